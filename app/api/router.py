"""
People Profile — Main API Router

Aggregates all sub-routers so that ``app.main`` can mount the entire API
surface under ``/api`` with one ``include_router`` call.
"""

from fastapi import APIRouter

from app.api import auth, profiles
from app.api.admin import imports

router = APIRouter()

router.include_router(auth.router, tags=["Auth"])
router.include_router(profiles.router, prefix="/profiles", tags=["Profiles"])
router.include_router(imports.router, prefix="/admin/import", tags=["Admin - Import"])

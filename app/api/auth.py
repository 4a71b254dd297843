"""
People Profile — Email login & self-service profile lookup

There is no password or session handling here: a login simply resolves an
email to a profile, creating one on first sight.
"""

import structlog
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.schemas.auth import LoginRequest, LoginResponse
from app.schemas.profile import EmailLookup, ProfileDetailResponse
from app.services import profile_service
from app.utils import cache

logger = structlog.get_logger("people_profile.api.auth")

router = APIRouter()


@router.post(
    "/auth/login",
    response_model=LoginResponse,
    summary="Resolve an email to a profile, creating it if needed",
)
async def login(
    payload: LoginRequest,
    db: AsyncSession = Depends(get_db),
) -> LoginResponse:
    profile, created = await profile_service.find_or_create_by_email(
        db, payload.email, default_name=payload.email.split("@")[0]
    )
    if created:
        await cache.invalidate_profiles()

    logger.info("login", email=payload.email, is_new_user=created)
    return LoginResponse(email=profile.email, name=profile.name, is_new_user=created)


@router.post(
    "/profile-by-email",
    response_model=ProfileDetailResponse,
    summary="Get (or create) the full profile for an email",
)
async def profile_by_email(
    payload: EmailLookup,
    db: AsyncSession = Depends(get_db),
) -> ProfileDetailResponse:
    profile, created = await profile_service.find_or_create_by_email(
        db, payload.email, default_name=payload.email, team=""
    )
    if created:
        await cache.invalidate_profiles()
        logger.info("profile_by_email_created", email=payload.email)

    return profile_service.build_profile_detail(profile)

"""
People Profile — Profiles API

Directory listing, CRUD on a single profile, and the Big Five view.
"""

from __future__ import annotations

import math
import uuid
from typing import Optional

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import get_settings
from app.database import get_db
from app.models import UserProfile
from app.schemas.profile import (
    BigFiveGroup,
    BigFiveResponse,
    DeleteResponse,
    PaginationMeta,
    ProfileCreate,
    ProfileDetailResponse,
    ProfileListResponse,
    ProfileUpdate,
)
from app.services import profile_service
from app.services.big_five import prepare_big_five_for_save, transform_profile_to_big_five_data
from app.utils import cache

logger = structlog.get_logger("people_profile.api.profiles")

router = APIRouter()

MAX_PAGE_SIZE = 100


def parse_profile_id(profile_id: str) -> uuid.UUID:
    try:
        return uuid.UUID(profile_id)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid profile ID format",
        )


async def _get_profile_or_404(db: AsyncSession, profile_id: uuid.UUID) -> UserProfile:
    profile = await profile_service.load_profile(db, profile_id)
    if profile is None:
        logger.warning("profile_not_found", profile_id=str(profile_id))
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Profile not found",
        )
    return profile


# ──────────────────────────────────────────────────────────────────────────────
# GET / — Paginated directory
# ──────────────────────────────────────────────────────────────────────────────

@router.get(
    "",
    response_model=ProfileListResponse,
    summary="List profiles with pagination",
)
async def list_profiles(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, description="Page size, capped at 100"),
    q: Optional[str] = Query(None, max_length=255, description="Search name, email or team"),
    db: AsyncSession = Depends(get_db),
):
    """Return one page of the directory, ordered by name."""
    limit = min(limit, MAX_PAGE_SIZE)
    key = cache.profile_list_key(page, limit, q)

    cached = await cache.get_json(key)
    if cached is not None:
        logger.debug("list_profiles_cache_hit", page=page, limit=limit)
        return cached

    profiles, total = await profile_service.list_profiles(db, page, limit, q)
    total_pages = math.ceil(total / limit) if total else 0

    response = ProfileListResponse(
        data=[profile_service.build_profile_summary(p) for p in profiles],
        pagination=PaginationMeta(
            page=page,
            limit=limit,
            total=total,
            total_pages=total_pages,
            has_next=page < total_pages,
            has_prev=page > 1,
        ),
    )
    await cache.set_json(
        key,
        response.model_dump(mode="json"),
        get_settings().PROFILE_LIST_CACHE_TTL_SECONDS,
    )
    return response


# ──────────────────────────────────────────────────────────────────────────────
# POST / — Create a profile
# ──────────────────────────────────────────────────────────────────────────────

@router.post(
    "",
    response_model=ProfileDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new profile",
)
async def create_profile(
    payload: ProfileCreate,
    db: AsyncSession = Depends(get_db),
) -> ProfileDetailResponse:
    log = logger.bind(email=payload.email)
    log.info("create_profile_start")

    if await profile_service.get_profile_by_email(db, payload.email) is not None:
        log.warning("create_profile_duplicate_email")
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Profile with this email already exists",
        )

    profile = UserProfile(
        user_id=payload.user_id,
        email=payload.email,
        name=payload.name,
        team=payload.team,
        birthday=payload.birthday,
    )
    db.add(profile)
    await db.flush()
    await cache.invalidate_profiles()

    log.info("create_profile_complete", profile_id=str(profile.id))
    profile = await profile_service.load_profile(db, profile.id)
    return profile_service.build_profile_detail(profile)


# ──────────────────────────────────────────────────────────────────────────────
# GET /{profile_id} — Full profile
# ──────────────────────────────────────────────────────────────────────────────

@router.get(
    "/{profile_id}",
    response_model=ProfileDetailResponse,
    summary="Get a profile with all related data",
)
async def get_profile(
    profile_id: str,
    db: AsyncSession = Depends(get_db),
) -> ProfileDetailResponse:
    pid = parse_profile_id(profile_id)
    profile = await _get_profile_or_404(db, pid)
    return profile_service.build_profile_detail(profile)


# ──────────────────────────────────────────────────────────────────────────────
# PATCH /{profile_id} — Partial update
# ──────────────────────────────────────────────────────────────────────────────

@router.patch(
    "/{profile_id}",
    response_model=ProfileDetailResponse,
    summary="Update a profile and its related records",
)
async def update_profile(
    profile_id: str,
    payload: ProfileUpdate,
    db: AsyncSession = Depends(get_db),
) -> ProfileDetailResponse:
    """Apply a partial update in one unit of work.

    Only fields present in the request body are touched.  ``chronotype``
    set to ``null`` (or with no types) removes the chronotype.  Big Five
    data may be sent either as stored traits (``big_five_profile``) or as
    display groups (``big_five_data``); both merge trait by trait.
    """
    pid = parse_profile_id(profile_id)
    log = logger.bind(profile_id=str(pid))
    profile = await _get_profile_or_404(db, pid)

    fields = payload.model_fields_set
    log.info("update_profile_start", fields=sorted(fields))

    for attr in ("name", "job_title", "birthday"):
        if attr in fields and (attr != "name" or payload.name is not None):
            setattr(profile, attr, getattr(payload, attr))
    if "team" in fields:
        profile.team = payload.team or None

    if payload.core_values is not None:
        profile_service.upsert_core_values(profile, payload.core_values)
    if payload.character_strengths is not None:
        profile_service.upsert_character_strengths(profile, payload.character_strengths)
    if "chronotype" in fields:
        profile_service.upsert_chronotype(profile, payload.chronotype)

    big_five: dict[str, dict] = {}
    if payload.big_five_profile is not None:
        big_five.update(payload.big_five_profile.model_dump(mode="json", exclude_none=True))
    if payload.big_five_data:
        big_five.update(prepare_big_five_for_save(payload.big_five_data) or {})
    if big_five:
        profile_service.upsert_big_five(profile, big_five)

    if payload.goals is not None:
        profile_service.upsert_goals(profile, payload.goals)

    await db.flush()
    await cache.invalidate_profiles()
    log.info("update_profile_complete")

    profile = await profile_service.load_profile(db, pid)
    return profile_service.build_profile_detail(profile)


# ──────────────────────────────────────────────────────────────────────────────
# DELETE /{profile_id}
# ──────────────────────────────────────────────────────────────────────────────

@router.delete(
    "/{profile_id}",
    response_model=DeleteResponse,
    summary="Delete a profile and all related records",
)
async def delete_profile(
    profile_id: str,
    db: AsyncSession = Depends(get_db),
) -> DeleteResponse:
    pid = parse_profile_id(profile_id)
    profile = await _get_profile_or_404(db, pid)

    await db.delete(profile)
    await db.flush()
    await cache.invalidate_profiles()

    logger.info("delete_profile_complete", profile_id=str(pid))
    return DeleteResponse(success=True)


# ──────────────────────────────────────────────────────────────────────────────
# GET /{profile_id}/bigfive
# ──────────────────────────────────────────────────────────────────────────────

@router.get(
    "/{profile_id}/bigfive",
    response_model=BigFiveResponse,
    summary="Get the Big Five groups for a profile",
)
async def get_big_five(
    profile_id: str,
    db: AsyncSession = Depends(get_db),
) -> BigFiveResponse:
    pid = parse_profile_id(profile_id)
    profile = await _get_profile_or_404(db, pid)

    if profile.big_five_profile is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Big Five profile not found",
        )

    groups = transform_profile_to_big_five_data(profile.big_five_profile)
    return BigFiveResponse(big_five_data=[BigFiveGroup(**g) for g in groups])

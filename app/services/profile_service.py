"""
People Profile — Profile persistence helpers

Shared by the profile endpoints, the login endpoints and the bulk importer:

  * eager loading of a profile with every related record
  * the related-record upserts (core values, strengths, chronotype,
    Big Five, goals)
  * completeness scoring
  * serialisation to the detail / summary response models

All related records hang off ``UserProfile`` relationships, so the upserts
work on a profile that was loaded through ``load_profile`` (or
``fetch_profiles_by_email``) and leave flushing to the caller's unit of work.
"""

from __future__ import annotations

import uuid
from typing import Any, Iterable, Optional

import structlog
from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models import (
    BigFiveProfile,
    CharacterStrengths,
    Chronotype,
    CoreValues,
    Goals,
    UserProfile,
)
from app.schemas.profile import (
    BigFiveGroup,
    ProfileDetailResponse,
    ProfileSummary,
)
from app.services.big_five import TRAIT_COLUMNS, transform_profile_to_big_five_data

logger = structlog.get_logger("people_profile.profile_service")

COMPLETENESS_CHECKS = 9

_PROFILE_RELATIONS = (
    UserProfile.core_values,
    UserProfile.character_strengths,
    UserProfile.chronotype,
    UserProfile.big_five_profile,
    UserProfile.goals,
)


def _with_relations(stmt):
    return stmt.options(*(selectinload(rel) for rel in _PROFILE_RELATIONS)).execution_options(
        populate_existing=True
    )


def _get(value: Any, key: str, default: Any = None) -> Any:
    if value is None:
        return default
    if isinstance(value, dict):
        return value.get(key, default)
    return getattr(value, key, default)


# ──────────────────────────────────────────────────────────────────────────────
# Loading
# ──────────────────────────────────────────────────────────────────────────────

async def load_profile(db: AsyncSession, profile_id: uuid.UUID) -> Optional[UserProfile]:
    """Fetch a profile with all related records, or ``None``."""
    stmt = _with_relations(select(UserProfile).where(UserProfile.id == profile_id))
    result = await db.execute(stmt)
    return result.scalar_one_or_none()


async def get_profile_by_email(db: AsyncSession, email: str) -> Optional[UserProfile]:
    stmt = _with_relations(select(UserProfile).where(UserProfile.email == email))
    result = await db.execute(stmt)
    return result.scalar_one_or_none()


async def fetch_profiles_by_email(
    db: AsyncSession, emails: Iterable[str]
) -> dict[str, UserProfile]:
    """Load every profile whose email is in ``emails`` in one query."""
    emails = list(set(emails))
    if not emails:
        return {}
    stmt = _with_relations(select(UserProfile).where(UserProfile.email.in_(emails)))
    result = await db.execute(stmt)
    return {p.email: p for p in result.scalars().all()}


async def list_profiles(
    db: AsyncSession,
    page: int,
    limit: int,
    q: Optional[str] = None,
) -> tuple[list[UserProfile], int]:
    """Return one page of the directory ordered by name, plus the total."""
    filters = []
    if q and q.strip():
        pattern = f"%{q.strip()}%"
        filters.append(
            or_(
                UserProfile.name.ilike(pattern),
                UserProfile.email.ilike(pattern),
                UserProfile.team.ilike(pattern),
            )
        )

    count_stmt = select(func.count()).select_from(UserProfile).where(*filters)
    total = (await db.execute(count_stmt)).scalar_one()

    stmt = _with_relations(
        select(UserProfile)
        .where(*filters)
        .order_by(UserProfile.name.asc(), UserProfile.id.asc())
        .offset((page - 1) * limit)
        .limit(limit)
    )
    result = await db.execute(stmt)
    return list(result.scalars().all()), total


async def find_or_create_by_email(
    db: AsyncSession,
    email: str,
    default_name: str,
    team: Optional[str] = None,
) -> tuple[UserProfile, bool]:
    """Return ``(profile, created)`` for a normalised email."""
    profile = await get_profile_by_email(db, email)
    if profile is not None:
        return profile, False

    profile = UserProfile(email=email, name=default_name, team=team)
    db.add(profile)
    await db.flush()
    logger.info("profile_created_for_email", profile_id=str(profile.id), email=email)

    return await load_profile(db, profile.id), True


# ──────────────────────────────────────────────────────────────────────────────
# Related-record upserts
# ──────────────────────────────────────────────────────────────────────────────

def upsert_core_values(profile: UserProfile, values: list[str]) -> None:
    if profile.core_values is None:
        profile.core_values = CoreValues(values=list(values))
    else:
        profile.core_values.values = list(values)


def upsert_character_strengths(profile: UserProfile, strengths: list[str]) -> None:
    if profile.character_strengths is None:
        profile.character_strengths = CharacterStrengths(strengths=list(strengths))
    else:
        profile.character_strengths.strengths = list(strengths)


def upsert_chronotype(profile: UserProfile, chronotype: Any) -> None:
    """Store chronotype types; ``None`` or an empty type list deletes the record.

    Duplicate types are dropped keeping their first position.  When no
    primary type is given the first type is used.
    """
    types = [getattr(t, "value", t) for t in (_get(chronotype, "types") or [])]
    types = list(dict.fromkeys(types))
    if not types:
        profile.chronotype = None
        return

    primary = _get(chronotype, "primary_type")
    primary = getattr(primary, "value", primary) or types[0]

    if profile.chronotype is None:
        profile.chronotype = Chronotype(types=types, primary_type=primary)
    else:
        profile.chronotype.types = types
        profile.chronotype.primary_type = primary


def upsert_big_five(profile: UserProfile, traits: dict[str, Optional[dict]]) -> None:
    """Merge stored-format traits keyed by column into the Big Five record.

    Only the traits present in ``traits`` replace stored ones.  A new record
    fills the remaining traits with ``{}``.
    """
    given = {col: dict(data) for col, data in traits.items() if col in TRAIT_COLUMNS and data is not None}
    if not given:
        return

    if profile.big_five_profile is None:
        profile.big_five_profile = BigFiveProfile(
            **{col: given.get(col, {}) for col in TRAIT_COLUMNS}
        )
        return

    for col, data in given.items():
        setattr(profile.big_five_profile, col, data)


def upsert_goals(profile: UserProfile, goals: Any) -> None:
    period = _get(goals, "period")
    professional = _get(goals, "professional_goals") or None
    personal = _get(goals, "personal_goals") or None

    if profile.goals is None:
        profile.goals = Goals(
            period=period,
            professional_goals=professional,
            personal_goals=personal,
        )
    else:
        profile.goals.period = period
        profile.goals.professional_goals = professional
        profile.goals.personal_goals = personal


# ──────────────────────────────────────────────────────────────────────────────
# Completeness & serialisation
# ──────────────────────────────────────────────────────────────────────────────

def _non_blank(text: Optional[str]) -> bool:
    return bool(text and text.strip())


def calculate_profile_completeness(profile: Any) -> int:
    """Percentage (0-100, rounded) of the nine profile sections filled in."""
    chronotype = _get(profile, "chronotype")
    core_values = _get(profile, "core_values")
    strengths = _get(profile, "character_strengths")
    goals = _get(profile, "goals")

    checks = [
        _non_blank(_get(profile, "name")),
        _non_blank(_get(profile, "email")),
        _non_blank(_get(profile, "team")),
        bool(_get(chronotype, "types")),
        bool(_get(core_values, "values")),
        bool(_get(strengths, "strengths")),
        _get(profile, "big_five_profile") is not None,
        _non_blank(_get(goals, "professional_goals")),
        _non_blank(_get(goals, "personal_goals")),
    ]
    completed = sum(1 for check in checks if check)
    return round(completed / COMPLETENESS_CHECKS * 100)


def build_profile_detail(profile: UserProfile) -> ProfileDetailResponse:
    detail = ProfileDetailResponse.model_validate(profile)
    detail.big_five_data = [
        BigFiveGroup(**group)
        for group in transform_profile_to_big_five_data(profile.big_five_profile)
    ]
    return detail


def build_profile_summary(profile: UserProfile) -> ProfileSummary:
    return ProfileSummary(
        id=profile.id,
        user_id=profile.user_id,
        email=profile.email,
        name=profile.name,
        team=profile.team,
        birthday=profile.birthday,
        created_at=profile.created_at,
        updated_at=profile.updated_at,
        core_values=(
            {"values": profile.core_values.values} if profile.core_values else None
        ),
        character_strengths=(
            {"strengths": profile.character_strengths.strengths}
            if profile.character_strengths
            else None
        ),
        chronotype=(
            {
                "types": profile.chronotype.types,
                "primary_type": profile.chronotype.primary_type,
            }
            if profile.chronotype
            else None
        ),
        has_big_five=profile.big_five_profile is not None,
        completeness=calculate_profile_completeness(profile),
    )

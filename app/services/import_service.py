"""
People Profile — Bulk spreadsheet import

Pipeline for one uploaded workbook (rows already parsed by
``app.excel.reader``):

  1. Validate every row (email + name required, email well-formed)
  2. Reset mode: delete profiles that are neither in the file nor protected
  3. Load existing profiles for all emails in one query
  4. Batch-create the new profiles, falling back to one-by-one on failure
  5. Apply each row's data inside its own SAVEPOINT
  6. Report per-row outcomes

A bad row never aborts the import; its error is collected and processing
moves on to the next row.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import date
from typing import Iterable, Optional

import structlog
from sqlalchemy import delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import get_settings
from app.excel import columns
from app.excel.big_five_processor import build_big_five_profile
from app.excel.parsers import cell_text, parse_birthday, parse_chronotypes
from app.excel.reader import ExcelRow
from app.models import UserProfile
from app.schemas.profile import is_valid_email, normalize_email
from app.services.profile_service import (
    fetch_profiles_by_email,
    load_profile,
    upsert_big_five,
    upsert_character_strengths,
    upsert_chronotype,
    upsert_core_values,
    upsert_goals,
)

logger = structlog.get_logger("people_profile.import_service")

MAX_NAME_LENGTH = 255
MAX_TEAM_LENGTH = 255
MAX_PERIOD_LENGTH = 100


@dataclass
class ImportResult:
    success: bool = True
    success_count: int = 0
    error_count: int = 0
    deleted_count: int = 0
    errors: list[dict] = field(default_factory=list)
    details: list[dict] = field(default_factory=list)

    def add_error(self, row: int, email: Optional[str], name: Optional[str], error: str) -> None:
        self.errors.append({"row": row, "email": email or None, "name": name or None, "error": error})
        self.error_count = len(self.errors)
        self.success = False

    def add_detail(self, row: int, email: str, name: str, action: str) -> None:
        self.details.append({"row": row, "email": email, "name": name, "action": action})
        self.success_count = len(self.details)

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class _ValidRow:
    row: ExcelRow
    email: str
    name: str


@dataclass
class _RowChanges:
    name: str
    team: Optional[str] = None
    birthday: Optional[date] = None
    core_values: list[str] = field(default_factory=list)
    strengths: list[str] = field(default_factory=list)
    chronotypes: list[str] = field(default_factory=list)
    big_five: Optional[dict] = None
    goals: Optional[dict] = None


class ImportService:
    """Imports parsed spreadsheet rows into user profiles."""

    def __init__(self, protected_emails: Optional[Iterable[str]] = None) -> None:
        if protected_emails is None:
            protected_emails = get_settings().protected_emails
        self.protected_emails = {normalize_email(e) for e in protected_emails}

    async def import_rows(
        self,
        db: AsyncSession,
        rows: list[ExcelRow],
        reset_database: bool = False,
    ) -> ImportResult:
        log = logger.bind(rows=len(rows), reset_database=reset_database)
        log.info("import_start")

        result = ImportResult()
        valid_rows = self._validate(rows, result)
        emails = {item.email for item in valid_rows}

        if reset_database:
            result.deleted_count = await self._delete_profiles_not_in(db, emails)

        existing = await fetch_profiles_by_email(db, emails)

        pending: dict[str, _ValidRow] = {}
        for item in valid_rows:
            if item.email not in existing and item.email not in pending:
                pending[item.email] = item
        created = await self._create_profiles(db, pending, result)

        profiles = await fetch_profiles_by_email(db, emails)
        seen: set[str] = set()
        for item in valid_rows:
            row_number = item.row.row_number
            profile = profiles.get(item.email)
            if profile is None:
                if pending.get(item.email) is not item:
                    result.add_error(row_number, item.email, item.name, "Profile could not be created")
                continue

            action = "created" if item.email in created and item.email not in seen else "updated"
            seen.add(item.email)

            try:
                changes = self._row_changes(item)
            except ValueError as exc:
                log.warning("import_row_invalid", row=row_number, email=item.email, error=str(exc))
                result.add_error(row_number, item.email, item.name, str(exc))
                continue

            profile_id = profile.id
            try:
                async with db.begin_nested():
                    self._apply_changes(profile, changes)
            except SQLAlchemyError as exc:
                log.warning("import_row_failed", row=row_number, email=item.email, error=str(exc))
                result.add_error(row_number, item.email, item.name, f"Database error: {exc}")
                # The rolled-back savepoint expired this profile; reload it for later rows.
                reloaded = await load_profile(db, profile_id)
                if reloaded is not None:
                    profiles[item.email] = reloaded
                continue

            result.add_detail(row_number, item.email, item.name, action)

        result.success = result.error_count == 0
        log.info(
            "import_complete",
            success_count=result.success_count,
            error_count=result.error_count,
            deleted_count=result.deleted_count,
        )
        return result

    # ── Steps ─────────────────────────────────────────────────────────────

    def _validate(self, rows: list[ExcelRow], result: ImportResult) -> list[_ValidRow]:
        valid: list[_ValidRow] = []
        for row in rows:
            email = normalize_email(cell_text(row.get(columns.EMAIL)))
            name = cell_text(row.get(columns.NAME))

            if not email or not name:
                result.add_error(row.row_number, email, name, "Missing required fields: email or name")
                continue
            if not is_valid_email(email):
                result.add_error(row.row_number, email, name, "Invalid email format")
                continue
            if len(name) > MAX_NAME_LENGTH:
                result.add_error(
                    row.row_number, email, name,
                    f"Name must be at most {MAX_NAME_LENGTH} characters",
                )
                continue
            team = cell_text(row.get(columns.TEAM))
            if len(team) > MAX_TEAM_LENGTH:
                result.add_error(
                    row.row_number, email, name,
                    f"Team must be at most {MAX_TEAM_LENGTH} characters",
                )
                continue
            valid.append(_ValidRow(row=row, email=email, name=name))
        return valid

    async def _delete_profiles_not_in(self, db: AsyncSession, emails: set[str]) -> int:
        if not emails:
            logger.warning("import_reset_skipped", reason="no valid rows")
            return 0

        keep = emails | self.protected_emails
        stmt = (
            delete(UserProfile)
            .where(UserProfile.email.not_in(keep))
            .execution_options(synchronize_session=False)
        )
        deleted = (await db.execute(stmt)).rowcount or 0
        logger.warning("import_reset_deleted", deleted_count=deleted, kept=len(keep))
        return deleted

    async def _create_profiles(
        self,
        db: AsyncSession,
        pending: dict[str, _ValidRow],
        result: ImportResult,
    ) -> set[str]:
        if not pending:
            return set()

        try:
            async with db.begin_nested():
                db.add_all([self._new_profile(item) for item in pending.values()])
            logger.info("import_batch_created", count=len(pending))
            return set(pending)
        except SQLAlchemyError as exc:
            logger.warning("import_batch_create_failed", count=len(pending), error=str(exc))

        created: set[str] = set()
        for email, item in pending.items():
            try:
                async with db.begin_nested():
                    db.add(self._new_profile(item))
            except SQLAlchemyError as exc:
                logger.warning(
                    "import_create_failed", row=item.row.row_number, email=email, error=str(exc)
                )
                result.add_error(
                    item.row.row_number, email, item.name, f"Failed to create profile: {exc}"
                )
                continue
            created.add(email)
        return created

    @staticmethod
    def _new_profile(item: _ValidRow) -> UserProfile:
        return UserProfile(
            email=item.email,
            name=item.name,
            team=cell_text(item.row.get(columns.TEAM)) or None,
        )

    # ── Row data ──────────────────────────────────────────────────────────

    @staticmethod
    def _row_changes(item: _ValidRow) -> _RowChanges:
        """Parse a row into the changes to apply; raises ``ValueError`` on bad data."""
        row = item.row
        changes = _RowChanges(
            name=item.name,
            team=cell_text(row.get(columns.TEAM)) or None,
            birthday=parse_birthday(row.get(columns.BIRTHDAY)),
            core_values=[
                v for v in (cell_text(row.get(c)) for c in columns.CORE_VALUE_COLUMNS) if v
            ],
            strengths=[
                v for v in (cell_text(row.get(c)) for c in columns.STRENGTH_COLUMNS) if v
            ],
            chronotypes=parse_chronotypes(row.get(columns.CHRONOTYPE)),
            big_five=build_big_five_profile(row.values),
        )

        period = cell_text(row.get(columns.GOALS_PERIOD))
        if period:
            if len(period) > MAX_PERIOD_LENGTH:
                raise ValueError(f"Goals period must be at most {MAX_PERIOD_LENGTH} characters")
            changes.goals = {
                "period": period,
                "professional_goals": cell_text(row.get(columns.GOALS_PROFESSIONAL)) or None,
                "personal_goals": cell_text(row.get(columns.GOALS_PERSONAL)) or None,
            }
        return changes

    @staticmethod
    def _apply_changes(profile: UserProfile, changes: _RowChanges) -> None:
        profile.name = changes.name
        if changes.team:
            profile.team = changes.team
        if changes.birthday is not None:
            profile.birthday = changes.birthday
        if changes.core_values:
            upsert_core_values(profile, changes.core_values)
        if changes.strengths:
            upsert_character_strengths(profile, changes.strengths)
        if changes.chronotypes:
            upsert_chronotype(profile, {"types": changes.chronotypes})
        if changes.big_five is not None:
            upsert_big_five(profile, changes.big_five)
        if changes.goals is not None:
            upsert_goals(profile, changes.goals)

"""Tests for the bulk import pipeline against an in-memory database."""
import uuid
from datetime import date

import pytest
from sqlalchemy import func, select

from app.models import UserProfile
from app.services.import_service import ImportResult, ImportService
from app.services.profile_service import get_profile_by_email


@pytest.fixture
def service():
    return ImportService(protected_emails=[])


async def _count_profiles(db) -> int:
    return (await db.execute(select(func.count()).select_from(UserProfile))).scalar_one()


class TestImportResult:

    def test_error_marks_failure(self):
        result = ImportResult()
        result.add_detail(2, "a@example.com", "A", "created")
        result.add_error(3, "", None, "Missing required fields: email or name")
        assert result.success is False
        assert result.success_count == 1
        assert result.error_count == 1
        assert result.errors[0] == {
            "row": 3,
            "email": None,
            "name": None,
            "error": "Missing required fields: email or name",
        }


class TestImportRows:

    @pytest.mark.asyncio
    async def test_create_then_update(self, db_session, service, make_rows):
        result = await service.import_rows(
            db_session, make_rows({"Email": "A@Example.com", "Name": "Amy"})
        )
        assert result.success is True
        assert result.details == [
            {"row": 2, "email": "a@example.com", "name": "Amy", "action": "created"}
        ]

        result = await service.import_rows(
            db_session, make_rows({"Email": "a@example.com", "Name": "Amy Pond"})
        )
        assert result.details[0]["action"] == "updated"
        await db_session.flush()

        profile = await get_profile_by_email(db_session, "a@example.com")
        assert profile.name == "Amy Pond"
        assert await _count_profiles(db_session) == 1

    @pytest.mark.asyncio
    async def test_bad_rows_do_not_stop_import(self, db_session, service, make_rows):
        rows = make_rows(
            {"Name": "No Email"},
            {"Email": "not-an-email", "Name": "Bad"},
            {"Email": "ok@example.com", "Name": "Ok"},
            {"Email": "noname@example.com"},
        )
        result = await service.import_rows(db_session, rows)

        assert result.success is False
        assert result.success_count == 1
        assert [(e["row"], e["error"]) for e in result.errors] == [
            (2, "Missing required fields: email or name"),
            (3, "Invalid email format"),
            (5, "Missing required fields: email or name"),
        ]
        assert await _count_profiles(db_session) == 1

    @pytest.mark.asyncio
    async def test_duplicate_email_last_row_wins(self, db_session, service, make_rows):
        rows = make_rows(
            {"Email": "dup@example.com", "Name": "First", "Team": "Sales"},
            {"Email": "DUP@example.com", "Name": "Second"},
        )
        result = await service.import_rows(db_session, rows)

        assert [d["action"] for d in result.details] == ["created", "updated"]
        await db_session.flush()
        profile = await get_profile_by_email(db_session, "dup@example.com")
        assert profile.name == "Second"
        assert profile.team == "Sales"

    @pytest.mark.asyncio
    async def test_blank_cells_keep_existing_data(self, db_session, service, make_rows):
        await service.import_rows(
            db_session,
            make_rows({
                "Email": "a@example.com",
                "Name": "Amy",
                "Team": "Sales",
                "Birthday": "1990-01-15",
                "CoreValue1": "Integrity",
            }),
        )
        await service.import_rows(db_session, make_rows({"Email": "a@example.com", "Name": "Amy"}))
        await db_session.flush()

        profile = await get_profile_by_email(db_session, "a@example.com")
        assert profile.team == "Sales"
        assert profile.birthday == date(1990, 1, 15)
        assert profile.core_values.values == ["Integrity"]

    @pytest.mark.asyncio
    async def test_full_row(self, db_session, service, make_rows, full_row):
        result = await service.import_rows(db_session, make_rows(full_row))
        assert result.success is True
        await db_session.flush()

        profile = await get_profile_by_email(db_session, "jane.smith@example.com")
        assert profile.team == "Engineering"
        assert profile.birthday == date(1990, 1, 15)
        assert profile.chronotype.types == ["Wolf", "Lion"]
        assert profile.chronotype.primary_type == "Wolf"
        assert profile.core_values.values == ["Integrity", "Curiosity"]
        assert profile.character_strengths.strengths == ["Creativity", "Leadership"]
        assert profile.goals.period == "Q1 2025"
        assert profile.goals.personal_goals is None

        big_five = profile.big_five_profile
        assert big_five.neuroticism_data["overall_score"] == 420
        assert big_five.neuroticism_data["subtraits"] == [
            {"name": "Anxiety", "level": "Low", "score": 410}
        ]
        assert big_five.openness_data["overall_level"] == "High"
        assert big_five.openness_data["overall_score"] == 75
        assert big_five.extraversion_data["overall_level"] == "Average"

    @pytest.mark.asyncio
    async def test_invalid_level_is_row_error(self, db_session, service, make_rows):
        rows = make_rows(
            {
                "Email": "a@example.com",
                "Name": "Amy",
                "BigFive_Agreeableness_Level": 3,
            },
            {"Email": "b@example.com", "Name": "Ben"},
        )
        result = await service.import_rows(db_session, rows)

        assert result.error_count == 1
        assert result.errors[0]["row"] == 2
        assert "not a number" in result.errors[0]["error"]
        assert result.details[0]["email"] == "b@example.com"

    @pytest.mark.asyncio
    async def test_long_goals_period_rejected(self, db_session, service, make_rows):
        rows = make_rows({"Email": "a@example.com", "Name": "Amy", "Goals_Period": "x" * 101})
        result = await service.import_rows(db_session, rows)
        assert result.errors[0]["error"] == "Goals period must be at most 100 characters"

    @pytest.mark.asyncio
    async def test_goals_need_period(self, db_session, service, make_rows):
        rows = make_rows({"Email": "a@example.com", "Name": "Amy", "Goals_Professional": "Ship"})
        await service.import_rows(db_session, rows)
        await db_session.flush()
        profile = await get_profile_by_email(db_session, "a@example.com")
        assert profile.goals is None

    @pytest.mark.asyncio
    async def test_long_team_rejected(self, db_session, service, make_rows):
        rows = make_rows(
            {"Email": "a@example.com", "Name": "Amy", "Team": "x" * 256},
            {"Email": "b@example.com", "Name": "Ben", "Team": "Sales"},
        )
        result = await service.import_rows(db_session, rows)

        assert result.errors == [
            {
                "row": 2,
                "email": "a@example.com",
                "name": "Amy",
                "error": "Team must be at most 255 characters",
            }
        ]
        assert [d["email"] for d in result.details] == ["b@example.com"]
        assert await _count_profiles(db_session) == 1

    @pytest.mark.asyncio
    async def test_database_error_on_one_row_continues(
        self, db_session, service, make_rows, monkeypatch
    ):
        other = UserProfile(email="other@example.com", name="Other")
        db_session.add(other)
        await db_session.flush()
        taken_user_id = other.user_id

        apply_changes = ImportService._apply_changes

        def apply_with_conflict(profile, changes):
            apply_changes(profile, changes)
            if changes.name == "Bad":
                profile.user_id = taken_user_id

        monkeypatch.setattr(ImportService, "_apply_changes", staticmethod(apply_with_conflict))

        rows = make_rows(
            {"Email": "a@example.com", "Name": "Bad"},
            {"Email": "a@example.com", "Name": "Good"},
        )
        result = await service.import_rows(db_session, rows)

        assert result.error_count == 1
        assert result.errors[0]["row"] == 2
        assert result.errors[0]["error"].startswith("Database error:")
        assert result.details == [
            {"row": 3, "email": "a@example.com", "name": "Good", "action": "updated"}
        ]

        await db_session.flush()
        profile = await get_profile_by_email(db_session, "a@example.com")
        assert profile.name == "Good"
        assert profile.user_id != taken_user_id

    @pytest.mark.asyncio
    async def test_batch_create_falls_back_to_one_by_one(
        self, db_session, service, make_rows, monkeypatch
    ):
        shared_user_id = uuid.uuid4()
        new_profile = ImportService._new_profile

        def new_profile_with_shared_id(item):
            profile = new_profile(item)
            if item.email in ("b@example.com", "c@example.com"):
                profile.user_id = shared_user_id
            return profile

        monkeypatch.setattr(ImportService, "_new_profile", staticmethod(new_profile_with_shared_id))

        rows = make_rows(
            {"Email": "a@example.com", "Name": "Amy"},
            {"Email": "b@example.com", "Name": "Ben"},
            {"Email": "c@example.com", "Name": "Cat"},
            {"Email": "c@example.com", "Name": "Cat Again"},
        )
        result = await service.import_rows(db_session, rows)

        assert [(d["email"], d["action"]) for d in result.details] == [
            ("a@example.com", "created"),
            ("b@example.com", "created"),
        ]
        assert [e["row"] for e in result.errors] == [4, 5]
        assert result.errors[0]["error"].startswith("Failed to create profile:")
        assert result.errors[1]["error"] == "Profile could not be created"

        emails = set((await db_session.execute(select(UserProfile.email))).scalars())
        assert emails == {"a@example.com", "b@example.com"}


class TestResetMode:

    @pytest.mark.asyncio
    async def test_deletes_profiles_missing_from_file(self, db_session, make_rows):
        service = ImportService(protected_emails=["Admin@Example.com"])
        await service.import_rows(
            db_session,
            make_rows(
                {"Email": "keep@example.com", "Name": "Keep"},
                {"Email": "gone@example.com", "Name": "Gone", "CoreValue1": "Honesty"},
                {"Email": "admin@example.com", "Name": "Admin"},
            ),
        )
        await db_session.flush()

        result = await service.import_rows(
            db_session,
            make_rows({"Email": "keep@example.com", "Name": "Keep"}),
            reset_database=True,
        )
        await db_session.flush()

        assert result.deleted_count == 1
        emails = set((await db_session.execute(select(UserProfile.email))).scalars())
        assert emails == {"keep@example.com", "admin@example.com"}

    @pytest.mark.asyncio
    async def test_skipped_without_valid_rows(self, db_session, service, make_rows):
        await service.import_rows(db_session, make_rows({"Email": "a@example.com", "Name": "Amy"}))
        await db_session.flush()

        result = await service.import_rows(
            db_session, make_rows({"Email": "broken", "Name": "X"}), reset_database=True
        )
        assert result.deleted_count == 0
        assert await _count_profiles(db_session) == 1

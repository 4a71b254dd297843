"""Unit tests for profile persistence helpers and completeness scoring."""
from types import SimpleNamespace

import pytest

from app.models import UserProfile
from app.schemas.profile import ChronotypeUpdate
from app.services import profile_service
from app.services.big_five import create_default_group, transform_group_to_database


def _full_profile():
    return SimpleNamespace(
        name="Jane Smith",
        email="jane@example.com",
        team="Engineering",
        chronotype={"types": ["Wolf"]},
        core_values={"values": ["Integrity"]},
        character_strengths={"strengths": ["Creativity"]},
        big_five_profile={"neuroticism_data": {}},
        goals={"professional_goals": "Ship it", "personal_goals": "Run a marathon"},
    )


class TestCompleteness:

    def test_full_profile(self):
        assert profile_service.calculate_profile_completeness(_full_profile()) == 100

    def test_name_and_email_only(self):
        profile = {"name": "Jane", "email": "jane@example.com"}
        assert profile_service.calculate_profile_completeness(profile) == 22

    def test_blank_team_not_counted(self):
        profile = _full_profile()
        profile.team = "   "
        assert profile_service.calculate_profile_completeness(profile) == 89

    def test_empty_lists_not_counted(self):
        profile = _full_profile()
        profile.core_values = {"values": []}
        profile.chronotype = {"types": []}
        assert profile_service.calculate_profile_completeness(profile) == 78

    def test_goals_count_separately(self):
        profile = _full_profile()
        profile.goals = {"professional_goals": "Ship it", "personal_goals": None}
        assert profile_service.calculate_profile_completeness(profile) == 89

    def test_empty(self):
        assert profile_service.calculate_profile_completeness({}) == 0


async def _saved_profile(db, email="jane@example.com", name="Jane Smith"):
    profile = UserProfile(email=email, name=name)
    db.add(profile)
    await db.flush()
    return await profile_service.load_profile(db, profile.id)


class TestLoading:

    @pytest.mark.asyncio
    async def test_load_includes_relations(self, db_session):
        profile = await _saved_profile(db_session)
        assert profile.core_values is None
        assert profile.big_five_profile is None

    @pytest.mark.asyncio
    async def test_fetch_by_email(self, db_session):
        await _saved_profile(db_session, "a@example.com", "A")
        await _saved_profile(db_session, "b@example.com", "B")
        found = await profile_service.fetch_profiles_by_email(
            db_session, ["a@example.com", "missing@example.com"]
        )
        assert list(found) == ["a@example.com"]
        assert await profile_service.fetch_profiles_by_email(db_session, []) == {}

    @pytest.mark.asyncio
    async def test_list_ordered_and_searched(self, db_session):
        await _saved_profile(db_session, "zed@example.com", "Zed")
        await _saved_profile(db_session, "amy@example.com", "Amy")
        profiles, total = await profile_service.list_profiles(db_session, 1, 10)
        assert total == 2
        assert [p.name for p in profiles] == ["Amy", "Zed"]

        profiles, total = await profile_service.list_profiles(db_session, 1, 10, "ZED@")
        assert total == 1
        assert profiles[0].email == "zed@example.com"

    @pytest.mark.asyncio
    async def test_find_or_create(self, db_session):
        profile, created = await profile_service.find_or_create_by_email(
            db_session, "new@example.com", "new"
        )
        assert created is True
        assert profile.name == "new"

        again, created = await profile_service.find_or_create_by_email(
            db_session, "new@example.com", "ignored"
        )
        assert created is False
        assert again.id == profile.id
        assert again.name == "new"


class TestUpserts:

    @pytest.mark.asyncio
    async def test_core_values_replace(self, db_session):
        profile = await _saved_profile(db_session)
        profile_service.upsert_core_values(profile, ["Integrity", "Curiosity"])
        await db_session.flush()
        first_id = profile.core_values.id

        profile_service.upsert_core_values(profile, ["Courage"])
        await db_session.flush()
        profile = await profile_service.load_profile(db_session, profile.id)
        assert profile.core_values.values == ["Courage"]
        assert profile.core_values.id == first_id

    @pytest.mark.asyncio
    async def test_chronotype_dedupes_and_defaults_primary(self, db_session):
        profile = await _saved_profile(db_session)
        profile_service.upsert_chronotype(profile, {"types": ["Wolf", "Lion", "Wolf"]})
        await db_session.flush()
        profile = await profile_service.load_profile(db_session, profile.id)
        assert profile.chronotype.types == ["Wolf", "Lion"]
        assert profile.chronotype.primary_type == "Wolf"

    @pytest.mark.asyncio
    async def test_chronotype_from_request_model(self, db_session):
        profile = await _saved_profile(db_session)
        update = ChronotypeUpdate(types=["Bear", "Dolphin"], primary_type="Dolphin")
        profile_service.upsert_chronotype(profile, update)
        await db_session.flush()
        profile = await profile_service.load_profile(db_session, profile.id)
        assert profile.chronotype.types == ["Bear", "Dolphin"]
        assert profile.chronotype.primary_type == "Dolphin"

    @pytest.mark.asyncio
    async def test_chronotype_deleted(self, db_session):
        profile = await _saved_profile(db_session)
        profile_service.upsert_chronotype(profile, {"types": ["Bear"]})
        await db_session.flush()

        profile_service.upsert_chronotype(profile, None)
        await db_session.flush()
        profile = await profile_service.load_profile(db_session, profile.id)
        assert profile.chronotype is None

    @pytest.mark.asyncio
    async def test_big_five_new_record_fills_missing_traits(self, db_session):
        profile = await _saved_profile(db_session)
        neuroticism = transform_group_to_database(create_default_group(0))
        profile_service.upsert_big_five(profile, {"neuroticism_data": neuroticism})
        await db_session.flush()

        profile = await profile_service.load_profile(db_session, profile.id)
        assert profile.big_five_profile.neuroticism_data["group_name"] == "Neuroticism"
        assert profile.big_five_profile.extraversion_data == {}

    @pytest.mark.asyncio
    async def test_big_five_partial_update(self, db_session):
        profile = await _saved_profile(db_session)
        profile_service.upsert_big_five(
            profile,
            {
                "neuroticism_data": {"group_name": "Neuroticism", "overall_level": "Low"},
                "extraversion_data": {"group_name": "Extraversion", "overall_level": "High"},
            },
        )
        await db_session.flush()

        profile_service.upsert_big_five(
            profile,
            {"extraversion_data": {"group_name": "Extraversion", "overall_level": "Low"}},
        )
        await db_session.flush()
        profile = await profile_service.load_profile(db_session, profile.id)
        assert profile.big_five_profile.neuroticism_data["overall_level"] == "Low"
        assert profile.big_five_profile.extraversion_data["overall_level"] == "Low"

    @pytest.mark.asyncio
    async def test_big_five_ignores_unknown_columns(self, db_session):
        profile = await _saved_profile(db_session)
        profile_service.upsert_big_five(profile, {"honesty_data": {"overall_level": "High"}})
        assert profile.big_five_profile is None

    @pytest.mark.asyncio
    async def test_goals_blank_text_stored_as_null(self, db_session):
        profile = await _saved_profile(db_session)
        profile_service.upsert_goals(
            profile, {"period": "Q1 2025", "professional_goals": "Ship", "personal_goals": ""}
        )
        await db_session.flush()
        profile = await profile_service.load_profile(db_session, profile.id)
        assert profile.goals.period == "Q1 2025"
        assert profile.goals.personal_goals is None


class TestSerialisation:

    @pytest.mark.asyncio
    async def test_detail_includes_big_five_groups(self, db_session):
        profile = await _saved_profile(db_session)
        profile_service.upsert_big_five(
            profile, {"openness_data": {"overall_level": "High"}}
        )
        await db_session.flush()
        profile = await profile_service.load_profile(db_session, profile.id)

        detail = profile_service.build_profile_detail(profile)
        assert detail.email == "jane@example.com"
        assert [g.name for g in detail.big_five_data] == ["Openness to Experience"]

    @pytest.mark.asyncio
    async def test_summary(self, db_session):
        profile = await _saved_profile(db_session)
        profile_service.upsert_chronotype(profile, {"types": ["Lion"]})
        await db_session.flush()
        profile = await profile_service.load_profile(db_session, profile.id)

        summary = profile_service.build_profile_summary(profile)
        assert summary.chronotype.primary_type == "Lion"
        assert summary.has_big_five is False
        assert summary.completeness == 33

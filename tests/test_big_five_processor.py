"""Unit tests for Big Five extraction from spreadsheet rows."""
import pytest

from app.excel.big_five_processor import (
    build_big_five_profile,
    build_big_five_subtraits,
    create_big_five_data,
    has_big_five_data,
    normalize_big_five_level,
)


class TestNormalizeLevel:

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("High", "High"),
            ("high", "High"),
            (" LOW ", "Low"),
            ("Average", "Average"),
            ("Neutral", "Average"),
            ("neutral ", "Average"),
            ("Hgh", "High"),
            ("Averag", "Average"),
        ],
    )
    def test_recognised(self, value, expected):
        assert normalize_big_five_level(value) == expected

    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_blank(self, value):
        assert normalize_big_five_level(value) is None

    def test_unrecognisable_gives_none(self):
        assert normalize_big_five_level("banana") is None

    @pytest.mark.parametrize("value", [3, 0, 4.5])
    def test_numbers_rejected(self, value):
        with pytest.raises(ValueError, match="not a number"):
            normalize_big_five_level(value)

    @pytest.mark.parametrize("value", [True, False])
    def test_boolean_rejected(self, value):
        with pytest.raises(ValueError, match="not a boolean"):
            normalize_big_five_level(value)


class TestCreateBigFiveData:

    @pytest.mark.parametrize("level, expected", [("High", 75), ("Average", 50), ("Low", 25), (None, 50)])
    def test_score_from_level(self, level, expected):
        data = create_big_five_data("Neuroticism", level, None)
        assert data["overall_score"] == expected

    def test_explicit_score_kept(self):
        assert create_big_five_data("Neuroticism", "High", 620)["overall_score"] == 620

    def test_zero_score_kept(self):
        assert create_big_five_data("Neuroticism", "Low", 0)["overall_score"] == 0

    def test_level_defaults_to_average(self):
        data = create_big_five_data("Agreeableness", None, None)
        assert data == {
            "group_name": "Agreeableness",
            "overall_level": "Average",
            "overall_score": 50,
            "subtraits": [],
        }


class TestBuildFromRow:

    def test_no_trait_levels(self):
        row = {"Email": "a@example.com", "BigFive_Neuroticism_Anxiety_Level": "High"}
        assert has_big_five_data(row) is False
        assert build_big_five_profile(row) is None

    def test_all_five_traits_returned(self):
        profile = build_big_five_profile({"BigFive_Extraversion_Level": "High"})
        assert set(profile) == {
            "neuroticism_data",
            "extraversion_data",
            "openness_data",
            "agreeableness_data",
            "conscientiousness_data",
        }
        assert profile["extraversion_data"]["overall_level"] == "High"
        assert profile["extraversion_data"]["overall_score"] == 75
        assert profile["neuroticism_data"]["overall_level"] == "Average"

    def test_legacy_openness_columns(self):
        row = {
            "BigFive_Openness_Level": "Low",
            "BigFive_Openness_Score": "310",
            "BigFive_Openness_Imagination_Level": "High",
            "BigFive_Openness_Imagination_Score": 880,
        }
        openness = build_big_five_profile(row)["openness_data"]
        assert openness["group_name"] == "Openness to Experience"
        assert openness["overall_level"] == "Low"
        assert openness["overall_score"] == 310
        assert openness["subtraits"] == [{"name": "Imagination", "level": "High", "score": 880}]

    def test_new_openness_columns_take_precedence(self):
        row = {
            "BigFive_OpennessToExperience_Level": "High",
            "BigFive_Openness_Level": "Low",
        }
        assert build_big_five_profile(row)["openness_data"]["overall_level"] == "High"

    def test_facet_display_names(self):
        row = {
            "BigFive_Neuroticism_SelfConsciousness_Level": "Average",
            "BigFive_Extraversion_ActivityLevel_Level": "High",
            "BigFive_Conscientiousness_SelfDiscipline_Level": "Low",
        }
        subtraits = build_big_five_subtraits(row)
        assert subtraits["Neuroticism"][0]["name"] == "Self-Consciousness"
        assert subtraits["Extraversion"][0]["name"] == "Activity Level"
        assert subtraits["Conscientiousness"][0]["name"] == "Self Discipline"
        assert subtraits["Agreeableness"] == []

    def test_facet_without_level_skipped(self):
        row = {"BigFive_Agreeableness_Trust_Score": 500}
        assert build_big_five_subtraits(row)["Agreeableness"] == []

    def test_out_of_range_score_dropped(self):
        row = {"BigFive_Agreeableness_Level": "High", "BigFive_Agreeableness_Score": 1500}
        assert build_big_five_profile(row)["agreeableness_data"]["overall_score"] == 75

    def test_numeric_facet_level_raises(self):
        row = {"BigFive_Agreeableness_Level": "High", "BigFive_Agreeableness_Trust_Level": 4}
        with pytest.raises(ValueError):
            build_big_five_profile(row)

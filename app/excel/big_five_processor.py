"""
Big Five extraction from an imported spreadsheet row.

Produces the stored trait format used by ``big_five_profiles`` (see
``app.services.big_five``) keyed by column name.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from app.excel.columns import BIG_FIVE_FACETS, BIG_FIVE_TRAIT_ORDER, trait_columns
from app.excel.fuzzy_match import fuzzy_match
from app.excel.parsers import is_blank, parse_score
from app.schemas.profile import MAX_SCORE, MIN_SCORE
from app.services.big_five import BIG_FIVE_TEMPLATE, TRAIT_COLUMNS

LEVELS = ["High", "Average", "Low"]
LEVEL_SCORES = {"High": 75, "Average": 50, "Low": 25}
DEFAULT_SCORE = 50

# Spreadsheet trait key -> (stored group name, storage column)
_TRAIT_TARGETS = {
    trait: (template["name"], column)
    for trait, template, column in zip(BIG_FIVE_TRAIT_ORDER, BIG_FIVE_TEMPLATE, TRAIT_COLUMNS)
}


def normalize_big_five_level(value: Any) -> Optional[str]:
    """Map a level cell to ``High`` / ``Average`` / ``Low``.

    Blank cells give ``None``.  Numbers and booleans are data errors and
    raise ``ValueError``.  ``Neutral`` counts as ``Average`` and small typos
    are corrected; anything unrecognisable gives ``None``.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError(
            f'Invalid level value: "{value}". Expected "High", "Average", or "Low", not a boolean.'
        )
    if isinstance(value, (int, float)):
        raise ValueError(
            f'Invalid level value: "{value}". Expected "High", "Average", or "Low", not a number.'
        )
    if not isinstance(value, str):
        raise ValueError(
            f'Invalid level type: {type(value).__name__}. Expected "High", "Average", or "Low".'
        )

    normalized = value.strip().lower()
    if not normalized:
        return None
    if normalized == "neutral":
        return "Average"
    for level in LEVELS:
        if normalized == level.lower():
            return level
    return fuzzy_match(value, LEVELS)


def create_big_five_data(
    name: str,
    level: Optional[str],
    score: Optional[int],
    subtraits: Optional[list[dict]] = None,
) -> dict:
    if score is None:
        score = LEVEL_SCORES.get(level, DEFAULT_SCORE)
    return {
        "group_name": name,
        "overall_level": level or "Average",
        "overall_score": score,
        "subtraits": list(subtraits or []),
    }


def _first_filled(row: Mapping[str, Any], columns: list[str]) -> Any:
    for column in columns:
        value = row.get(column)
        if not is_blank(value):
            return value
    return None


def _score(row: Mapping[str, Any], columns: list[str]) -> Optional[int]:
    score = parse_score(_first_filled(row, columns))
    if score is None or not MIN_SCORE <= score <= MAX_SCORE:
        return None
    return score


def build_big_five_subtraits(row: Mapping[str, Any]) -> dict[str, list[dict]]:
    """Facets with a recognisable level, per spreadsheet trait key."""
    result: dict[str, list[dict]] = {}
    for trait in BIG_FIVE_TRAIT_ORDER:
        subtraits = []
        for facet_key, display_name in BIG_FIVE_FACETS[trait]:
            level = normalize_big_five_level(
                _first_filled(row, trait_columns(trait, f"{facet_key}_Level"))
            )
            if level is None:
                continue
            subtraits.append({
                "name": display_name,
                "level": level,
                "score": _score(row, trait_columns(trait, f"{facet_key}_Score")),
            })
        result[trait] = subtraits
    return result


def has_big_five_data(row: Mapping[str, Any]) -> bool:
    return any(
        _first_filled(row, trait_columns(trait, "Level")) is not None
        for trait in BIG_FIVE_TRAIT_ORDER
    )


def build_big_five_profile(row: Mapping[str, Any]) -> Optional[dict[str, dict]]:
    """All five traits in stored format keyed by column, or ``None``.

    ``None`` means the row has no trait-level column filled in, in which
    case the stored profile should be left alone.
    """
    if not has_big_five_data(row):
        return None

    subtraits = build_big_five_subtraits(row)
    profile = {}
    for trait in BIG_FIVE_TRAIT_ORDER:
        group_name, column = _TRAIT_TARGETS[trait]
        profile[column] = create_big_five_data(
            group_name,
            normalize_big_five_level(_first_filled(row, trait_columns(trait, "Level"))),
            _score(row, trait_columns(trait, "Score")),
            subtraits[trait],
        )
    return profile

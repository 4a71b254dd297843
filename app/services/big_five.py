"""
People Profile — Big Five transforms

Converts between the two shapes a Big Five trait takes in this service:

* **stored** – one JSON document per ``big_five_profiles.*_data`` column::

      {"group_name": "Neuroticism", "overall_level": "Low",
       "overall_score": 450, "subtraits": [{"name", "level", "score"}]}

* **group** – what clients render, filled out from ``BIG_FIVE_TEMPLATE``::

      {"name": "Neuroticism", "color": "#7C3AED", "level": "Low",
       "score": 450, "subtraits": [... always six ...]}
"""

from __future__ import annotations

from typing import Any, Optional

# Display order, colours and facet names.  The index of a trait in this list
# is the ``template_index`` accepted by the transforms below.
BIG_FIVE_TEMPLATE: list[dict[str, Any]] = [
    {
        "name": "Neuroticism",
        "color": "#7C3AED",
        "subtraits": [
            "Anxiety", "Anger", "Depression",
            "Self-Consciousness", "Immoderation", "Vulnerability",
        ],
    },
    {
        "name": "Extraversion",
        "color": "#006CFA",
        "subtraits": [
            "Friendliness", "Gregariousness", "Assertiveness",
            "Activity Level", "Excitement Seeking", "Cheerfulness",
        ],
    },
    {
        "name": "Openness to Experience",
        "color": "#DB2777",
        "subtraits": [
            "Imagination", "Artistic Interests", "Emotionality",
            "Adventurousness", "Intellect", "Liberalism",
        ],
    },
    {
        "name": "Agreeableness",
        "color": "#E18600",
        "subtraits": [
            "Trust", "Morality", "Altruism",
            "Cooperation", "Modesty", "Sympathy",
        ],
    },
    {
        "name": "Conscientiousness",
        "color": "#059669",
        "subtraits": [
            "Self-Efficacy", "Orderliness", "Dutifulness",
            "Achievement", "Self Discipline", "Cautiousness",
        ],
    },
]

# Column on ``BigFiveProfile`` for each template entry, same order.
TRAIT_COLUMNS: list[str] = [
    "neuroticism_data",
    "extraversion_data",
    "openness_data",
    "agreeableness_data",
    "conscientiousness_data",
]

DEFAULT_LEVEL = "Average"

_COLUMN_BY_GROUP_NAME: dict[str, str] = {
    template["name"].lower(): column
    for template, column in zip(BIG_FIVE_TEMPLATE, TRAIT_COLUMNS)
}
_COLUMN_BY_GROUP_NAME["openness"] = "openness_data"


def column_for_group(name: str) -> Optional[str]:
    """Return the ``*_data`` column a group name is stored in, if any."""
    return _COLUMN_BY_GROUP_NAME.get((name or "").strip().lower())


def _as_dict(value: Any) -> dict:
    if hasattr(value, "model_dump"):
        return value.model_dump(mode="json")
    return dict(value)


def transform_big_five_data(db_data: Optional[dict], template_index: int) -> Optional[dict]:
    """Expand one stored trait into a display group.

    Returns ``None`` when the index is out of range or nothing is stored.
    Missing values fall back to the template; subtrait levels default to
    ``Average``.
    """
    if not 0 <= template_index < len(BIG_FIVE_TEMPLATE):
        return None
    if not db_data:
        return None

    template = BIG_FIVE_TEMPLATE[template_index]
    stored_subtraits = db_data.get("subtraits") or []
    by_name = {
        (s.get("name") or "").lower(): s
        for s in stored_subtraits
        if isinstance(s, dict)
    }

    subtraits = []
    for subtrait_name in template["subtraits"]:
        stored = by_name.get(subtrait_name.lower(), {})
        subtraits.append({
            "name": subtrait_name,
            "level": stored.get("level") or DEFAULT_LEVEL,
            "score": stored.get("score"),
        })

    score = db_data.get("overall_score")
    if score is None:
        score = db_data.get("score")

    return {
        "name": db_data.get("group_name") or db_data.get("name") or template["name"],
        "color": db_data.get("color") or template["color"],
        "level": db_data.get("overall_level") or db_data.get("level") or DEFAULT_LEVEL,
        "score": score,
        "subtraits": subtraits,
    }


def transform_profile_to_big_five_data(profile: Any) -> list[dict]:
    """Map a ``BigFiveProfile`` (or a dict of its columns) to display groups.

    Traits with nothing stored are skipped, so the result holds 0..5 groups
    in template order.
    """
    if profile is None:
        return []

    groups = []
    for index, column in enumerate(TRAIT_COLUMNS):
        if isinstance(profile, dict):
            stored = profile.get(column)
        else:
            stored = getattr(profile, column, None)
        group = transform_big_five_data(stored, index)
        if group is not None:
            groups.append(group)
    return groups


def create_default_group(index: int) -> dict:
    template = BIG_FIVE_TEMPLATE[index]
    return {
        "name": template["name"],
        "color": template["color"],
        "level": DEFAULT_LEVEL,
        "score": None,
        "subtraits": [
            {"name": name, "level": DEFAULT_LEVEL, "score": None}
            for name in template["subtraits"]
        ],
    }


def transform_group_to_database(group: Any) -> dict:
    group = _as_dict(group)
    return {
        "group_name": group.get("name"),
        "overall_level": group.get("level") or DEFAULT_LEVEL,
        "overall_score": group.get("score"),
        "subtraits": [_as_dict(s) for s in group.get("subtraits") or []],
    }


def prepare_big_five_for_save(groups: Optional[list]) -> Optional[dict[str, dict]]:
    """Key display groups by their storage column.

    Groups whose name matches no trait are ignored.  Returns ``None`` for
    a missing or empty list so callers can leave the record untouched.
    """
    if not groups:
        return None

    prepared: dict[str, dict] = {}
    for group in groups:
        data = transform_group_to_database(group)
        column = column_for_group(data["group_name"])
        if column is not None:
            prepared[column] = data
    return prepared

"""
Spreadsheet column conventions shared by the reader, the importer and the
downloadable template.
"""

EMAIL = "Email"
NAME = "Name"
TEAM = "Team"
BIRTHDAY = "Birthday"
CHRONOTYPE = "Chronotype"
CORE_VALUE_COLUMNS = [f"CoreValue{i}" for i in range(1, 6)]
STRENGTH_COLUMNS = [f"Strength{i}" for i in range(1, 6)]
GOALS_PERIOD = "Goals_Period"
GOALS_PROFESSIONAL = "Goals_Professional"
GOALS_PERSONAL = "Goals_Personal"

# (column key, display name) per facet, in template order.
BIG_FIVE_FACETS: dict[str, list[tuple[str, str]]] = {
    "Neuroticism": [
        ("Anxiety", "Anxiety"),
        ("Anger", "Anger"),
        ("Depression", "Depression"),
        ("SelfConsciousness", "Self-Consciousness"),
        ("Immoderation", "Immoderation"),
        ("Vulnerability", "Vulnerability"),
    ],
    "Extraversion": [
        ("Friendliness", "Friendliness"),
        ("Gregariousness", "Gregariousness"),
        ("Assertiveness", "Assertiveness"),
        ("ActivityLevel", "Activity Level"),
        ("ExcitementSeeking", "Excitement Seeking"),
        ("Cheerfulness", "Cheerfulness"),
    ],
    "OpennessToExperience": [
        ("Imagination", "Imagination"),
        ("ArtisticInterests", "Artistic Interests"),
        ("Emotionality", "Emotionality"),
        ("Adventurousness", "Adventurousness"),
        ("Intellect", "Intellect"),
        ("Liberalism", "Liberalism"),
    ],
    "Agreeableness": [
        ("Trust", "Trust"),
        ("Morality", "Morality"),
        ("Altruism", "Altruism"),
        ("Cooperation", "Cooperation"),
        ("Modesty", "Modesty"),
        ("Sympathy", "Sympathy"),
    ],
    "Conscientiousness": [
        ("SelfEfficacy", "Self-Efficacy"),
        ("Orderliness", "Orderliness"),
        ("Dutifulness", "Dutifulness"),
        ("Achievement", "Achievement"),
        ("SelfDiscipline", "Self Discipline"),
        ("Cautiousness", "Cautiousness"),
    ],
}

BIG_FIVE_TRAIT_ORDER = list(BIG_FIVE_FACETS)

# Older sheets used "Openness"; the first prefix listed wins when both are filled.
TRAIT_PREFIXES: dict[str, tuple[str, ...]] = {
    trait: (trait,) for trait in BIG_FIVE_TRAIT_ORDER
}
TRAIT_PREFIXES["OpennessToExperience"] = ("OpennessToExperience", "Openness")


def trait_columns(trait: str, suffix: str) -> list[str]:
    """All accepted headers for ``BigFive_<trait>_<suffix>``."""
    return [f"BigFive_{prefix}_{suffix}" for prefix in TRAIT_PREFIXES[trait]]


def big_five_headers() -> list[str]:
    headers = []
    for trait in BIG_FIVE_TRAIT_ORDER:
        headers.append(f"BigFive_{trait}_Level")
        headers.append(f"BigFive_{trait}_Score")
        for facet_key, _ in BIG_FIVE_FACETS[trait]:
            headers.append(f"BigFive_{trait}_{facet_key}_Level")
            headers.append(f"BigFive_{trait}_{facet_key}_Score")
    return headers


def template_headers() -> list[str]:
    return [
        EMAIL,
        NAME,
        TEAM,
        BIRTHDAY,
        CHRONOTYPE,
        *CORE_VALUE_COLUMNS,
        *STRENGTH_COLUMNS,
        *big_five_headers(),
        GOALS_PERIOD,
        GOALS_PROFESSIONAL,
        GOALS_PERSONAL,
    ]

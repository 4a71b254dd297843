"""
Downloadable import template (``user_import_template.xlsx``).
"""

from __future__ import annotations

from io import BytesIO

from openpyxl import Workbook
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter

from app.excel.columns import (
    BIG_FIVE_FACETS,
    BIG_FIVE_TRAIT_ORDER,
    big_five_headers,
    template_headers,
)

TEMPLATE_VERSION = "2.0"
TEMPLATE_UPDATED_DATE = "2025-01-15"
TEMPLATE_FILENAME = "user_import_template.xlsx"
TEMPLATE_SHEET_NAME = "Users"

# trait: (level, score, {facet: (level, score)})
_SAMPLE_BIG_FIVE = {
    "Neuroticism": ("Low", 450, {
        "Anxiety": ("Low", 420),
        "Anger": ("Low", 400),
        "Depression": ("Low", 380),
        "SelfConsciousness": ("Average", 550),
        "Immoderation": ("Low", 430),
        "Vulnerability": ("Low", 470),
    }),
    "Extraversion": ("Average", 750, {
        "Friendliness": ("High", 800),
        "Gregariousness": ("Average", 720),
        "Assertiveness": ("High", 810),
        "ActivityLevel": ("Average", 740),
        "ExcitementSeeking": ("Low", 650),
        "Cheerfulness": ("Average", 780),
    }),
    "OpennessToExperience": ("High", 850, {
        "Imagination": ("High", 880),
        "ArtisticInterests": ("High", 820),
        "Emotionality": ("Average", 750),
        "Adventurousness": ("High", 900),
        "Intellect": ("High", 870),
        "Liberalism": ("Average", 780),
    }),
    "Agreeableness": ("High", 800, {
        "Trust": ("Average", 750),
        "Morality": ("High", 850),
        "Altruism": ("High", 820),
        "Cooperation": ("High", 810),
        "Modesty": ("Average", 770),
        "Sympathy": ("High", 830),
    }),
    "Conscientiousness": ("High", 920, {
        "SelfEfficacy": ("High", 910),
        "Orderliness": ("High", 880),
        "Dutifulness": ("High", 950),
        "Achievement": ("High", 930),
        "SelfDiscipline": ("High", 900),
        "Cautiousness": ("Average", 820),
    }),
}


def sample_row() -> list:
    big_five = []
    for trait in BIG_FIVE_TRAIT_ORDER:
        level, score, facets = _SAMPLE_BIG_FIVE[trait]
        big_five.extend([level, score])
        for facet_key, _ in BIG_FIVE_FACETS[trait]:
            big_five.extend(facets[facet_key])

    return [
        "john.doe@example.com",
        "John Doe",
        "Engineering",
        "1990-01-15",
        "Lion",
        "Innovation", "Integrity", "Collaboration", "", "",
        "Creativity", "Leadership", "Persistence", "", "",
        *big_five,
        "Q1 2025",
        "Lead three major projects and mentor two junior developers",
        "Complete a marathon and learn Spanish",
    ]


def column_widths() -> list[int]:
    return (
        [25, 20, 15, 12, 12]
        + [15] * 10
        + [10] * len(big_five_headers())
        + [15, 50, 50]
    )


def build_template_workbook() -> bytes:
    """Render the template workbook and return the ``.xlsx`` bytes."""
    workbook = Workbook()
    sheet = workbook.active
    sheet.title = TEMPLATE_SHEET_NAME

    sheet.append(template_headers())
    sheet.append([value if value != "" else None for value in sample_row()])

    for cell in sheet[1]:
        cell.font = Font(bold=True)
    sheet.freeze_panes = "A2"

    for index, width in enumerate(column_widths(), start=1):
        sheet.column_dimensions[get_column_letter(index)].width = width

    buffer = BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()

"""
Cell value parsers for imported spreadsheets.

Cells arrive as whatever openpyxl produced: ``str``, ``int``, ``float``,
``datetime`` or ``None``.  Every parser here is lenient and returns ``None``
(or an empty list) instead of raising on unusable input.
"""

from __future__ import annotations

import math
import re
from datetime import date, datetime, timedelta
from typing import Any, Optional

_EXCEL_EPOCH = datetime(1900, 1, 1)

_BIRTHDAY_FORMATS = (
    "%Y-%m-%d",
    "%Y/%m/%d",
    "%d/%m/%Y",
    "%d.%m.%Y",
    "%d-%m-%Y",
    "%d %B %Y",
    "%d %b %Y",
    "%B %d, %Y",
    "%b %d, %Y",
    "%B %d %Y",
    "%b %d %Y",
)

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")
_CHRONOTYPE_SEPARATORS = re.compile(r"[,/\s]+")
_CHRONOTYPES = {
    "lion": "Lion",
    "bear": "Bear",
    "wolf": "Wolf",
    "dolphin": "Dolphin",
}


def is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def cell_text(value: Any) -> str:
    """Render a cell as trimmed text (``""`` for empty cells)."""
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value).strip()


def excel_serial_to_date(serial: float) -> date:
    """Convert an Excel 1900-system serial number to a date.

    Excel counts 1900-02-29, which never existed, so serials after 59 are
    one day ahead of the calendar on top of the 1-based epoch.
    """
    adjusted = serial - 2 if serial > 59 else serial - 1
    return (_EXCEL_EPOCH + timedelta(days=adjusted)).date()


def parse_birthday(value: Any) -> Optional[date]:
    if is_blank(value) or isinstance(value, bool):
        return None

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    if isinstance(value, (int, float)):
        if isinstance(value, float) and not math.isfinite(value):
            return None
        if value <= 0:
            return None
        try:
            return excel_serial_to_date(value)
        except OverflowError:
            return None

    text = str(value).strip()
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        pass

    for fmt in _BIRTHDAY_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None


def parse_score(value: Any) -> Optional[int]:
    """Integer score from a cell: floats truncate, strings use their leading integer."""
    if is_blank(value) or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None

    match = _LEADING_INT.match(str(value))
    return int(match.group(1)) if match else None


def parse_chronotypes(text: Any) -> list[str]:
    """Extract chronotypes from text like ``"Lion (Bear)"`` or ``"wolf/dolphin"``."""
    if is_blank(text):
        return []

    cleaned = re.sub(r"[()]", " ", str(text))
    found: list[str] = []
    for part in _CHRONOTYPE_SEPARATORS.split(cleaned):
        animal = _CHRONOTYPES.get(part.strip().lower())
        if animal and animal not in found:
            found.append(animal)
    return found

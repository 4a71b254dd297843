"""
Workbook reader for bulk imports.

Reads the first worksheet of an ``.xlsx`` / ``.xlsm`` file with openpyxl,
uses row 1 as headers and yields one ``ExcelRow`` per non-blank data row.
"""

from __future__ import annotations

import zipfile
from dataclasses import dataclass, field
from io import BytesIO
from typing import Any

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from app.excel.parsers import is_blank


class ExcelParseError(ValueError):
    """The upload is not a readable workbook."""


@dataclass
class ExcelRow:
    row_number: int
    values: dict[str, Any] = field(default_factory=dict)

    def get(self, column: str, default: Any = None) -> Any:
        return self.values.get(column, default)

    def __getitem__(self, column: str) -> Any:
        return self.values[column]

    def __contains__(self, column: object) -> bool:
        return column in self.values


def parse_excel_file(content: bytes) -> list[ExcelRow]:
    """Parse workbook bytes into rows keyed by header.

    Columns with an empty header are ignored and fully blank rows are
    skipped; ``row_number`` is the 1-based row on the sheet.
    """
    try:
        workbook = load_workbook(BytesIO(content), read_only=True, data_only=True)
    except (InvalidFileException, zipfile.BadZipFile, KeyError, OSError) as exc:
        raise ExcelParseError(f"Could not read Excel file: {exc}") from exc

    try:
        if not workbook.worksheets:
            return []
        sheet = workbook.worksheets[0]
        row_iter = sheet.iter_rows(values_only=True)

        header_row = next(row_iter, None)
        if header_row is None:
            return []
        headers = [
            str(h).strip() if h is not None and str(h).strip() else None
            for h in header_row
        ]

        rows: list[ExcelRow] = []
        for row_number, raw in enumerate(row_iter, start=2):
            values = {
                header: value
                for header, value in zip(headers, raw)
                if header is not None and not is_blank(value)
            }
            if values:
                rows.append(ExcelRow(row_number=row_number, values=values))
        return rows
    finally:
        workbook.close()

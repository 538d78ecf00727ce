"""Sheet to record sequence extraction."""

from __future__ import annotations

from typing import Any

from excel_asset_importer.record_schema import RecordType
from excel_asset_importer.workbook_loading import CellKind, Sheet

from .cell_coercion import TypeMismatchError
from .row_mapping import map_row

HEADER_ROW_INDEX = 0
COMMENT_PREFIX = "#"


def read_column_names(sheet: Sheet) -> list[str]:
    """Return the contiguous header names of row 0."""
    header_row = sheet.row(HEADER_ROW_INDEX)
    if header_row is None:
        return []
    names: list[str] = []
    for column_index, cell in enumerate(header_row.cells):
        if cell is None or cell.is_blank:
            break
        text = cell.text
        if text is None:
            raise TypeMismatchError.at(HEADER_ROW_INDEX, column_index, sheet.name)
        names.append(text)
    return names


def extract_records(sheet: Sheet, record_type: RecordType) -> list[Any]:
    """Map the data rows of a sheet to records in row order.

    Extraction ends at the first absent row or the first row whose leading cell is
    absent or blank. Rows whose leading text starts with ``#`` are comments.
    A sheet with data below a missing header row is rejected at row 0.
    """
    if sheet.row(HEADER_ROW_INDEX) is None:
        if any(row is not None for row in sheet.rows):
            raise TypeMismatchError.at(HEADER_ROW_INDEX, 0, sheet.name)
        return []
    column_names = read_column_names(sheet)
    records: list[Any] = []
    for row_index in range(HEADER_ROW_INDEX + 1, sheet.last_row_index + 1):
        row = sheet.row(row_index)
        if row is None:
            break
        entry_cell = row.cell(0)
        if entry_cell is None or entry_cell.is_blank:
            break
        if entry_cell.kind is CellKind.STRING and str(entry_cell.value).startswith(COMMENT_PREFIX):
            continue
        records.append(map_row(row, column_names, record_type, sheet.name))
    return records

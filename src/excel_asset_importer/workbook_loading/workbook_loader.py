"""Workbook loading service for legacy binary and XML-based workbooks."""

from __future__ import annotations

import logging
from datetime import date, datetime, time, timedelta
from io import BytesIO
from pathlib import Path

import xlrd
from openpyxl import load_workbook as openpyxl_load_workbook
from openpyxl.utils.datetime import to_excel

from .workbook_models import Cell, CellKind, Row, Sheet, Workbook, WorkbookVariant

logger = logging.getLogger(__name__)

OLE2_SIGNATURE = b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1"
ZIP_SIGNATURE = b"PK\x03\x04"

_SIGNATURES = {
    WorkbookVariant.XLS: OLE2_SIGNATURE,
    WorkbookVariant.XLSX: ZIP_SIGNATURE,
}

_XLS_KINDS = {
    xlrd.XL_CELL_TEXT: CellKind.STRING,
    xlrd.XL_CELL_NUMBER: CellKind.NUMERIC,
    xlrd.XL_CELL_DATE: CellKind.NUMERIC,
    xlrd.XL_CELL_BOOLEAN: CellKind.BOOLEAN,
    xlrd.XL_CELL_BLANK: CellKind.BLANK,
    xlrd.XL_CELL_ERROR: CellKind.ERROR,
}


class FileFormatError(Exception):
    """Raised when a workbook file does not match its extension-implied format."""


def workbook_variant(path: Path | str) -> WorkbookVariant:
    """Select the decoder for a workbook path by its extension."""
    suffix = Path(path).suffix
    for variant in WorkbookVariant:
        if variant.value == suffix:
            return variant
    raise FileFormatError(f"Unsupported workbook extension '{suffix}': {path}")


def load_workbook(path: Path | str) -> Workbook:
    """Open a workbook file and decode all of its sheets.

    The file is read fully with a non-exclusive open so the application that wrote it
    may still hold a handle. No handle is kept after this call returns.

    Raises:
      FileFormatError: If the extension is unsupported, the container signature does
        not match the extension, or the decoder rejects the content.
    """
    path = Path(path)
    variant = workbook_variant(path)
    data = path.read_bytes()
    signature = _SIGNATURES[variant]
    if not data.startswith(signature):
        raise FileFormatError(
            f"File content does not match the {variant.value} container signature: {path}"
        )

    if variant is WorkbookVariant.XLS:
        sheets = _decode_xls(data, path)
    else:
        sheets = _decode_xlsx(data, path)
    logger.debug("Loaded workbook %s with sheets %s", path, [sheet.name for sheet in sheets])
    return Workbook(path=path, variant=variant, sheets=tuple(sheets))


def list_sheet_names(path: Path | str) -> tuple[str, ...]:
    """Return the sheet names of a workbook in workbook order."""
    return load_workbook(path).sheet_names


def _decode_xls(data: bytes, path: Path) -> list[Sheet]:
    try:
        book = xlrd.open_workbook(file_contents=data)
    except Exception as exc:  # pylint: disable=broad-exception-caught
        raise FileFormatError(f"Failed to read legacy workbook {path}: {exc}") from exc

    sheets: list[Sheet] = []
    for xls_sheet in book.sheets():
        rows: list[Row | None] = []
        for row_index in range(xls_sheet.nrows):
            cells = tuple(
                xls_cell_to_cell(xls_sheet.cell(row_index, column_index), row_index, column_index)
                for column_index in range(xls_sheet.row_len(row_index))
            )
            rows.append(_row_or_absent(row_index, cells))
        sheets.append(Sheet(name=xls_sheet.name, rows=tuple(rows)))
    return sheets


def xls_cell_to_cell(xls_cell, row_index: int, column_index: int) -> Cell | None:
    """Convert an xlrd cell; empty positions are absent."""
    if xls_cell.ctype == xlrd.XL_CELL_EMPTY:
        return None
    kind = _XLS_KINDS.get(xls_cell.ctype, CellKind.ERROR)
    value = xls_cell.value
    if kind is CellKind.BOOLEAN:
        value = bool(value)
    elif kind is CellKind.NUMERIC:
        value = float(value)
    elif kind is CellKind.BLANK:
        value = None
    return Cell(row_index=row_index, column_index=column_index, kind=kind, value=value)


def _decode_xlsx(data: bytes, path: Path) -> list[Sheet]:
    try:
        formula_book = openpyxl_load_workbook(BytesIO(data), data_only=False)
        value_book = openpyxl_load_workbook(BytesIO(data), data_only=True)
    except Exception as exc:  # pylint: disable=broad-exception-caught
        raise FileFormatError(f"Failed to read workbook {path}: {exc}") from exc

    sheets: list[Sheet] = []
    for formula_sheet in formula_book.worksheets:
        value_sheet = value_book[formula_sheet.title]
        bounds = {
            "min_row": 1,
            "max_row": formula_sheet.max_row,
            "min_col": 1,
            "max_col": formula_sheet.max_column,
        }
        rows: list[Row | None] = []
        for row_index, (formula_row, value_row) in enumerate(
            zip(formula_sheet.iter_rows(**bounds), value_sheet.iter_rows(**bounds))
        ):
            cells = tuple(
                xlsx_cell_to_cell(formula_cell, value_cell, row_index, column_index)
                for column_index, (formula_cell, value_cell) in enumerate(
                    zip(formula_row, value_row)
                )
            )
            rows.append(_row_or_absent(row_index, cells))
        sheets.append(Sheet(name=formula_sheet.title, rows=tuple(rows)))
    formula_book.close()
    value_book.close()
    return sheets


def xlsx_cell_to_cell(formula_cell, value_cell, row_index: int, column_index: int) -> Cell | None:
    """Combine the formula view and the cached-value view of one openpyxl cell."""
    if formula_cell.data_type == "f":
        cached_kind, cached_value = _classify_xlsx_value(value_cell.data_type, value_cell.value)
        formula = getattr(formula_cell.value, "text", formula_cell.value)
        return Cell(
            row_index=row_index,
            column_index=column_index,
            kind=CellKind.FORMULA,
            value=formula,
            cached_kind=cached_kind,
            cached_value=cached_value,
        )
    if formula_cell.value is None:
        return None
    kind, value = _classify_xlsx_value(formula_cell.data_type, formula_cell.value)
    return Cell(row_index=row_index, column_index=column_index, kind=kind, value=value)


def _classify_xlsx_value(data_type: str, value: object) -> tuple[CellKind, object]:
    if value is None:
        return CellKind.BLANK, None
    if isinstance(value, bool):
        return CellKind.BOOLEAN, value
    if isinstance(value, datetime | date | time | timedelta):
        return CellKind.NUMERIC, float(to_excel(value))
    if isinstance(value, int | float):
        return CellKind.NUMERIC, float(value)
    if data_type == "e":
        return CellKind.ERROR, value
    if isinstance(value, str):
        return CellKind.STRING, value
    return CellKind.ERROR, value


def _row_or_absent(row_index: int, cells: tuple[Cell | None, ...]) -> Row | None:
    if all(cell is None for cell in cells):
        return None
    return Row(index=row_index, cells=cells)

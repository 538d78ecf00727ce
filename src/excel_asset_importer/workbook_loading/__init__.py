"""Workbook loading exports."""

from .workbook_loader import FileFormatError, list_sheet_names, load_workbook, workbook_variant
from .workbook_models import Cell, CellKind, Row, Sheet, Workbook, WorkbookVariant

__all__ = [
    "Cell",
    "CellKind",
    "Row",
    "Sheet",
    "Workbook",
    "WorkbookVariant",
    "FileFormatError",
    "list_sheet_names",
    "load_workbook",
    "workbook_variant",
]

"""Workbook loading entities."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class CellKind(Enum):
    """Runtime kind of a stored cell value."""

    STRING = "string"
    BOOLEAN = "boolean"
    NUMERIC = "numeric"
    FORMULA = "formula"
    BLANK = "blank"
    ERROR = "error"


class WorkbookVariant(Enum):
    """Container format of a workbook file."""

    XLS = ".xls"
    XLSX = ".xlsx"


@dataclass(frozen=True)
class Cell:
    """One stored grid position.

    Formula cells keep the formula text in ``value`` and the result computed by the
    producing application in ``cached_kind``/``cached_value``.
    """

    row_index: int
    column_index: int
    kind: CellKind
    value: object = None
    cached_kind: CellKind | None = None
    cached_value: object = None

    @property
    def is_blank(self) -> bool:
        return self.kind is CellKind.BLANK

    @property
    def text(self) -> str | None:
        """Return the string content of a text cell or a formula with a text result."""
        if self.kind is CellKind.STRING:
            return str(self.value)
        if self.kind is CellKind.FORMULA and self.cached_kind is CellKind.STRING:
            return str(self.cached_value)
        return None


@dataclass(frozen=True)
class Row:
    """A row of cells indexed by column; ``None`` marks an absent cell."""

    index: int
    cells: tuple[Cell | None, ...]

    def cell(self, column_index: int) -> Cell | None:
        if 0 <= column_index < len(self.cells):
            return self.cells[column_index]
        return None


@dataclass(frozen=True)
class Sheet:
    """A named grid; row 0 is the header row."""

    name: str
    rows: tuple[Row | None, ...]

    def row(self, row_index: int) -> Row | None:
        if 0 <= row_index < len(self.rows):
            return self.rows[row_index]
        return None

    @property
    def last_row_index(self) -> int:
        return len(self.rows) - 1


@dataclass(frozen=True)
class Workbook:
    """An opened workbook and its sheets in workbook order."""

    path: Path
    variant: WorkbookVariant
    sheets: tuple[Sheet, ...]

    def sheet(self, name: str) -> Sheet | None:
        for sheet in self.sheets:
            if sheet.name == name:
                return sheet
        return None

    @property
    def sheet_names(self) -> tuple[str, ...]:
        return tuple(sheet.name for sheet in self.sheets)

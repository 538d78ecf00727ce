"""Shared fixtures: the item catalogue schema and in-memory sheet builders."""

from __future__ import annotations

import zipfile
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

import pytest
import xlwt
from openpyxl import Workbook as OpenpyxlWorkbook

from excel_asset_importer.record_schema import (
    AssetType,
    FieldSpec,
    NumericType,
    RecordType,
    SchemaDeclaration,
)
from excel_asset_importer.workbook_loading import Cell, CellKind, Row, Sheet

ITEM_HEADER = ["id", "name", "price", "isNotForSale", "rate", "category"]


class MstItemCategory(Enum):
    Red = 0
    Green = 1
    Blue = 2


@dataclass(frozen=True)
class MstItemEntity:
    id: int = 0
    name: str | None = None
    price: int = 0
    isNotForSale: bool = False
    rate: float = 0.0
    category: MstItemCategory = MstItemCategory.Red


@pytest.fixture
def item_category() -> type[MstItemCategory]:
    return MstItemCategory


@pytest.fixture
def item_entity_cls() -> type[MstItemEntity]:
    return MstItemEntity


@pytest.fixture
def item_record_type() -> RecordType:
    return RecordType.declare(
        "MstItemEntity",
        [
            FieldSpec.numeric("id", NumericType.INT32),
            FieldSpec.string("name"),
            FieldSpec.numeric("price", NumericType.INT32),
            FieldSpec.boolean("isNotForSale"),
            FieldSpec.numeric("rate", NumericType.FLOAT32),
            FieldSpec.enum("category", MstItemCategory),
        ],
        factory=MstItemEntity,
    )


@pytest.fixture
def items_declaration(item_record_type: RecordType) -> SchemaDeclaration:
    asset_type = AssetType.declare(
        "MstItems",
        [FieldSpec.records("Entities", item_record_type), FieldSpec.string("note")],
    )
    return SchemaDeclaration(asset_type=asset_type, log_on_import=True)


def build_cell(row_index: int, column_index: int, value: object) -> Cell | None:
    if value is None or isinstance(value, Cell):
        return value
    if isinstance(value, bool):
        kind = CellKind.BOOLEAN
    elif isinstance(value, int | float):
        kind, value = CellKind.NUMERIC, float(value)
    else:
        kind = CellKind.STRING
    return Cell(row_index=row_index, column_index=column_index, kind=kind, value=value)


def build_sheet(name: str, rows: Sequence[Sequence[object] | None]) -> Sheet:
    return Sheet(
        name=name,
        rows=tuple(
            None
            if values is None
            else Row(
                index=row_index,
                cells=tuple(
                    build_cell(row_index, column_index, value)
                    for column_index, value in enumerate(values)
                ),
            )
            for row_index, values in enumerate(rows)
        ),
    )


def write_xlsx(path: Path, sheets: Mapping[str, Sequence[Sequence[object]]]) -> Path:
    workbook = OpenpyxlWorkbook()
    workbook.remove(workbook.active)
    for sheet_name, rows in sheets.items():
        sheet = workbook.create_sheet(sheet_name)
        for row_index, values in enumerate(rows, start=1):
            for column_index, value in enumerate(values, start=1):
                if value is not None:
                    sheet.cell(row=row_index, column=column_index, value=value)
    path.parent.mkdir(parents=True, exist_ok=True)
    workbook.save(path)
    return path


def write_xls(path: Path, sheets: Mapping[str, Sequence[Sequence[object]]]) -> Path:
    workbook = xlwt.Workbook()
    for sheet_name, rows in sheets.items():
        sheet = workbook.add_sheet(sheet_name)
        for row_index, values in enumerate(rows):
            for column_index, value in enumerate(values):
                if value is not None:
                    sheet.write(row_index, column_index, value)
    path.parent.mkdir(parents=True, exist_ok=True)
    workbook.save(str(path))
    return path


def replace_xlsx_entry(path: Path, entry_name: str, data: bytes) -> Path:
    """Rewrite one archive member of a saved xlsx in place."""
    with zipfile.ZipFile(path) as archive:
        entries = {name: archive.read(name) for name in archive.namelist()}
    entries[entry_name] = data
    with zipfile.ZipFile(path, "w", zipfile.ZIP_DEFLATED) as archive:
        for name, payload in entries.items():
            archive.writestr(name, payload)
    return path


@pytest.fixture
def make_sheet() -> Callable[[str, Sequence[Sequence[object] | None]], Sheet]:
    return build_sheet


@pytest.fixture
def make_xlsx() -> Callable[[Path, Mapping[str, Sequence[Sequence[object]]]], Path]:
    return write_xlsx


@pytest.fixture
def make_xls() -> Callable[[Path, Mapping[str, Sequence[Sequence[object]]]], Path]:
    return write_xls


@pytest.fixture
def rewrite_xlsx_entry() -> Callable[[Path, str, bytes], Path]:
    return replace_xlsx_entry


@pytest.fixture
def item_rows() -> list[list[object]]:
    return [
        ITEM_HEADER,
        [1, "Sword", 100, False, 0.5, "Red"],
        ["#comment"],
        [2, "Shield", 50, True, 0.1, "Blue"],
    ]

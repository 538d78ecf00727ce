"""Cell value coercion into declared field types."""

from __future__ import annotations

import math
import struct
from typing import Any

from excel_asset_importer.record_schema import FieldKind, FieldSpec, NumericType
from excel_asset_importer.workbook_loading import Cell, CellKind


class TypeMismatchError(Exception):
    """Raised when a cell's content cannot be coerced to its field's type."""

    def __init__(
        self,
        message: str,
        *,
        row_index: int | None = None,
        column_index: int | None = None,
        sheet_name: str | None = None,
    ) -> None:
        super().__init__(message)
        self.row_index = row_index
        self.column_index = column_index
        self.sheet_name = sheet_name

    @classmethod
    def at(cls, row_index: int, column_index: int, sheet_name: str) -> TypeMismatchError:
        return cls(
            f"Invalid excel cell type at row {row_index}, column {column_index}, "
            f"{sheet_name} sheet.",
            row_index=row_index,
            column_index=column_index,
            sheet_name=sheet_name,
        )


def coerce_cell(cell: Cell, field: FieldSpec) -> Any:
    """Convert one cell to the value stored in ``field``.

    Formula cells are resolved once through their cached result; formulas are never
    evaluated.
    """
    kind, value = cell.kind, cell.value
    if kind is CellKind.FORMULA:
        kind, value = cell.cached_kind, cell.cached_value

    if kind is CellKind.STRING:
        return _coerce_text(str(value), field)
    if kind is CellKind.BOOLEAN:
        if field.kind is not FieldKind.BOOLEAN:
            raise TypeMismatchError(
                f"Boolean cell cannot fill {field.kind.value} field '{field.name}'."
            )
        return bool(value)
    if kind is CellKind.NUMERIC:
        return _coerce_number(float(value), field)  # type: ignore[arg-type]
    return field.zero_value()


def _coerce_text(text: str, field: FieldSpec) -> Any:
    if field.kind is FieldKind.ENUM:
        assert field.enum_type is not None
        try:
            return field.enum_type[text]
        except KeyError as exc:
            raise TypeMismatchError(
                f"'{text}' is not a member of {field.enum_type.__name__}."
            ) from exc
    if field.kind is FieldKind.STRING:
        return text
    if field.kind is FieldKind.NUMERIC_ARRAY:
        assert field.numeric_type is not None
        if not text.strip():
            return ()
        try:
            numbers = [float(token) for token in text.split(",")]
        except ValueError as exc:
            raise TypeMismatchError(f"'{text}' is not a comma separated number list.") from exc
        return tuple(convert_number(number, field.numeric_type) for number in numbers)
    raise TypeMismatchError(f"Text cell cannot fill {field.kind.value} field '{field.name}'.")


def _coerce_number(number: float, field: FieldSpec) -> Any:
    if field.kind is FieldKind.NUMERIC:
        assert field.numeric_type is not None
        return convert_number(number, field.numeric_type)
    if field.kind is FieldKind.BOOLEAN:
        return number != 0
    if field.kind is FieldKind.STRING:
        return _number_text(number)
    if field.kind is FieldKind.NUMERIC_ARRAY:
        assert field.numeric_type is not None
        return (convert_number(number, field.numeric_type),)
    raise TypeMismatchError(f"Numeric cell cannot fill {field.kind.value} field '{field.name}'.")


def convert_number(number: float, numeric_type: NumericType) -> int | float:
    """Narrow a spreadsheet number to a declared width.

    Integral widths round half to even and reject out-of-range or non-finite values.
    """
    if numeric_type.is_integral:
        if not math.isfinite(number):
            raise TypeMismatchError(f"{number} cannot be stored as {numeric_type.value}.")
        converted = round(number)
        low, high = numeric_type.bounds
        if not low <= converted <= high:
            raise TypeMismatchError(f"{number} is out of range for {numeric_type.value}.")
        return converted
    if numeric_type is NumericType.FLOAT32:
        try:
            return struct.unpack("<f", struct.pack("<f", number))[0]
        except OverflowError as exc:
            raise TypeMismatchError(f"{number} is out of range for float32.") from exc
    return number


def _number_text(number: float) -> str:
    if number.is_integer():
        return str(int(number))
    return repr(number)

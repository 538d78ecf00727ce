"""Row to record mapping service."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from excel_asset_importer.record_schema import RecordType
from excel_asset_importer.workbook_loading import Row

from .cell_coercion import TypeMismatchError, coerce_cell

logger = logging.getLogger(__name__)


def map_row(
    row: Row, column_names: Sequence[str], record_type: RecordType, sheet_name: str
) -> Any:
    """Build one record from a data row.

    Columns without a matching importable field and absent cells are skipped; the
    corresponding fields keep their zero value.
    """
    values: dict[str, Any] = {}
    for column_index, column_name in enumerate(column_names):
        field = record_type.field(column_name)
        if field is None:
            continue
        if not field.importable:
            logger.debug(
                "Column '%s' of sheet %s matches non-importable field of %s",
                column_name,
                sheet_name,
                record_type.name,
            )
            continue
        cell = row.cell(column_index)
        if cell is None:
            continue
        try:
            values[field.name] = coerce_cell(cell, field)
        except Exception as exc:  # pylint: disable=broad-exception-caught
            raise TypeMismatchError.at(row.index, column_index, sheet_name) from exc
    try:
        return record_type.build(values)
    except (TypeError, ValueError) as exc:
        raise TypeMismatchError(
            f"Record {record_type.name} rejected row {row.index} of {sheet_name} sheet: {exc}",
            row_index=row.index,
            sheet_name=sheet_name,
        ) from exc

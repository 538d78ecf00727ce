"""Record mapping exports."""

from .cell_coercion import TypeMismatchError, coerce_cell, convert_number
from .row_mapping import map_row
from .sheet_extraction import extract_records, read_column_names

__all__ = [
    "TypeMismatchError",
    "coerce_cell",
    "convert_number",
    "extract_records",
    "map_row",
    "read_column_names",
]

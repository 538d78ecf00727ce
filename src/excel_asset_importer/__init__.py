"""Spreadsheet workbook to typed asset importer."""

from .import_orchestration import (
    BatchResult,
    ImportOutcome,
    ImportStatus,
    import_batch,
    import_workbook,
)
from .record_schema import AssetType, FieldSpec, NumericType, RecordType, SchemaDeclaration
from .schema_registry import SchemaRegistry, default_registry, register_schema

__all__ = [
    "AssetType",
    "BatchResult",
    "FieldSpec",
    "ImportOutcome",
    "ImportStatus",
    "NumericType",
    "RecordType",
    "SchemaDeclaration",
    "SchemaRegistry",
    "default_registry",
    "import_batch",
    "import_workbook",
    "register_schema",
]

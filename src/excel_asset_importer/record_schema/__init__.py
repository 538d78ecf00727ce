"""Record schema exports."""

from .asset_models import AssetType, SchemaDeclaration
from .field_models import FieldKind, FieldSpec, NumericType, RecordType

__all__ = [
    "AssetType",
    "FieldKind",
    "FieldSpec",
    "NumericType",
    "RecordType",
    "SchemaDeclaration",
]

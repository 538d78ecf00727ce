"""Schema registry exports."""

from .schema_registry import (
    SchemaNotFoundError,
    SchemaRegistry,
    default_registry,
    register_schema,
)

__all__ = [
    "SchemaNotFoundError",
    "SchemaRegistry",
    "default_registry",
    "register_schema",
]

"""Schema generation exports."""

from .schema_stub_builder import SLOT_PLACEHOLDER, build_schema_stub, write_schema_stub

__all__ = [
    "SLOT_PLACEHOLDER",
    "build_schema_stub",
    "write_schema_stub",
]

"""Asset type and schema declaration entities."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from .field_models import FieldKind, FieldSpec


@dataclass(frozen=True)
class AssetType:
    """Destination collection type: named slots, some holding record sequences."""

    name: str
    slots: tuple[FieldSpec, ...]

    @classmethod
    def declare(cls, name: str, slots: Iterable[FieldSpec]) -> AssetType:
        return cls(name=name, slots=tuple(slots))

    @property
    def record_slots(self) -> tuple[FieldSpec, ...]:
        return tuple(slot for slot in self.slots if slot.kind is FieldKind.RECORD_SEQUENCE)

    def slot(self, name: str) -> FieldSpec | None:
        for slot in self.slots:
            if slot.name == name:
                return slot
        return None


@dataclass(frozen=True)
class SchemaDeclaration:
    """Binds an external workbook name to an asset type and destination.

    ``asset_root`` is the base for ``asset_path``; declarations loaded from a
    configuration file carry that file's root.
    """

    asset_type: AssetType
    excel_name: str | None = None
    asset_path: str | None = None
    log_on_import: bool = False
    asset_root: Path | None = None

    @property
    def external_name(self) -> str:
        return self.excel_name or self.asset_type.name

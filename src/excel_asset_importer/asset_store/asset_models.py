"""Asset object entities."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from excel_asset_importer.record_schema import AssetType


@dataclass
class AssetObject:
    """Destination collection keyed by path; each record slot holds an ordered list."""

    asset_type: AssetType
    path: Path
    slots: dict[str, list[Any]] = field(default_factory=dict)

    @classmethod
    def empty(cls, asset_type: AssetType, path: Path) -> AssetObject:
        return cls(
            asset_type=asset_type,
            path=path,
            slots={slot.name: [] for slot in asset_type.record_slots},
        )

    def assign(self, slot_name: str, records: Sequence[Any]) -> None:
        """Replace the full contents of a record slot."""
        if self.asset_type.slot(slot_name) is None:
            raise KeyError(f"{self.asset_type.name} has no slot '{slot_name}'.")
        self.slots[slot_name] = list(records)

    def records(self, slot_name: str) -> list[Any]:
        return self.slots.get(slot_name, [])

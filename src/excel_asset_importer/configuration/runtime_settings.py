"""Configuration domain entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from excel_asset_importer.record_schema import RecordType, SchemaDeclaration


@dataclass(frozen=True)
class ImporterConfiguration:
    """Declarations and settings loaded from one configuration file."""

    path: Path
    asset_root: Path
    enums: Mapping[str, type[Enum]]
    records: Mapping[str, RecordType]
    declarations: tuple[SchemaDeclaration, ...]

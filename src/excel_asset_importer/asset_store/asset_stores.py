"""Asset stores: the commit target of workbook imports."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from enum import Enum
from pathlib import Path
from typing import Any, Protocol

from excel_asset_importer.record_schema import AssetType, FieldKind, RecordType

from .asset_models import AssetObject

logger = logging.getLogger(__name__)

ASSET_SUFFIX = ".asset"


class AssetStoreError(Exception):
    """Raised when a persisted asset cannot be read."""


class AssetStore(Protocol):
    """Path-addressable persisted object store."""

    def load_or_create(self, path: Path, asset_type: AssetType) -> AssetObject: ...

    def mark_dirty(self, asset: AssetObject) -> None: ...

    def flush(self) -> None: ...


class InMemoryAssetStore:
    """Keeps assets in memory and records which were modified."""

    def __init__(self) -> None:
        self.assets: dict[Path, AssetObject] = {}
        self.dirty_paths: list[Path] = []
        self.flush_count = 0

    def load_or_create(self, path: Path, asset_type: AssetType) -> AssetObject:
        asset = self.assets.get(path)
        if asset is None or asset.asset_type != asset_type:
            asset = AssetObject.empty(asset_type, path)
            self.assets[path] = asset
        return asset

    def mark_dirty(self, asset: AssetObject) -> None:
        if asset.path not in self.dirty_paths:
            self.dirty_paths.append(asset.path)

    def flush(self) -> None:
        self.dirty_paths.clear()
        self.flush_count += 1


class JsonAssetStore:
    """Persists assets as JSON documents at their asset paths."""

    def __init__(self) -> None:
        self._assets: dict[Path, AssetObject] = {}
        self._dirty: list[Path] = []

    def load_or_create(self, path: Path, asset_type: AssetType) -> AssetObject:
        cached = self._assets.get(path)
        if cached is not None and cached.asset_type == asset_type:
            return cached
        asset = read_asset(path, asset_type) if path.exists() else None
        if asset is None:
            asset = AssetObject.empty(asset_type, path)
        self._assets[path] = asset
        return asset

    def mark_dirty(self, asset: AssetObject) -> None:
        self._assets[asset.path] = asset
        if asset.path not in self._dirty:
            self._dirty.append(asset.path)

    def flush(self) -> None:
        for path in self._dirty:
            asset = self._assets[path]
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(dump_asset(asset), encoding="utf-8")
            logger.debug("Wrote asset %s", path)
        self._dirty.clear()


def dump_asset(asset: AssetObject) -> str:
    """Serialize an asset deterministically in declaration order."""
    slots: dict[str, list[dict[str, Any]]] = {}
    for slot in asset.asset_type.record_slots:
        record_type = slot.record_type
        assert record_type is not None
        slots[slot.name] = [
            {name: _encode_value(value) for name, value in record_type.values_of(record).items()}
            for record in asset.records(slot.name)
        ]
    payload = {"asset_type": asset.asset_type.name, "slots": slots}
    return json.dumps(payload, indent=2, ensure_ascii=False) + "\n"


def read_asset(path: Path, asset_type: AssetType) -> AssetObject | None:
    """Load a persisted asset; ``None`` when the file holds a different asset type."""
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise AssetStoreError(f"Failed to read asset {path}: {exc}") from exc
    if not isinstance(payload, Mapping) or not isinstance(payload.get("slots"), Mapping):
        raise AssetStoreError(f"Asset file has no slots mapping: {path}")
    if payload.get("asset_type") != asset_type.name:
        logger.warning(
            "Asset %s holds %s, replacing it with a new %s",
            path,
            payload.get("asset_type"),
            asset_type.name,
        )
        return None

    asset = AssetObject.empty(asset_type, path)
    for slot in asset_type.record_slots:
        assert slot.record_type is not None
        stored = payload["slots"].get(slot.name)
        if not isinstance(stored, list):
            continue
        asset.slots[slot.name] = [
            _decode_record(item, slot.record_type, path) for item in stored
        ]
    return asset


def _encode_value(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.name
    if isinstance(value, tuple):
        return list(value)
    return value


def _decode_record(item: Any, record_type: RecordType, path: Path) -> Any:
    if not isinstance(item, Mapping):
        raise AssetStoreError(f"Asset {path} holds a non-object {record_type.name} record.")
    values: dict[str, Any] = {}
    for spec in record_type.importable_fields:
        if spec.name not in item:
            continue
        raw = item[spec.name]
        if spec.kind is FieldKind.ENUM and raw is not None:
            assert spec.enum_type is not None
            try:
                raw = spec.enum_type[raw]
            except KeyError as exc:
                raise AssetStoreError(
                    f"Asset {path} holds unknown {spec.enum_type.__name__} member '{raw}'."
                ) from exc
        elif spec.kind is FieldKind.NUMERIC_ARRAY and raw is not None:
            raw = tuple(raw)
        values[spec.name] = raw
    return record_type.build(values)

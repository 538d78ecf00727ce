"""Asset store exports."""

from .asset_models import AssetObject
from .asset_stores import (
    ASSET_SUFFIX,
    AssetStore,
    AssetStoreError,
    InMemoryAssetStore,
    JsonAssetStore,
    dump_asset,
    read_asset,
)

__all__ = [
    "ASSET_SUFFIX",
    "AssetObject",
    "AssetStore",
    "AssetStoreError",
    "InMemoryAssetStore",
    "JsonAssetStore",
    "dump_asset",
    "read_asset",
]

"""Workbook import use-case service."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from excel_asset_importer.asset_store import ASSET_SUFFIX, AssetStore, AssetStoreError
from excel_asset_importer.record_mapping import TypeMismatchError, extract_records
from excel_asset_importer.record_schema import SchemaDeclaration
from excel_asset_importer.schema_registry import SchemaNotFoundError, SchemaRegistry
from excel_asset_importer.workbook_loading import FileFormatError, WorkbookVariant, load_workbook

from .import_contracts import BatchResult, ImportOutcome, ImportStatus

logger = logging.getLogger(__name__)

TEMPORARY_FILE_PREFIX = "~$"
WORKBOOK_SUFFIXES = frozenset(variant.value for variant in WorkbookVariant)


def import_workbook(
    workbook_path: Path | str,
    *,
    registry: SchemaRegistry,
    store: AssetStore,
    asset_root: Path | None = None,
) -> ImportOutcome:
    """Import every sheet of a workbook into the asset declared for its name.

    Raises:
      SchemaNotFoundError: If no declaration matches the workbook name.
      FileFormatError: If the workbook cannot be decoded.
      TypeMismatchError: If a cell cannot be coerced; slots assigned before the
        failing sheet keep their new contents.
    """
    path = Path(workbook_path)
    excel_name = path.stem
    if excel_name.startswith(TEMPORARY_FILE_PREFIX):
        return ImportOutcome(workbook_path=path, status=ImportStatus.IGNORED)

    declaration = registry.resolve(excel_name)
    workbook = load_workbook(path)
    asset_path = resolve_asset_path(path, declaration, asset_root)
    asset = store.load_or_create(asset_path, declaration.asset_type)

    sheet_count = 0
    for slot in declaration.asset_type.record_slots:
        sheet = workbook.sheet(slot.name)
        if sheet is None:
            continue
        assert slot.record_type is not None
        asset.assign(slot.name, extract_records(sheet, slot.record_type))
        sheet_count += 1

    log_level = logging.INFO if declaration.log_on_import else logging.DEBUG
    logger.log(log_level, "Imported %d sheets from %s.", sheet_count, path)
    store.mark_dirty(asset)
    return ImportOutcome(
        workbook_path=path,
        status=ImportStatus.IMPORTED,
        asset_path=asset_path,
        sheet_count=sheet_count,
    )


def resolve_asset_path(
    workbook_path: Path, declaration: SchemaDeclaration, asset_root: Path | None = None
) -> Path:
    """Return the destination asset path for a workbook.

    A declared ``asset_path`` is relative to the declaration's own asset root, then
    ``asset_root``, then the working directory; otherwise the asset sits beside the
    workbook.
    """
    asset_name = f"{declaration.asset_type.name}{ASSET_SUFFIX}"
    if declaration.asset_path:
        base = declaration.asset_root or asset_root or Path.cwd()
        return base / declaration.asset_path / asset_name
    return workbook_path.parent / asset_name


def is_workbook_path(path: Path | str) -> bool:
    return Path(path).suffix in WORKBOOK_SUFFIXES


def import_batch(
    workbook_paths: Iterable[Path | str],
    *,
    registry: SchemaRegistry,
    store: AssetStore,
    asset_root: Path | None = None,
) -> BatchResult:
    """Import changed workbooks one after another in delivered order.

    A failing file is reported and the batch continues. The store is flushed once
    when at least one workbook was imported.
    """
    outcomes: list[ImportOutcome] = []
    for raw_path in workbook_paths:
        path = Path(raw_path)
        if not is_workbook_path(path):
            continue
        try:
            outcome = import_workbook(path, registry=registry, store=store, asset_root=asset_root)
        except SchemaNotFoundError as exc:
            logger.warning("%s", exc)
            outcome = ImportOutcome(workbook_path=path, status=ImportStatus.SKIPPED, error=exc)
        except (FileFormatError, TypeMismatchError, AssetStoreError, OSError) as exc:
            logger.error("Failed to import %s: %s", path, exc)
            outcome = ImportOutcome(workbook_path=path, status=ImportStatus.FAILED, error=exc)
        outcomes.append(outcome)

    result = BatchResult(outcomes=tuple(outcomes))
    if result.imported:
        store.flush()
    return result

"""End-to-end import tests against the JSON asset store."""

from __future__ import annotations

import json
from pathlib import Path

from excel_asset_importer.asset_store import JsonAssetStore
from excel_asset_importer.import_orchestration import ImportStatus, import_batch
from excel_asset_importer.record_schema import SchemaDeclaration
from excel_asset_importer.schema_registry import SchemaRegistry


def test_reimporting_unchanged_workbook_is_byte_identical(
    tmp_path: Path, make_xlsx, item_rows, items_declaration
) -> None:
    workbook = make_xlsx(tmp_path / "MstItems.xlsx", {"Entities": item_rows})
    registry = SchemaRegistry([items_declaration])
    asset_path = tmp_path / "MstItems.asset"

    import_batch([workbook], registry=registry, store=JsonAssetStore())
    first = asset_path.read_bytes()
    import_batch([workbook], registry=registry, store=JsonAssetStore())
    second = asset_path.read_bytes()

    assert first == second
    payload = json.loads(first)
    assert [record["name"] for record in payload["slots"]["Entities"]] == ["Sword", "Shield"]
    assert payload["slots"]["Entities"][1]["category"] == "Blue"


def test_import_writes_into_declared_asset_root(
    tmp_path: Path, make_xlsx, item_rows, items_declaration
) -> None:
    workbook = make_xlsx(tmp_path / "excel" / "Items.xlsx", {"Entities": item_rows})
    declaration = SchemaDeclaration(
        asset_type=items_declaration.asset_type, excel_name="Items", asset_path="Data"
    )

    result = import_batch(
        [workbook],
        registry=SchemaRegistry([declaration]),
        store=JsonAssetStore(),
        asset_root=tmp_path / "Assets",
    )

    assert result.outcomes[0].status is ImportStatus.IMPORTED
    assert (tmp_path / "Assets" / "Data" / "MstItems.asset").exists()
    assert not (tmp_path / "excel" / "MstItems.asset").exists()

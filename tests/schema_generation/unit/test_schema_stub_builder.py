"""Schema declaration stub tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from excel_asset_importer.configuration import load_configuration
from excel_asset_importer.schema_generation import build_schema_stub, write_schema_stub


def test_build_schema_stub_comments_one_slot_per_sheet() -> None:
    stub = build_schema_stub("MstItems", ["Entities", "Drop Table"])

    assert "# Asset schema declaration for workbook 'MstItems'." in stub
    assert "  MstItems:\n" in stub
    assert '    excel_name: "MstItems"\n' in stub
    assert "      # Entities: EntityType\n" in stub
    assert '      # "Drop Table": EntityType\n' in stub


def test_build_schema_stub_sanitizes_asset_name() -> None:
    stub = build_schema_stub("2024 items", [])

    assert "  _2024_items:\n" in stub
    assert '    excel_name: "2024 items"\n' in stub
    assert "(workbook has no sheets)" in stub


def test_write_schema_stub_writes_loadable_yaml(tmp_path: Path, make_xlsx) -> None:
    workbook = make_xlsx(tmp_path / "MstItems.xlsx", {"Entities": [["id"]], "Prices": [["id"]]})

    written = write_schema_stub(workbook, tmp_path / "schemas")

    assert written == (tmp_path / "schemas" / "MstItems.yaml").resolve()
    text = written.read_text(encoding="utf-8")
    assert "# Entities: EntityType" in text
    assert "# Prices: EntityType" in text
    configuration = load_configuration(written)
    (declaration,) = configuration.declarations
    assert declaration.external_name == "MstItems"
    assert declaration.asset_type.slots == ()


def test_write_schema_stub_defaults_to_workbook_directory(tmp_path: Path, make_xlsx) -> None:
    workbook = make_xlsx(tmp_path / "MstItems.xlsx", {"Entities": [["id"]]})

    assert write_schema_stub(workbook) == (tmp_path / "MstItems.yaml").resolve()


def test_write_schema_stub_refuses_to_overwrite(tmp_path: Path, make_xlsx) -> None:
    workbook = make_xlsx(tmp_path / "MstItems.xlsx", {"Entities": [["id"]]})
    (tmp_path / "MstItems.yaml").write_text("existing", encoding="utf-8")

    with pytest.raises(FileExistsError):
        write_schema_stub(workbook)

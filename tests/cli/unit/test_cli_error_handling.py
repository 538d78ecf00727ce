"""CLI error handling tests."""

from __future__ import annotations

from pathlib import Path

from excel_asset_importer.cli import main


def test_main_reports_missing_configuration(tmp_path: Path, capsys) -> None:
    exit_code = main(["import", "--config", str(tmp_path / "missing.yaml"), "Items.xlsx"])

    assert exit_code == 1
    assert "Configuration file not found" in capsys.readouterr().err


def test_main_reports_unreadable_workbook_for_schema_generation(tmp_path: Path, capsys) -> None:
    workbook = tmp_path / "Broken.xlsx"
    workbook.write_bytes(b"garbage")

    exit_code = main(["generate-schema", str(workbook)])

    assert exit_code == 1
    assert "container signature" in capsys.readouterr().err


def test_main_returns_usage_error_code_for_unknown_command() -> None:
    assert main(["unknown-command"]) == 2

"""Schema declaration stub generation helpers."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from excel_asset_importer.workbook_loading import list_sheet_names

SLOT_PLACEHOLDER = "EntityType"

_SCHEMA_STUB_TEMPLATE = """# Asset schema declaration for workbook '{excel_name}'.
# Declare a record type under 'records' for each sheet, then uncomment the matching
# slot below and replace '{placeholder}' with the record type name.

enums: {{}}

records: {{}}
#  {placeholder}:
#    id: int32
#    name: string

assets:
  {asset_name}:
    excel_name: {quoted_excel_name}
    # asset_path: "<OPTIONAL>"
    log_on_import: false
    slots:
{slot_lines}
"""


def build_schema_stub(excel_name: str, sheet_names: Sequence[str]) -> str:
    """Build a YAML declaration stub with one commented-out slot per sheet."""
    slot_lines = "\n".join(
        f"      # {_yaml_key(sheet_name)}: {SLOT_PLACEHOLDER}" for sheet_name in sheet_names
    )
    return _SCHEMA_STUB_TEMPLATE.format(
        excel_name=excel_name,
        quoted_excel_name=_quoted(excel_name),
        asset_name=_asset_name(excel_name),
        placeholder=SLOT_PLACEHOLDER,
        slot_lines=slot_lines or "      # (workbook has no sheets)",
    )


def write_schema_stub(workbook_path: Path | str, output_dir: Path | str | None = None) -> Path:
    """Write the declaration stub for a workbook next to it or into ``output_dir``.

    Returns:
      The resolved destination path.

    Raises:
      FileExistsError: If the destination file already exists.
      FileFormatError: If the workbook cannot be read.
    """
    workbook = Path(workbook_path)
    excel_name = workbook.stem
    destination_dir = Path(output_dir) if output_dir else workbook.parent
    destination = destination_dir / f"{excel_name}.yaml"
    if destination.exists():
        raise FileExistsError(f"Schema declaration already exists: {destination.resolve()}")
    stub = build_schema_stub(excel_name, list_sheet_names(workbook))
    destination_dir.mkdir(parents=True, exist_ok=True)
    destination.write_text(stub, encoding="utf-8")
    return destination.resolve()


def _asset_name(excel_name: str) -> str:
    candidate = "".join(char if char.isalnum() or char == "_" else "_" for char in excel_name)
    if not candidate or candidate[0].isdigit():
        candidate = f"_{candidate}"
    return candidate


def _yaml_key(sheet_name: str) -> str:
    if sheet_name.replace("_", "").isalnum():
        return sheet_name
    return _quoted(sheet_name)


def _quoted(text: str) -> str:
    escaped = text.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'

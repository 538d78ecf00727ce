"""Configuration loader service."""

from __future__ import annotations

import dataclasses
import keyword
from collections.abc import Iterable, Mapping, Sequence
from enum import Enum
from pathlib import Path
from typing import Any

import yaml

from excel_asset_importer.record_schema import (
    AssetType,
    FieldKind,
    FieldSpec,
    NumericType,
    RecordType,
    SchemaDeclaration,
)
from excel_asset_importer.schema_registry import SchemaRegistry

from .runtime_settings import ImporterConfiguration

ENUM_TYPE_PREFIX = "enum:"
ARRAY_TYPE_SUFFIX = "[]"

NUMERIC_ALIASES: Mapping[str, NumericType] = {
    **{numeric_type.value: numeric_type for numeric_type in NumericType},
    "byte": NumericType.UINT8,
    "sbyte": NumericType.INT8,
    "short": NumericType.INT16,
    "ushort": NumericType.UINT16,
    "int": NumericType.INT32,
    "uint": NumericType.UINT32,
    "long": NumericType.INT64,
    "ulong": NumericType.UINT64,
    "float": NumericType.FLOAT32,
    "double": NumericType.FLOAT64,
}
STRING_TYPES = frozenset({"string", "str"})
BOOLEAN_TYPES = frozenset({"bool", "boolean"})


class ConfigurationError(Exception):
    """Raised when the configuration file is invalid."""


def load_configuration(config_path: Path | str) -> ImporterConfiguration:
    """Load and validate an importer configuration file."""
    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    text = path.read_text(encoding="utf-8")
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Failed to parse configuration file: {exc}") from exc

    if parsed is None:
        parsed = {}

    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Configuration root must be a mapping.")

    asset_root = _parse_asset_root(parsed.get("asset_root"), path.parent)
    enums = _parse_enums_section(parsed.get("enums"))
    records = _parse_records_section(parsed.get("records"), enums)
    declarations = _parse_assets_section(parsed.get("assets"), records, asset_root)

    return ImporterConfiguration(
        path=path,
        asset_root=asset_root,
        enums=enums,
        records=records,
        declarations=declarations,
    )


def registry_from_configuration(
    configurations: ImporterConfiguration | Iterable[ImporterConfiguration],
    registry: SchemaRegistry | None = None,
) -> SchemaRegistry:
    """Register the declarations of one or more configurations in file order.

    Declarations are added to ``registry`` when given, otherwise to a new one.
    """
    if isinstance(configurations, ImporterConfiguration):
        configurations = (configurations,)
    if registry is None:
        registry = SchemaRegistry()
    for configuration in configurations:
        registry.register_all(configuration.declarations)
    return registry


def _parse_asset_root(value: Any, base_path: Path) -> Path:
    if value is None:
        return base_path.resolve()
    root = _require_non_empty_string(value, "asset_root")
    return _resolve_path(base_path, root)


def _parse_enums_section(value: Any) -> dict[str, type[Enum]]:
    section = _optional_mapping(value, "enums")
    enums: dict[str, type[Enum]] = {}
    for name, members in section.items():
        enum_name = _require_identifier(name, "enums")
        if isinstance(members, str) or not isinstance(members, Sequence):
            raise ConfigurationError(f"enums.{enum_name} must be a list of member names.")
        member_names = [
            _require_non_empty_string(member, f"enums.{enum_name} member") for member in members
        ]
        if not member_names:
            raise ConfigurationError(f"enums.{enum_name} must declare at least one member.")
        if len(set(member_names)) != len(member_names):
            raise ConfigurationError(f"enums.{enum_name} declares duplicate members.")
        try:
            enums[enum_name] = Enum(enum_name, [(member, member) for member in member_names])
        except (TypeError, ValueError) as exc:
            raise ConfigurationError(f"enums.{enum_name} is invalid: {exc}") from exc
    return enums


def _parse_records_section(
    value: Any, enums: Mapping[str, type[Enum]]
) -> dict[str, RecordType]:
    section = _optional_mapping(value, "records")
    records: dict[str, RecordType] = {}
    for name, fields_value in section.items():
        record_name = _require_identifier(name, "records")
        fields_section = _require_mapping(fields_value, f"records.{record_name}")
        fields = [
            _parse_field(record_name, field_name, definition, enums)
            for field_name, definition in fields_section.items()
        ]
        records[record_name] = RecordType.declare(
            record_name, fields, factory=_record_class(record_name, fields)
        )
    return records


def _parse_field(
    record_name: str, field_name: Any, definition: Any, enums: Mapping[str, type[Enum]]
) -> FieldSpec:
    label = f"records.{record_name}.{field_name}"
    name = _require_identifier(field_name, f"records.{record_name}")
    importable = True
    if isinstance(definition, Mapping):
        type_name = _require_non_empty_string(definition.get("type"), f"{label}.type")
        importable_value = definition.get("importable", True)
        if not isinstance(importable_value, bool):
            raise ConfigurationError(f"{label}.importable must be a boolean.")
        importable = importable_value
    else:
        type_name = _require_non_empty_string(definition, label)

    if type_name.endswith(ARRAY_TYPE_SUFFIX):
        element_type = NUMERIC_ALIASES.get(type_name.removesuffix(ARRAY_TYPE_SUFFIX))
        if element_type is None:
            raise ConfigurationError(f"{label}: arrays must hold a numeric type.")
        return FieldSpec.numeric_array(name, element_type, importable=importable)
    if type_name.startswith(ENUM_TYPE_PREFIX):
        enum_name = type_name.removeprefix(ENUM_TYPE_PREFIX)
        if enum_name not in enums:
            raise ConfigurationError(f"{label}: enum '{enum_name}' is not declared.")
        return FieldSpec.enum(name, enums[enum_name], importable=importable)
    if type_name in STRING_TYPES:
        return FieldSpec.string(name, importable=importable)
    if type_name in BOOLEAN_TYPES:
        return FieldSpec.boolean(name, importable=importable)
    if type_name in NUMERIC_ALIASES:
        return FieldSpec.numeric(name, NUMERIC_ALIASES[type_name], importable=importable)
    raise ConfigurationError(f"{label}: unsupported field type '{type_name}'.")


def _record_class(record_name: str, fields: Sequence[FieldSpec]) -> type:
    try:
        return dataclasses.make_dataclass(
            record_name,
            [(spec.name, Any, dataclasses.field(default=spec.zero_value())) for spec in fields],
            frozen=True,
        )
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"records.{record_name} is invalid: {exc}") from exc


def _parse_assets_section(
    value: Any, records: Mapping[str, RecordType], asset_root: Path
) -> tuple[SchemaDeclaration, ...]:
    section = _optional_mapping(value, "assets")
    declarations: list[SchemaDeclaration] = []
    for name, asset_value in section.items():
        asset_name = _require_identifier(name, "assets")
        label = f"assets.{asset_name}"
        asset_section = _require_mapping(asset_value, label)
        slots_section = _optional_mapping(asset_section.get("slots"), f"{label}.slots")
        slots = []
        for slot_name, record_name in slots_section.items():
            record_key = _require_non_empty_string(record_name, f"{label}.slots.{slot_name}")
            if record_key not in records:
                raise ConfigurationError(
                    f"{label}.slots.{slot_name}: record type '{record_key}' is not declared."
                )
            slots.append(FieldSpec.records(str(slot_name), records[record_key]))
        log_on_import = asset_section.get("log_on_import", False)
        if not isinstance(log_on_import, bool):
            raise ConfigurationError(f"{label}.log_on_import must be a boolean.")
        declarations.append(
            SchemaDeclaration(
                asset_type=AssetType.declare(asset_name, slots),
                excel_name=_optional_string(asset_section.get("excel_name"), f"{label}.excel_name"),
                asset_path=_optional_string(asset_section.get("asset_path"), f"{label}.asset_path"),
                log_on_import=log_on_import,
                asset_root=asset_root,
            )
        )
    return tuple(declarations)


def _resolve_path(base_path: Path, raw_path: str) -> Path:
    candidate = Path(raw_path)
    if not candidate.is_absolute():
        return (base_path / candidate).resolve()
    return candidate


def _require_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' is required.")
    return value


def _optional_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' must be a mapping.")
    return value


def _require_identifier(value: Any, section_name: str) -> str:
    if not isinstance(value, str) or not value.isidentifier() or keyword.iskeyword(value):
        raise ConfigurationError(f"{section_name}: '{value}' is not a valid identifier.")
    return value


def _require_non_empty_string(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    if not stripped:
        raise ConfigurationError(f"{field_name} must not be empty.")
    return stripped


def _optional_string(value: Any, field_name: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    return stripped or None

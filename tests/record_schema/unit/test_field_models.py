"""Record type model tests."""

from __future__ import annotations

import pytest

from excel_asset_importer.record_schema import (
    AssetType,
    FieldKind,
    FieldSpec,
    NumericType,
    RecordType,
    SchemaDeclaration,
)


@pytest.mark.parametrize(
    ("numeric_type", "bounds"),
    [
        (NumericType.INT8, (-128, 127)),
        (NumericType.UINT8, (0, 255)),
        (NumericType.INT32, (-(2**31), 2**31 - 1)),
        (NumericType.UINT64, (0, 2**64 - 1)),
    ],
)
def test_integral_bounds(numeric_type: NumericType, bounds: tuple[int, int]) -> None:
    assert numeric_type.is_integral
    assert numeric_type.bounds == bounds


def test_float_types_have_no_bounds() -> None:
    assert not NumericType.FLOAT32.is_integral
    with pytest.raises(ValueError):
        _ = NumericType.FLOAT64.bounds


def test_zero_values_follow_field_kind(item_category) -> None:
    assert FieldSpec.numeric("id", NumericType.INT32).zero_value() == 0
    assert FieldSpec.numeric("rate", NumericType.FLOAT32).zero_value() == 0.0
    assert FieldSpec.boolean("flag").zero_value() is False
    assert FieldSpec.enum("category", item_category).zero_value() is item_category.Red
    assert FieldSpec.string("name").zero_value() is None
    assert FieldSpec.numeric_array("scores", NumericType.INT16).zero_value() is None


def test_field_spec_validates_required_type_details() -> None:
    with pytest.raises(ValueError, match="numeric type"):
        FieldSpec(name="id", kind=FieldKind.NUMERIC)
    with pytest.raises(ValueError, match="enum type"):
        FieldSpec(name="category", kind=FieldKind.ENUM)
    with pytest.raises(ValueError, match="record type"):
        FieldSpec(name="Entities", kind=FieldKind.RECORD_SEQUENCE)


def test_record_type_builds_with_zero_values(
    item_record_type, item_entity_cls, item_category
) -> None:
    record = item_record_type.build({"id": 7, "name": "Bow"})

    assert record == item_entity_cls(id=7, name="Bow", category=item_category.Red)
    assert item_record_type.values_of(record)["price"] == 0


def test_record_type_without_factory_builds_dicts() -> None:
    record_type = RecordType.declare(
        "Row",
        [
            FieldSpec.numeric("id", NumericType.INT64),
            FieldSpec.string("hidden", importable=False),
        ],
    )

    assert record_type.build({"id": 3}) == {"id": 3}
    assert record_type.values_of({"id": 3, "hidden": "x"}) == {"id": 3}
    assert record_type.field("hidden") is not None
    assert record_type.field("unknown") is None


def test_record_type_rejects_duplicate_and_nested_fields(item_record_type) -> None:
    with pytest.raises(ValueError, match="Duplicate field"):
        RecordType.declare("Twice", [FieldSpec.string("a"), FieldSpec.string("a")])
    with pytest.raises(ValueError, match="cannot nest"):
        RecordType.declare("Nested", [FieldSpec.records("rows", item_record_type)])


def test_schema_declaration_external_name_defaults_to_asset_type(item_record_type) -> None:
    asset_type = AssetType.declare(
        "MstItems", [FieldSpec.records("Entities", item_record_type), FieldSpec.string("note")]
    )

    assert SchemaDeclaration(asset_type=asset_type).external_name == "MstItems"
    assert SchemaDeclaration(asset_type=asset_type, excel_name="Items").external_name == "Items"
    assert [slot.name for slot in asset_type.record_slots] == ["Entities"]
    assert asset_type.slot("note") is not None

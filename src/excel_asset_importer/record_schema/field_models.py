"""Record type entities: declared field tables used to map sheet columns."""

from __future__ import annotations

import dataclasses
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any


class FieldKind(Enum):
    """Closed set of semantic field kinds."""

    NUMERIC = "numeric"
    STRING = "string"
    BOOLEAN = "boolean"
    ENUM = "enum"
    NUMERIC_ARRAY = "numeric_array"
    RECORD_SEQUENCE = "record_sequence"

    @property
    def is_value_kind(self) -> bool:
        return self in (FieldKind.NUMERIC, FieldKind.BOOLEAN, FieldKind.ENUM)


class NumericType(Enum):
    """Declared storage width of a numeric field."""

    INT8 = "int8"
    INT16 = "int16"
    INT32 = "int32"
    INT64 = "int64"
    UINT8 = "uint8"
    UINT16 = "uint16"
    UINT32 = "uint32"
    UINT64 = "uint64"
    FLOAT32 = "float32"
    FLOAT64 = "float64"

    @property
    def is_integral(self) -> bool:
        return self not in (NumericType.FLOAT32, NumericType.FLOAT64)

    @property
    def bounds(self) -> tuple[int, int]:
        """Inclusive range of an integral type."""
        if not self.is_integral:
            raise ValueError(f"{self.value} has no integral bounds.")
        bits = int(self.value.removeprefix("u").removeprefix("int"))
        if self.value.startswith("u"):
            return 0, 2**bits - 1
        return -(2 ** (bits - 1)), 2 ** (bits - 1) - 1


@dataclass(frozen=True)
class FieldSpec:  # pylint: disable=too-many-instance-attributes
    """One named, typed field of a record or asset type."""

    name: str
    kind: FieldKind
    numeric_type: NumericType | None = None
    enum_type: type[Enum] | None = None
    record_type: RecordType | None = None
    importable: bool = True

    def __post_init__(self) -> None:
        if self.kind in (FieldKind.NUMERIC, FieldKind.NUMERIC_ARRAY) and self.numeric_type is None:
            raise ValueError(f"Field '{self.name}' requires a numeric type.")
        if self.kind is FieldKind.ENUM and (self.enum_type is None or not list(self.enum_type)):
            raise ValueError(f"Field '{self.name}' requires an enum type with members.")
        if self.kind is FieldKind.RECORD_SEQUENCE and self.record_type is None:
            raise ValueError(f"Field '{self.name}' requires a record type.")

    @classmethod
    def numeric(cls, name: str, numeric_type: NumericType, **options: Any) -> FieldSpec:
        return cls(name=name, kind=FieldKind.NUMERIC, numeric_type=numeric_type, **options)

    @classmethod
    def string(cls, name: str, **options: Any) -> FieldSpec:
        return cls(name=name, kind=FieldKind.STRING, **options)

    @classmethod
    def boolean(cls, name: str, **options: Any) -> FieldSpec:
        return cls(name=name, kind=FieldKind.BOOLEAN, **options)

    @classmethod
    def enum(cls, name: str, enum_type: type[Enum], **options: Any) -> FieldSpec:
        return cls(name=name, kind=FieldKind.ENUM, enum_type=enum_type, **options)

    @classmethod
    def numeric_array(cls, name: str, numeric_type: NumericType, **options: Any) -> FieldSpec:
        return cls(name=name, kind=FieldKind.NUMERIC_ARRAY, numeric_type=numeric_type, **options)

    @classmethod
    def records(cls, name: str, record_type: RecordType) -> FieldSpec:
        return cls(name=name, kind=FieldKind.RECORD_SEQUENCE, record_type=record_type)

    def zero_value(self) -> Any:
        """Default of a value-kind field; reference kinds are absent."""
        if self.kind is FieldKind.NUMERIC:
            assert self.numeric_type is not None
            return 0 if self.numeric_type.is_integral else 0.0
        if self.kind is FieldKind.BOOLEAN:
            return False
        if self.kind is FieldKind.ENUM:
            assert self.enum_type is not None
            return next(iter(self.enum_type))
        return None


@dataclass(frozen=True)
class RecordType:
    """Flat record description with an explicit name-to-field table.

    ``factory`` receives every importable field as a keyword argument. Without a
    factory, records are plain dictionaries.
    """

    name: str
    fields: tuple[FieldSpec, ...]
    factory: Callable[..., Any] | None = None
    _by_name: Mapping[str, FieldSpec] = dataclasses.field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        by_name: dict[str, FieldSpec] = {}
        for spec in self.fields:
            if spec.kind is FieldKind.RECORD_SEQUENCE:
                raise ValueError(f"Record type '{self.name}' cannot nest record sequences.")
            if spec.name in by_name:
                raise ValueError(f"Duplicate field '{spec.name}' in record type '{self.name}'.")
            by_name[spec.name] = spec
        object.__setattr__(self, "_by_name", by_name)

    @classmethod
    def declare(
        cls,
        name: str,
        fields: Iterable[FieldSpec],
        factory: Callable[..., Any] | None = None,
    ) -> RecordType:
        return cls(name=name, fields=tuple(fields), factory=factory)

    def field(self, name: str) -> FieldSpec | None:
        return self._by_name.get(name)

    @property
    def importable_fields(self) -> tuple[FieldSpec, ...]:
        return tuple(spec for spec in self.fields if spec.importable)

    def build(self, values: Mapping[str, Any] | None = None) -> Any:
        """Construct one record, filling unmapped importable fields with zero values."""
        payload = {spec.name: spec.zero_value() for spec in self.importable_fields}
        if values:
            payload.update(values)
        if self.factory is None:
            return payload
        return self.factory(**payload)

    def values_of(self, record: Any) -> dict[str, Any]:
        """Read importable field values back from a record built by this type."""
        if isinstance(record, Mapping):
            return {spec.name: record.get(spec.name) for spec in self.importable_fields}
        return {spec.name: getattr(record, spec.name) for spec in self.importable_fields}

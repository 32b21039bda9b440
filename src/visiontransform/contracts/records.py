# src/visiontransform/contracts/records.py
from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Mapping

from .core import SchemaMismatchError
from .schema import RecordSchema


@dataclass(frozen=True)
class StructuredRecord:
    """
    Registro inmutable ligado a un RecordSchema.
    - `values` solo contiene campos declarados en el schema.
    - Los campos declarados sin valor se leen como None.
    """
    schema: RecordSchema
    values: Mapping[str, Any]

    def __post_init__(self):
        unknown = [k for k in self.values if self.schema.get_field(k) is None]
        if unknown:
            raise SchemaMismatchError(
                f"campos no declarados en schema '{self.schema.name}': {sorted(unknown)}",
                field=unknown[0],
            )
        object.__setattr__(self, "values", MappingProxyType(dict(self.values)))

    def get(self, name: str) -> Any:
        if self.schema.get_field(name) is None:
            raise SchemaMismatchError(f"campo '{name}' no existe en schema '{self.schema.name}'", field=name)
        return self.values.get(name)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, StructuredRecord):
            return NotImplemented
        return self.schema == other.schema and dict(self.values) == dict(other.values)

    def __hash__(self) -> int:
        return hash((self.schema, tuple(sorted(self.values))))

    def as_dict(self) -> Dict[str, Any]:
        """Copia profunda a tipos planos (records anidados -> dict)."""
        return {k: _plain(v) for k, v in self.values.items()}

    @classmethod
    def builder(cls, schema: RecordSchema) -> "RecordBuilder":
        return RecordBuilder(schema)

    @classmethod
    def from_dict(cls, schema: RecordSchema, data: Mapping[str, Any]) -> "StructuredRecord":
        b = RecordBuilder(schema)
        for k, v in data.items():
            b.set(k, v)
        return b.build()


class RecordBuilder:
    """Acumula valores para un schema y produce un StructuredRecord nuevo."""

    def __init__(self, schema: RecordSchema):
        self.schema = schema
        self._values: Dict[str, Any] = {}

    def set(self, name: str, value: Any) -> "RecordBuilder":
        if self.schema.get_field(name) is None:
            raise SchemaMismatchError(f"campo '{name}' no existe en schema '{self.schema.name}'", field=name)
        # las listas se congelan como tuple para no compartir estado mutable
        self._values[name] = tuple(value) if isinstance(value, list) else value
        return self

    def build(self) -> StructuredRecord:
        return StructuredRecord(schema=self.schema, values=self._values)


def _plain(v: Any) -> Any:
    if isinstance(v, StructuredRecord):
        return v.as_dict()
    if isinstance(v, (list, tuple)):
        return [_plain(x) for x in v]
    return v


__all__ = ["StructuredRecord", "RecordBuilder"]

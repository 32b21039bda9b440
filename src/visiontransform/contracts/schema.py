# src/visiontransform/contracts/schema.py

from __future__ import annotations
import json
from dataclasses import dataclass
from typing import Any, Literal, Mapping, Optional, Tuple, Union

PrimitiveType = Literal["null", "boolean", "int", "long", "float", "double", "string", "bytes"]
_PRIMITIVES: Tuple[str, ...] = ("null", "boolean", "int", "long", "float", "double", "string", "bytes")

# ---------- Tipos del schema (suma explícita, puro dominio) ----------
@dataclass(frozen=True)
class PrimitiveSchema:
    type: PrimitiveType

    def __post_init__(self):
        if self.type not in _PRIMITIVES:
            raise ValueError(f"tipo primitivo desconocido: {self.type}")


@dataclass(frozen=True)
class FieldSchema:
    name: str
    schema: "Schema"


@dataclass(frozen=True)
class RecordSchema:
    name: str
    fields: Tuple[FieldSchema, ...] = ()

    def __post_init__(self):
        # tuple inmutable aunque llegue una lista
        object.__setattr__(self, "fields", tuple(self.fields))
        seen: set[str] = set()
        for f in self.fields:
            if f.name in seen:
                raise ValueError(f"campo duplicado en record '{self.name}': {f.name}")
            seen.add(f.name)

    def get_field(self, name: str) -> Optional[FieldSchema]:
        for f in self.fields:
            if f.name == name:
                return f
        return None

    def field_names(self) -> frozenset[str]:
        return frozenset(f.name for f in self.fields)


@dataclass(frozen=True)
class ArraySchema:
    items: Optional["Schema"]  # None -> componente no resoluble


@dataclass(frozen=True)
class NullableSchema:
    """Modificador de nulabilidad alrededor de otro schema (union [null, T])."""
    inner: "Schema"


Schema = Union[PrimitiveSchema, RecordSchema, ArraySchema, NullableSchema]


def is_nullable(schema: Schema) -> bool:
    return isinstance(schema, NullableSchema)


def unwrap(schema: Schema) -> Schema:
    """Quita la nulabilidad (recursivo: Nullable(Nullable(T)) -> T)."""
    if isinstance(schema, NullableSchema):
        return unwrap(schema.inner)
    return schema


def nullable(schema: Schema) -> NullableSchema:
    return schema if isinstance(schema, NullableSchema) else NullableSchema(schema)


# ---------- Parser de JSON estilo Avro/CDAP ----------
def parse_schema(obj: Any) -> Schema:
    """
    Construye un Schema desde su forma JSON (Avro/CDAP):
      - "string", "double", ...            -> PrimitiveSchema
      - {"type": "record", "fields": [...]} -> RecordSchema
      - {"type": "array", "items": ...}    -> ArraySchema
      - ["null", T] / [T, "null"]          -> NullableSchema(T)
    Otras uniones no se soportan.
    """
    if isinstance(obj, str):
        return PrimitiveSchema(obj)  # type: ignore[arg-type]
    if isinstance(obj, list):
        return _parse_union(obj)
    if isinstance(obj, Mapping):
        t = obj.get("type")
        if t == "record":
            fields = obj.get("fields")
            if not isinstance(fields, list):
                raise ValueError("record sin lista 'fields'")
            return RecordSchema(
                name=str(obj.get("name") or "record"),
                fields=tuple(_parse_field(f) for f in fields),
            )
        if t == "array":
            items = obj.get("items")
            return ArraySchema(items=None if items is None else parse_schema(items))
        if isinstance(t, (str, list, Mapping)):
            # {"type": "string"} o tipo anidado
            return parse_schema(t)
        raise ValueError(f"schema sin 'type' válido: {obj!r}")
    raise ValueError(f"schema no reconocido: {obj!r}")


def _parse_field(obj: Any) -> FieldSchema:
    if not isinstance(obj, Mapping) or "name" not in obj or "type" not in obj:
        raise ValueError(f"campo inválido (requiere 'name' y 'type'): {obj!r}")
    name = str(obj["name"]).strip()
    if not name:
        raise ValueError("nombre de campo vacío")
    return FieldSchema(name=name, schema=parse_schema(obj["type"]))


def _parse_union(items: list) -> Schema:
    non_null = [it for it in items if it != "null"]
    if len(items) == 2 and len(non_null) == 1:
        return NullableSchema(parse_schema(non_null[0]))
    if len(items) == 1:
        return parse_schema(items[0])
    raise ValueError(f"solo se soportan uniones [null, T]; recibido: {items!r}")


def parse_schema_json(text: str) -> Schema:
    return parse_schema(json.loads(text))


def to_avro(schema: Schema) -> Any:
    """Inverso de parse_schema (forma JSON serializable)."""
    if isinstance(schema, PrimitiveSchema):
        return schema.type
    if isinstance(schema, NullableSchema):
        inner = unwrap(schema)
        return [to_avro(inner), "null"]
    if isinstance(schema, ArraySchema):
        if schema.items is None:
            raise ValueError("array sin componente no serializable")
        return {"type": "array", "items": to_avro(schema.items)}
    if isinstance(schema, RecordSchema):
        return {
            "type": "record",
            "name": schema.name,
            "fields": [{"name": f.name, "type": to_avro(f.schema)} for f in schema.fields],
        }
    raise TypeError(f"schema no soportado: {schema!r}")


__all__ = [
    "PrimitiveSchema",
    "FieldSchema",
    "RecordSchema",
    "ArraySchema",
    "NullableSchema",
    "Schema",
    "is_nullable",
    "unwrap",
    "nullable",
    "parse_schema",
    "parse_schema_json",
    "to_avro",
]

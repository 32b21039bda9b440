# src/visiontransform/services/output_record.py
from __future__ import annotations

"""
Utilidades compartidas por los transformadores de anotaciones:
  • output_schema: schema de salida sin nulabilidad (debe ser record)
  • output_record_builder: builder con todos los campos del registro de entrada
  • resolve_component_schema: record componente de un campo array (con nulabilidad)

Sin estado y sin I/O. Se usan por composición, no por herencia.
"""

import logging

from ..contracts.core import SchemaMismatchError
from ..contracts.records import RecordBuilder, StructuredRecord
from ..contracts.schema import ArraySchema, RecordSchema, Schema, unwrap

logger = logging.getLogger(__name__)


def output_schema(schema: Schema) -> RecordSchema:
    s = unwrap(schema)
    if not isinstance(s, RecordSchema):
        raise SchemaMismatchError(f"el schema de salida debe ser un record; es {type(s).__name__}")
    return s


def output_record_builder(record: StructuredRecord, schema: Schema) -> RecordBuilder:
    """Builder del schema de salida con cada campo de `record` copiado sin cambios."""
    builder = RecordBuilder(output_schema(schema))
    for f in record.schema.fields:
        builder.set(f.name, record.values.get(f.name))
    return builder


def resolve_component_schema(schema: Schema, field_name: str) -> RecordSchema:
    """
    Schema efectivo de cada elemento de `field_name`:
      Nullable?(Array(Nullable?(Record))) -> Record
    Cualquier otra forma es un error de configuración.
    """
    rec = output_schema(schema)
    f = rec.get_field(field_name)
    if f is None:
        raise SchemaMismatchError(
            f"el campo de salida '{field_name}' no existe en schema '{rec.name}'", field=field_name
        )
    arr = unwrap(f.schema)
    if not isinstance(arr, ArraySchema):
        raise SchemaMismatchError(
            f"el campo '{field_name}' debe ser array; es {type(arr).__name__}", field=field_name
        )
    if arr.items is None:
        raise SchemaMismatchError(f"el array '{field_name}' no tiene schema de componente", field=field_name)
    component = unwrap(arr.items)
    if not isinstance(component, RecordSchema):
        raise SchemaMismatchError(
            f"el componente de '{field_name}' debe ser record; es {type(component).__name__}",
            field=field_name,
        )
    logger.debug("componente de '%s' resuelto: %s", field_name, sorted(component.field_names()))
    return component


__all__ = ["output_schema", "output_record_builder", "resolve_component_schema"]

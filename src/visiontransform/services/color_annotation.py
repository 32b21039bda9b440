# src/visiontransform/services/color_annotation.py
from __future__ import annotations

from functools import cached_property
from typing import Callable, List, Tuple

from ..contracts.annotations import AnnotateImageResponse, ColorInfo
from ..contracts.core import (
    ALPHA_FIELD,
    BLUE_FIELD,
    GREEN_FIELD,
    PIXEL_FRACTION_FIELD,
    RED_FIELD,
    SCORE_FIELD,
    ColorFieldName,
)
from ..contracts.records import RecordBuilder, StructuredRecord
from ..contracts.schema import RecordSchema, Schema
from .output_record import output_record_builder, resolve_component_schema

# (campo destino, extractor) en el orden del schema canónico
COLOR_FIELD_EXTRACTORS: Tuple[Tuple[ColorFieldName, Callable[[ColorInfo], float]], ...] = (
    (SCORE_FIELD, lambda c: c.score),
    (PIXEL_FRACTION_FIELD, lambda c: c.pixel_fraction),
    (RED_FIELD, lambda c: c.color.red),
    (GREEN_FIELD, lambda c: c.color.green),
    (BLUE_FIELD, lambda c: c.color.blue),
    (ALPHA_FIELD, lambda c: c.color.opacity),
)


class ColorAnnotationTransformer:
    """
    Propiedades de imagen (colores dominantes) -> registro de salida.

    El schema del componente se lee del schema de salida en vez de usar uno
    fijo: el usuario puede omitir cualquiera de los campos de ColorInfo.
    Un schema mal formado se detecta en el primer `transform`, no al construir.
    """

    def __init__(self, schema: Schema, output_field: str):
        self._schema = schema
        self._output_field = output_field

    @property
    def schema(self) -> Schema:
        return self._schema

    @property
    def output_field(self) -> str:
        return self._output_field

    @cached_property
    def component_schema(self) -> RecordSchema:
        return resolve_component_schema(self._schema, self._output_field)

    def transform(self, record: StructuredRecord, response: AnnotateImageResponse) -> StructuredRecord:
        colors = self.extract_dominant_colors(response)
        return output_record_builder(record, self._schema).set(self._output_field, colors).build()

    @staticmethod
    def _color_record(color: ColorInfo, component: RecordSchema) -> StructuredRecord:
        declared = component.field_names()
        builder = RecordBuilder(component)
        for name, extract in COLOR_FIELD_EXTRACTORS:
            if name in declared:
                builder.set(name, extract(color))
        return builder.build()

    def extract_dominant_colors(self, response: AnnotateImageResponse) -> List[StructuredRecord]:
        component = self.component_schema
        return [self._color_record(c, component) for c in response.dominant_colors()]


__all__ = ["COLOR_FIELD_EXTRACTORS", "ColorAnnotationTransformer"]

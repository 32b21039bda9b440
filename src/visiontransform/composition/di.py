### `composition/di.py` – wiring de config, schema, ports y servicios
from __future__ import annotations

from pathlib import Path
from typing import Callable, Mapping, Optional

import yaml

from ..adapters.file_response_annotator import FileResponseAnnotator
from ..config import Settings
from ..contracts.core import AnnotationKind
from ..contracts.schema import RecordSchema, Schema, parse_schema_json
from ..ports.annotator import ImageAnnotatorPort
from ..ports.transformer import AnnotationTransformerPort
from ..services.color_annotation import ColorAnnotationTransformer
from ..services.extraction_service import ExtractionService
from ..services.output_record import output_schema

TransformerFactory = Callable[[Schema, str], AnnotationTransformerPort]

# un caso por tipo de anotación (variante etiquetada, sin herencia)
TRANSFORMERS: Mapping[AnnotationKind, TransformerFactory] = {
    AnnotationKind.IMAGE_PROPERTIES: ColorAnnotationTransformer,
}


def build_transformer(kind: AnnotationKind | str, schema: Schema, output_field: str) -> AnnotationTransformerPort:
    k = AnnotationKind(kind)
    try:
        factory = TRANSFORMERS[k]
    except KeyError:
        raise ValueError(f"tipo de anotación sin transformador: {k.value}") from None
    return factory(schema, output_field)


def load_settings_from_yaml(path: Path) -> Settings:
    data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    return Settings(**data)


def load_schema(path: Path) -> Schema:
    return parse_schema_json(Path(path).read_text(encoding="utf-8"))


def input_schema_for(schema: Schema, output_field: str) -> RecordSchema:
    """Schema de entrada implícito: el de salida sin el campo de salida."""
    rec = output_schema(schema)
    return RecordSchema(name=rec.name, fields=tuple(f for f in rec.fields if f.name != output_field))


def build_extraction_service(
    settings: Settings,
    *,
    schema: Optional[Schema] = None,
    annotator: Optional[ImageAnnotatorPort] = None,
) -> ExtractionService:
    if schema is None:
        if settings.schema_file is None:
            raise ValueError("schema_file no configurado")
        schema = load_schema(settings.schema_file)
    if annotator is None:
        if settings.responses_dir is None:
            raise ValueError("responses_dir no configurado")
        annotator = FileResponseAnnotator(responses_dir=settings.responses_dir)
    transformer = build_transformer(settings.annotation_kind, schema, settings.output_field)
    return ExtractionService(annotator=annotator, transformer=transformer, path_field=settings.path_field)

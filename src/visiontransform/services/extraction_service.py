# src/visiontransform/services/extraction_service.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional

from ..contracts.core import AnnotationResponseError
from ..contracts.records import StructuredRecord
from ..ports.annotator import ImageAnnotatorPort
from ..ports.transformer import AnnotationTransformerPort

"""
Servicio de extracción por registro, contracts-first:
  PATH (campo del registro) → ANNOTATE (port) → CHECK error → TRANSFORM

No conoce Cloud Vision ni archivos: todo va vía *ports*.
Los errores se propagan; abortan el registro (y la corrida) en curso.
"""

logger = logging.getLogger(__name__)


@dataclass
class ExtractionService:
    annotator: Optional[ImageAnnotatorPort] = None
    transformer: Optional[AnnotationTransformerPort] = None
    path_field: str = "image_path"

    # --------- API principal ---------
    def process(self, record: StructuredRecord) -> StructuredRecord:
        if self.annotator is None:
            raise RuntimeError("ImageAnnotatorPort no configurado")
        if self.transformer is None:
            raise RuntimeError("AnnotationTransformerPort no configurado")

        uri = self._image_uri(record)
        response = self.annotator.annotate(uri)
        if response.has_error():
            err = response.error
            raise AnnotationResponseError(
                f"error de anotación para '{uri}': {err.message} (code={err.code})",
                code=err.code,
                image_uri=uri,
            )
        return self.transformer.transform(record, response)

    def iter_process(self, records: Iterable[StructuredRecord]) -> Iterator[StructuredRecord]:
        for r in records:
            yield self.process(r)

    def run(self, records: Iterable[StructuredRecord]) -> List[StructuredRecord]:
        out = list(self.iter_process(records))
        logger.info(
            "extracción completa: %d registros -> campo '%s'",
            len(out),
            self.transformer.output_field if self.transformer else "?",
        )
        return out

    # --------- Fases internas ---------
    def _image_uri(self, record: StructuredRecord) -> str:
        if record.schema.get_field(self.path_field) is None:
            raise ValueError(f"el registro no tiene el campo de ruta '{self.path_field}'")
        uri = record.values.get(self.path_field)
        if not isinstance(uri, str) or not uri.strip():
            raise ValueError(f"campo '{self.path_field}' vacío o no es texto: {uri!r}")
        return uri.strip()


__all__ = ["ExtractionService"]

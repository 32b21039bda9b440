# src/visiontransform/ports/transformer.py
from __future__ import annotations

from typing import Protocol, runtime_checkable
from ..contracts.annotations import AnnotateImageResponse
from ..contracts.records import StructuredRecord

@runtime_checkable
class AnnotationTransformerPort(Protocol):
    """
    Convierte una respuesta de anotación en el registro de salida.
    Reglas:
      - el registro de entrada no se muta; se devuelve uno nuevo.
      - solo se agrega/sobrescribe `output_field`.
    """
    output_field: str

    def transform(self, record: StructuredRecord, response: AnnotateImageResponse) -> StructuredRecord: ...

__all__ = ["AnnotationTransformerPort"]

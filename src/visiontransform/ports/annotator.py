# src/visiontransform/ports/annotator.py
from __future__ import annotations

from typing import Protocol, runtime_checkable
from ..contracts.annotations import AnnotateImageResponse

URI = str

@runtime_checkable
class ImageAnnotatorPort(Protocol):
    """
    Anotador de imágenes (Cloud Vision u otro origen).
    Reglas: devuelve la respuesta tal cual; NO lanza por `response.error`,
    eso lo decide el servicio.
    """
    def annotate(self, image_uri: URI) -> AnnotateImageResponse: ...

__all__ = ["ImageAnnotatorPort", "URI"]

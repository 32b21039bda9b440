# src/visiontransform/contracts/core.py
from __future__ import annotations

from enum import Enum
from typing import Literal, Optional

# -------------------------
# Tipos de anotación soportados
# -------------------------
class AnnotationKind(str, Enum):
    IMAGE_PROPERTIES = "image_properties"

# -------------------------
# Nombres de campo de ColorInfo (schema destino)
# -------------------------
ColorFieldName = Literal["score", "pixelFraction", "red", "green", "blue", "alpha"]

SCORE_FIELD: ColorFieldName = "score"
PIXEL_FRACTION_FIELD: ColorFieldName = "pixelFraction"
RED_FIELD: ColorFieldName = "red"
GREEN_FIELD: ColorFieldName = "green"
BLUE_FIELD: ColorFieldName = "blue"
ALPHA_FIELD: ColorFieldName = "alpha"

# -------------------------
# Errores
# -------------------------
class SchemaMismatchError(ValueError):
    """
    El schema de salida no tiene la forma requerida (campo ausente, tipo
    incorrecto, componente no resoluble). Es un error de configuración:
    no se reintenta y aborta el registro en curso.
    """

    def __init__(self, message: str, *, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class AnnotationResponseError(RuntimeError):
    """La respuesta de anotación trae `error` seteado."""

    def __init__(self, message: str, *, code: int = 0, image_uri: Optional[str] = None):
        super().__init__(message)
        self.code = code
        self.image_uri = image_uri

# src/visiontransform/contracts/annotations.py
from __future__ import annotations

from typing import Any, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

"""
Contratos de la respuesta de anotación (forma JSON REST de Cloud Vision).
Solo la rama de propiedades de imagen: imagePropertiesAnnotation.dominantColors.colors.

Los números ausentes valen 0.0: proto3 omite en JSON los valores por defecto.
"""

# valor de FloatValue sin setear (wrapper proto3)
DEFAULT_ALPHA = 0.0

_CAMEL = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


class Color(BaseModel):
    model_config = _CAMEL
    red: float = 0.0
    green: float = 0.0
    blue: float = 0.0
    alpha: Optional[float] = None  # None -> opacidad no seteada

    @field_validator("alpha", mode="before")
    @classmethod
    def _unwrap_float_value(cls, v: Any) -> Any:
        # google.protobuf.FloatValue puede llegar como {"value": x}
        if isinstance(v, Mapping):
            return v.get("value", DEFAULT_ALPHA)
        return v

    @property
    def opacity(self) -> float:
        return DEFAULT_ALPHA if self.alpha is None else self.alpha


class ColorInfo(BaseModel):
    """Un color dominante: score, fracción de píxeles y color RGBA."""
    model_config = _CAMEL
    color: Color = Color()
    score: float = Field(0.0, ge=0.0, le=1.0)
    pixel_fraction: float = Field(0.0, ge=0.0, le=1.0, alias="pixelFraction")


class DominantColorsAnnotation(BaseModel):
    model_config = _CAMEL
    colors: Tuple[ColorInfo, ...] = ()


class ImagePropertiesAnnotation(BaseModel):
    model_config = _CAMEL
    dominant_colors: DominantColorsAnnotation = Field(
        default_factory=DominantColorsAnnotation, alias="dominantColors"
    )


class Status(BaseModel):
    model_config = _CAMEL
    code: int = 0
    message: str = ""


class AnnotateImageResponse(BaseModel):
    """Respuesta de anotación para una imagen (solo lectura)."""
    model_config = _CAMEL
    image_properties_annotation: Optional[ImagePropertiesAnnotation] = Field(
        None, alias="imagePropertiesAnnotation"
    )
    error: Optional[Status] = None

    def dominant_colors(self) -> Tuple[ColorInfo, ...]:
        # anotación ausente == cero colores
        if self.image_properties_annotation is None:
            return ()
        return self.image_properties_annotation.dominant_colors.colors

    def has_error(self) -> bool:
        return self.error is not None and (self.error.code != 0 or bool(self.error.message))

    @classmethod
    def from_api(cls, payload: Mapping[str, Any]) -> "AnnotateImageResponse":
        """Acepta la respuesta individual o el envoltorio {"responses": [r]}."""
        if "responses" in payload:
            responses = payload["responses"]
            if len(responses) != 1:
                raise ValueError(f"se esperaba 1 respuesta, hay {len(responses)}")
            payload = responses[0]
        return cls.model_validate(payload)


__all__ = [
    "DEFAULT_ALPHA",
    "Color",
    "ColorInfo",
    "DominantColorsAnnotation",
    "ImagePropertiesAnnotation",
    "Status",
    "AnnotateImageResponse",
]

# src/visiontransform/config.py
from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .contracts.core import AnnotationKind


class Settings(BaseSettings):
    """
    Config unificada del proyecto. No toca disco.
    Debe ser construida y provista por composition/di.py (CLI/adapters).
    """
    # --- transformación ---
    annotation_kind: AnnotationKind = AnnotationKind.IMAGE_PROPERTIES
    output_field: str = "image_properties"
    path_field: str = "image_path"

    # --- entradas ---
    schema_file: Optional[Path] = None    # schema de salida (JSON Avro/CDAP)
    responses_dir: Optional[Path] = None  # respuestas de anotación guardadas

    # --- logging ---
    log_level: str = "INFO"
    log_file: Optional[Path] = None       # si None -> solo consola

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="VISION_",
        env_nested_delimiter="__",
        extra="forbid",
        frozen=True,
    )

    # ----------------------------
    # Normalizadores / validadores
    # ----------------------------
    @field_validator("output_field", "path_field", mode="before")
    @classmethod
    def _non_empty(cls, v: str, info) -> str:
        v2 = str(v).strip()
        if not v2:
            raise ValueError(f"{info.field_name} no puede ser vacío")
        return v2

    @field_validator("schema_file", "responses_dir", "log_file", mode="after")
    @classmethod
    def _abs_path(cls, p: Optional[Path]) -> Optional[Path]:
        if p is None:
            return None
        return p.expanduser().resolve()

    @field_validator("log_level", mode="before")
    @classmethod
    def _known_level(cls, v: str) -> str:
        v2 = str(v).strip().upper()
        if not isinstance(logging.getLevelName(v2), int):
            raise ValueError(f"log_level inválido: {v}")
        return v2


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Instancia cacheada. Úsala SOLO desde composition/di.py o CLI.
    Prohibido usarla en services/ (dominio). Para tests, recuerda limpiar:
        get_settings.cache_clear()
    """
    return Settings()

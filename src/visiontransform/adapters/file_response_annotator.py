## `src/visiontransform/adapters/file_response_annotator.py`
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from ..contracts.annotations import AnnotateImageResponse
from ..ports.annotator import ImageAnnotatorPort

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FileResponseAnnotator(ImageAnnotatorPort):
    """Anotador offline: lee respuestas de Cloud Vision ya guardadas en JSON.

    Convención:
      - imagen `.../foto.jpg` -> `<responses_dir>/foto.json`
      - el JSON puede ser la respuesta individual o `{"responses": [r]}`
    """
    responses_dir: Path
    suffix: str = ".json"

    def response_path(self, image_uri: str) -> Path:
        # acepta rutas locales y URIs tipo gs://bucket/dir/foto.jpg
        name = image_uri.rstrip("/").rsplit("/", 1)[-1]
        return Path(self.responses_dir) / (Path(name).stem + self.suffix)

    def annotate(self, image_uri: str) -> AnnotateImageResponse:
        path = self.response_path(image_uri)
        if not path.exists():
            raise FileNotFoundError(f"no hay respuesta para '{image_uri}': {path}")
        logger.debug("leyendo respuesta %s", path)
        payload = json.loads(path.read_text(encoding="utf-8"))
        return AnnotateImageResponse.from_api(payload)

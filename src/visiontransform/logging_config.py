# src/visiontransform/logging_config.py
from __future__ import annotations

"""
Logging de la CLI. Los services/ solo usan `logging.getLogger(__name__)`;
la configuración del logger raíz se hace una vez, desde Settings.
"""

import logging
from pathlib import Path
from typing import List, Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(log_level: str = "INFO", log_file: Optional[Path] = None) -> List[logging.Handler]:
    """
    Configura el logger raíz (consola + archivo opcional) y devuelve los handlers.
    Niveles desconocidos caen a INFO; la carpeta de `log_file` se crea si falta.
    """
    level = getattr(logging, str(log_level).upper(), logging.INFO)
    if not isinstance(level, int):
        level = logging.INFO
    formatter = logging.Formatter(LOG_FORMAT)

    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if log_file is not None:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(path, encoding="utf-8"))

    for h in handlers:
        h.setLevel(level)
        h.setFormatter(formatter)

    # force=True: reemplaza cualquier configuración previa del raíz
    logging.basicConfig(level=level, handlers=handlers, force=True)
    return handlers

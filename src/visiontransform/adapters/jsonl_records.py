## `src/visiontransform/adapters/jsonl_records.py`
from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Iterable, Iterator

from ..contracts.records import StructuredRecord
from ..contracts.schema import RecordSchema


def read_records(path: Path, schema: RecordSchema) -> Iterator[StructuredRecord]:
    """Una línea JSON por registro; líneas en blanco se ignoran."""
    with open(path, "r", encoding="utf-8") as f:
        for lineno, line in enumerate(f, start=1):
            line = line.strip()
            if not line:
                continue
            obj = json.loads(line)
            if not isinstance(obj, dict):
                raise ValueError(f"{path}:{lineno}: se esperaba un objeto JSON")
            yield StructuredRecord.from_dict(schema, obj)


def write_records(path: Path, records: Iterable[StructuredRecord]) -> int:
    """Escribe a un temporal en la misma carpeta y lo reemplaza solo si todo salió bien."""
    out_dir = os.path.dirname(str(path)) or "."
    os.makedirs(out_dir, exist_ok=True)
    fd, tmp = tempfile.mkstemp(prefix=".records-", suffix=".tmp", dir=out_dir)
    n = 0
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            for r in records:
                f.write(json.dumps(r.as_dict(), ensure_ascii=False))
                f.write("\n")
                n += 1
        os.replace(tmp, path)
    except BaseException:
        # no dejar salidas parciales ni pisar la anterior
        if os.path.exists(tmp):
            os.remove(tmp)
        raise
    return n

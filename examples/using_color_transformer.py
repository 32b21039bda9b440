# =============================
# FILE: examples/using_color_transformer.py
# =============================
"""
Uso mínimo: ColorAnnotationTransformer sobre una respuesta guardada de Cloud Vision.
El schema de salida decide qué campos de cada color se copian.
"""
import json
from pathlib import Path

from visiontransform.composition.di import build_transformer, input_schema_for, load_schema
from visiontransform.contracts.annotations import AnnotateImageResponse
from visiontransform.contracts.records import StructuredRecord


if __name__ == "__main__":
    root = Path("/ruta/al/proyecto").resolve()
    schema = load_schema(root / "schema.json")
    transformer = build_transformer("image_properties", schema, "colors")

    response = AnnotateImageResponse.from_api(json.loads((root / "responses" / "foto.json").read_text()))
    record = StructuredRecord.from_dict(input_schema_for(schema, "colors"), {"image_path": "foto.jpg"})

    out = transformer.transform(record, response)
    for c in out.get("colors"):
        print(" -", c.as_dict())

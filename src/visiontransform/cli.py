# src/visiontransform/cli.py
from __future__ import annotations

"""
CLI de extracción de anotaciones de imagen (contracts-first, minimal).

Comandos:
  - extract: aplica el transformador a un JSONL de registros usando respuestas guardadas.
  - schema: valida el schema de salida e imprime los campos del componente.

Ejemplos rápidos:
  python -m visiontransform.cli extract \
      --schema ./schema.json --responses ./responses \
      --input ./records.jsonl --out ./out.jsonl

  python -m visiontransform.cli schema --schema ./schema.json --output-field colors
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Dict

from .composition.di import build_extraction_service, input_schema_for, load_schema
from .config import Settings, get_settings
from .adapters.jsonl_records import read_records, write_records
from .logging_config import configure_logging
from .services.output_record import resolve_component_schema

logger = logging.getLogger(__name__)


# ----------------------
# Utilidades locales
# ----------------------

def _settings_from_args(args: argparse.Namespace) -> Settings:
    s = get_settings()
    update: Dict[str, Any] = {}
    if getattr(args, "schema", None):
        update["schema_file"] = Path(args.schema).resolve()
    if getattr(args, "responses", None):
        update["responses_dir"] = Path(args.responses).resolve()
    if getattr(args, "output_field", None):
        update["output_field"] = args.output_field
    if getattr(args, "path_field", None):
        update["path_field"] = args.path_field
    return s.model_copy(update=update) if update else s


# ----------------------
# Comandos
# ----------------------

def cmd_extract(args: argparse.Namespace) -> int:
    s = _settings_from_args(args)
    if s.schema_file is None:
        raise ValueError("falta --schema (o VISION_SCHEMA_FILE)")
    schema = load_schema(s.schema_file)
    svc = build_extraction_service(s, schema=schema)

    in_path = Path(args.input)
    out_path = Path(args.out) if args.out else in_path.with_suffix(".out.jsonl")
    if out_path.resolve() == in_path.resolve():
        raise ValueError(f"--out no puede ser el mismo archivo que --input: {in_path}")
    records = read_records(in_path, input_schema_for(schema, s.output_field))
    n = write_records(out_path, svc.iter_process(records))
    logger.info("%d registros escritos en %s", n, out_path)
    print(f"[OK] {n} registros -> {out_path}")
    return 0


def cmd_schema(args: argparse.Namespace) -> int:
    s = _settings_from_args(args)
    if s.schema_file is None:
        raise ValueError("falta --schema (o VISION_SCHEMA_FILE)")
    component = resolve_component_schema(load_schema(s.schema_file), s.output_field)
    print(f"{s.output_field}: {component.name}")
    for f in component.fields:
        print(f"  - {f.name}")
    return 0


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="visiontransform", description="Anotaciones de imagen -> registros (contracts-first)")
    p.add_argument("--log-level", default=None, help="nivel de log (sobre-escribe Settings.log_level)")
    p.add_argument("--log-file", default=None, help="archivo de log (sobre-escribe Settings.log_file)")
    sub = p.add_subparsers(dest="cmd", required=True)

    # extract
    pe = sub.add_parser("extract", help="transforma registros JSONL con respuestas guardadas")
    pe.add_argument("--schema", help="schema de salida (JSON Avro/CDAP)")
    pe.add_argument("--responses", help="carpeta con respuestas <imagen>.json")
    pe.add_argument("-i", "--input", required=True, help="registros de entrada (JSONL)")
    pe.add_argument("--out", help="salida JSONL (por defecto <input>.out.jsonl)")
    pe.add_argument("--output-field", help="campo de salida (sobre-escribe Settings.output_field)")
    pe.add_argument("--path-field", help="campo con la ruta de la imagen")
    pe.set_defaults(func=cmd_extract)

    # schema
    pz = sub.add_parser("schema", help="valida el schema e imprime los campos del componente")
    pz.add_argument("--schema", help="schema de salida (JSON Avro/CDAP)")
    pz.add_argument("--output-field", help="campo de salida")
    pz.set_defaults(func=cmd_schema)

    return p


def main(argv: list[str] | None = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    parser = _build_parser()
    args = parser.parse_args(argv)
    try:
        s = get_settings()
        configure_logging(args.log_level or s.log_level, Path(args.log_file) if args.log_file else s.log_file)
        return int(bool(args.func(args)))  # 0 si todo bien
    except KeyboardInterrupt:
        return 130
    except Exception as ex:
        print(f"[ERROR] {ex}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())

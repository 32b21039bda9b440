import json
import pytest
from visiontransform.contracts.schema import (
    ArraySchema, FieldSchema, NullableSchema, PrimitiveSchema, RecordSchema,
    is_nullable, nullable, parse_schema, parse_schema_json, to_avro, unwrap,
)

def test_unwrap_is_recursive():
    rec = RecordSchema("r", (FieldSchema("a", PrimitiveSchema("int")),))
    assert unwrap(NullableSchema(NullableSchema(rec))) is rec
    assert unwrap(rec) is rec
    assert is_nullable(nullable(rec))
    assert nullable(nullable(rec)) == NullableSchema(rec)

def test_record_rejects_duplicate_fields():
    with pytest.raises(ValueError):
        RecordSchema("r", (FieldSchema("a", PrimitiveSchema("int")), FieldSchema("a", PrimitiveSchema("long"))))

def test_record_field_lookup():
    rec = RecordSchema("r", [FieldSchema("a", PrimitiveSchema("int"))])
    assert isinstance(rec.fields, tuple)
    assert rec.get_field("a").schema == PrimitiveSchema("int")
    assert rec.get_field("b") is None
    assert rec.field_names() == frozenset({"a"})

def test_unknown_primitive_fails():
    with pytest.raises(ValueError):
        PrimitiveSchema("decimal")

def test_parse_cdap_style_schema():
    text = json.dumps({
        "type": "record", "name": "output",
        "fields": [
            {"name": "image_path", "type": "string"},
            {"name": "colors", "type": [
                {"type": "array", "items": [
                    {"type": "record", "name": "colorInfo", "fields": [
                        {"name": "score", "type": "float"},
                        {"name": "red", "type": ["float", "null"]},
                    ]},
                    "null",
                ]},
                "null",
            ]},
        ],
    })
    s = parse_schema_json(text)
    assert isinstance(s, RecordSchema)
    colors = s.get_field("colors").schema
    assert isinstance(colors, NullableSchema)
    arr = unwrap(colors)
    assert isinstance(arr, ArraySchema)
    comp = unwrap(arr.items)
    assert comp.name == "colorInfo"
    assert comp.field_names() == {"score", "red"}

def test_parse_nested_type_object():
    assert parse_schema({"type": "string"}) == PrimitiveSchema("string")
    assert parse_schema({"type": "array"}) == ArraySchema(items=None)

@pytest.mark.parametrize("bad", [
    ["int", "string"],
    ["null", "int", "string"],
    {"type": "record"},
    {"type": "record", "fields": [{"name": "a"}]},
    {"name": "x"},
    42,
])
def test_parse_rejects_unsupported(bad):
    with pytest.raises(ValueError):
        parse_schema(bad)

def test_to_avro_inverse_of_parse():
    obj = {"type": "record", "name": "r", "fields": [
        {"name": "a", "type": ["long", "null"]},
        {"name": "xs", "type": {"type": "array", "items": "double"}},
    ]}
    assert to_avro(parse_schema(obj)) == obj

import pytest
from visiontransform.contracts.core import SchemaMismatchError
from visiontransform.contracts.schema import (
    ArraySchema, FieldSchema, NullableSchema, PrimitiveSchema, RecordSchema,
)
from visiontransform.services.color_annotation import COLOR_FIELD_EXTRACTORS, ColorAnnotationTransformer
from tests.factories import (
    ALL_COLOR_FIELDS, make_color, make_input_record, make_output_schema, make_response,
)


def _colors(out, field="colors"):
    return [c.as_dict() for c in out.get(field)]


def test_subset_schema_keeps_only_declared_fields():
    t = ColorAnnotationTransformer(make_output_schema(("score", "red")), "colors")
    src = make_response(make_color(score=0.8, pixel_fraction=0.3, red=10, green=20, blue=30, alpha=0.5))
    out = t.transform(make_input_record(), src)
    assert _colors(out) == [{"score": 0.8, "red": 10.0}]


@pytest.mark.parametrize("fields", [
    ("score",), ("alpha",), ("pixelFraction", "blue"), ("red", "green", "blue"), ALL_COLOR_FIELDS,
])
def test_declared_fields_are_exactly_extracted(fields):
    t = ColorAnnotationTransformer(make_output_schema(fields), "colors")
    out = t.transform(make_input_record(), make_response(make_color(alpha=0.9)))
    (sub,) = out.get("colors")
    assert set(sub.as_dict()) == set(fields)


def test_all_fields_and_unset_alpha_uses_default():
    t = ColorAnnotationTransformer(make_output_schema(), "colors")
    out = t.transform(make_input_record(), make_response(make_color()))
    assert _colors(out) == [{
        "score": 0.8, "pixelFraction": 0.3, "red": 10.0, "green": 20.0, "blue": 30.0, "alpha": 0.0,
    }]


def test_order_and_duplicates_preserved():
    entries = [make_color(score=s) for s in (0.5, 0.1, 0.9, 0.1)]
    t = ColorAnnotationTransformer(make_output_schema(("score",)), "colors")
    out = t.transform(make_input_record(), make_response(*entries))
    assert [c["score"] for c in _colors(out)] == [0.5, 0.1, 0.9, 0.1]


def test_zero_entries_gives_empty_sequence():
    t = ColorAnnotationTransformer(make_output_schema(), "colors")
    out = t.transform(make_input_record(), make_response())
    assert out.get("colors") == ()
    assert "colors" in out.as_dict()


def test_input_fields_copied_and_input_untouched():
    rec = make_input_record(id=42, image_path="/tmp/a.png")
    before = rec.as_dict()
    t = ColorAnnotationTransformer(make_output_schema(), "colors")
    out = t.transform(rec, make_response(make_color()))
    assert rec.as_dict() == before
    assert out is not rec
    assert out.get("id") == 42
    assert out.get("image_path") == "/tmp/a.png"


def test_idempotent():
    t = ColorAnnotationTransformer(make_output_schema(), "colors")
    rec, src = make_input_record(), make_response(make_color(), make_color(score=0.2))
    assert t.transform(rec, src) == t.transform(rec, src)


@pytest.mark.parametrize("nullable_array,nullable_items", [(True, False), (False, True), (True, True)])
def test_nullability_is_transparent(nullable_array, nullable_items):
    src = make_response(make_color(alpha=0.5), make_color(score=0.1))
    plain = ColorAnnotationTransformer(make_output_schema(("score", "alpha")), "colors")
    wrapped = ColorAnnotationTransformer(
        make_output_schema(("score", "alpha"), nullable_array=nullable_array, nullable_items=nullable_items),
        "colors",
    )
    assert _colors(plain.transform(make_input_record(), src)) == _colors(wrapped.transform(make_input_record(), src))


def test_nullable_output_schema_is_unwrapped():
    t = ColorAnnotationTransformer(NullableSchema(make_output_schema(("red",))), "colors")
    out = t.transform(make_input_record(), make_response(make_color(red=200)))
    assert _colors(out) == [{"red": 200.0}]


def test_unknown_declared_field_is_not_extracted():
    comp = RecordSchema("colorInfo", (
        FieldSchema("score", PrimitiveSchema("double")),
        FieldSchema("hex", PrimitiveSchema("string")),
    ))
    schema = RecordSchema("output", (
        FieldSchema("id", PrimitiveSchema("long")),
        FieldSchema("image_path", PrimitiveSchema("string")),
        FieldSchema("colors", ArraySchema(comp)),
    ))
    out = ColorAnnotationTransformer(schema, "colors").transform(make_input_record(), make_response(make_color()))
    assert _colors(out) == [{"score": 0.8}]


def test_misconfiguration_is_lazy():
    t = ColorAnnotationTransformer(make_output_schema(output_field="colors"), "missing")
    with pytest.raises(SchemaMismatchError) as ei:
        t.transform(make_input_record(), make_response())
    assert ei.value.field == "missing"


@pytest.mark.parametrize("field_schema", [
    PrimitiveSchema("string"),
    ArraySchema(items=None),
    ArraySchema(items=PrimitiveSchema("double")),
    NullableSchema(ArraySchema(items=NullableSchema(PrimitiveSchema("double")))),
])
def test_wrong_shapes_fail(field_schema):
    schema = RecordSchema("output", (
        FieldSchema("id", PrimitiveSchema("long")),
        FieldSchema("image_path", PrimitiveSchema("string")),
        FieldSchema("colors", field_schema),
    ))
    t = ColorAnnotationTransformer(schema, "colors")
    with pytest.raises(SchemaMismatchError):
        t.transform(make_input_record(), make_response(make_color()))


def test_extractor_table_covers_known_fields():
    assert tuple(n for n, _ in COLOR_FIELD_EXTRACTORS) == ALL_COLOR_FIELDS


def test_existing_output_field_is_overwritten():
    schema = make_output_schema(("score",))
    stale_input = RecordSchema("input", schema.fields)  # ya declara `colors`
    from visiontransform.contracts.records import StructuredRecord
    rec = StructuredRecord.from_dict(stale_input, {"id": 1, "image_path": "a.jpg", "colors": ["stale"]})
    out = ColorAnnotationTransformer(schema, "colors").transform(rec, make_response(make_color()))
    assert out.as_dict() == {"id": 1, "image_path": "a.jpg", "colors": [{"score": 0.8}]}
    assert rec.get("colors") == ("stale",)

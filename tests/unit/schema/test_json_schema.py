import pytest
from pydantic import ValidationError

from lfx_make.schema import json_schema
from lfx_make.schema.json_schema import PermissiveArgsSchema, create_input_schema_from_json_schema


def test_required_and_optional_fields():
    schema = {
        "type": "object",
        "properties": {"a": {"type": "string"}, "b": {"type": "number"}},
        "required": ["a"],
    }
    model = create_input_schema_from_json_schema(schema)

    with pytest.raises(ValidationError):
        model()
    assert model(a="x").b is None
    assert model(a="x", b=1.5).b == 1.5


@pytest.mark.parametrize(
    ("prop_type", "valid", "invalid"),
    [
        ("string", "text", 1),
        ("number", 3, "3"),
        ("integer", 3, 3.5),
        ("boolean", True, "true"),
    ],
)
def test_primitive_types_are_strict(prop_type, valid, invalid):
    model = create_input_schema_from_json_schema(
        {"type": "object", "properties": {"value": {"type": prop_type}}, "required": ["value"]}
    )

    assert model(value=valid).value == valid
    with pytest.raises(ValidationError):
        model(value=invalid)


def test_unknown_property_type_accepts_anything():
    model = create_input_schema_from_json_schema(
        {"type": "object", "properties": {"payload": {"type": "array"}}, "required": ["payload"]}
    )

    assert model(payload=[1, "two"]).payload == [1, "two"]
    assert model(payload={"nested": True}).payload == {"nested": True}


def test_description_is_carried_over():
    model = create_input_schema_from_json_schema(
        {"type": "object", "properties": {"city": {"type": "string", "description": "City name"}}}
    )

    assert model.model_fields["city"].description == "City name"
    assert model.model_json_schema()["properties"]["city"]["description"] == "City name"


@pytest.mark.parametrize("schema", [None, {}, {"type": "array"}, {"type": "object"}, {"type": "object", "properties": {}}])
def test_invalid_or_empty_schema_yields_empty_model(schema):
    model = create_input_schema_from_json_schema(schema)

    assert model.model_fields == {}
    assert model().model_dump() == {}


def test_conversion_failure_falls_back_to_permissive_schema(monkeypatch):
    def broken_create_model(*args, **kwargs):
        msg = "boom"
        raise TypeError(msg)

    monkeypatch.setattr(json_schema, "create_model", broken_create_model)
    model = json_schema.create_input_schema_from_json_schema(
        {"type": "object", "properties": {"city": {"type": "string"}}}
    )

    assert model is PermissiveArgsSchema
    assert model(anything=1, other="x").model_dump() == {"anything": 1, "other": "x"}

"""Schema tests."""

import pytest

from pyjsonmodel import FieldSchema, FieldType, InvalidSchemaError, Schema


class TestFieldSchema:
    def test_defaults(self):
        f = FieldSchema(name="firstName")
        assert f.type is FieldType.STRING
        assert f.json_key == "firstName"
        assert f.required is True
        assert f.array_dimensions == 0

    def test_key_override(self):
        assert FieldSchema(name="firstName", key="first_name").json_key == "first_name"

    def test_type_string_normalized(self):
        assert FieldSchema(name="n", type="integer").type is FieldType.INTEGER

    def test_repeated_dimensions(self):
        assert FieldSchema(name="t", repeated=True).array_dimensions == 1
        assert FieldSchema(name="t", repeated=True, dimensions=3).array_dimensions == 3

    def test_unknown_type(self):
        with pytest.raises(InvalidSchemaError) as exc_info:
            FieldSchema(name="n", type="decimal")
        assert "decimal" in exc_info.value.internal()

    def test_empty_name(self):
        with pytest.raises(InvalidSchemaError):
            FieldSchema(name="")

    def test_nested_schema_requires_object(self):
        with pytest.raises(InvalidSchemaError):
            FieldSchema(name="n", type="string", schema=Schema([]))

    def test_dimensions_require_repeated(self):
        with pytest.raises(InvalidSchemaError):
            FieldSchema(name="n", dimensions=2)

    def test_frozen(self):
        f = FieldSchema(name="n")
        with pytest.raises(AttributeError):
            f.name = "m"


class TestSchema:
    def test_create_schema(self):
        schema = Schema([
            FieldSchema(name="id", type="integer"),
            FieldSchema(name="name"),
        ])
        assert len(schema) == 2

    def test_find_field(self):
        schema = Schema([
            FieldSchema(name="id", type="integer"),
            FieldSchema(name="tags", repeated=True),
        ])
        field = schema.find_field("tags")
        assert field is not None
        assert field.repeated is True

    def test_find_field_not_found(self):
        schema = Schema([FieldSchema(name="id", type="integer")])
        assert schema.find_field("nonexistent") is None

    def test_find_key(self, name_schema):
        field = name_schema.find_key("first_name")
        assert field is not None
        assert field.name == "firstName"
        assert name_schema.find_key("firstName") is None

    def test_fields_property(self):
        fields = [
            FieldSchema(name="a"),
            FieldSchema(name="b", type="integer"),
        ]
        schema = Schema(fields)
        assert schema.fields == fields
        schema.fields.append(FieldSchema(name="c"))
        assert len(schema) == 2

    def test_duplicate_name(self):
        with pytest.raises(InvalidSchemaError, match="invalid schema"):
            Schema([FieldSchema(name="a"), FieldSchema(name="a", key="b")])

    def test_duplicate_key(self):
        with pytest.raises(InvalidSchemaError) as exc_info:
            Schema([FieldSchema(name="a", key="x"), FieldSchema(name="b", key="x")])
        assert "'x'" in exc_info.value.internal()

    def test_default_model_is_dict(self):
        schema = Schema([FieldSchema(name="a")])
        assert schema.model is dict
        assert schema.build({"a": "1"}) == {"a": "1"}

    def test_name_from_model(self):
        class Point:
            def __init__(self, x):
                self.x = x

        assert Schema([FieldSchema(name="x", type="number")], model=Point).name == "Point"

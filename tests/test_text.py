"""JSON text parsing and serialization."""

import pytest

from _models import ComplexModel, Name
from pyjsonmodel import (
    MalformedTextError,
    TypeMismatchError,
    UnsupportedTypeError,
    decode_text,
    encode_text,
    parse_text,
    serialize_text,
)


class TestParseText:
    def test_object(self):
        assert parse_text('{"first_name": "Ash", "tags": [1, 2.5, null, true]}') == {
            "first_name": "Ash",
            "tags": [1, 2.5, None, True],
        }

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("null", None),
            ("false", False),
            ("12", 12),
            ('"x"', "x"),
            ("[]", []),
        ],
    )
    def test_scalars_and_arrays(self, text, expected):
        assert parse_text(text) == expected

    def test_bytes(self):
        assert parse_text('{"name": "Zoë"}'.encode()) == {"name": "Zoë"}

    def test_malformed(self):
        with pytest.raises(MalformedTextError) as exc_info:
            parse_text("{not json")
        err = exc_info.value
        assert str(err) == "malformed JSON text"
        assert "line 1 column 2" in err.internal()
        assert err.wrapped is not None

    def test_empty_text(self):
        with pytest.raises(MalformedTextError):
            parse_text("")

    @pytest.mark.parametrize("text", ["NaN", "[Infinity]", '{"a": -Infinity}'])
    def test_non_standard_constants(self, text):
        with pytest.raises(MalformedTextError, match="malformed JSON text") as exc_info:
            parse_text(text)
        assert "not valid JSON" in exc_info.value.internal()

    def test_invalid_utf8(self):
        with pytest.raises(MalformedTextError) as exc_info:
            parse_text(b'{"a": "\xff"}')
        assert "encoding" in exc_info.value.internal()

    def test_non_text_input(self):
        with pytest.raises(TypeMismatchError):
            parse_text(42)


class TestSerializeText:
    def test_compact(self):
        assert serialize_text({"a": [1, None], "b": "é"}) == '{"a":[1,null],"b":"é"}'

    def test_pretty(self):
        assert serialize_text({"a": [1]}, pretty=True) == '{\n  "a": [\n    1\n  ]\n}'

    def test_pretty_only_changes_whitespace(self, complex_json):
        compact = serialize_text(complex_json)
        pretty = serialize_text(complex_json, pretty=True)
        assert parse_text(compact) == parse_text(pretty)

    def test_key_order_preserved(self):
        assert serialize_text({"b": 1, "a": 2}) == '{"b":1,"a":2}'

    def test_not_serializable(self):
        with pytest.raises(UnsupportedTypeError) as exc_info:
            serialize_text({"a": {1, 2}})
        assert isinstance(exc_info.value.wrapped, TypeError)

    def test_nan_rejected(self):
        with pytest.raises(UnsupportedTypeError):
            serialize_text([float("nan")])


class TestTextConveniences:
    def test_decode_text(self, complex_json, complex_model):
        text = serialize_text(complex_json)
        assert decode_text(text, ComplexModel) == complex_model

    def test_encode_text(self):
        text = encode_text(Name(firstName="Ash", lastName="Williams"))
        assert text == '{"first_name":"Ash","last_name":"Williams"}'

    def test_encode_text_pretty(self):
        text = encode_text(Name(firstName="Ash", lastName="Williams"), pretty=True)
        assert text.startswith('{\n  "first_name": "Ash"')

    def test_decode_text_malformed(self):
        with pytest.raises(MalformedTextError):
            decode_text('{"first_name": ', Name)

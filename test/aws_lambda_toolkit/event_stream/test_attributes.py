import pytest

from aws_lambda_toolkit.common.exceptions import InvalidMessageAttributeTypeError
from aws_lambda_toolkit.event_stream.attributes import (
    get_attr_type,
    parse_attributes,
    parse_sns_type,
)
from aws_lambda_toolkit.event_stream.model import EventStatus


def test__parse_attributes__encodes_arrays_and_numbers():
    assert parse_attributes({"tags": ["x", "y"], "count": 3}) == {
        "tags": {"DataType": "String.Array", "StringValue": '["x","y"]'},
        "count": {"DataType": "Number", "StringValue": "3"},
    }


def test__parse_attributes__encodes_strings_floats_and_enums():
    assert parse_attributes({"entity": "product", "ratio": 0.5, "status": EventStatus.PASS}) == {
        "entity": {"DataType": "String", "StringValue": "product"},
        "ratio": {"DataType": "Number", "StringValue": "0.5"},
        "status": {"DataType": "String", "StringValue": "pass"},
    }


def test__parse_attributes__skips_none_values():
    assert parse_attributes({"entity": None, "count": 1}) == {
        "count": {"DataType": "Number", "StringValue": "1"}
    }
    assert parse_attributes(None) == {}


@pytest.mark.parametrize(
    "value, expected",
    [
        pytest.param("a", "String", id="string"),
        pytest.param(1, "Number", id="int"),
        pytest.param(1.5, "Number", id="float"),
        pytest.param([1, "a"], "String.Array", id="list"),
        pytest.param(("a",), "String.Array", id="tuple"),
    ],
)
def test__get_attr_type__valid_types(value, expected):
    assert get_attr_type(value) == expected


@pytest.mark.parametrize(
    "value",
    [
        pytest.param(True, id="bool"),
        pytest.param({"a": 1}, id="dict"),
        pytest.param(object(), id="object"),
    ],
)
def test__get_attr_type__invalid_types_raise(value):
    with pytest.raises(InvalidMessageAttributeTypeError):
        get_attr_type(value)


def test__parse_attributes__invalid_type_raises():
    with pytest.raises(InvalidMessageAttributeTypeError, match="Invalid MessageAttribute type"):
        parse_attributes({"nested": {"a": 1}})


def test__parse_sns_type__decodes_non_string_types():
    assert parse_sns_type("product", "String") == "product"
    assert parse_sns_type("42", "String") == "42"
    assert parse_sns_type("42", "Number") == 42
    assert parse_sns_type('["x","y"]', "String.Array") == ["x", "y"]

"""Encoding and decoding of SNS message attributes.

Only three attribute types are used on the event stream: `String`, `Number`
and `String.Array`. Arrays travel as JSON text.
"""

__all__ = [
    "NUMBER",
    "STRING",
    "STRING_ARRAY",
    "get_attr_type",
    "parse_attributes",
    "parse_sns_type",
]

import json
from enum import Enum
from typing import Any, Dict, Mapping, Optional

from aws_lambda_toolkit.common.exceptions import InvalidMessageAttributeTypeError
from aws_lambda_toolkit.common.utils import to_json

STRING = "String"
NUMBER = "Number"
STRING_ARRAY = "String.Array"


def get_attr_type(value: Any) -> str:
    if isinstance(value, str):
        return STRING
    # bool is an int subclass but not a valid attribute value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return NUMBER
    if isinstance(value, (list, tuple)):
        return STRING_ARRAY
    raise InvalidMessageAttributeTypeError(
        f"Invalid MessageAttribute type: {type(value).__name__}. "
        "Valid types: String, Number, Array."
    )


def _to_string_value(value: Any, attr_type: str) -> str:
    if attr_type == STRING_ARRAY:
        return to_json(list(value))
    if attr_type == NUMBER:
        if isinstance(value, float) and value.is_integer():
            return str(int(value))
        return str(value)
    return value


def parse_attributes(attributes: Optional[Mapping[str, Any]]) -> Dict[str, Dict[str, str]]:
    """Build SNS MessageAttributes from plain values.

    Attributes whose value is None are left out.

    Example:
        >>> parse_attributes({"tags": ["x", "y"], "count": 3})
        {'tags': {'DataType': 'String.Array', 'StringValue': '["x","y"]'},
         'count': {'DataType': 'Number', 'StringValue': '3'}}

    Raises:
        InvalidMessageAttributeTypeError: If a value is not a string, number or array.
    """
    message_attributes: Dict[str, Dict[str, str]] = {}
    for key, value in (attributes or {}).items():
        if value is None:
            continue
        if isinstance(value, Enum):
            value = value.value
        attr_type = get_attr_type(value)
        message_attributes[key] = {
            "DataType": attr_type,
            "StringValue": _to_string_value(value, attr_type),
        }
    return message_attributes


def parse_sns_type(value: str, attr_type: str) -> Any:
    """Decode an inbound attribute value. Non-string types are JSON text."""
    if attr_type == STRING:
        return value
    return json.loads(value)

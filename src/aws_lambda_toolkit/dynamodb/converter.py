"""Conversion between plain records and DynamoDB's typed attribute encoding."""

__all__ = [
    "marshall",
    "unmarshall",
]

from decimal import Decimal
from typing import Any, Dict

from aibs_informatics_aws_utils.dynamodb import convert_floats_to_decimals
from boto3.dynamodb.types import TypeDeserializer, TypeSerializer

_serializer = TypeSerializer()
_deserializer = TypeDeserializer()


def _from_decimals(value: Any) -> Any:
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    if isinstance(value, dict):
        return {k: _from_decimals(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_from_decimals(v) for v in value]
    if isinstance(value, set):
        return {_from_decimals(v) for v in value}
    return value


def marshall(record: Dict[str, Any]) -> Dict[str, Dict[str, Any]]:
    """Convert a plain record into DynamoDB attribute values.

    Floats (also nested ones) are sent as Decimal. The record is not modified.

    Example:
        >>> marshall({"id": "a", "count": 1.5})
        {'id': {'S': 'a'}, 'count': {'N': '1.5'}}
    """
    record = convert_floats_to_decimals(record, in_place=False)
    return {key: _serializer.serialize(value) for key, value in record.items()}


def unmarshall(item: Dict[str, Dict[str, Any]]) -> Dict[str, Any]:
    """Convert DynamoDB attribute values into a plain record.

    Numbers come back as int when integral, float otherwise.
    """
    return {key: _from_decimals(_deserializer.deserialize(value)) for key, value in item.items()}

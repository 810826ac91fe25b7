"""JSON and HTTP response helpers."""

__all__ = [
    "format_http_response",
    "get_code_status",
    "health",
    "parse_json",
    "to_json",
]

import json
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, Optional

from aibs_informatics_core.utils.json import JSON

HTTP_STATUS_NAMES = {
    200: "OK",
    201: "Created",
    400: "Bad Request",
    500: "Internal Server Error",
}


def _json_default(value: Any) -> Any:
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    if isinstance(value, (set, frozenset, tuple)):
        return list(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    raise TypeError(f"Object of type {value.__class__.__name__} is not JSON serializable")


def to_json(value: Any) -> str:
    """Serialize to compact JSON (no whitespace after separators), keeping key order."""
    return json.dumps(value, separators=(",", ":"), default=_json_default)


def parse_json(value: Any) -> Any:
    """Attempt to parse the value as JSON. If parsing fails, return the original value."""
    try:
        return json.loads(value)
    except (TypeError, ValueError):
        return value


def get_code_status(code: int) -> Optional[str]:
    return HTTP_STATUS_NAMES.get(code)


def format_http_response(code: int, input: JSON, result: JSON) -> Dict[str, Any]:
    """Format a Lambda proxy integration response for API Gateway.

    Args:
        code (int): HTTP status code.
        input (JSON): The request input, echoed back in the body.
        result (JSON): The handler result.

    Returns:
        `{"statusCode": code, "body": <json>}` where the body holds `resp`, `input`
        and `result`. `resp` reads "HTTP Resp: <code> - <status>" for known codes
        and "HTTP Resp: <code>" otherwise.
    """
    status = get_code_status(code)
    resp = f"HTTP Resp: {code}" + (f" - {status}" if status else "")
    return {
        "statusCode": code,
        "body": to_json({"resp": resp, "input": input, "result": result}),
    }


def health(service_name: str) -> str:
    return f"{service_name} is healthy"

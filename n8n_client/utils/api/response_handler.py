# n8n_client/utils/api/response_handler.py

import dataclasses
import json
import math
from dataclasses import dataclass
from typing import Any, Callable, Optional, TypeVar, Union

from ...core.exceptions import APIError, DeserializationError

T = TypeVar('T')

class _Discard:
    """Response target meaning "read the body, keep nothing" """
    _instance: Optional["_Discard"] = None

    def __new__(cls) -> "_Discard":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "DISCARD"

DISCARD = _Discard()

ResultType = Union[Callable[[Any], Any], _Discard, None]

@dataclass
class PaginationInfo:
    """Pagination metadata of a list response"""
    limit: int = 0
    offset: int = 0
    total: int = 0
    next_cursor: str = ""
    has_next: bool = False

def parse_api_error(status: int, body: bytes) -> APIError:
    """
    Build the structured error for a failed response.

    The body is expected to be ``{"code": int, "message": str, "details": str}``;
    any other payload is reported with the raw status and body text. The
    HTTP status always wins over the code in the payload.
    """
    text = body.decode("utf-8", errors="replace")
    try:
        payload = json.loads(text) if text else None
    except ValueError:
        payload = None

    if isinstance(payload, dict) and isinstance(payload.get("message"), str):
        details = payload.get("details")
        if details is not None and not isinstance(details, str):
            details = json.dumps(details)
        return APIError(code=status, message=payload["message"], details=details or None)

    return APIError(code=status, message=f"HTTP {status}: {text}")

def convert_result(data: Any, result_type: Callable[[Any], T]) -> T:
    """Turn decoded JSON into the caller's result type"""
    if result_type in (dict, list, str, int, float, bool, object):
        if result_type is object or isinstance(data, result_type):
            return data
        raise DeserializationError(
            f"failed to unmarshal response: expected {result_type.__name__}, got {type(data).__name__}"
        )

    try:
        if dataclasses.is_dataclass(result_type):
            return _to_dataclass(data, result_type)
        return result_type(data)
    except DeserializationError:
        raise
    except Exception as e:
        raise DeserializationError(f"failed to unmarshal response: {str(e)}") from e

def _to_dataclass(data: Any, result_type: Any) -> Any:
    if isinstance(data, list):
        return [_to_dataclass(item, result_type) for item in data]
    if not isinstance(data, dict):
        raise DeserializationError(
            f"failed to unmarshal response: expected object for {result_type.__name__}, "
            f"got {type(data).__name__}"
        )
    names = {f.name for f in dataclasses.fields(result_type) if f.init}
    return result_type(**{k: v for k, v in data.items() if k in names})

def decode_response(body: bytes, result_type: ResultType = None) -> Any:
    """
    Decode a successful response body.

    An empty body is always success and yields None. ``DISCARD`` skips
    decoding entirely. Without a result type the plain JSON value is
    returned.
    """
    if result_type is DISCARD or not body:
        return None

    try:
        data = json.loads(body)
    except ValueError as e:
        raise DeserializationError(f"failed to unmarshal response: {str(e)}") from e

    if result_type is None:
        return data
    return convert_result(data, result_type)

def extract_pagination(data: Any) -> PaginationInfo:
    """
    Best-effort pagination metadata from a decoded response.

    Only JSON objects are inspected: a string ``nextCursor`` and a numeric
    ``total``. A string ``total`` such as ``"10"`` is ignored and reported
    as 0. Every other shape gives the defaults.
    """
    pagination = PaginationInfo()
    if not isinstance(data, dict):
        return pagination

    next_cursor = data.get("nextCursor")
    if isinstance(next_cursor, str):
        pagination.next_cursor = next_cursor
        pagination.has_next = next_cursor != ""

    total = data.get("total")
    if isinstance(total, (int, float)) and not isinstance(total, bool) and math.isfinite(total):
        pagination.total = int(total)

    return pagination

def json_dumps(value: Any) -> str:
    """Encode a request body; values without a JSON form raise TypeError/ValueError"""
    return json.dumps(value, allow_nan=False)


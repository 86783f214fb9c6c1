"""
JSON-RPC request/response codec.

Pure functions, no I/O:

- build_request / new_request_id   construct the per-call Request
- encode_request                   Request -> JSON text (EncodingError on failure)
- decode_response                  body text -> non-empty dict (DecodingError otherwise)
- unwrap_response                  dict -> `result`, after error and id checks
- ids_match                        loose id correlation

Wire shape (request):   {"method": "<lowercase>", "params": [...], "id": <int>}
Wire shape (response):  {"id": <same>, "result": ...} or {"id": <same>, "error": {...}}
"""

from __future__ import annotations

import json
import random
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Union

from ..errors import DecodingError, EncodingError, ServerError, excerpt, raise_for_jsonrpc_error

JSON = Union[Dict[str, Any], List[Any], str, int, float, bool, None]
Params = Optional[Sequence[Any]]

# Same range as a C rand(): 0..2**31-1.
MAX_REQUEST_ID = 2**31 - 1

_INT_RE = re.compile(r"^[+-]?[0-9]+$")


def new_request_id() -> int:
    return random.randint(0, MAX_REQUEST_ID)


@dataclass(frozen=True)
class Request:
    method: str
    params: List[Any] = field(default_factory=list)
    id: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {"method": self.method, "params": self.params, "id": self.id}


def build_request(method: str, params: Params = None, *, request_id: int) -> Request:
    """Validate inputs and normalize the method name to lowercase."""
    if not isinstance(method, str) or not method:
        raise EncodingError("RPC method name must be a non-empty string", method=None)
    if params is None:
        params = []
    elif isinstance(params, (list, tuple)):
        params = list(params)
    else:
        raise EncodingError(
            f"params must be a list or tuple, got {type(params).__name__}", method=method
        )
    return Request(method=method.lower(), params=params, id=int(request_id))


def encode_request(request: Request) -> str:
    try:
        return json.dumps(request.to_dict(), allow_nan=False, separators=(",", ":"))
    except (TypeError, ValueError, RecursionError) as e:
        raise EncodingError(
            f"Unable to encode server request: {e}", method=request.method
        ) from e


def decode_response(body: Union[str, bytes]) -> Dict[str, Any]:
    """Parse a response body; only a non-empty JSON object is acceptable."""
    if isinstance(body, (bytes, bytearray)):
        try:
            body = bytes(body).decode("utf-8")
        except UnicodeDecodeError as e:
            raise DecodingError("Unable to decode server response.", body=excerpt(body)) from e
    text = body.strip()
    try:
        obj = json.loads(text)
    except (ValueError, RecursionError) as e:
        raise DecodingError("Unable to decode server response.", body=excerpt(text)) from e
    if not isinstance(obj, dict) or not obj:
        raise DecodingError(
            "Server response is not a non-empty JSON object.", body=excerpt(text)
        )
    return obj


def _normalize_id(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        text = value.strip()
        if text.isascii() and _INT_RE.match(text):
            return int(text)
        return None
    return None


def ids_match(expected: Any, actual: Any) -> bool:
    """
    Loose id equality: 7, 7.0 and "7" all match 7. Booleans, null and
    non-numeric strings only match an identical raw value.
    """
    a, b = _normalize_id(expected), _normalize_id(actual)
    if a is not None and b is not None:
        return a == b
    return expected == actual and type(expected) is type(actual)


def unwrap_response(obj: Dict[str, Any], expected_id: Any) -> JSON:
    raise_for_jsonrpc_error(obj)
    actual_id = obj.get("id")
    if not ids_match(expected_id, actual_id):
        raise ServerError(
            message=f"Server returned ID {actual_id!r}, was expecting {expected_id!r}.",
            request_id=actual_id,
        )
    return obj.get("result")


__all__ = [
    "JSON",
    "Params",
    "MAX_REQUEST_ID",
    "Request",
    "new_request_id",
    "build_request",
    "encode_request",
    "decode_response",
    "ids_match",
    "unwrap_response",
]

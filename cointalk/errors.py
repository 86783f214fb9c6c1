"""
Typed error classes for the cointalk client.

Every failure of `RpcClient.query` is raised as one of the five kinds below so
callers can catch a specific failure mode, or the shared base `CoinTalkError`:

- EncodingError        the request could not be built or serialized (no I/O happened)
- TransportError       network/socket/timeout failure, or an unexpected HTTP status
- AuthenticationError  the server answered HTTP 401
- DecodingError        the response body is not a usable JSON-RPC object
- ServerError          the server reported an error, or echoed the wrong id
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Mapping, Optional

import httpx

__all__ = [
    "CoinTalkError",
    "EncodingError",
    "TransportError",
    "AuthenticationError",
    "DecodingError",
    "ServerError",
    "TransportCode",
    "transport_code_for",
    "excerpt",
    "from_jsonrpc_error",
    "raise_for_jsonrpc_error",
]

_BODY_EXCERPT = 256


class CoinTalkError(Exception):
    """Base class for all cointalk errors."""


class TransportCode(IntEnum):
    # Values mirror libcurl CURLE_* numbers.
    UNKNOWN = 0
    UNSUPPORTED_PROTOCOL = 1
    PROXY = 5
    CONNECT = 7
    PROTOCOL = 8
    HTTP_STATUS = 22
    TIMEOUT = 28
    TOO_MANY_REDIRECTS = 47
    SEND = 55
    RECEIVE = 56


@dataclass(slots=True)
class EncodingError(CoinTalkError):
    """Raised when the request cannot be encoded; nothing was sent."""

    message: str
    method: Optional[str] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        if self.method:
            return f"{self.message} (method={self.method})"
        return self.message


@dataclass(slots=True)
class TransportError(CoinTalkError):
    """
    Raised when the HTTP exchange itself failed.

    Fields:
      - code: TransportCode describing the failure class
      - http_status: set when the server answered with an unexpected status
    """

    message: str
    code: int = TransportCode.UNKNOWN
    http_status: Optional[int] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"{self.message} (code={int(self.code)})"


@dataclass(slots=True)
class AuthenticationError(CoinTalkError):
    """Raised on HTTP 401; the RPC credentials were rejected."""

    message: str = "The RPC username or password was incorrect."
    http_status: int = 401

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.message


@dataclass(slots=True)
class DecodingError(CoinTalkError):
    """Raised when the response body is not a non-empty JSON object."""

    message: str
    body: Optional[str] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        if self.body:
            return f"{self.message} body={self.body!r}"
        return self.message


@dataclass(slots=True)
class ServerError(CoinTalkError):
    """
    Raised when the server reports an error object, when the response id does
    not match the request id, or when a non-200 reply carries a JSON-RPC error.
    """

    message: str
    code: Optional[int] = None
    data: Optional[Any] = None
    request_id: Optional[Any] = None
    http_status: Optional[int] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        parts = [self.message]
        if self.code is not None:
            parts.append(f"code={self.code}")
        if self.http_status is not None:
            parts.append(f"http={self.http_status}")
        return " ".join(parts)


def excerpt(body: Any) -> str:
    """Short printable slice of a response body for error context."""
    if isinstance(body, (bytes, bytearray)):
        body = bytes(body).decode("utf-8", errors="replace")
    text = str(body)
    if len(text) > _BODY_EXCERPT:
        return text[:_BODY_EXCERPT] + "..."
    return text


_TRANSPORT_CODES = (
    (httpx.TimeoutException, TransportCode.TIMEOUT),
    (httpx.ProxyError, TransportCode.PROXY),
    (httpx.ConnectError, TransportCode.CONNECT),
    (httpx.ReadError, TransportCode.RECEIVE),
    (httpx.WriteError, TransportCode.SEND),
    (httpx.ProtocolError, TransportCode.PROTOCOL),
    (httpx.UnsupportedProtocol, TransportCode.UNSUPPORTED_PROTOCOL),
    (httpx.TooManyRedirects, TransportCode.TOO_MANY_REDIRECTS),
)


def transport_code_for(exc: BaseException) -> TransportCode:
    """Map an httpx exception onto a TransportCode (UNKNOWN when unmapped)."""
    for exc_type, code in _TRANSPORT_CODES:
        if isinstance(exc, exc_type):
            return code
    return TransportCode.UNKNOWN


def from_jsonrpc_error(
    err_obj: Any,
    *,
    request_id: Optional[Any] = None,
    http_status: Optional[int] = None,
) -> ServerError:
    """
    Convert a JSON-RPC error member into ServerError.

    `err_obj` should resemble {"code": int, "message": str, "data": any?}; some
    daemons send a bare string instead, which becomes the message.
    """
    if not isinstance(err_obj, Mapping):
        return ServerError(
            message=str(err_obj), request_id=request_id, http_status=http_status
        )
    code = err_obj.get("code")
    try:
        code = int(code) if code is not None else None
    except (TypeError, ValueError):
        code = None
    return ServerError(
        message=str(err_obj.get("message", "Unknown JSON-RPC error")),
        code=code,
        data=err_obj.get("data"),
        request_id=request_id,
        http_status=http_status,
    )


def raise_for_jsonrpc_error(
    obj: Mapping[str, Any], *, http_status: Optional[int] = None
) -> None:
    """If `obj` carries a non-empty "error" member, raise ServerError."""
    err = obj.get("error")
    if err:
        raise from_jsonrpc_error(err, request_id=obj.get("id"), http_status=http_status)

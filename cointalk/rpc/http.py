"""
HTTP JSON-RPC client (sync) for a coin daemon's control interface.

- One POST per call over plain HTTP with Basic auth; a fresh httpx.Client each
  time, so nothing is pooled or cached between calls.
- No retries: every failure is raised to the caller as a cointalk error.

Example:
    from cointalk import RpcClient
    rpc = RpcClient(user="rpcuser", password="secret", port=9332)
    info = rpc.query("getinfo")
    print(info["blocks"])
"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, Dict, Mapping, Optional, Union

import httpx

from ..config import ServerConfig
from ..errors import (
    AuthenticationError,
    ServerError,
    TransportCode,
    TransportError,
    from_jsonrpc_error,
    transport_code_for,
)
from ..version import user_agent
from .codec import JSON, Params, build_request, decode_response, encode_request, new_request_id, unwrap_response

log = logging.getLogger(__name__)


def _server_error_from_body(body: str, http_status: int) -> Optional[ServerError]:
    """ServerError if a non-200 body still carries a JSON-RPC error message."""
    if not body or not body.strip():
        return None
    try:
        obj = json.loads(body)
    except (ValueError, RecursionError):
        return None
    if not isinstance(obj, dict):
        return None
    err = obj.get("error")
    if not isinstance(err, Mapping) or not err.get("message"):
        return None
    return from_jsonrpc_error(err, request_id=obj.get("id"), http_status=http_status)


class RpcClient:
    """
    Query a JSON-RPC daemon over HTTP.

    The client owns a ServerConfig. `set_conf` merges updates into it; each call
    reads the config current at call time.
    """

    def __init__(
        self,
        conf: Union[ServerConfig, Mapping[str, Any], None] = None,
        *,
        id_factory: Optional[Callable[[], int]] = None,
        **overrides: Any,
    ) -> None:
        base = conf if isinstance(conf, ServerConfig) else ServerConfig().merged(conf)
        self._config = base.merged(overrides) if overrides else base
        self._id_factory = id_factory or new_request_id

    def __repr__(self) -> str:
        return f"RpcClient(url={self._config.url!r}, user={self._config.user!r})"

    @property
    def config(self) -> ServerConfig:
        return self._config

    def set_conf(self, conf: Optional[Mapping[str, Any]] = None, **overrides: Any) -> "RpcClient":
        """
        Merge settings into the current config and return self.

        Accepted keys: user, pass (or password), host, port, timeout.
        """
        self._config = self._config.merged(conf, **overrides)
        return self

    # --- protocol ---------------------------------------------------------

    def query(self, method: str, params: Params = None) -> JSON:
        """
        Call `method` with positional `params` and return the `result` member.

        Raises EncodingError, TransportError, AuthenticationError,
        DecodingError or ServerError.
        """
        request = build_request(method, params, request_id=self._id_factory())
        payload = encode_request(request)
        log.debug("rpc request method=%s id=%s", request.method, request.id)
        body = self.send(payload)
        obj = decode_response(body)
        return unwrap_response(obj, request.id)

    # --- transport --------------------------------------------------------

    def send(self, body: Union[str, bytes]) -> str:
        """POST `body` to the daemon and return the raw 200 response text."""
        conf = self._config
        headers: Dict[str, str] = {
            "Content-Type": "application/json",
            "User-Agent": user_agent(),
        }
        try:
            with httpx.Client(
                auth=(conf.user, conf.password), timeout=conf.timeout, headers=headers
            ) as client:
                r = client.post(conf.url, content=body)
        except httpx.RequestError as e:
            code = transport_code_for(e)
            log.debug("rpc transport failure url=%s code=%d: %s", conf.url, code, e)
            raise TransportError(str(e) or type(e).__name__, code=code) from e

        status = r.status_code
        log.debug("rpc response url=%s status=%d bytes=%d", conf.url, status, len(r.content))
        if status == 401:
            raise AuthenticationError()
        if status != 200:
            err = _server_error_from_body(r.text, status)
            if err is not None:
                raise err
            raise TransportError(
                f"Received HTTP status code {status} from the server.",
                code=TransportCode.HTTP_STATUS,
                http_status=status,
            )
        return r.text


__all__ = ["RpcClient"]

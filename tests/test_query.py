"""
RpcClient.query against an in-memory transport.

`EchoClient` replaces the HTTP layer: it records the request document and
answers with whatever the test's `reply` callable builds from it.
"""

from __future__ import annotations

import json
from typing import Any, Callable, Dict, List

import pytest
from hypothesis import given
from hypothesis import strategies as st

from cointalk import (
    AuthenticationError,
    DecodingError,
    EncodingError,
    RpcClient,
    ServerError,
    TransportError,
)


class EchoClient(RpcClient):
    def __init__(self, reply: Callable[[Dict[str, Any]], Any], **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.reply = reply
        self.sent: List[Dict[str, Any]] = []

    def send(self, body):
        req = json.loads(body)
        self.sent.append(req)
        out = self.reply(req)
        return out if isinstance(out, str) else json.dumps(out)


def _result(value):
    return lambda req: {"id": req["id"], "result": value}


@given(data=st.data())
def test_round_trip_returns_result_exactly(json_strategy, data):
    value = data.draw(json_strategy)
    rpc = EchoClient(_result(value))
    assert rpc.query("echo", [value]) == value


@pytest.mark.parametrize("value", [None, [], {}, 0, "", False, {"a": [1, {"b": None}]}])
def test_round_trip_edge_values(value):
    assert EchoClient(_result(value)).query("getx") == value


def test_request_document_shape():
    rpc = EchoClient(_result(1), id_factory=lambda: 4242)
    rpc.query("GetBlockHash", [0, "x", None])
    assert rpc.sent == [{"method": "getblockhash", "params": [0, "x", None], "id": 4242}]


def test_ids_are_drawn_per_call():
    ids = iter([11, 12])
    rpc = EchoClient(_result("ok"), id_factory=lambda: next(ids))
    rpc.query("a")
    rpc.query("b")
    assert [r["id"] for r in rpc.sent] == [11, 12]


def test_numeric_string_id_is_accepted():
    rpc = EchoClient(lambda req: {"id": str(req["id"]), "result": "ok"})
    assert rpc.query("getinfo") == "ok"


def test_id_mismatch_raises_server_error():
    rpc = EchoClient(lambda req: {"id": req["id"] + 1, "result": "stolen"}, id_factory=lambda: 5)
    with pytest.raises(ServerError) as ei:
        rpc.query("getinfo")
    assert ei.value.message == "Server returned ID 6, was expecting 5."


def test_missing_id_raises_server_error():
    with pytest.raises(ServerError):
        EchoClient(lambda req: {"result": 1}).query("getinfo")


def test_error_payload_raises_with_exact_message():
    rpc = EchoClient(lambda req: {"id": req["id"], "error": {"message": "boom"}})
    with pytest.raises(ServerError) as ei:
        rpc.query("getinfo")
    assert ei.value.message == "boom"


@pytest.mark.parametrize("body", ["", "<html>oops</html>", "null", "{}", "[1, 2]"])
def test_bad_body_raises_decoding_error(body):
    with pytest.raises(DecodingError):
        EchoClient(lambda req: body).query("getinfo")


def test_encoding_error_happens_before_send():
    rpc = EchoClient(_result(1))
    with pytest.raises(EncodingError):
        rpc.query("sendtoaddress", [{1, 2}])
    with pytest.raises(EncodingError):
        rpc.query("")
    assert rpc.sent == []


class FailingClient(RpcClient):
    def __init__(self, exc: Exception) -> None:
        super().__init__()
        self.exc = exc

    def send(self, body):
        raise self.exc


@pytest.mark.parametrize(
    "exc",
    [TransportError("connection refused", code=7), AuthenticationError()],
)
def test_transport_failures_propagate_unchanged(exc):
    with pytest.raises(type(exc)) as ei:
        FailingClient(exc).query("getinfo")
    assert ei.value is exc

"""
cointalk: a small JSON-RPC client for coin daemons (litecoind, bitcoind, ...).

    from cointalk import RpcClient
    info = RpcClient({"user": "rpc", "pass": "secret"}).query("getinfo")
"""

import logging

from .version import __version__  # noqa: F401

from .config import ServerConfig  # noqa: F401
from .errors import (  # noqa: F401
    AuthenticationError,
    CoinTalkError,
    DecodingError,
    EncodingError,
    ServerError,
    TransportCode,
    TransportError,
)
from .rpc.http import RpcClient  # noqa: F401

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "__version__",
    "ServerConfig",
    "RpcClient",
    "CoinTalkError",
    "EncodingError",
    "TransportError",
    "AuthenticationError",
    "DecodingError",
    "ServerError",
    "TransportCode",
]

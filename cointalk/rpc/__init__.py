"""
cointalk.rpc
------------

- RpcClient: HTTP JSON-RPC client (see .http)
- codec:     request/response encoding and id correlation (see .codec)
"""

from __future__ import annotations

from .http import RpcClient

__all__ = ["RpcClient"]

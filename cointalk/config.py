"""
Connection settings for the daemon's RPC endpoint.

- Sane defaults matching a local litecoind-style daemon (test/test@localhost:9332).
- Merge-style updates: supply only the keys you want to change.
- Optional overrides via environment variables (COINTALK_*).
"""

from __future__ import annotations

import logging
import math
import os
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

log = logging.getLogger(__name__)

DEFAULT_USER = "test"
DEFAULT_PASS = "test"
DEFAULT_HOST = "localhost"
DEFAULT_PORT = 9332
DEFAULT_TIMEOUT = 30.0

# "pass" is the wire/config name; the attribute is `password`.
_KEY_ALIASES = {"pass": "password"}
_FIELDS = ("user", "password", "host", "port", "timeout")


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    v = os.getenv(name)
    return v if v is not None else default


def _parse_port(val: Any) -> int:
    if isinstance(val, bool):
        raise ValueError(f"port must be an integer, got: {val!r}")
    try:
        port = int(str(val).strip()) if isinstance(val, str) else int(val)
    except (TypeError, ValueError) as e:
        raise ValueError(f"port must be an integer, got: {val!r}") from e
    if not 1 <= port <= 65535:
        raise ValueError(f"port must be in 1..65535, got: {port}")
    return port


@dataclass(frozen=True, slots=True)
class ServerConfig:
    user: str = DEFAULT_USER
    password: str = field(default=DEFAULT_PASS, repr=False)
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    # Seconds; applies to connect, read and write.
    timeout: float = DEFAULT_TIMEOUT

    def __post_init__(self) -> None:
        host = str(self.host).strip()
        if not host:
            raise ValueError("host must be a non-empty string")
        timeout = float(self.timeout)
        if not (math.isfinite(timeout) and timeout > 0):
            raise ValueError(f"timeout must be a finite number > 0, got: {self.timeout!r}")
        object.__setattr__(self, "user", str(self.user))
        object.__setattr__(self, "password", str(self.password))
        object.__setattr__(self, "host", host)
        object.__setattr__(self, "port", _parse_port(self.port))
        object.__setattr__(self, "timeout", timeout)

    @property
    def url(self) -> str:
        host = self.host
        if ":" in host and not host.startswith("["):
            host = f"[{host}]"
        return f"http://{host}:{self.port}"

    @classmethod
    def from_env(cls, prefix: str = "COINTALK_") -> "ServerConfig":
        """
        Create config from environment variables:

        COINTALK_USER      (str)
        COINTALK_PASS      (str)
        COINTALK_HOST      (str)
        COINTALK_PORT      (int)
        COINTALK_TIMEOUT   (float seconds)
        """
        return cls(
            user=_env(f"{prefix}USER", DEFAULT_USER),
            password=_env(f"{prefix}PASS", DEFAULT_PASS),
            host=_env(f"{prefix}HOST", DEFAULT_HOST),
            port=_env(f"{prefix}PORT", str(DEFAULT_PORT)),
            timeout=float(_env(f"{prefix}TIMEOUT", str(DEFAULT_TIMEOUT))),
        )

    def merged(
        self, conf: Optional[Mapping[str, Any]] = None, **overrides: Any
    ) -> "ServerConfig":
        """
        Return a copy with the supplied keys replaced; everything else is kept.

        Keys may come from `conf` and/or keyword arguments (keywords win).
        "pass" is accepted for `password`. None values count as not supplied.
        Unknown keys are ignored.
        """
        supplied: Dict[str, Any] = dict(conf or {})
        supplied.update(overrides)
        data = self.to_fields()
        for key, value in supplied.items():
            name = _KEY_ALIASES.get(key, key)
            if name not in data:
                log.warning("ServerConfig: ignoring unknown key %r", key)
                continue
            if value is None:
                continue
            data[name] = value
        return ServerConfig(**data)

    def to_fields(self) -> Dict[str, Any]:
        return {name: getattr(self, name) for name in _FIELDS}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "user": self.user,
            "pass": self.password,
            "host": self.host,
            "port": int(self.port),
            "timeout": float(self.timeout),
        }


__all__ = ["ServerConfig", "DEFAULT_HOST", "DEFAULT_PORT", "DEFAULT_TIMEOUT"]

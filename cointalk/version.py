"""
Version helpers for the cointalk client.
We keep a static __version__ (PEP 440) and derive the HTTP User-Agent from it.
"""

from __future__ import annotations

# Bump this when publishing
__version__ = "0.1.0"


def user_agent() -> str:
    """Value sent in the User-Agent header, e.g. 'cointalk-python/0.1.0'."""
    return f"cointalk-python/{__version__}"


__all__ = ["__version__", "user_agent"]

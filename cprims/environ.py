"""Look up a variable in an explicit environment list."""

from __future__ import annotations

from typing import Iterable, Optional, TypeVar

__all__ = ["getenv"]

S = TypeVar("S", str, bytes)


def getenv(envp: Optional[Iterable[Optional[S]]], var: S) -> Optional[S]:
    """Return the value of ``var`` from ``envp`` entries of the form NAME=VALUE.

    The first matching entry wins. A ``None`` entry ends the list, and a
    ``None`` list holds nothing. Returns None when ``var`` is not set.
    """
    if envp is None:
        return None
    separator = b"=" if isinstance(var, bytes) else "="
    prefix = var + separator
    for entry in envp:
        if entry is None:
            break
        if entry.startswith(prefix):
            return entry[len(prefix):]
    return None
"""Find the first or last set bit of a fixed-width signed integer.

Each function takes an integer and treats it as a two's-complement value of
the matching C width: 32 bits for ``ffs``/``fls``, 64 bits for the ``l`` and
``ll`` variants. Wider values are reduced to that width first. Bits are
numbered from 1 (least significant), and 0 means no bit is set.
"""

from __future__ import annotations

__all__ = ["ffs", "ffsl", "ffsll", "fls", "flsl", "flsll"]

_INT_BITS = 32
_LONG_BITS = 64
_LONG_LONG_BITS = 64


def _as_unsigned(mask: int, width: int) -> int:
    if not isinstance(mask, int):
        raise TypeError(f"mask must be an integer, not {type(mask).__name__}")
    return mask & ((1 << width) - 1)


def _first_set(mask: int, width: int) -> int:
    value = _as_unsigned(mask, width)
    if value == 0:
        return 0
    return (value & -value).bit_length()


def _last_set(mask: int, width: int) -> int:
    return _as_unsigned(mask, width).bit_length()


def ffs(mask: int) -> int:
    """Return the position of the lowest set bit of a 32-bit int, or 0."""
    return _first_set(mask, _INT_BITS)


def ffsl(mask: int) -> int:
    """Return the position of the lowest set bit of a 64-bit long, or 0."""
    return _first_set(mask, _LONG_BITS)


def ffsll(mask: int) -> int:
    """Return the position of the lowest set bit of a 64-bit long long, or 0."""
    return _first_set(mask, _LONG_LONG_BITS)


def fls(mask: int) -> int:
    """Return the position of the highest set bit of a 32-bit int, or 0."""
    return _last_set(mask, _INT_BITS)


def flsl(mask: int) -> int:
    """Return the position of the highest set bit of a 64-bit long, or 0."""
    return _last_set(mask, _LONG_BITS)


def flsll(mask: int) -> int:
    """Return the position of the highest set bit of a 64-bit long long, or 0."""
    return _last_set(mask, _LONG_LONG_BITS)
"""Byte-buffer primitives: fill, search, compare and copy.

Buffers that are read may be any bytes-like object. Buffers that are
written must be writable: a ``bytearray`` or a writable ``memoryview``.
A memoryview slice lets a function work on part of a larger buffer,
including overlapping regions of the same buffer in ``memmove``.
"""

from __future__ import annotations

from typing import Optional, Union

Buffer = Union[bytes, bytearray, memoryview]
WritableBuffer = Union[bytearray, memoryview]

__all__ = [
    "bzero",
    "memset",
    "memchr",
    "memcmp",
    "memmove",
    "memccpy",
    "memset_pattern4",
    "memset_pattern8",
    "memset_pattern16",
    "memcmp_zero_aligned8",
]


def _view(buf: Buffer, n: int, what: str) -> memoryview:
    """Return a byte view of ``buf`` after checking that ``n`` bytes fit."""
    if n < 0:
        raise ValueError(f"{what}: length must not be negative, got {n}")
    view = memoryview(buf).cast("B")
    if n > len(view):
        raise ValueError(
            f"{what}: length {n} exceeds buffer size {len(view)}"
        )
    return view


def _writable(buf: WritableBuffer, n: int, what: str) -> memoryview:
    view = _view(buf, n, what)
    if view.readonly:
        raise TypeError(f"{what}: destination buffer is read-only")
    return view


def memset(buf: WritableBuffer, c: int, n: int) -> WritableBuffer:
    """Set the first ``n`` bytes of ``buf`` to ``c`` (as an unsigned byte)."""
    return _fill_pattern(buf, bytes([c & 0xFF]) * 4, 4, n, "memset")


def bzero(buf: WritableBuffer, n: int) -> None:
    """Set the first ``n`` bytes of ``buf`` to zero."""
    memset(buf, 0, n)


def memchr(s: Buffer, c: int, n: int) -> Optional[int]:
    """Return the index of the first byte equal to ``c`` in ``s[:n]``, or None."""
    view = _view(s, n, "memchr")
    index = bytes(view[:n]).find(c & 0xFF)
    return None if index < 0 else index


def memcmp(s1: Buffer, s2: Buffer, n: int) -> int:
    """Compare ``n`` bytes; return the difference of the first unequal bytes."""
    a = _view(s1, n, "memcmp")
    b = _view(s2, n, "memcmp")
    for x, y in zip(a[:n], b[:n]):
        if x != y:
            return x - y
    return 0


def memmove(dst: WritableBuffer, src: Buffer, n: int) -> WritableBuffer:
    """Copy ``n`` bytes from ``src`` to ``dst``; overlapping regions are safe."""
    out = _writable(dst, n, "memmove")
    data = bytes(_view(src, n, "memmove")[:n])
    out[:n] = data
    return dst


def memccpy(dst: WritableBuffer, src: Buffer, c: int, n: int) -> Optional[int]:
    """Copy bytes from ``src`` to ``dst``, stopping after the first ``c``.

    Returns the offset in ``dst`` just past the copied ``c``, or None when
    ``c`` did not occur in the first ``n`` bytes (all ``n`` bytes are then
    copied).
    """
    if n == 0:
        _view(src, 0, "memccpy")
        return None
    found = memchr(src, c, n)
    if found is None:
        memmove(dst, src, n)
        return None
    count = found + 1
    memmove(dst, src, count)
    return count


def _fill_pattern(
    buf: WritableBuffer, pattern: Buffer, size: int, n: int, what: str
) -> WritableBuffer:
    out = _writable(buf, n, what)
    pat = bytes(memoryview(pattern).cast("B")[:size])
    if len(pat) < size:
        raise ValueError(f"{what}: pattern must be at least {size} bytes")
    out[:n] = (pat * (n // size + 1))[:n]
    return buf


def memset_pattern4(buf: WritableBuffer, pattern: Buffer, n: int) -> None:
    """Fill ``n`` bytes of ``buf`` by repeating a 4-byte pattern."""
    _fill_pattern(buf, pattern, 4, n, "memset_pattern4")


def memset_pattern8(buf: WritableBuffer, pattern: Buffer, n: int) -> None:
    """Fill ``n`` bytes of ``buf`` by repeating an 8-byte pattern."""
    _fill_pattern(buf, pattern, 8, n, "memset_pattern8")


def memset_pattern16(buf: WritableBuffer, pattern: Buffer, n: int) -> None:
    """Fill ``n`` bytes of ``buf`` by repeating a 16-byte pattern."""
    _fill_pattern(buf, pattern, 16, n, "memset_pattern16")


def memcmp_zero_aligned8(s: Buffer, n: int) -> int:
    """Return 0 if the first ``n`` bytes of ``s`` are all zero, else 1.

    ``n`` must be a multiple of 8. Zero length yields 0.
    """
    if n % 8:
        raise ValueError(f"memcmp_zero_aligned8: length {n} is not a multiple of 8")
    view = _view(s, n, "memcmp_zero_aligned8")
    return 0 if not any(view[:n]) else 1
"""NUL-terminated byte-string primitives.

Strings are bytes-like objects holding C-style strings: the string ends at
the first NUL byte, or at the end of the buffer when there is none.
Functions that write take a writable buffer (``bytearray`` or a writable
``memoryview``) and raise ``ValueError`` when the destination is too small.
Positions in a string are returned as indices, and "not found" as ``None``.
"""

from __future__ import annotations

from typing import Optional, Union

from .memory import memmove, memset

Buffer = Union[bytes, bytearray, memoryview]
WritableBuffer = Union[bytearray, memoryview]

__all__ = [
    "strchr",
    "strcmp",
    "strcpy",
    "strlcat",
    "strlcpy",
    "strlen",
    "strncmp",
    "strncpy",
    "strnlen",
    "strstr",
]


def _bytes_view(s: Buffer) -> memoryview:
    return memoryview(s).cast("B")


def _cstr(s: Buffer) -> bytes:
    """Return the bytes of ``s`` before its terminating NUL."""
    data = bytes(_bytes_view(s))
    end = data.find(0)
    return data if end < 0 else data[:end]


def strlen(s: Buffer) -> int:
    """Return the number of bytes before the terminating NUL."""
    return len(_cstr(s))


def strnlen(s: Buffer, maxlen: int) -> int:
    """Return ``strlen(s)``, but never more than ``maxlen``."""
    if maxlen < 0:
        raise ValueError(f"strnlen: maxlen must not be negative, got {maxlen}")
    return min(strlen(s), maxlen)


def strchr(s: Buffer, c: int) -> Optional[int]:
    """Return the index of the first byte ``c`` in ``s``, or None.

    Searching for NUL finds the terminator itself.
    """
    target = c & 0xFF
    data = _cstr(s)
    if target == 0:
        return len(data)
    index = data.find(target)
    return None if index < 0 else index


def _compare(a: bytes, b: bytes, limit: Optional[int]) -> int:
    pairs = zip(a + b"\0", b + b"\0")
    for count, (x, y) in enumerate(pairs):
        if limit is not None and count >= limit:
            break
        if x != y:
            return x - y
        if x == 0:
            break
    return 0


def strcmp(s1: Buffer, s2: Buffer) -> int:
    """Compare two strings as unsigned bytes.

    Returns the difference of the first unequal bytes, or 0 when equal.
    """
    return _compare(_cstr(s1), _cstr(s2), None)


def strncmp(s1: Buffer, s2: Buffer, n: int) -> int:
    """Compare at most ``n`` bytes of two strings, like ``strcmp``."""
    if n < 0:
        raise ValueError(f"strncmp: n must not be negative, got {n}")
    if n == 0:
        return 0
    return _compare(_cstr(s1), _cstr(s2), n)


def strcpy(dst: WritableBuffer, src: Buffer) -> WritableBuffer:
    """Copy ``src`` and its terminating NUL into ``dst``; return ``dst``."""
    data = _cstr(src) + b"\0"
    memmove(dst, data, len(data))
    return dst


def strncpy(dst: WritableBuffer, src: Buffer, maxlen: int) -> WritableBuffer:
    """Copy at most ``maxlen`` bytes of ``src`` into ``dst``; return ``dst``.

    A shorter source is padded with NUL bytes up to ``maxlen``; a source
    of ``maxlen`` bytes or more leaves ``dst`` unterminated.
    """
    srclen = strnlen(src, maxlen)
    data = _cstr(src)[:srclen]
    if srclen < maxlen:
        memmove(dst, data, srclen)
        view = _bytes_view(dst)
        if maxlen > len(view):
            raise ValueError(
                f"strncpy: length {maxlen} exceeds buffer size {len(view)}"
            )
        memset(view[srclen:], 0, maxlen - srclen)
    else:
        memmove(dst, data, maxlen)
    return dst


def strlcpy(dst: WritableBuffer, src: Buffer, maxlen: int) -> int:
    """Copy ``src`` into ``dst`` of size ``maxlen``, always NUL-terminating.

    Returns ``strlen(src)``; a result of ``maxlen`` or more means the copy
    was truncated.
    """
    if maxlen < 0:
        raise ValueError(f"strlcpy: maxlen must not be negative, got {maxlen}")
    data = _cstr(src)
    srclen = len(data)
    if srclen < maxlen:
        memmove(dst, data + b"\0", srclen + 1)
    elif maxlen != 0:
        memmove(dst, data[: maxlen - 1] + b"\0", maxlen)
    return srclen


def strlcat(dst: WritableBuffer, src: Buffer, maxlen: int) -> int:
    """Append ``src`` to the string in ``dst`` of size ``maxlen``.

    The result is always NUL-terminated when there is room for it. Returns
    the length of the string it tried to create; a result of ``maxlen`` or
    more means the result was truncated.
    """
    if maxlen < 0:
        raise ValueError(f"strlcat: maxlen must not be negative, got {maxlen}")
    data = _cstr(src)
    srclen = len(data)
    dstlen = strnlen(dst, maxlen)
    if dstlen == maxlen:
        return maxlen + srclen
    view = _bytes_view(dst)
    if srclen < maxlen - dstlen:
        memmove(view[dstlen:], data + b"\0", srclen + 1)
    else:
        count = maxlen - dstlen - 1
        memmove(view[dstlen:], data[:count] + b"\0", count + 1)
    return dstlen + srclen


def strstr(s: Buffer, find: Buffer) -> Optional[int]:
    """Return the index of the first occurrence of ``find`` in ``s``, or None.

    An empty ``find`` matches at index 0.
    """
    needle = _cstr(find)
    if not needle:
        return 0
    index = _cstr(s).find(needle)
    return None if index < 0 else index
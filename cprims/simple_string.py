"""A small printf-style formatter, growable strings and raw descriptor output.

The formatter understands a fixed, reduced set of conversions:

``%%``
    a literal percent sign
``%c``
    a character (an int, truncated to one byte, or a one-character str)
``%d`` ``%i``
    signed decimal
``%u``
    unsigned decimal
``%o``
    octal
``%x`` ``%X``
    hexadecimal in lower or upper case
``%p``
    a pointer-sized value in hex, prefixed with ``0x``
``%s``
    a string; ``None`` prints as ``(null)``
``%y``
    an unsigned byte count, rounded to ``MB``, ``KB`` or ``b``
``%.*s``
    the first *n* characters of a string, taking *n* and the string as two
    arguments

A conversion may carry a ``0`` flag (zero padding), a decimal minimum field
width, and ``l`` modifiers. Without ``l`` integers are taken as 32-bit C
``int`` values; with one or more ``l`` as 64-bit values. Any other
character after ``%`` is printed as is.

An escape function maps each output character to a replacement string, or
to ``None`` to leave it unchanged.
"""

from __future__ import annotations

import operator
import os
from typing import Any, Callable, Iterator, List, Optional

__all__ = ["EscapeFunc", "format_simple", "dprintf", "SimpleString"]

EscapeFunc = Callable[[str], Optional[str]]

_DIGITS = "0123456789"
_NULL = "(null)"
_PREFIX = "0x"


def _wrap_unsigned(value: int, bits: int) -> int:
    return value & ((1 << bits) - 1)


def _wrap_signed(value: int, bits: int) -> int:
    value = _wrap_unsigned(value, bits)
    if value >= 1 << (bits - 1):
        value -= 1 << bits
    return value


class _Sink:
    """Collects formatted output, applying an optional escape function."""

    def __init__(self, esc: Optional[EscapeFunc]) -> None:
        self.esc = esc
        self.parts: List[str] = []

    def char(self, ch: str) -> None:
        if self.esc is not None:
            replacement = self.esc(ch)
            if replacement is not None:
                self.parts.append(replacement)
                return
        self.parts.append(ch)

    def text(self, s: str) -> None:
        for ch in s:
            self.char(ch)

    def pad(self, count: int, zero: bool) -> None:
        if count > 0:
            self.text(("0" if zero else " ") * count)

    def result(self) -> str:
        return "".join(self.parts)


class _Args:
    """Hands out the formatter's arguments one at a time, checking types."""

    def __init__(self, args: tuple) -> None:
        self._it: Iterator[Any] = iter(args)

    def _next(self) -> Any:
        try:
            return next(self._it)
        except StopIteration:
            raise TypeError("not enough arguments for format string") from None

    def integer(self) -> int:
        value = self._next()
        try:
            return operator.index(value)
        except TypeError:
            raise TypeError(
                f"integer argument expected, got {type(value).__name__}"
            ) from None

    def string(self) -> Optional[str]:
        value = self._next()
        if value is None or isinstance(value, str):
            return value
        if isinstance(value, (bytes, bytearray, memoryview)):
            return bytes(value).decode("utf-8", "surrogateescape")
        raise TypeError(f"string argument expected, got {type(value).__name__}")

    def character(self) -> str:
        value = self._next()
        if isinstance(value, str):
            if len(value) != 1:
                raise TypeError("%c requires a single character")
            return value
        try:
            return chr(operator.index(value) & 0xFF)
        except TypeError:
            raise TypeError(
                f"character argument expected, got {type(value).__name__}"
            ) from None


def _dec(out: _Sink, value: int, width: int, zero: bool) -> None:
    neg = value < 0
    if neg:
        width -= 1
    digits = str(abs(value))
    if neg and zero:
        out.char("-")
        neg = False
    out.pad(width - len(digits), zero)
    if neg:
        out.char("-")
    out.text(digits)


def _udec(out: _Sink, value: int, width: int, zero: bool) -> None:
    digits = str(value)
    out.pad(width - len(digits), zero)
    out.text(digits)


def _oct(out: _Sink, value: int, width: int, zero: bool) -> None:
    digits = format(value, "o")
    out.pad(width - len(digits), zero)
    out.text(digits)


def _hex(
    out: _Sink, value: int, width: int, zero: bool, upper: bool, prefix: bool
) -> None:
    digits = format(value, "X" if upper else "x")
    if prefix:
        width -= len(_PREFIX)
        if zero:
            out.text(_PREFIX)
            prefix = False
    out.pad(width - len(digits), zero)
    if prefix:
        out.text(_PREFIX)
    out.text(digits)


def _ydec(out: _Sink, value: int, width: int, zero: bool) -> None:
    if value >= 10 * (1 << 20):
        value = _wrap_unsigned(value + (1 << 19), 64)
        _udec(out, value >> 20, width, zero)
        out.text("MB")
    elif value >= 10 * (1 << 10):
        value = _wrap_unsigned(value + (1 << 9), 64)
        _udec(out, value >> 10, width, zero)
        out.text("KB")
    else:
        _udec(out, value, width, zero)
        out.text("b")


def _render(out: _Sink, fmt: str, args: tuple) -> None:
    source = _Args(args)
    pos, end = 0, len(fmt)
    while pos < end:
        pct = fmt.find("%", pos)
        if pct < 0:
            out.text(fmt[pos:])
            return
        out.text(fmt[pos:pct])
        pos = pct + 1
        if pos >= end:
            raise ValueError("format string ends with an incomplete conversion")
        if fmt[pos] == "%":
            out.char("%")
            pos += 1
            continue

        lflag = width = 0
        zero = False
        while True:
            if fmt.startswith(".*s", pos):
                count = source.integer()
                text = source.string()
                text = _NULL if text is None else text
                out.text(text[: max(count, 0)])
                pos += 2
                break
            if pos >= end:
                raise ValueError("format string ends with an incomplete conversion")
            ch = fmt[pos]
            if ch in _DIGITS:
                if ch == "0":
                    zero = True
                    pos += 1
                while pos < end and fmt[pos] in _DIGITS:
                    width = 10 * width + int(fmt[pos])
                    pos += 1
                continue
            if ch == "l":
                lflag += 1
                pos += 1
                continue
            bits = 32 if lflag == 0 else 64
            if ch == "c":
                out.pad(width - 1, zero)
                out.char(source.character())
            elif ch in "di":
                _dec(out, _wrap_signed(source.integer(), bits), width, zero)
            elif ch == "o":
                # A plain int is sign-extended before being shown unsigned.
                value = _wrap_signed(source.integer(), bits)
                _oct(out, _wrap_unsigned(value, 64), width, zero)
            elif ch == "p":
                value = _wrap_unsigned(source.integer(), 64)
                _hex(out, value, width, zero, upper=False, prefix=True)
            elif ch == "s":
                text = source.string()
                text = _NULL if text is None else text
                out.pad(width - len(text), zero)
                out.text(text)
            elif ch == "u":
                _udec(out, _wrap_unsigned(source.integer(), bits), width, zero)
            elif ch in "xX":
                value = _wrap_unsigned(source.integer(), bits)
                _hex(out, value, width, zero, upper=ch == "X", prefix=False)
            elif ch == "y":
                _ydec(out, _wrap_unsigned(source.integer(), bits), width, zero)
            else:
                out.char(ch)
            break
        pos += 1


def format_simple(fmt: str, *args: Any, esc: Optional[EscapeFunc] = None) -> str:
    """Format ``args`` according to ``fmt`` and return the text."""
    out = _Sink(esc)
    _render(out, fmt, args)
    return out.result()


def _encode(text: str) -> bytes:
    return text.encode("utf-8", "surrogateescape")


def _write_all(fd: int, data: bytes) -> None:
    """Write all of ``data`` to ``fd``; retry on interruption, stop on error."""
    view = memoryview(data)
    while view:
        try:
            written = os.write(fd, view)
        except (InterruptedError, BlockingIOError):
            continue
        except OSError:
            return
        view = view[written:]


def dprintf(fd: int, fmt: str, *args: Any) -> None:
    """Format ``args`` according to ``fmt`` and write the result to ``fd``."""
    _write_all(fd, _encode(format_simple(fmt, *args)))


class SimpleString:
    """A growable string that formatted output is appended to."""

    def __init__(self) -> None:
        self._parts: List[str] = []

    def _content(self) -> str:
        if len(self._parts) > 1:
            self._parts = ["".join(self._parts)]
        return self._parts[0] if self._parts else ""

    def sprintf(self, fmt: str, *args: Any) -> None:
        """Append formatted text."""
        self._parts.append(format_simple(fmt, *args))

    def esprintf(self, esc: Optional[EscapeFunc], fmt: str, *args: Any) -> None:
        """Append formatted text, passing every character through ``esc``."""
        self._parts.append(format_simple(fmt, *args, esc=esc))

    def append(self, s: str) -> None:
        """Append ``s`` unchanged."""
        self._parts.append(s)

    def esappend(self, esc: Optional[EscapeFunc], s: str) -> None:
        """Append ``s``, passing every character through ``esc``."""
        out = _Sink(esc)
        out.text(s)
        self._parts.append(out.result())

    def string(self) -> str:
        """Return the text up to the first NUL character."""
        return self._content().split("\0", 1)[0]

    def resize(self) -> None:
        """Drop everything from the first NUL character onwards."""
        self._parts = [self.string()]

    def put(self, fd: int) -> None:
        """Write the whole buffer to ``fd``."""
        _write_all(fd, _encode(self._content()))

    def putline(self, fd: int) -> None:
        """Write the whole buffer and a newline to ``fd``."""
        _write_all(fd, _encode(self._content() + "\n"))

    def __len__(self) -> int:
        return len(self._content())

    def __str__(self) -> str:
        return self.string()
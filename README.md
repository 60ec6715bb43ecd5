# cprims

Small, dependency-free primitives that behave like the classic C memory,
string and bit routines, working on Python `bytes`, `bytearray` and
`memoryview` buffers. The package also has a reduced printf-style formatter
with a growable string buffer, a lookup for `NAME=VALUE` environment lists,
and a minimal client that builds ASL-style log messages and sends them over
a Unix datagram socket.

## Install

```
pip install cprims
```

To run the tests:

```
pip install "cprims[test]"
pytest
```

## Conventions

- Buffers that are only read may be any bytes-like object. Buffers that are
  written must be writable: a `bytearray` or a writable `memoryview`. A
  `memoryview` slice lets a function work on part of a larger buffer.
- Positions are returned as indices or offsets, and "not found" as `None`.
- A length larger than the buffer, or a negative length, raises
  `ValueError`; writing to a read-only buffer raises `TypeError`.

## Modules

### `cprims.memory`

- `memset(buf, c, n)` sets `n` bytes to `c & 0xFF` and returns `buf`;
  `bzero(buf, n)` sets them to zero.
- `memchr(s, c, n)` returns the index of the first byte equal to `c` in the
  first `n` bytes, or `None`.
- `memcmp(s1, s2, n)` returns the difference of the first unequal bytes, or 0.
- `memmove(dst, src, n)` copies `n` bytes, safely for overlapping views of
  the same buffer, and returns `dst`.
- `memccpy(dst, src, c, n)` copies up to and including the first `c`;
  it returns the offset just past it, or `None` when `c` was not found
  (all `n` bytes are then copied).
- `memset_pattern4`, `memset_pattern8`, `memset_pattern16` fill `n` bytes by
  repeating a 4-, 8- or 16-byte pattern; the last copy may be partial.
- `memcmp_zero_aligned8(s, n)` returns 0 when the first `n` bytes are all
  zero (or `n` is 0) and 1 otherwise; `n` must be a multiple of 8.

### `cprims.strings`

NUL-terminated byte strings: a string ends at its first NUL byte, or at the
end of the buffer when there is none.

- `strlen(s)`, `strnlen(s, maxlen)`
- `strchr(s, c)` (searching for 0 finds the terminator), `strstr(s, find)`
  (an empty `find` matches at 0)
- `strcmp(s1, s2)`, `strncmp(s1, s2, n)` compare as unsigned bytes
- `strcpy(dst, src)` and `strncpy(dst, src, maxlen)` return `dst`;
  `strncpy` pads a short source with NULs and leaves a long one unterminated
- `strlcpy(dst, src, maxlen)` and `strlcat(dst, src, maxlen)` always
  NUL-terminate when there is room and return the length they tried to
  create; a result of `maxlen` or more means truncation

### `cprims.bits`

`ffs`, `ffsl`, `ffsll` return the 1-based position of the lowest set bit,
and `fls`, `flsl`, `flsll` that of the highest, or 0 when no bit is set.
`ffs`/`fls` treat the value as a 32-bit two's-complement int, the others as
64-bit, so `fls(-1) == 32` and `flsll(-1) == 64`.

### `cprims.environ`

`getenv(envp, var)` returns the value of the first `var=...` entry in a list
of `str` or `bytes` entries, or `None`. A `None` entry ends the list.

### `cprims.simple_string`

`format_simple(fmt, *args, esc=None)` formats with a fixed, reduced set of
conversions: `%%`, `%c`, `%d`/`%i`, `%u`, `%o`, `%x`/`%X`, `%p`, `%s`
(`None` prints as `(null)`), `%y` (a byte count rounded to `MB`, `KB` or
`b`) and `%.*s`. A conversion may carry a `0` flag, a minimum width and `l`
modifiers (without `l` integers are 32-bit, with it 64-bit). Any other
character after `%` is printed as is. The optional `esc` function maps each
output character to a replacement string, or `None` to keep it.

`dprintf(fd, fmt, *args)` writes the formatted text to a file descriptor.

`SimpleString` is a growable buffer with `sprintf`, `esprintf`, `append`,
`esappend`, `string()` (text up to the first NUL), `resize()` (drop
everything from the first NUL), `put(fd)` and `putline(fd)`.

### `cprims.asl`

- `escape_key(c)` and `escape_val(c)` return the escape for a character
  (`\`, `[`, `]`, newline; keys also escape space as `\s`) or `None`.
- `AslMessage` starts with a fixed header; `set(key, val)` appends an
  escaped `[key val]` pair (a `None` key is ignored, a `None` value
  omitted, and trailing newlines are dropped from a `Message` value).
  `render()` returns the text; `send(context)` appends `PID`, `UID`, `GID`,
  `Time` and `TimeNanoSec` fields and sends one datagram.
- `AslContext(log_path=DEFAULT_LOG_PATH)` holds the connection.
  `init(envp, progname=None)` enables it unless `ASL_DISABLE=1` is in
  `envp`; `get_fd()` connects once and returns the descriptor or `None`;
  `reinit()` connects again and raises `RuntimeError` if already connected;
  `close()` closes it. It can be used as a context manager.
- `connect(log_path)` opens a connected Unix datagram socket, or returns
  `None`.
- `AslLevel` names the priority levels `EMERG` (0) to `DEBUG` (7).

## Example

```python
from cprims.memory import memmove, memcmp
from cprims.strings import strlcpy
from cprims.simple_string import SimpleString
from cprims.asl import AslMessage

buf = bytearray(b"hello world")
memmove(buf, b"HELLO", 5)
assert memcmp(buf, b"HELLO world", 11) == 0

dst = bytearray(4)
assert strlcpy(dst, b"truncate\0", 4) == 8   # returns the source length
assert bytes(dst) == b"tru\0"

s = SimpleString()
s.sprintf("%05d|%x|%s", 42, 255, "ok")
assert s.string() == "00042|ff|ok"

msg = AslMessage()
msg.set("Sender", "myapp")
msg.set("Message", "hi\n")
assert msg.render() == "         0 [Sender myapp] [Message hi]"
```

## What it does not do

- There is no command-line program; everything is a library call.
- There is no one-call "log this at a level" function. `AslLevel` only
  names the levels; nothing attaches a level to a message, and
  `AslMessage.send` does not add the context's `progname` by itself: set a
  `Sender` key if you want one.
- Sending needs a Unix datagram socket listening at the context's
  `log_path` and a context enabled with `init`; otherwise `send` does
  nothing.
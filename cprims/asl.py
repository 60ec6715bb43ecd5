"""A minimal ASL-style log client.

Messages are lines of bracketed ``[Key Value]`` pairs behind a fixed
header. Keys and values are escaped so that brackets, backslashes and
newlines cannot break the framing, and keys also escape spaces. A message
is sent as one datagram over a Unix datagram socket. An ``AslContext``
holds the connection and the program name.
"""

from __future__ import annotations

import enum
import os
import socket
import threading
import time
from typing import Iterable, List, Optional, Union

from .environ import getenv
from .simple_string import format_simple

__all__ = [
    "AslLevel",
    "escape_key",
    "escape_val",
    "connect",
    "AslMessage",
    "AslContext",
    "DEFAULT_LOG_PATH",
]

DEFAULT_LOG_PATH = "/var/run/syslog"

_HEADER = "         0"
_ESCAPED_NEWLINE = "\\n"


class AslLevel(enum.IntEnum):
    """Message priority levels, most severe first."""

    EMERG = 0
    ALERT = 1
    CRIT = 2
    ERR = 3
    WARNING = 4
    NOTICE = 5
    INFO = 6
    DEBUG = 7


_VAL_ESCAPES = {
    "\\": "\\\\",
    "[": "\\[",
    "]": "\\]",
    "\n": "\\n",
}
_KEY_ESCAPES = {**_VAL_ESCAPES, " ": "\\s"}


def _as_char(c: Union[str, int]) -> str:
    if isinstance(c, int):
        return chr(c & 0xFF)
    return c


def escape_key(c: Union[str, int]) -> Optional[str]:
    """Return the escape for a character of a key, or None to keep it."""
    return _KEY_ESCAPES.get(_as_char(c))


def escape_val(c: Union[str, int]) -> Optional[str]:
    """Return the escape for a character of a value, or None to keep it."""
    return _VAL_ESCAPES.get(_as_char(c))


def connect(log_path: str) -> Optional[socket.socket]:
    """Open a Unix datagram socket connected to ``log_path``, or None on failure."""
    family = getattr(socket, "AF_UNIX", None)
    if family is None:
        return None
    try:
        sock = socket.socket(family, socket.SOCK_DGRAM)
    except OSError:
        return None
    try:
        sock.connect(log_path)
    except (OSError, ValueError):
        sock.close()
        return None
    return sock


class AslMessage:
    """A log message built from escaped key/value pairs."""

    def __init__(self) -> None:
        self._parts: List[str] = [_HEADER]

    def set(self, key: Optional[str], val: Optional[str]) -> None:
        """Append ``[key val]``; a None key is ignored, a None value omitted."""
        if key is None:
            return
        self._parts.append(" [")
        self._parts.append(format_simple("%s", key, esc=escape_key))
        if val is not None:
            self._parts.append(format_simple(" %s", val, esc=escape_val))
            if key == "Message":
                text = "".join(self._parts)
                while text.endswith(_ESCAPED_NEWLINE):
                    text = text[: -len(_ESCAPED_NEWLINE)]
                self._parts = [text]
        self._parts.append("]")

    def render(self) -> str:
        """Return the message text built so far."""
        text = "".join(self._parts)
        self._parts = [text]
        return text

    def _stamp(self) -> None:
        now_ns = time.time_ns()
        seconds = now_ns // 1_000_000_000
        usec = (now_ns // 1000) % 1_000_000
        fields = [
            (" [PID ", "%u", os.getpid()),
            ("] [UID ", "%u", os.getuid()),
            ("] [GID ", "%u", os.getgid()),
            ("] [Time ", "%lu", seconds),
            ("] [TimeNanoSec ", "%d", usec * 1000),
        ]
        for label, fmt, value in fields:
            self._parts.append(label)
            self._parts.append(format_simple(fmt, value, esc=escape_val))
        self._parts.append("]\n")

    def send(self, context: "AslContext") -> None:
        """Add process and time fields and send the message through ``context``.

        Nothing happens when the context has no connection.
        """
        sock = context._socket_for_send()
        if sock is None:
            return
        self._stamp()
        data = self.render().encode("utf-8", "surrogateescape")
        try:
            sock.send(data)
        except OSError:
            pass


class AslContext:
    """Per-process logging state: enablement, program name and connection."""

    def __init__(self, log_path: str = DEFAULT_LOG_PATH) -> None:
        self.log_path = log_path
        self.enabled = False
        self.progname = "unknown"
        self._sock: Optional[socket.socket] = None
        self._connect_done = False
        self._lock = threading.Lock()

    def init(
        self, envp: Optional[Iterable[Optional[str]]], progname: Optional[str] = None
    ) -> None:
        """Enable logging unless ``ASL_DISABLE=1`` is in ``envp``."""
        if getenv(envp, "ASL_DISABLE") == "1":
            return
        self.enabled = True
        if progname:
            self.progname = progname

    def _ensure_connected(self) -> Optional[socket.socket]:
        if not self.enabled:
            return None
        with self._lock:
            if not self._connect_done:
                self._connect_done = True
                if self._sock is None:
                    self._sock = connect(self.log_path)
            return self._sock

    def _socket_for_send(self) -> Optional[socket.socket]:
        return self._ensure_connected()

    def get_fd(self) -> Optional[int]:
        """Return the log socket's descriptor, connecting once; None if unavailable."""
        sock = self._ensure_connected()
        return None if sock is None else sock.fileno()

    def reinit(self) -> None:
        """Try the connection again after the log socket has become available.

        Raises RuntimeError if a connection already exists.
        """
        if not self.enabled:
            return
        with self._lock:
            if self._sock is not None:
                raise RuntimeError(
                    f"asl fd already initialized ({self._sock.fileno()})"
                )
            self._sock = connect(self.log_path)

    def close(self) -> None:
        """Close the connection; a later ``get_fd`` connects again."""
        with self._lock:
            if self._sock is not None:
                self._sock.close()
                self._sock = None
            self._connect_done = False

    def __enter__(self) -> "AslContext":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
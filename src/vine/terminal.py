from __future__ import annotations

import errno
import fcntl
import os
import struct
import termios
from contextlib import AbstractContextManager

from .constants import ESC, ESCAPE_SEQUENCES

# Terminal size query: move far right and down, then ask where the cursor is.
_CURSOR_TO_CORNER = b"\x1b[999C\x1b[999B"
_CURSOR_REPORT_QUERY = b"\x1b[6n"
_WINSIZE = struct.Struct("HHHH")


def read_byte(fd: int) -> int | None:
    """One byte from ``fd``, or None when the read timed out or was interrupted."""
    try:
        data = os.read(fd, 1)
    except InterruptedError:
        return None
    return data[0] if data else None


def _read_escape_tail(fd: int) -> bytes:
    """Collect the bytes after ESC: two for ``[A`` or ``OH``, three for ``[3~``."""
    tail = bytearray()
    for _ in range(2):
        c = read_byte(fd)
        if c is None:
            return bytes(tail)
        tail.append(c)
    if tail[0] == ord("[") and ord("0") <= tail[1] <= ord("9"):
        c = read_byte(fd)
        if c is not None:
            tail.append(c)
    return bytes(tail)


def read_key(fd: int) -> int:
    """Block until a key arrives and return its code.

    Plain bytes come back unchanged. Recognized escape sequences map to the
    ``ARROW_*``, ``HOME_KEY``, ``END_KEY``, ``DEL_KEY``, ``PAGE_*`` codes; a lone
    or unknown escape is ``ESC``.
    """
    c = read_byte(fd)
    while c is None:
        c = read_byte(fd)
    if c != ESC:
        return c
    return ESCAPE_SEQUENCES.get(_read_escape_tail(fd), ESC)


def get_cursor_position(ifd: int, ofd: int) -> tuple[int, int]:
    if os.write(ofd, _CURSOR_REPORT_QUERY) != len(_CURSOR_REPORT_QUERY):
        raise OSError(errno.EIO, "cursor query write failed")

    reply = bytearray()
    while len(reply) < 32:
        c = read_byte(ifd)
        if c is None or c == ord("R"):
            break
        reply.append(c)

    # Expected reply: ESC [ rows ; cols R
    if not reply.startswith(b"\x1b["):
        raise OSError(errno.EIO, "invalid cursor position response")
    rows, sep, cols = bytes(reply[2:]).partition(b";")
    if not sep or not rows.isdigit() or not cols.isdigit():
        raise OSError(errno.EIO, "invalid cursor position response")
    return int(rows), int(cols)


def _ioctl_window_size(fd: int) -> tuple[int, int] | None:
    try:
        packed = fcntl.ioctl(fd, termios.TIOCGWINSZ, _WINSIZE.pack(0, 0, 0, 0))
    except OSError:
        return None
    rows, cols, _, _ = _WINSIZE.unpack(packed)
    return (rows, cols) if cols else None


def get_window_size(ifd: int, ofd: int) -> tuple[int, int]:
    size = _ioctl_window_size(ofd)
    if size is not None:
        return size
    if os.write(ofd, _CURSOR_TO_CORNER) != len(_CURSOR_TO_CORNER):
        raise OSError(errno.EIO, "window query write failed")
    return get_cursor_position(ifd, ofd)


def _raw_attributes(attrs: list) -> list:
    iflag, oflag, cflag, lflag, ispeed, ospeed, cc = attrs
    iflag &= ~(termios.BRKINT | termios.ICRNL | termios.INPCK | termios.ISTRIP | termios.IXON)
    oflag &= ~termios.OPOST
    cflag |= termios.CS8
    lflag &= ~(termios.ECHO | termios.ICANON | termios.IEXTEN | termios.ISIG)
    cc = list(cc)
    # Reads return after at most 100 ms so escape sequences can time out.
    cc[termios.VMIN] = 0
    cc[termios.VTIME] = 1
    return [iflag, oflag, cflag, lflag, ispeed, ospeed, cc]


class RawMode(AbstractContextManager["RawMode"]):
    """Puts the tty on ``fd`` in raw mode and restores it on exit."""

    def __init__(self, fd: int) -> None:
        self.fd = fd
        self.saved: list | None = None

    def __enter__(self) -> "RawMode":
        if not os.isatty(self.fd):
            raise OSError(errno.ENOTTY, "stdin is not a tty")
        self.saved = termios.tcgetattr(self.fd)
        termios.tcsetattr(self.fd, termios.TCSAFLUSH, _raw_attributes(self.saved))
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if self.saved is not None:
            termios.tcsetattr(self.fd, termios.TCSAFLUSH, self.saved)
            self.saved = None

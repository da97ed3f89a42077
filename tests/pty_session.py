"""Drive a real ``vine`` process through a pseudo-terminal."""

from __future__ import annotations

import fcntl
import os
import pty
import select
import signal
import struct
import sys
import termios
import time
from dataclasses import dataclass
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
FRAME_END = b"\x1b[?25h"

NAMED_KEYS: dict[str, bytes] = {
    "ENTER": b"\r",
    "BACKSPACE": b"\x7f",
    "TAB": b"\t",
    "UP": b"\x1b[A",
    "DOWN": b"\x1b[B",
    "RIGHT": b"\x1b[C",
    "LEFT": b"\x1b[D",
    "HOME": b"\x1b[H",
    "END": b"\x1b[F",
    "DEL": b"\x1b[3~",
    "PAGE_UP": b"\x1b[5~",
    "PAGE_DOWN": b"\x1b[6~",
}


def encode_key(key: str) -> bytes:
    """``CTRL_S``, ``ENTER``, ``UP`` and so on. Anything else is typed as text."""
    if key.startswith("CTRL_") and len(key) == 6:
        return bytes([ord(key[-1].upper()) & 0x1F])
    return NAMED_KEYS.get(key, key.encode("latin-1"))


@dataclass(slots=True)
class SessionResult:
    status: int | None
    timed_out: bool
    transcript: bytes

    @property
    def exit_code(self) -> int | None:
        if self.status is None or not os.WIFEXITED(self.status):
            return None
        return os.WEXITSTATUS(self.status)


class PtySession:
    def __init__(self, args: list[str], home: Path, size: tuple[int, int]) -> None:
        self.transcript = bytearray()
        self.pid, self.fd = pty.fork()
        if self.pid == 0:
            self._exec_child(args, home, size)

    @staticmethod
    def _exec_child(args: list[str], home: Path, size: tuple[int, int]) -> None:
        # A fresh pty reports 0x0, so give it a real size before vine asks.
        fcntl.ioctl(0, termios.TIOCSWINSZ, struct.pack("HHHH", size[0], size[1], 0, 0))
        env = dict(os.environ, PYTHONPATH=str(ROOT / "src"), HOME=str(home))
        env.pop("VINERC", None)
        os.execve(sys.executable, [sys.executable, "-m", "vine", *args], env)

    def drain(self, seconds: float) -> None:
        end = time.monotonic() + seconds
        while time.monotonic() < end:
            ready, _, _ = select.select([self.fd], [], [], 0.02)
            if not ready:
                continue
            try:
                data = os.read(self.fd, 65536)
            except OSError:
                return
            if not data:
                return
            self.transcript.extend(data)

    def wait_for_output(self, marker: bytes, timeout_s: float) -> bool:
        end = time.monotonic() + timeout_s
        while marker not in self.transcript and time.monotonic() < end:
            self.drain(0.05)
        return marker in self.transcript

    def press(self, key: str) -> None:
        os.write(self.fd, encode_key(key))
        self.drain(0.1)

    def finish(self, timeout_s: float) -> SessionResult:
        end = time.monotonic() + timeout_s
        status: int | None = None
        while status is None and time.monotonic() < end:
            self.drain(0.05)
            pid, raw = os.waitpid(self.pid, os.WNOHANG)
            if pid == self.pid:
                status = raw

        timed_out = status is None
        if timed_out:
            os.kill(self.pid, signal.SIGKILL)
            _, status = os.waitpid(self.pid, 0)
        os.close(self.fd)
        return SessionResult(status=status, timed_out=timed_out, transcript=bytes(self.transcript))


def run_session(
    args: list[str],
    keys: list[str],
    home: Path,
    size: tuple[int, int] = (24, 80),
    timeout_s: float = 5.0,
) -> SessionResult:
    session = PtySession(args, home, size)
    # Raw mode flushes pending input, so wait for the first frame.
    session.wait_for_output(FRAME_END, timeout_s)
    for key in keys:
        session.press(key)
    return session.finish(timeout_s)

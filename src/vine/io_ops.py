from __future__ import annotations

import errno
import logging
import os
import time

from .models import EditorConfig
from .rows import load_rows, rows_to_string
from .syntax import select_syntax_highlight

logger = logging.getLogger(__name__)


def set_status(cfg: EditorConfig, fmt: str, *args: object) -> None:
    cfg.statusmsg = fmt % args if args else fmt
    cfg.statusmsg_time = time.time()


def load_lines(path: str) -> list[str]:
    """Read ``path`` as one string per line, line terminators stripped.

    Bytes are decoded as latin-1 so every byte maps to exactly one character
    and saving writes back the same bytes.
    """
    lines: list[str] = []
    with open(path, "rb") as f:
        for line in f:
            lines.append(line.rstrip(b"\r\n").decode("latin-1"))
    return lines


def write_all(path: str, data: bytes) -> int:
    fd = os.open(path, os.O_RDWR | os.O_CREAT, 0o644)
    try:
        os.ftruncate(fd, len(data))
        written = 0
        while written < len(data):
            n = os.write(fd, data[written:])
            if n <= 0:
                raise OSError(errno.EIO, "short write")
            written += n
    finally:
        os.close(fd)
    return written


def open_file(cfg: EditorConfig, filename: str) -> bool:
    cfg.filename = filename
    select_syntax_highlight(cfg, filename)
    try:
        lines = load_lines(filename)
    except FileNotFoundError:
        logger.info("new file %s", filename)
        set_status(cfg, "New file")
        return False
    except OSError as exc:
        logger.warning("cannot open %s: %s", filename, exc)
        set_status(cfg, "[ERROR] Can't open file! I/O error: %s", exc.strerror or exc)
        return False
    load_rows(cfg, lines)
    logger.info("opened %s (%d lines)", filename, cfg.numrows)
    return True


def save_file(cfg: EditorConfig) -> bool:
    if not cfg.filename:
        set_status(cfg, "Can't save! No filename.")
        return False

    data = rows_to_string(cfg).encode("latin-1")
    try:
        written = write_all(cfg.filename, data)
    except OSError as exc:
        logger.warning("cannot save %s: %s", cfg.filename, exc)
        set_status(cfg, "[ERROR] Can't save! I/O error: %s", exc.strerror or exc)
        return False

    cfg.dirty = 0
    logger.info("saved %s (%d bytes)", cfg.filename, written)
    set_status(cfg, "%d bytes written to disk", written)
    return True

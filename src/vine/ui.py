from __future__ import annotations

import os
import time
from typing import TYPE_CHECKING

from .constants import (
    ANSI_CLEAR_LINE,
    ANSI_CURSOR_HOME,
    ANSI_DEFAULT_FG,
    ANSI_HIDE_CURSOR,
    ANSI_INVERT_OFF,
    ANSI_INVERT_ON,
    ANSI_SHOW_CURSOR,
    GUTTER_WIDTH,
    MESSAGE_TIMEOUT,
    VINE_LINE_NUMBER_PADDING,
    VINE_VERSION,
    Highlight,
)
from .models import EditorConfig
from .rows import cx_to_rx
from .syntax import Theme, syntax_to_color

if TYPE_CHECKING:
    from .editor import Editor


def text_cols(cfg: EditorConfig) -> int:
    return max(1, cfg.screencols - GUTTER_WIDTH)


def scroll(cfg: EditorConfig) -> None:
    row = cfg.current_row()
    cfg.rx = cx_to_rx(row.chars, cfg.cx, cfg.tab_stop) if row is not None else 0

    if cfg.cy < cfg.rowoff:
        cfg.rowoff = cfg.cy
    if cfg.cy >= cfg.rowoff + cfg.screenrows:
        cfg.rowoff = cfg.cy - cfg.screenrows + 1
    width = text_cols(cfg)
    if cfg.rx < cfg.coloff:
        cfg.coloff = cfg.rx
    if cfg.rx >= cfg.coloff + width:
        cfg.coloff = cfg.rx - width + 1


def compose_status_line(left: str, right: str, width: int) -> str:
    """Return exactly ``width`` characters: ``left`` flush left, ``right`` flush right.

    ``left`` is cut to the width. ``right`` is dropped when it does not fit
    next to ``left``.
    """
    if width <= 0:
        return ""
    left = left[:width]
    if len(left) + len(right) <= width:
        return left + " " * (width - len(left) - len(right)) + right
    return left.ljust(width)


def draw_welcome(cfg: EditorConfig, out: list[str]) -> None:
    welcome = f"Vine editor -- version {VINE_VERSION}"
    if len(welcome) > cfg.screencols:
        welcome = welcome[: cfg.screencols]
    pad = (cfg.screencols - len(welcome)) // 2
    if pad:
        out.append("~")
        pad -= 1
    if pad > 0:
        out.append(" " * pad)
    out.append(welcome)


def draw_gutter(filerow: int, out: list[str]) -> None:
    out.append(f"{filerow + 1:>{VINE_LINE_NUMBER_PADDING}} "[:GUTTER_WIDTH])


def draw_row_text(cfg: EditorConfig, filerow: int, theme: Theme, out: list[str]) -> None:
    row = cfg.rows[filerow]
    width = text_cols(cfg)
    chars = row.render[cfg.coloff : cfg.coloff + width]
    hl = row.hl[cfg.coloff : cfg.coloff + width]
    current_color = -1
    for ch, h in zip(chars, hl):
        code = ord(ch)
        if code < 32 or code == 127:
            sym = chr(ord("@") + code) if code <= 26 else "?"
            out.append(ANSI_INVERT_ON)
            out.append(sym)
            out.append(ANSI_INVERT_OFF)
            if current_color != -1:
                out.append(f"\x1b[{current_color}m")
        elif h == Highlight.NORMAL:
            if current_color != -1:
                out.append(ANSI_DEFAULT_FG)
                current_color = -1
            out.append(ch)
        else:
            color = syntax_to_color(theme, h)
            if color != current_color:
                current_color = color
                out.append(f"\x1b[{color}m")
            out.append(ch)
    out.append(ANSI_DEFAULT_FG)


def draw_rows(cfg: EditorConfig, theme: Theme, out: list[str]) -> None:
    for y in range(cfg.screenrows):
        filerow = cfg.rowoff + y
        if filerow >= cfg.numrows:
            if cfg.numrows == 0 and y == cfg.screenrows // 3:
                draw_welcome(cfg, out)
            else:
                out.append("~")
        else:
            draw_gutter(filerow, out)
            draw_row_text(cfg, filerow, theme, out)
        out.append(ANSI_CLEAR_LINE)
        out.append("\r\n")


def draw_status_bar(cfg: EditorConfig, out: list[str]) -> None:
    filename = cfg.filename if cfg.filename else "[No Name]"
    status = f"{filename:.20} - {cfg.numrows} lines {'[+]' if cfg.dirty else ''}"
    filetype = cfg.syntax.filetype if cfg.syntax else "[No FT]"
    rstatus = f"{filetype} | {cfg.cy + 1}/{cfg.numrows}"
    out.append(ANSI_INVERT_ON)
    out.append(compose_status_line(status, rstatus, cfg.screencols))
    out.append(ANSI_INVERT_OFF)
    out.append("\r\n")


def draw_message_bar(cfg: EditorConfig, out: list[str], now: float) -> None:
    out.append(ANSI_CLEAR_LINE)
    if cfg.statusmsg and now - cfg.statusmsg_time < MESSAGE_TIMEOUT:
        out.append(cfg.statusmsg[: cfg.screencols])


def cursor_escape(cfg: EditorConfig) -> str:
    return f"\x1b[{(cfg.cy - cfg.rowoff) + 1};{(cfg.rx - cfg.coloff) + GUTTER_WIDTH + 1}H"


def build_frame(cfg: EditorConfig, theme: Theme, now: float | None = None) -> str:
    now = time.time() if now is None else now
    out: list[str] = [ANSI_HIDE_CURSOR, ANSI_CURSOR_HOME]
    draw_rows(cfg, theme, out)
    draw_status_bar(cfg, out)
    draw_message_bar(cfg, out, now)
    out.append(cursor_escape(cfg))
    out.append(ANSI_SHOW_CURSOR)
    return "".join(out)


def refresh_screen(editor: Editor) -> None:
    scroll(editor.cfg)
    frame = build_frame(editor.cfg, editor.theme)
    os.write(editor.stdout_fd, frame.encode("latin-1", errors="replace"))

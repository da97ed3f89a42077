from __future__ import annotations

from typing import Iterable

from .models import EditorConfig, Row
from .syntax import update_syntax


def render_row(chars: str, tab_stop: int) -> str:
    out: list[str] = []
    idx = 0
    for ch in chars:
        if ch == "\t":
            out.append(" ")
            idx += 1
            while idx % tab_stop != 0:
                out.append(" ")
                idx += 1
        else:
            out.append(ch)
            idx += 1
    return "".join(out)


def cx_to_rx(chars: str, cx: int, tab_stop: int) -> int:
    rx = 0
    for ch in chars[:cx]:
        if ch == "\t":
            rx += (tab_stop - 1) - (rx % tab_stop)
        rx += 1
    return rx


def rx_to_cx(chars: str, rx: int, tab_stop: int) -> int:
    cur_rx = 0
    for cx, ch in enumerate(chars):
        if ch == "\t":
            cur_rx += (tab_stop - 1) - (cur_rx % tab_stop)
        cur_rx += 1
        if cur_rx > rx:
            return cx
    return len(chars)


def update_row(cfg: EditorConfig, row: Row) -> None:
    row.render = render_row(row.chars, cfg.tab_stop)
    update_syntax(cfg, row.idx)


def _renumber(cfg: EditorConfig, start: int) -> None:
    for j in range(start, cfg.numrows):
        cfg.rows[j].idx = j


def insert_row(cfg: EditorConfig, at: int, s: str) -> None:
    at = max(0, min(at, cfg.numrows))
    cfg.rows.insert(at, Row(idx=at, chars=s))
    _renumber(cfg, at + 1)
    update_row(cfg, cfg.rows[at])
    # The row after the new one has a new predecessor.
    update_syntax(cfg, at + 1)
    cfg.dirty += 1


def del_row(cfg: EditorConfig, at: int) -> None:
    if at < 0 or at >= cfg.numrows:
        return
    del cfg.rows[at]
    _renumber(cfg, at)
    # The row now at ``at`` has a new predecessor.
    update_syntax(cfg, at)
    cfg.dirty += 1


def row_insert_char(cfg: EditorConfig, row: Row, at: int, c: str) -> None:
    if at < 0 or at > row.size:
        at = row.size
    row.chars = row.chars[:at] + c + row.chars[at:]
    update_row(cfg, row)
    cfg.dirty += 1


def row_append_string(cfg: EditorConfig, row: Row, s: str) -> None:
    row.chars += s
    update_row(cfg, row)
    cfg.dirty += 1


def row_del_char(cfg: EditorConfig, row: Row, at: int) -> None:
    if at < 0 or at >= row.size:
        return
    row.chars = row.chars[:at] + row.chars[at + 1 :]
    update_row(cfg, row)
    cfg.dirty += 1


def split_row(cfg: EditorConfig, at: int, col: int) -> None:
    if at < 0 or at >= cfg.numrows:
        return
    row = cfg.rows[at]
    col = max(0, min(col, row.size))
    insert_row(cfg, at + 1, row.chars[col:])
    row.chars = row.chars[:col]
    update_row(cfg, row)


def join_rows(cfg: EditorConfig, dst: int, src: int) -> None:
    if dst == src or not (0 <= dst < cfg.numrows and 0 <= src < cfg.numrows):
        return
    row_append_string(cfg, cfg.rows[dst], cfg.rows[src].chars)
    del_row(cfg, src)


def load_rows(cfg: EditorConfig, lines: Iterable[str]) -> None:
    for line in lines:
        insert_row(cfg, cfg.numrows, line)
    cfg.dirty = 0


def rows_to_string(cfg: EditorConfig) -> str:
    return "".join(f"{row.chars}\n" for row in cfg.rows)

from __future__ import annotations

from .constants import ARROW_DOWN, ARROW_LEFT, ARROW_RIGHT, ARROW_UP
from .models import EditorConfig
from .rows import del_row, insert_row, join_rows, row_del_char, row_insert_char, split_row


def row_len(cfg: EditorConfig, y: int | None = None) -> int:
    y = cfg.cy if y is None else y
    if 0 <= y < cfg.numrows:
        return cfg.rows[y].size
    return 0


def clamp_cursor_x(cfg: EditorConfig) -> None:
    cfg.cx = min(cfg.cx, row_len(cfg))


def move_cursor(cfg: EditorConfig, key: int) -> None:
    row = cfg.current_row()

    if key == ARROW_LEFT:
        if cfg.cx != 0:
            cfg.cx -= 1
        elif cfg.cy > 0:
            cfg.cy -= 1
            cfg.cx = cfg.rows[cfg.cy].size
    elif key == ARROW_RIGHT:
        if row is not None and cfg.cx < row.size:
            cfg.cx += 1
        elif row is not None and cfg.cx == row.size:
            cfg.cy += 1
            cfg.cx = 0
    elif key == ARROW_UP:
        if cfg.cy != 0:
            cfg.cy -= 1
    elif key == ARROW_DOWN:
        if cfg.cy < cfg.numrows:
            cfg.cy += 1

    clamp_cursor_x(cfg)


def move_home(cfg: EditorConfig) -> None:
    cfg.cx = 0


def move_end(cfg: EditorConfig) -> None:
    cfg.cx = row_len(cfg)


def page_up(cfg: EditorConfig) -> None:
    cfg.cy = cfg.rowoff
    for _ in range(cfg.screenrows):
        move_cursor(cfg, ARROW_UP)


def page_down(cfg: EditorConfig) -> None:
    cfg.cy = min(cfg.rowoff + cfg.screenrows - 1, cfg.numrows)
    for _ in range(cfg.screenrows):
        move_cursor(cfg, ARROW_DOWN)


def insert_char(cfg: EditorConfig, c: str) -> None:
    if cfg.cy == cfg.numrows:
        insert_row(cfg, cfg.numrows, "")
    row_insert_char(cfg, cfg.rows[cfg.cy], cfg.cx, c)
    cfg.cx += 1


def insert_newline(cfg: EditorConfig) -> None:
    if cfg.cx == 0:
        insert_row(cfg, cfg.cy, "")
    else:
        split_row(cfg, cfg.cy, cfg.cx)
    cfg.cy += 1
    cfg.cx = 0


def del_char(cfg: EditorConfig) -> None:
    if cfg.cy >= cfg.numrows or (cfg.cx == 0 and cfg.cy == 0):
        return

    row = cfg.rows[cfg.cy]
    if cfg.cx > 0:
        row_del_char(cfg, row, cfg.cx - 1)
        cfg.cx -= 1
    else:
        cfg.cx = cfg.rows[cfg.cy - 1].size
        join_rows(cfg, cfg.cy - 1, cfg.cy)
        cfg.cy -= 1


def del_forward(cfg: EditorConfig) -> None:
    if cfg.cy >= cfg.numrows:
        return
    if cfg.cy == cfg.numrows - 1 and cfg.cx >= row_len(cfg):
        return
    move_cursor(cfg, ARROW_RIGHT)
    del_char(cfg)


def delete_current_row(cfg: EditorConfig) -> None:
    if cfg.cy >= cfg.numrows:
        return
    del_row(cfg, cfg.cy)
    clamp_cursor_x(cfg)

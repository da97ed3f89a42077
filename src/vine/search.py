from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .constants import (
    ARROW_DOWN,
    ARROW_LEFT,
    ARROW_RIGHT,
    ARROW_UP,
    ENTER,
    ESC,
    Highlight,
)
from .models import EditorConfig
from .prompt import PromptSession, prompt
from .rows import rx_to_cx

if TYPE_CHECKING:
    from .editor import Editor


@dataclass
class SearchSnapshot:
    cx: int
    cy: int
    coloff: int
    rowoff: int


def find_match(
    cfg: EditorConfig, query: str, last_match: int | None, direction: int
) -> tuple[int, int] | None:
    """Scan rows circularly for ``query``; return ``(row, render offset)``.

    Without a previous match the scan starts at the cursor row, forwards.
    """
    if not query or not cfg.rows:
        return None
    if last_match is None:
        current = min(cfg.cy, cfg.numrows) - 1
        direction = 1
    else:
        current = last_match
    for _ in range(cfg.numrows):
        current += direction
        if current < 0:
            current = cfg.numrows - 1
        elif current >= cfg.numrows:
            current = 0
        pos = cfg.rows[current].render.find(query)
        if pos != -1:
            return current, pos
    return None


class SearchSession(PromptSession):
    message = "Search: %s (Use ESC/Arrows/Enter)"

    def __init__(self, cfg: EditorConfig) -> None:
        self.cfg = cfg
        self.last_match: int | None = None
        self.direction = 1
        self.saved_hl_line = -1
        self.saved_hl: list[Highlight] | None = None

    def restore_hl(self) -> None:
        if self.saved_hl is not None and 0 <= self.saved_hl_line < self.cfg.numrows:
            self.cfg.rows[self.saved_hl_line].hl = self.saved_hl
        self.saved_hl = None
        self.saved_hl_line = -1

    def on_key(self, query: str, key: int) -> None:
        cfg = self.cfg
        self.restore_hl()

        if key in (ENTER, ESC):
            self.last_match = None
            self.direction = 1
            return
        if key in (ARROW_RIGHT, ARROW_DOWN):
            self.direction = 1
        elif key in (ARROW_LEFT, ARROW_UP):
            self.direction = -1
        else:
            self.last_match = None
            self.direction = 1

        match = find_match(cfg, query, self.last_match, self.direction)
        if match is None:
            return

        current, offset = match
        row = cfg.rows[current]
        self.last_match = current
        cfg.cy = current
        cfg.cx = rx_to_cx(row.chars, offset, cfg.tab_stop)
        # Past the end, so the next scroll puts the match on the top line.
        cfg.rowoff = cfg.numrows

        self.saved_hl_line = current
        self.saved_hl = row.hl.copy()
        for i in range(offset, min(offset + len(query), row.rsize)):
            row.hl[i] = Highlight.MATCH


def find(editor: Editor) -> None:
    cfg = editor.cfg
    saved = SearchSnapshot(cfg.cx, cfg.cy, cfg.coloff, cfg.rowoff)

    query = prompt(editor, SearchSession(cfg))
    if query is None:
        cfg.cx = saved.cx
        cfg.cy = saved.cy
        cfg.coloff = saved.coloff
        cfg.rowoff = saved.rowoff

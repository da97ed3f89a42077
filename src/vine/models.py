from __future__ import annotations

from dataclasses import dataclass, field

from .constants import (
    HL_HIGHLIGHT_NUMBERS,
    HL_HIGHLIGHT_STRINGS,
    VINE_TAB_STOP,
    Highlight,
)


def keyword_table(words: tuple[str, ...]) -> dict[str, Highlight]:
    """Build a keyword -> class mapping; a trailing "|" marks a secondary keyword.

    The first declaration of a word wins, so a word listed as both primary and
    secondary keeps the class it was given first.
    """
    table: dict[str, Highlight] = {}
    for word in words:
        if word.endswith("|"):
            table.setdefault(word[:-1], Highlight.KEYWORD2)
        else:
            table.setdefault(word, Highlight.KEYWORD1)
    return table


@dataclass(frozen=True, slots=True)
class EditorSyntax:
    filetype: str
    filematch: tuple[str, ...]
    keywords: dict[str, Highlight]
    singleline_comment_start: str
    multiline_comment_start: str
    multiline_comment_end: str
    flags: int

    @property
    def highlight_numbers(self) -> bool:
        return bool(self.flags & HL_HIGHLIGHT_NUMBERS)

    @property
    def highlight_strings(self) -> bool:
        return bool(self.flags & HL_HIGHLIGHT_STRINGS)


@dataclass(slots=True)
class Row:
    idx: int
    chars: str
    render: str = ""
    hl: list[Highlight] = field(default_factory=list)
    hl_oc: bool = False

    @property
    def size(self) -> int:
        return len(self.chars)

    @property
    def rsize(self) -> int:
        return len(self.render)


@dataclass(slots=True)
class EditorConfig:
    cx: int = 0
    cy: int = 0
    rx: int = 0
    rowoff: int = 0
    coloff: int = 0
    screenrows: int = 0
    screencols: int = 0
    rows: list[Row] = field(default_factory=list)
    dirty: int = 0
    filename: str | None = None
    statusmsg: str = ""
    statusmsg_time: float = 0.0
    syntax: EditorSyntax | None = None
    tab_stop: int = VINE_TAB_STOP

    @property
    def numrows(self) -> int:
        return len(self.rows)

    def current_row(self) -> Row | None:
        if 0 <= self.cy < self.numrows:
            return self.rows[self.cy]
        return None

from __future__ import annotations

import logging
from dataclasses import dataclass

from .constants import (
    C_HL_EXTENSIONS,
    C_HL_KEYWORDS,
    GO_HL_EXTENSIONS,
    GO_HL_KEYWORDS,
    HL_HIGHLIGHT_NUMBERS,
    HL_HIGHLIGHT_STRINGS,
    PY_HL_EXTENSIONS,
    PY_HL_KEYWORDS,
    RUST_HL_EXTENSIONS,
    RUST_HL_KEYWORDS,
    SEPARATORS,
    WHITESPACE,
    Highlight,
)
from .models import EditorConfig, EditorSyntax, keyword_table

logger = logging.getLogger(__name__)


HLDB: tuple[EditorSyntax, ...] = (
    EditorSyntax(
        filetype="C/C++",
        filematch=C_HL_EXTENSIONS,
        keywords=keyword_table(C_HL_KEYWORDS),
        singleline_comment_start="//",
        multiline_comment_start="/*",
        multiline_comment_end="*/",
        flags=HL_HIGHLIGHT_NUMBERS | HL_HIGHLIGHT_STRINGS,
    ),
    EditorSyntax(
        filetype="Golang",
        filematch=GO_HL_EXTENSIONS,
        keywords=keyword_table(GO_HL_KEYWORDS),
        singleline_comment_start="//",
        multiline_comment_start="/*",
        multiline_comment_end="*/",
        flags=HL_HIGHLIGHT_NUMBERS | HL_HIGHLIGHT_STRINGS,
    ),
    EditorSyntax(
        filetype="Python",
        filematch=PY_HL_EXTENSIONS,
        keywords=keyword_table(PY_HL_KEYWORDS),
        singleline_comment_start="#",
        multiline_comment_start='"""',
        multiline_comment_end='"""',
        flags=HL_HIGHLIGHT_NUMBERS | HL_HIGHLIGHT_STRINGS,
    ),
    EditorSyntax(
        filetype="Rust",
        filematch=RUST_HL_EXTENSIONS,
        keywords=keyword_table(RUST_HL_KEYWORDS),
        singleline_comment_start="//",
        multiline_comment_start="/*",
        multiline_comment_end="*/",
        flags=HL_HIGHLIGHT_NUMBERS | HL_HIGHLIGHT_STRINGS,
    ),
)


@dataclass(frozen=True, slots=True)
class Theme:
    comment: int
    keyword1: int
    keyword2: int
    string: int
    number: int
    match: int
    normal: int


THEMES: dict[str, Theme] = {
    "sonokai": Theme(comment=90, keyword1=31, keyword2=32, string=92, number=35, match=34, normal=37),
    "kilo": Theme(comment=36, keyword1=33, keyword2=32, string=35, number=31, match=34, normal=37),
}

NUMBER_CONTINUATION = ".xabcdef"


def is_separator(c: str) -> bool:
    return not c or c == "\0" or c in WHITESPACE or c in SEPARATORS


def syntax_to_color(theme: Theme, hl: int) -> int:
    if hl in (Highlight.COMMENT, Highlight.MLCOMMENT):
        return theme.comment
    if hl == Highlight.KEYWORD1:
        return theme.keyword1
    if hl == Highlight.KEYWORD2:
        return theme.keyword2
    if hl == Highlight.STRING:
        return theme.string
    if hl == Highlight.NUMBER:
        return theme.number
    if hl == Highlight.MATCH:
        return theme.match
    return theme.normal


def find_syntax(filename: str) -> EditorSyntax | None:
    for syntax in HLDB:
        for pattern in syntax.filematch:
            if pattern.startswith("."):
                if filename.endswith(pattern):
                    return syntax
            elif pattern in filename:
                return syntax
    return None


def select_syntax_highlight(cfg: EditorConfig, filename: str | None) -> None:
    cfg.syntax = find_syntax(filename) if filename else None
    logger.debug("syntax for %r: %s", filename, cfg.syntax.filetype if cfg.syntax else None)
    for row in cfg.rows:
        row.hl_oc = False
    for row in cfg.rows:
        update_syntax(cfg, row.idx)


def _match_keyword(
    p: str, i: int, keywords: dict[str, Highlight], lengths: list[int]
) -> tuple[int, Highlight] | None:
    # Longest candidate first; the byte after it must be a separator.
    for klen in lengths:
        token = p[i : i + klen]
        if len(token) != klen:
            continue
        mark = keywords.get(token)
        if mark is None:
            continue
        tail = p[i + klen] if i + klen < len(p) else ""
        if is_separator(tail):
            return klen, mark
    return None


def highlight_row(
    render: str, syntax: EditorSyntax | None, in_comment: bool
) -> tuple[list[Highlight], bool]:
    """Classify every position of ``render``.

    ``in_comment`` is the open-comment state inherited from the previous row.
    Returns the classes and the open-comment state at the end of this row.
    """
    hl = [Highlight.NORMAL] * len(render)
    if syntax is None:
        return hl, False

    keywords = syntax.keywords
    lengths = sorted({len(k) for k in keywords}, reverse=True)
    scs = syntax.singleline_comment_start
    mcs = syntax.multiline_comment_start
    mce = syntax.multiline_comment_end

    p = render
    n = len(p)
    prev_sep = True
    in_string = ""
    i = 0
    while i < n:
        ch = p[i]
        prev_hl = hl[i - 1] if i > 0 else Highlight.NORMAL

        if scs and not in_string and not in_comment and p.startswith(scs, i):
            for h in range(i, n):
                hl[h] = Highlight.COMMENT
            break

        if mcs and mce and not in_string:
            if in_comment:
                hl[i] = Highlight.MLCOMMENT
                if p.startswith(mce, i):
                    for h in range(i, i + len(mce)):
                        hl[h] = Highlight.MLCOMMENT
                    i += len(mce)
                    in_comment = False
                    prev_sep = True
                    continue
                i += 1
                continue
            if p.startswith(mcs, i):
                for h in range(i, i + len(mcs)):
                    hl[h] = Highlight.MLCOMMENT
                i += len(mcs)
                in_comment = True
                continue

        if syntax.highlight_strings:
            if in_string:
                hl[i] = Highlight.STRING
                if ch == "\\" and i + 1 < n:
                    hl[i + 1] = Highlight.STRING
                    i += 2
                    continue
                if ch == in_string:
                    in_string = ""
                i += 1
                prev_sep = True
                continue
            if ch in ('"', "'"):
                in_string = ch
                hl[i] = Highlight.STRING
                i += 1
                continue

        if syntax.highlight_numbers:
            if ("0" <= ch <= "9" and (prev_sep or prev_hl == Highlight.NUMBER)) or (
                ch in NUMBER_CONTINUATION and prev_hl == Highlight.NUMBER
            ):
                hl[i] = Highlight.NUMBER
                i += 1
                prev_sep = False
                continue

        if prev_sep:
            matched = _match_keyword(p, i, keywords, lengths)
            if matched is not None:
                klen, mark = matched
                for h in range(i, i + klen):
                    hl[h] = mark
                i += klen
                prev_sep = False
                continue

        prev_sep = is_separator(ch)
        i += 1

    return hl, in_comment


def update_syntax(cfg: EditorConfig, idx: int) -> int:
    """Re-highlight row ``idx`` and every following row whose comment state flips.

    Returns how many rows were highlighted.
    """
    count = 0
    while 0 <= idx < cfg.numrows:
        row = cfg.rows[idx]
        inherited = idx > 0 and cfg.rows[idx - 1].hl_oc
        row.hl, open_comment = highlight_row(row.render, cfg.syntax, inherited)
        count += 1
        if open_comment == row.hl_oc:
            break
        row.hl_oc = open_comment
        idx += 1
    return count

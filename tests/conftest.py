from __future__ import annotations

import os
from typing import Iterable

import pytest

from vine.config import Config
from vine.editor import Editor
from vine.models import EditorConfig
from vine.rows import load_rows
from vine.syntax import select_syntax_highlight


def build_cfg(
    lines: Iterable[str],
    filename: str | None = "test.c",
    tab_stop: int = 4,
    size: tuple[int, int] = (24, 80),
) -> EditorConfig:
    cfg = EditorConfig(tab_stop=tab_stop, screenrows=size[0] - 2, screencols=size[1])
    cfg.filename = filename
    select_syntax_highlight(cfg, filename)
    load_rows(cfg, lines)
    return cfg


@pytest.fixture
def make_cfg():
    return build_cfg


@pytest.fixture
def devnull():
    fd = os.open(os.devnull, os.O_WRONLY)
    yield fd
    os.close(fd)


@pytest.fixture
def make_editor(devnull):
    """Editor writing frames to /dev/null and reading keys from a script."""

    def factory(lines=(), filename="test.c", keys=(), config=None):
        editor = Editor(config or Config(), stdout_fd=devnull, size=(24, 80))
        editor.cfg.filename = filename
        select_syntax_highlight(editor.cfg, filename)
        load_rows(editor.cfg, lines)
        script = iter(keys)
        editor.read_key = lambda: next(script)
        return editor

    return factory

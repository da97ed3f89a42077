from __future__ import annotations

from typing import TYPE_CHECKING

from .constants import BACKSPACE, CTRL_H, CTRL_X, DEL_KEY, ENTER, ESC
from .io_ops import set_status

if TYPE_CHECKING:
    from .editor import Editor


class PromptSession:
    """A single-line prompt shown in the message bar.

    ``message`` is a %-template receiving the text typed so far. ``on_key`` is
    called after every key, including the Enter or Escape that ends the
    session.
    """

    message = "%s"

    def on_key(self, query: str, key: int) -> None:
        pass


class SaveAsSession(PromptSession):
    message = "Save as: %s (ESC to cancel)"


def prompt(editor: Editor, session: PromptSession) -> str | None:
    cfg = editor.cfg
    buf = ""
    while True:
        set_status(cfg, session.message, buf)
        editor.refresh_screen()

        c = editor.read_key()
        if c in (CTRL_X, CTRL_H, BACKSPACE, DEL_KEY):
            buf = buf[:-1]
        elif c == ESC:
            set_status(cfg, "")
            session.on_key(buf, c)
            return None
        elif c == ENTER:
            if buf:
                set_status(cfg, "")
                session.on_key(buf, c)
                return buf
        elif 32 <= c < 127:
            buf += chr(c)

        session.on_key(buf, c)

from __future__ import annotations

import logging
import os
import signal
import sys
from typing import Callable, Final

from .actions import (
    del_char,
    del_forward,
    delete_current_row,
    insert_char,
    insert_newline,
    move_cursor,
    move_end,
    move_home,
    page_down,
    page_up,
)
from .config import Config, load_config
from .constants import (
    ANSI_CLEAR_SCREEN,
    ANSI_CURSOR_HOME,
    ARROW_DOWN,
    ARROW_LEFT,
    ARROW_RIGHT,
    ARROW_UP,
    BACKSPACE,
    CTRL_D,
    CTRL_F,
    CTRL_H,
    CTRL_J,
    CTRL_K,
    CTRL_L,
    CTRL_Q,
    CTRL_S,
    CTRL_X,
    DEL_KEY,
    END_KEY,
    ENTER,
    ESC,
    HOME_KEY,
    PAGE_DOWN,
    PAGE_UP,
)
from .io_ops import open_file, save_file, set_status
from .log import setup_logging
from .models import EditorConfig
from .prompt import SaveAsSession, prompt
from .search import find
from .syntax import THEMES, select_syntax_highlight
from .terminal import RawMode, get_window_size, read_key
from .ui import refresh_screen

logger = logging.getLogger(__name__)

STDIN_FD: Final[int] = 0
STDOUT_FD: Final[int] = 1

HELP_MESSAGE = "HELP: Ctrl-S = Save | Ctrl-Q = Quit | Ctrl-F = Find"


class Editor:
    def __init__(
        self,
        config: Config | None = None,
        stdin_fd: int = STDIN_FD,
        stdout_fd: int = STDOUT_FD,
        size: tuple[int, int] | None = None,
    ) -> None:
        self.config = config if config is not None else Config()
        self.cfg = EditorConfig(tab_stop=self.config.tab_stop)
        self.theme = THEMES[self.config.theme]
        self.quit_times = self.config.quit_times
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self.key_handlers: dict[int, Callable[[], None]] = {
            ENTER: lambda: insert_newline(self.cfg),
            CTRL_S: self.save,
            CTRL_F: self.find,
            CTRL_J: lambda: move_home(self.cfg),
            CTRL_K: lambda: move_end(self.cfg),
            CTRL_D: lambda: delete_current_row(self.cfg),
            BACKSPACE: lambda: del_char(self.cfg),
            CTRL_H: lambda: del_char(self.cfg),
            CTRL_X: lambda: del_forward(self.cfg),
            DEL_KEY: lambda: del_forward(self.cfg),
            HOME_KEY: lambda: move_home(self.cfg),
            END_KEY: lambda: move_end(self.cfg),
            PAGE_UP: lambda: page_up(self.cfg),
            PAGE_DOWN: lambda: page_down(self.cfg),
            ARROW_UP: lambda: move_cursor(self.cfg, ARROW_UP),
            ARROW_DOWN: lambda: move_cursor(self.cfg, ARROW_DOWN),
            ARROW_LEFT: lambda: move_cursor(self.cfg, ARROW_LEFT),
            ARROW_RIGHT: lambda: move_cursor(self.cfg, ARROW_RIGHT),
            CTRL_L: lambda: None,
            ESC: lambda: None,
        }
        if size is None:
            self.update_window_size()
        else:
            self.set_window_size(*size)

    def set_window_size(self, rows: int, cols: int) -> None:
        # Two lines for the status and message bars.
        self.cfg.screenrows = max(1, rows - 2)
        self.cfg.screencols = max(1, cols)

    def update_window_size(self) -> None:
        try:
            rows, cols = get_window_size(self.stdin_fd, self.stdout_fd)
        except OSError as exc:
            raise OSError(exc.errno, "Unable to query screen size") from exc
        self.set_window_size(rows, cols)

    def handle_sigwinch(self, _signum: int, _frame) -> None:
        self.update_window_size()
        self.refresh_screen()

    def set_status_message(self, fmt: str, *args: object) -> None:
        set_status(self.cfg, fmt, *args)

    def open(self, filename: str) -> bool:
        return open_file(self.cfg, filename)

    def save(self) -> None:
        if not self.cfg.filename:
            filename = prompt(self, SaveAsSession())
            if filename is None:
                self.set_status_message("Save aborted")
                return
            self.cfg.filename = filename
            select_syntax_highlight(self.cfg, filename)
        save_file(self.cfg)

    def find(self) -> None:
        find(self)

    def read_key(self) -> int:
        return read_key(self.stdin_fd)

    def refresh_screen(self) -> None:
        refresh_screen(self)

    def clear_screen(self) -> None:
        os.write(self.stdout_fd, (ANSI_CLEAR_SCREEN + ANSI_CURSOR_HOME).encode())

    def confirm_quit(self) -> bool:
        if self.cfg.dirty and self.quit_times > 0:
            self.set_status_message(
                "[WARNING] File has unsaved changes. Press Ctrl-Q %d more times to quit.",
                self.quit_times,
            )
            self.quit_times -= 1
            return False
        return True

    def process_keypress(self) -> bool:
        """Handle one key. Returns True when the editor should quit."""
        c = self.read_key()

        if c == CTRL_Q:
            return self.confirm_quit()

        handler = self.key_handlers.get(c)
        if handler is not None:
            handler()
        elif c < 256:
            insert_char(self.cfg, chr(c))

        self.quit_times = self.config.quit_times
        return False


def run(argv: list[str] | None = None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) > 1:
        print("Usage: vine [filename]", file=sys.stderr)
        return 1
    if not os.isatty(STDIN_FD) or not os.isatty(STDOUT_FD):
        print("vine: stdin/stdout must be a tty", file=sys.stderr)
        return 1

    config = load_config()
    setup_logging(config)

    try:
        with RawMode(STDIN_FD):
            editor = Editor(config)
            if args:
                editor.open(args[0])
            signal.signal(signal.SIGWINCH, editor.handle_sigwinch)
            if not editor.cfg.statusmsg:
                editor.set_status_message(HELP_MESSAGE)
            while True:
                editor.refresh_screen()
                if editor.process_keypress():
                    break
    except OSError as exc:
        # Terminal state is already restored by RawMode.
        logger.critical("terminal failure: %s", exc)
        os.write(STDOUT_FD, (ANSI_CLEAR_SCREEN + ANSI_CURSOR_HOME).encode())
        print(f"vine: {exc}", file=sys.stderr)
        return 1

    editor.clear_screen()
    logger.info("exit")
    return 0

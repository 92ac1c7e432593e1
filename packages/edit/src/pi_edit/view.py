"""
View — decides what to draw for the visible terminal area.

An empty buffer shows the welcome banner; otherwise the buffer's lines are
drawn one per row, with "~" filler rows past the end of the content.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from .buffer import Buffer
from .config import AppInfo, get_app_info
from .terminal import Terminal
from .utils import truncate_to_width, visible_width

logger = logging.getLogger(__name__)

FILLER = "~"
NEWLINE = "\r\n"


@dataclass(frozen=True)
class LoadResult:
    """Outcome of View.load(); error is None on success."""

    path: str
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def welcome_message(text: str, width: int) -> str:
    """Center *text* after a filler marker, cut to *width* columns."""
    padding = max(width - visible_width(text), 0) // 2
    spaces = " " * max(padding - 1, 0)
    return truncate_to_width(f"{FILLER}{spaces}{text}", width)


class View:
    def __init__(
        self,
        terminal: Terminal,
        buffer: Buffer | None = None,
        app_info: AppInfo | None = None,
    ) -> None:
        self.terminal = terminal
        self.buffer = buffer if buffer is not None else Buffer()
        self.app_info = app_info if app_info is not None else get_app_info()

    def render(self) -> None:
        """Redraw every visible row."""
        if self.buffer.is_empty():
            self.render_welcome_screen()
        else:
            self.render_buffer()

    def render_welcome_screen(self) -> None:
        size = self.terminal.query_size()
        height = size.height
        for current_row in range(height):
            self.terminal.clear_current_line()
            if current_row == height // 3:
                self.terminal.print(welcome_message(self.app_info.banner, size.width))
            else:
                self.terminal.print(FILLER)
            if current_row + 1 < height:
                self.terminal.print(NEWLINE)

    def render_buffer(self) -> None:
        height = self.terminal.query_size().height
        for current_row in range(height):
            self.terminal.clear_current_line()
            line = self.buffer.line_at(current_row)
            if line is not None:
                self.terminal.print(line)
                self.terminal.print(NEWLINE)
            else:
                self.terminal.print(FILLER)
                if current_row + 1 < height:
                    self.terminal.print(NEWLINE)

    def load(self, path: str | os.PathLike[str]) -> LoadResult:
        """
        Replace the buffer with the contents of *path*.

        On failure the current buffer is kept and the error is returned.
        """
        path_str = os.fspath(path)
        try:
            buffer = Buffer.load(path_str)
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Could not load %s: %s", path_str, exc)
            return LoadResult(path=path_str, error=exc)
        self.buffer = buffer
        logger.info("Loaded %s (%d lines)", path_str, len(buffer))
        return LoadResult(path=path_str)

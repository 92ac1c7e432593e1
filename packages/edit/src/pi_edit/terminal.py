"""
Terminal abstraction.

Provides:
- Terminal: abstract base class (interface) for queued screen operations
- ProcessTerminal: real terminal using sys.stdin/sys.stdout + raw mode
- terminal_session(): context manager pairing initialize() with terminate()

Screen operations are queued and only become visible on flush(), so a whole
frame reaches the terminal in a single write.
"""
from __future__ import annotations

import logging
import os
import signal
import sys
import threading
from abc import ABC, abstractmethod
from collections import deque
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, TextIO

from .config import ENV_WRITE_LOG
from .keys import KeyEvent, parse_event
from .stdin_buffer import StdinBuffer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Size:
    height: int
    width: int


@dataclass(frozen=True)
class Position:
    x: int
    y: int


ORIGIN = Position(0, 0)

# ─────────────────────────────────────────────────────────────────────────────
# ANSI control sequences
# ─────────────────────────────────────────────────────────────────────────────

CLEAR_SCREEN = "\x1b[2J"
CLEAR_LINE = "\x1b[2K"
HIDE_CURSOR = "\x1b[?25l"
SHOW_CURSOR = "\x1b[?25h"


def move_to(position: Position) -> str:
    """CUP sequence; terminal rows and columns are 1-based."""
    return f"\x1b[{position.y + 1};{position.x + 1}H"


# ─────────────────────────────────────────────────────────────────────────────
# Terminal ABC
# ─────────────────────────────────────────────────────────────────────────────

class Terminal(ABC):
    """
    Minimal terminal interface for the editor.

    Every method may raise OSError from the underlying terminal; errors are
    passed through unchanged.
    """

    @abstractmethod
    def initialize(self) -> None:
        """Enable raw mode, clear the screen, home the cursor and flush."""

    @abstractmethod
    def terminate(self) -> None:
        """Flush queued operations and restore the terminal's previous mode."""

    @abstractmethod
    def clear_screen(self) -> None:
        """Queue: clear the entire screen."""

    @abstractmethod
    def clear_current_line(self) -> None:
        """Queue: clear the line under the cursor."""

    @abstractmethod
    def move_cursor_to(self, position: Position) -> None:
        """Queue: move the cursor to a zero-based cell."""

    @abstractmethod
    def hide_cursor(self) -> None:
        """Queue: hide the cursor."""

    @abstractmethod
    def show_cursor(self) -> None:
        """Queue: show the cursor."""

    @abstractmethod
    def print(self, text: str) -> None:
        """Queue: print text at the cursor."""

    @abstractmethod
    def flush(self) -> None:
        """Write all queued operations to the terminal."""

    @abstractmethod
    def query_size(self) -> Size:
        """Current terminal size; not cached."""

    @abstractmethod
    def read_event(self) -> KeyEvent:
        """Block until the next key event arrives."""


# ─────────────────────────────────────────────────────────────────────────────
# ProcessTerminal
# ─────────────────────────────────────────────────────────────────────────────

class ProcessTerminal(Terminal):
    """
    Real terminal using sys.stdin/sys.stdout.
    Screen operations are collected as escape sequences until flush().
    """

    def __init__(
        self,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
        timeout_ms: int = 10,
    ) -> None:
        self._stdin = stdin if stdin is not None else sys.stdin
        self._stdout = stdout if stdout is not None else sys.stdout
        self._queue: list[str] = []
        self._pending: deque[str] = deque()
        self._stdin_buffer = StdinBuffer(timeout_ms=timeout_ms)
        self._old_termios: list | None = None
        self._write_log_path = os.environ.get(ENV_WRITE_LOG, "")

    # ── lifecycle ──────────────────────────────────────────────────────────

    def initialize(self) -> None:
        self._enable_raw_mode()
        try:
            self.clear_screen()
            self.move_cursor_to(ORIGIN)
            self.flush()
        except BaseException:
            self._queue.clear()
            self._disable_raw_mode()
            raise

    def terminate(self) -> None:
        self.flush()
        self._disable_raw_mode()

    def _enable_raw_mode(self) -> None:
        """Put stdin in raw mode (no echo, no line buffering, no signals)."""
        import termios
        import tty

        fd = self._stdin.fileno()
        self._old_termios = termios.tcgetattr(fd)
        tty.setraw(fd)
        logger.debug("Raw mode enabled on fd %d", fd)

    def _disable_raw_mode(self) -> None:
        import termios

        if self._old_termios is None:
            return
        fd = self._stdin.fileno()
        termios.tcsetattr(fd, termios.TCSADRAIN, self._old_termios)
        self._old_termios = None
        logger.debug("Raw mode disabled on fd %d", fd)

    # ── queued operations ──────────────────────────────────────────────────

    def clear_screen(self) -> None:
        self._queue.append(CLEAR_SCREEN)

    def clear_current_line(self) -> None:
        self._queue.append(CLEAR_LINE)

    def move_cursor_to(self, position: Position) -> None:
        self._queue.append(move_to(position))

    def hide_cursor(self) -> None:
        self._queue.append(HIDE_CURSOR)

    def show_cursor(self) -> None:
        self._queue.append(SHOW_CURSOR)

    def print(self, text: str) -> None:
        self._queue.append(text)

    def flush(self) -> None:
        data = "".join(self._queue)
        self._queue.clear()
        if data:
            self._stdout.write(data)
        self._stdout.flush()
        if data and self._write_log_path:
            with open(self._write_log_path, "a", encoding="utf-8") as f:
                f.write(data)

    # ── queries ────────────────────────────────────────────────────────────

    def query_size(self) -> Size:
        size = os.get_terminal_size(self._stdout.fileno())
        return Size(height=size.lines, width=size.columns)

    def read_event(self) -> KeyEvent:
        while True:
            while self._pending:
                seq = self._pending.popleft()
                event = parse_event(seq)
                if event is not None:
                    return event
                logger.debug("Ignoring unrecognised input %r", seq)
            self._pending.extend(self._read_sequences())

    def _read_sequences(self) -> list[str]:
        import select

        fd = self._stdin.fileno()
        if self._stdin_buffer.pending:
            # A partial escape sequence is waiting; give the rest a moment to arrive
            ready, _, _ = select.select([fd], [], [], self._stdin_buffer.timeout_ms / 1000.0)
            if not ready:
                return self._stdin_buffer.flush()
        data = os.read(fd, 1024)
        if not data:
            raise EOFError("stdin closed")
        return self._stdin_buffer.process(data)


# ─────────────────────────────────────────────────────────────────────────────
# Scoped raw-mode session
# ─────────────────────────────────────────────────────────────────────────────

def _raise_system_exit(signum: int, frame: object) -> None:
    raise SystemExit(128 + signum)


@contextmanager
def terminal_session(terminal: Terminal) -> Iterator[Terminal]:
    """
    Initialize *terminal* and guarantee terminate() on every exit path.

    SIGTERM is turned into SystemExit while the session is open so the
    terminal is restored when the process is killed.
    """
    terminal.initialize()
    prev_sigterm = None
    in_main_thread = threading.current_thread() is threading.main_thread()
    if in_main_thread:
        prev_sigterm = signal.signal(signal.SIGTERM, _raise_system_exit)
    try:
        yield terminal
    finally:
        if in_main_thread:
            signal.signal(signal.SIGTERM, prev_sigterm if prev_sigterm is not None else signal.SIG_DFL)
        terminal.terminate()

"""Shared fixtures for pi_edit tests."""
from __future__ import annotations

import pytest

from pi_edit.keys import KeyEvent
from pi_edit.terminal import Position, Size, Terminal


class MockTerminal(Terminal):
    """Terminal double that records queued operations instead of drawing."""

    def __init__(self, height: int = 24, width: int = 80, events: list[KeyEvent] | None = None):
        self.size = Size(height=height, width=width)
        self.events = list(events or [])
        self.queue: list[tuple] = []
        self.frames: list[list[tuple]] = []
        self.initialized = False
        self.terminated = False
        self.reads = 0

    def initialize(self) -> None:
        self.initialized = True

    def terminate(self) -> None:
        self.flush()
        self.terminated = True

    def clear_screen(self) -> None:
        self.queue.append(("clear_screen",))

    def clear_current_line(self) -> None:
        self.queue.append(("clear_line",))

    def move_cursor_to(self, position: Position) -> None:
        self.queue.append(("move", position.x, position.y))

    def hide_cursor(self) -> None:
        self.queue.append(("hide",))

    def show_cursor(self) -> None:
        self.queue.append(("show",))

    def print(self, text: str) -> None:
        self.queue.append(("print", text))

    def flush(self) -> None:
        if self.queue:
            self.frames.append(self.queue)
        self.queue = []

    def query_size(self) -> Size:
        return self.size

    def read_event(self) -> KeyEvent:
        self.reads += 1
        if not self.events:
            raise EOFError("no more scripted events")
        return self.events.pop(0)

    # ── helpers ────────────────────────────────────────────────────────────

    def printed(self, ops: list[tuple] | None = None) -> str:
        ops = self.queue if ops is None else ops
        return "".join(op[1] for op in ops if op[0] == "print")

    def rows(self, ops: list[tuple] | None = None) -> list[str]:
        return self.printed(ops).split("\r\n")


@pytest.fixture
def make_terminal():
    return MockTerminal


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch, tmp_path):
    monkeypatch.setenv("PI_EDIT_DIR", str(tmp_path / "config"))
    monkeypatch.delenv("PI_EDIT_WRITE_LOG", raising=False)
    monkeypatch.delenv("PI_EDIT_LOG", raising=False)

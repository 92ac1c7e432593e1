"""
Editor session — owns the cursor location and the quit flag, and runs the
read-evaluate-redraw loop.

Key handling is split in two pure steps so it can be tested without a
terminal: resolve_action() maps a KeyEvent to an Action, and
move_location() applies a movement to a Location for a given Size.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Literal, Union

from .config import AppInfo
from .keybindings import KeybindingsManager
from .keys import KeyEvent
from .terminal import Position, Size, Terminal, terminal_session
from .view import LoadResult, View

logger = logging.getLogger(__name__)

GOODBYE = "Goodbye\r\n"

Direction = Literal["up", "down", "left", "right", "home", "end", "page_up", "page_down"]


@dataclass(frozen=True)
class Location:
    x: int = 0
    y: int = 0


# ─────────────────────────────────────────────────────────────────────────────
# Actions
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Quit:
    pass


@dataclass(frozen=True)
class Move:
    direction: Direction


Action = Union[Quit, Move]

_MOVE_ACTIONS: dict[str, Direction] = {
    "cursorUp": "up",
    "cursorDown": "down",
    "cursorLeft": "left",
    "cursorRight": "right",
    "cursorLineStart": "home",
    "cursorLineEnd": "end",
    "pageUp": "page_up",
    "pageDown": "page_down",
}


def resolve_action(event: KeyEvent, keybindings: KeybindingsManager) -> Action | None:
    """Map a key event to an action; only key presses count."""
    if not event.is_press:
        return None
    action = keybindings.action_for(event.key)
    if action == "quit":
        return Quit()
    if action in _MOVE_ACTIONS:
        return Move(_MOVE_ACTIONS[action])
    return None


def move_location(location: Location, direction: Direction, size: Size) -> Location:
    """Apply one movement, clamped to the terminal bounds."""
    x, y = location.x, location.y
    max_x = max(size.width - 1, 0)
    max_y = max(size.height - 1, 0)
    if direction == "up":
        y = max(y - 1, 0)
    elif direction == "down":
        y = min(y + 1, max_y)
    elif direction == "left":
        x = max(x - 1, 0)
    elif direction == "right":
        x = min(x + 1, max_x)
    elif direction == "home":
        x = 0
    elif direction == "end":
        x = max_x
    elif direction == "page_up":
        y = 0
    elif direction == "page_down":
        y = max_y
    return Location(x, y)


# ─────────────────────────────────────────────────────────────────────────────
# Editor
# ─────────────────────────────────────────────────────────────────────────────

class Editor:
    """
    Interactive session over a Terminal.

    Two states: active, and quitting once a quit key is pressed. After the
    switch the loop draws the farewell message once and returns without
    reading more input.
    """

    def __init__(
        self,
        terminal: Terminal,
        app_info: AppInfo | None = None,
        keybindings: KeybindingsManager | None = None,
    ) -> None:
        self.terminal = terminal
        self.view = View(terminal, app_info=app_info)
        self.keybindings = keybindings if keybindings is not None else KeybindingsManager()
        self.should_quit = False
        self.location = Location()

    def load(self, path: str | os.PathLike[str]) -> LoadResult:
        return self.view.load(path)

    def run(self) -> None:
        """Run the session; the terminal is restored however the loop ends."""
        with terminal_session(self.terminal):
            self.repl()

    def repl(self) -> None:
        while True:
            self.refresh_screen()
            if self.should_quit:
                break
            event = self.terminal.read_event()
            self.evaluate_event(event)

    def evaluate_event(self, event: KeyEvent) -> None:
        action = resolve_action(event, self.keybindings)
        logger.debug("Key %s (%s) -> %r", event.key, event.kind, action)
        if isinstance(action, Quit):
            self.should_quit = True
        elif isinstance(action, Move):
            self.move_point(action.direction)

    def move_point(self, direction: Direction) -> None:
        size = self.terminal.query_size()
        self.location = move_location(self.location, direction, size)

    def refresh_screen(self) -> None:
        self.terminal.hide_cursor()
        if self.should_quit:
            self.terminal.clear_screen()
            self.terminal.print(GOODBYE)
        else:
            self.view.render()
            self.terminal.move_cursor_to(Position(self.location.x, self.location.y))
        self.terminal.show_cursor()
        self.terminal.flush()

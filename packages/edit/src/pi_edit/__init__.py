"""
pi_edit — minimal terminal text viewer.

Reads key events, moves a cursor and redraws the visible terminal area.
"""
import logging

from .buffer import Buffer
from .config import APP_NAME, VERSION, AppInfo, get_app_info
from .editor import Editor, Location, Move, Quit, move_location, resolve_action
from .keybindings import DEFAULT_EDITOR_KEYBINDINGS, EditorAction, KeybindingsManager
from .keys import KeyEvent, is_key_release, is_key_repeat, parse_event, parse_key
from .stdin_buffer import StdinBuffer
from .terminal import Position, ProcessTerminal, Size, Terminal, terminal_session
from .view import LoadResult, View

# Raw-mode output belongs to the editor; logs go nowhere unless configured
logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = VERSION

__all__ = [
    # buffer
    "Buffer",
    # config
    "APP_NAME",
    "VERSION",
    "AppInfo",
    "get_app_info",
    # editor
    "Editor",
    "Location",
    "Move",
    "Quit",
    "move_location",
    "resolve_action",
    # keybindings
    "DEFAULT_EDITOR_KEYBINDINGS",
    "EditorAction",
    "KeybindingsManager",
    # keys
    "KeyEvent",
    "is_key_release",
    "is_key_repeat",
    "parse_event",
    "parse_key",
    # stdin buffer
    "StdinBuffer",
    # terminal
    "Position",
    "ProcessTerminal",
    "Size",
    "Terminal",
    "terminal_session",
    # view
    "LoadResult",
    "View",
]

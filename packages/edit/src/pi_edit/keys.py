"""
Keyboard input decoding.

Turns one complete input sequence (as split by StdinBuffer) into a key
identifier such as "up", "pageDown" or "ctrl+q", and into a KeyEvent that
also carries the press/repeat/release kind.

Handled encodings:
- unmodified cursor keys in normal (CSI) and application (SS3) mode
- modifier-encoded CSI keys, e.g. ESC[1;5A (ctrl+up), ESC[5;2~ (shift+pageUp)
- Kitty CSI-u keys, e.g. ESC[113;5u (ctrl+q), including event kinds
- control characters, alt+letter and printable text

Anything else decodes to None and is ignored by the editor.
"""
from __future__ import annotations

import re
import string
from dataclasses import dataclass
from typing import Literal

# A plain string such as "up" or "ctrl+q"
KeyId = str

KeyEventKind = Literal["press", "repeat", "release"]


@dataclass(frozen=True)
class KeyEvent:
    """A decoded key event."""

    key: KeyId
    kind: KeyEventKind = "press"

    @property
    def is_press(self) -> bool:
        return self.kind == "press"


# ─────────────────────────────────────────────────────────────────────────────
# Sequence tables
# ─────────────────────────────────────────────────────────────────────────────

# Final byte of ESC[<final>, ESCO<final> and ESC[1;<mod><final>
_NAVIGATION_FINALS: dict[str, str] = {
    "A": "up",
    "B": "down",
    "C": "right",
    "D": "left",
    "H": "home",
    "F": "end",
}

# Number in ESC[<n>~ and ESC[<n>;<mod>~ (1/4 from linux and tmux, 7/8 from rxvt)
_TILDE_KEYS: dict[int, str] = {
    1: "home",
    2: "insert",
    3: "delete",
    4: "end",
    5: "pageUp",
    6: "pageDown",
    7: "home",
    8: "end",
}

_PLAIN_SEQUENCES: dict[str, str] = {
    prefix + final: name
    for prefix in ("\x1b[", "\x1bO")
    for final, name in _NAVIGATION_FINALS.items()
}
_PLAIN_SEQUENCES.update({
    # linux console
    "\x1b[[5~": "pageUp",
    "\x1b[[6~": "pageDown",
    "\x1b[Z": "shift+tab",
})

# Kitty CSI-u codepoints with a name of their own
_NAMED_CODEPOINTS: dict[int, str] = {
    9: "tab",
    13: "enter",
    27: "escape",
    32: "space",
    127: "backspace",
    57414: "enter",  # keypad enter
}

# Keys that Kitty reports by their own codepoint rather than the base layout key
_LAYOUT_INDEPENDENT = frozenset(string.ascii_lowercase + string.punctuation)

_MOD_SHIFT = 1
_MOD_ALT = 2
_MOD_CTRL = 4
# caps lock / num lock bits never change the key id
_LOCK_MASK = 64 + 128

_CSI_U_RE = re.compile(r"^\x1b\[(\d+)(?::(\d*))?(?::(\d+))?(?:;(\d+))?(?::(\d+))?u$")
_CSI_NAV_RE = re.compile(r"^\x1b\[1;(\d+)(?::(\d+))?([ABCDHF])$")
_CSI_TILDE_RE = re.compile(r"^\x1b\[(\d+)(?:;(\d+))?(?::(\d+))?~$")

_KIND_CODES: dict[str, KeyEventKind] = {"2": "repeat", "3": "release"}

_RELEASE_SUFFIXES = tuple(":3" + final for final in "u~ABCDHF")
_REPEAT_SUFFIXES = tuple(":2" + final for final in "u~ABCDHF")


def is_key_release(data: str) -> bool:
    """Check if data is a Kitty key-release event."""
    return data.endswith(_RELEASE_SUFFIXES)


def is_key_repeat(data: str) -> bool:
    """Check if data is a Kitty key-repeat event."""
    return data.endswith(_REPEAT_SUFFIXES)


# ─────────────────────────────────────────────────────────────────────────────
# CSI decoding
# ─────────────────────────────────────────────────────────────────────────────

def _with_modifiers(name: str, modifier_field: str | None) -> KeyId:
    # The wire value is 1 + the modifier bit set
    mod = (int(modifier_field) - 1 if modifier_field else 0) & ~_LOCK_MASK
    mods = [label for bit, label in ((_MOD_SHIFT, "shift"), (_MOD_CTRL, "ctrl"), (_MOD_ALT, "alt")) if mod & bit]
    return "+".join(mods + [name])


def _codepoint_name(codepoint: int, base_layout_key: str | None) -> str | None:
    if codepoint in _NAMED_CODEPOINTS:
        return _NAMED_CODEPOINTS[codepoint]
    if codepoint > 0x10FFFF:
        return None
    if chr(codepoint) not in _LAYOUT_INDEPENDENT and base_layout_key:
        codepoint = int(base_layout_key)
    if codepoint in _NAMED_CODEPOINTS:
        return _NAMED_CODEPOINTS[codepoint]
    if codepoint <= 0x10FFFF and chr(codepoint) in _LAYOUT_INDEPENDENT:
        return chr(codepoint)
    return None


def _decode_csi(data: str) -> KeyEvent | None:
    """Decode a modifier-encoded or Kitty CSI sequence."""
    m = _CSI_U_RE.match(data)
    if m:
        name = _codepoint_name(int(m.group(1)), m.group(3))
        modifier, kind = m.group(4), m.group(5)
    else:
        m = _CSI_NAV_RE.match(data)
        if m:
            name = _NAVIGATION_FINALS[m.group(3)]
            modifier, kind = m.group(1), m.group(2)
        else:
            m = _CSI_TILDE_RE.match(data)
            if not m:
                return None
            name = _TILDE_KEYS.get(int(m.group(1)))
            modifier, kind = m.group(2), m.group(3)
    if name is None:
        return None
    return KeyEvent(_with_modifiers(name, modifier), _KIND_CODES.get(kind or "", "press"))


# ─────────────────────────────────────────────────────────────────────────────
# Control characters and text
# ─────────────────────────────────────────────────────────────────────────────

def _decode_plain(data: str) -> KeyId | None:
    if data in _PLAIN_SEQUENCES:
        return _PLAIN_SEQUENCES[data]
    if data == "\x1b":
        return "escape"
    # Tab, Enter and Backspace share codes with ctrl+i, ctrl+m and ctrl+h
    if data == "\t":
        return "tab"
    if data in ("\r", "\n"):
        return "enter"
    if data in ("\x7f", "\x08"):
        return "backspace"
    if data == " ":
        return "space"
    if len(data) == 2 and data[0] == "\x1b" and "a" <= data[1] <= "z":
        return f"alt+{data[1]}"
    if len(data) == 1:
        code = ord(data)
        if 1 <= code <= 26:
            return f"ctrl+{chr(code + 96)}"
        if code >= 32:
            return data
    return None


def parse_event(data: str) -> KeyEvent | None:
    """Decode *data* into a KeyEvent, or None when it is not a known key."""
    event = _decode_csi(data)
    if event is not None:
        return event
    key = _decode_plain(data)
    return KeyEvent(key) if key else None


def parse_key(data: str) -> KeyId | None:
    """Return the key identifier for *data*, or None for unknown input."""
    event = parse_event(data)
    return event.key if event else None

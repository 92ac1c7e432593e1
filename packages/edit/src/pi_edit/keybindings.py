"""
Editor keybindings.

Provides EditorAction, DEFAULT_EDITOR_KEYBINDINGS and KeybindingsManager.
User overrides live in <config dir>/keybindings.json, e.g.::

    {"quit": ["ctrl+q", "ctrl+x"], "cursorLineStart": "ctrl+a"}
"""
from __future__ import annotations

import json
import logging
import os
from typing import Literal, Union

from .config import get_keybindings_path
from .keys import KeyId

logger = logging.getLogger(__name__)

# ─────────────────────────────────────────────────────────────────────────────
# EditorAction type
# ─────────────────────────────────────────────────────────────────────────────

EditorAction = Literal[
    "quit",
    "cursorUp",
    "cursorDown",
    "cursorLeft",
    "cursorRight",
    "cursorLineStart",
    "cursorLineEnd",
    "pageUp",
    "pageDown",
]

KeybindingsConfig = dict[str, Union[KeyId, list[KeyId]]]

DEFAULT_EDITOR_KEYBINDINGS: dict[str, list[KeyId]] = {
    "quit":            ["ctrl+q"],
    "cursorUp":        ["up"],
    "cursorDown":      ["down"],
    "cursorLeft":      ["left"],
    "cursorRight":     ["right"],
    "cursorLineStart": ["home"],
    "cursorLineEnd":   ["end"],
    "pageUp":          ["pageUp"],
    "pageDown":        ["pageDown"],
}


def normalize_key_id(key_id: KeyId) -> str:
    """Canonical form for comparison: lowercase, modifiers sorted."""
    parts = key_id.lower().split("+")
    # "ctrl++" style ids bind the "+" key itself
    if key_id.endswith("++"):
        parts = [p for p in parts if p] + ["+"]
    *mods, key = parts
    return "+".join(sorted(mods) + [key])


# ─────────────────────────────────────────────────────────────────────────────
# KeybindingsManager
# ─────────────────────────────────────────────────────────────────────────────

class KeybindingsManager:
    """Maps key identifiers to editor actions."""

    def __init__(self, config: KeybindingsConfig | None = None) -> None:
        self._action_to_keys: dict[str, list[KeyId]] = {}
        self._key_to_action: dict[str, str] = {}
        self._build_maps(config or {})

    @classmethod
    def create(cls, config_dir: str | None = None) -> "KeybindingsManager":
        """Load keybindings.json from *config_dir* and merge with defaults."""
        path = get_keybindings_path(config_dir)
        if not os.path.exists(path):
            return cls()
        try:
            with open(path, encoding="utf-8") as f:
                user_config = json.load(f)
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring keybindings file %s: %s", path, exc)
            return cls()
        if not isinstance(user_config, dict):
            logger.warning("Ignoring keybindings file %s: expected a JSON object", path)
            return cls()
        return cls(user_config)

    def _build_maps(self, config: KeybindingsConfig) -> None:
        self._action_to_keys.clear()
        self._key_to_action.clear()
        for action, keys in DEFAULT_EDITOR_KEYBINDINGS.items():
            self._action_to_keys[action] = list(keys)
        for action, keys in config.items():
            if action not in DEFAULT_EDITOR_KEYBINDINGS:
                logger.warning("Unknown keybinding action %r", action)
                continue
            if keys is None:
                continue
            if isinstance(keys, str):
                keys = [keys]
            if not isinstance(keys, list) or not all(isinstance(k, str) for k in keys):
                logger.warning("Ignoring keybinding for %r: expected a key id or list of key ids", action)
                continue
            self._action_to_keys[action] = keys
        # First action in declaration order wins for a shared key
        for action, keys in self._action_to_keys.items():
            for key in keys:
                self._key_to_action.setdefault(normalize_key_id(key), action)

    def action_for(self, key_id: KeyId) -> str | None:
        """Return the action bound to *key_id*, if any."""
        return self._key_to_action.get(normalize_key_id(key_id))

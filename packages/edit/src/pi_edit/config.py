"""
Application metadata and configuration paths.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from importlib.metadata import PackageNotFoundError, version

# App metadata (mirrors the [project] table in pyproject.toml)
APP_NAME: str = "pi-edit"
CONFIG_DIR_NAME: str = ".pi"

ENV_CONFIG_DIR: str = "PI_EDIT_DIR"
ENV_LOG_FILE: str = "PI_EDIT_LOG"
ENV_WRITE_LOG: str = "PI_EDIT_WRITE_LOG"


def _resolve_version() -> str:
    try:
        return version(APP_NAME)
    except PackageNotFoundError:
        # Running from a source checkout without an install
        return "0.0.0"


VERSION: str = _resolve_version()


@dataclass(frozen=True)
class AppInfo:
    """Product name and version shown in the welcome banner."""

    name: str = APP_NAME
    version: str = VERSION

    @property
    def banner(self) -> str:
        return f"{self.name} -- version {self.version}"


def get_app_info() -> AppInfo:
    return AppInfo(name=APP_NAME, version=VERSION)


# ============================================================================
# User Config Paths (~/.pi/edit/*)
# ============================================================================


def get_config_dir() -> str:
    """Get the config directory (e.g., ~/.pi/edit/)."""
    env_dir = os.environ.get(ENV_CONFIG_DIR)
    if env_dir:
        return os.path.expanduser(env_dir)
    return os.path.join(os.path.expanduser("~"), CONFIG_DIR_NAME, "edit")


def get_keybindings_path(config_dir: str | None = None) -> str:
    """Get path to keybindings.json, under *config_dir* when given."""
    return os.path.join(config_dir or get_config_dir(), "keybindings.json")


def get_debug_log_path() -> str:
    """Get path to debug log file."""
    return os.path.join(get_config_dir(), f"{APP_NAME}-debug.log")

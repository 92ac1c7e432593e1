"""
CLI entry point for pi-edit.
"""
from __future__ import annotations

import logging
import os
import termios
from enum import Enum
from typing import Optional

import typer
from rich.console import Console

from .config import APP_NAME, ENV_LOG_FILE, VERSION, get_app_info, get_config_dir, get_debug_log_path
from .editor import Editor
from .keybindings import KeybindingsManager
from .terminal import ProcessTerminal

app = typer.Typer(
    name=APP_NAME,
    help="Pi Edit — minimal terminal text viewer",
    add_completion=False,
)

logger = logging.getLogger(__name__)
err_console = Console(stderr=True)

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


def configure_logging(log_file: str | None, level: str = "INFO") -> None:
    """Send package logs to *log_file*; stdout belongs to the editor."""
    if not log_file:
        return
    handler = logging.FileHandler(log_file, encoding="utf-8")
    handler.setFormatter(logging.Formatter(_LOG_FORMAT))
    package_logger = logging.getLogger("pi_edit")
    package_logger.addHandler(handler)
    package_logger.setLevel(level.upper())


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"{APP_NAME} {VERSION}")
        raise typer.Exit()


@app.command()
def edit(
    path: Optional[str] = typer.Argument(None, help="File to open"),
    log_file: Optional[str] = typer.Option(
        None, "--log-file", envvar=ENV_LOG_FILE, help="Write debug logs to this file"
    ),
    log_level: LogLevel = typer.Option(LogLevel.INFO, "--log-level", case_sensitive=False, help="Log level"),
    debug: bool = typer.Option(False, "--debug", help="Log at DEBUG level to the default debug log"),
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Show version and exit"
    ),
) -> None:
    """Open PATH (or the welcome screen) in the terminal."""
    if debug:
        os.makedirs(get_config_dir(), exist_ok=True)
        configure_logging(log_file or get_debug_log_path(), "DEBUG")
    else:
        configure_logging(log_file, log_level.value)

    editor = Editor(
        ProcessTerminal(),
        app_info=get_app_info(),
        keybindings=KeybindingsManager.create(),
    )
    if path:
        editor.load(os.path.expanduser(path))

    try:
        editor.run()
    except (OSError, EOFError, termios.error) as exc:
        logger.exception("Editor session failed")
        err_console.print(f"[red]{APP_NAME}: {exc}[/red]")
        raise typer.Exit(1)


def main() -> None:
    """Main CLI entrypoint."""
    app()


if __name__ == "__main__":
    main()

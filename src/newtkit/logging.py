"""Logging set-up for newtkit.

This module provides `init`, the single start-up entry point: it configures
the root logger with a Rich console handler on stderr (optionally teed to a
log file), filters records below a named minimum level, and sets the
process-wide message verbosity. It also registers the custom ``VERBOSE``
level used to trace executed commands, and a filter that annotates
third-party log records with a short prefix used by console formatting.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Literal, TypeAlias

from rich.console import Console
from rich.logging import RichHandler

from newtkit.errors import NewtError
from newtkit.messages import Verbosity, set_verbosity

# pylint: disable=too-few-public-methods

PROJECT_PREFIX = "newtkit"

VERBOSE = 15
logging.addLevelName(VERBOSE, "VERBOSE")

DEFAULT_LEVEL = "WARN"

# Recognized level names, ascending.
LEVELS: dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "VERBOSE": VERBOSE,
    "INFO": logging.INFO,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
}
_ALIASES = {"WARNING": "WARN"}

FILE_FORMAT = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"


class ThirdPartyPrefixFilter(logging.Filter):
    """Annotate third-party log records with a short prefix.

    For records whose logger name does not start with the project prefix,
    sets `record.prefix` to a short bracketed token like "[urllib3]". For
    project loggers the prefix is set to an empty string. The filter always
    returns True to allow the record to be processed.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if not record.name.startswith(PROJECT_PREFIX):
            # e.g. "urllib3.connectionpool" -> "[urllib3]"
            record.prefix = f"[{record.name.split('.')[0]}]"
        else:
            record.prefix = ""
        return True


def parse_level(name: str) -> int:
    """Convert a level name (DEBUG, VERBOSE, INFO, WARN, ERROR) to a number.

    Matching is case-insensitive, and ``WARNING`` is accepted for ``WARN``.
    An empty name selects the default, ``WARN``.

    Raises:
        NewtError: If the name is not a recognized level.
    """
    key = (name or DEFAULT_LEVEL).strip().upper()
    key = _ALIASES.get(key, key)
    try:
        return LEVELS[key]
    except KeyError:
        raise NewtError(
            f"Unknown log level {name!r}; expected one of {', '.join(LEVELS)}"
        ) from None


def config_console_handler(
    level: int = logging.WARNING, color: bool = True
) -> RichHandler:
    """Configure and return a RichHandler writing to stderr.

    Args:
        level: Minimum level for console output.
        color: Enable color output when True.

    Returns:
        RichHandler: Configured handler suitable to attach to the root logger.
    """
    ColorSystem: TypeAlias = Literal["auto", "standard", "256", "truecolor", "windows"]
    color_system: ColorSystem | None = "auto" if color else None
    console = Console(color_system=color_system, stderr=True)

    handler = RichHandler(
        level=level,
        console=console,
        show_time=False,
        show_path=False,
    )
    handler.setFormatter(logging.Formatter(fmt="%(prefix)s %(message)s"))
    handler.addFilter(ThirdPartyPrefixFilter())
    return handler


def config_file_handler(
    path: str | Path, level: int = logging.WARNING
) -> logging.FileHandler:
    """Configure and return a handler that tees records into ``path``.

    The file is truncated when the handler is created.

    Raises:
        NewtError: If the file cannot be created.
    """
    try:
        handler = logging.FileHandler(path, mode="w", encoding="utf-8")
    except OSError as e:
        raise NewtError(f"Cannot create log file {path}: {e}") from e
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(FILE_FORMAT))
    return handler


def init(
    level: str = "",
    verbosity: int = Verbosity.DEFAULT,
    log_file: str | Path | None = None,
    *,
    color: bool = True,
) -> None:
    """Initialize logging and message verbosity for the process.

    Args:
        level: Minimum log level name; empty means ``WARN``.
        verbosity: Process-wide status-message verbosity (see `Verbosity`).
        log_file: Optional file to receive a copy of every emitted record.
        color: Allow colored console output.

    Raises:
        NewtError: On an unknown level name or an unwritable log file.
    """
    min_level = parse_level(level)

    handlers: list[logging.Handler] = [config_console_handler(min_level, color=color)]
    if log_file:
        handlers.append(config_file_handler(log_file, min_level))

    logging.basicConfig(level=min_level, handlers=handlers, force=True)
    set_verbosity(verbosity)

"""Verbosity-aware status and error messages.

A `Messenger` decides, from its verbosity, whether a message is printed. The
module keeps one default instance, replaced once at start-up by
`newtkit.logging.init` (or `set_verbosity`), and the module-level
`status_message` / `error_message` helpers delegate to it. Code that prefers
explicit wiring can build and pass around its own `Messenger` instead.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from enum import IntEnum

import click


class Verbosity(IntEnum):
    """How chatty status output is. Higher values print more."""

    SILENT = 0
    QUIET = 1
    DEFAULT = 2
    VERBOSE = 3


def _render(message: str, args: tuple[object, ...]) -> str:
    return message % args if args else message


@dataclass(frozen=True)
class Messenger:
    """Print messages whose level does not exceed the configured verbosity."""

    verbosity: int = Verbosity.DEFAULT

    def status(self, level: int, message: str, *args: object) -> None:
        """Write ``message % args`` to stdout if ``verbosity >= level``.

        Stdout is flushed after every call, whether or not anything was
        written.
        """
        if self.verbosity >= level:
            click.echo(_render(message, args), nl=False)
        sys.stdout.flush()

    def error(self, level: int, message: str, *args: object) -> None:
        """Write ``message % args`` to stderr if ``verbosity >= level``."""
        if self.verbosity >= level:
            click.echo(_render(message, args), nl=False, err=True)


_default = Messenger()


def set_verbosity(verbosity: int) -> None:
    """Replace the process-wide messenger with one at ``verbosity``."""
    global _default  # pylint: disable=global-statement
    _default = Messenger(verbosity=int(verbosity))


def get_verbosity() -> int:
    """Return the process-wide verbosity."""
    return _default.verbosity


def default_messenger() -> Messenger:
    """Return the process-wide messenger."""
    return _default


def status_message(level: int, message: str, *args: object) -> None:
    """Print a status message to stdout through the process-wide messenger."""
    _default.status(level, message, *args)


def error_message(level: int, message: str, *args: object) -> None:
    """Print an error message to stderr through the process-wide messenger."""
    _default.error(level, message, *args)

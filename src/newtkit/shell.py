"""Process execution helpers.

Two ways to run something:

- `run_shell_command` hands a command string to ``sh -c`` and captures the
  combined stdout/stderr.
- `run_interactive_command` spawns a program directly with the terminal
  passed straight through, while this process ignores SIGINT/SIGTERM so that
  Ctrl-C reaches the child (e.g. a debugger) without killing us.

Neither call has a timeout; both block until the child exits.
"""

from __future__ import annotations

import logging
import signal
import subprocess
import threading
from collections.abc import Iterator, Sequence
from contextlib import contextmanager

from newtkit.errors import CommandError, NewtError
from newtkit.logging import VERBOSE

logger = logging.getLogger(__name__)

SHELL = "sh"
INTERACTIVE_SIGNALS = (signal.SIGINT, signal.SIGTERM)


def run_shell_command(cmd: str) -> bytes:
    """Run ``cmd`` through ``sh -c`` and return its combined output.

    Args:
        cmd: The shell command line.

    Returns:
        bytes: Interleaved stdout and stderr of the command.

    Raises:
        CommandError: If the shell cannot be spawned or the command exits
            non-zero. The output captured so far is kept on ``err.output``.
    """
    logger.log(VERBOSE, "%s", cmd)
    try:
        proc = subprocess.run(
            [SHELL, "-c", cmd],
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            check=False,
        )
    except OSError as e:
        raise CommandError(str(e)) from e

    if logger.isEnabledFor(VERBOSE):
        logger.log(VERBOSE, "o=%s", proc.stdout.decode("utf-8", errors="replace"))
    if proc.returncode != 0:
        raise CommandError(
            f"exit status {proc.returncode}",
            output=proc.stdout,
            returncode=proc.returncode,
        )
    return proc.stdout


def _swallow(signum, frame) -> None:  # pylint: disable=unused-argument
    pass


@contextmanager
def ignore_signals(*signums: signal.Signals) -> Iterator[None]:
    """Take ownership of ``signums`` for the duration of the block.

    While active, delivery of any of the signals is swallowed. The previous
    handlers are reinstated on exit, however the block ends. Outside the main
    thread Python cannot install handlers, so the block runs unchanged.
    """
    if threading.current_thread() is not threading.main_thread():
        yield
        return

    previous = {signum: signal.signal(signum, _swallow) for signum in signums}
    try:
        yield
    finally:
        for signum, handler in previous.items():
            signal.signal(signum, handler)


def run_interactive_command(argv: Sequence[str]) -> int:
    """Run ``argv`` attached to this process's terminal and wait for it.

    ``argv[0]`` is executed directly (no shell expansion) and the child
    inherits stdin, stdout and stderr.

    Returns:
        int: The child's exit status. A non-zero status is not an error.

    Raises:
        NewtError: If ``argv`` is empty or the child cannot be started or
            waited for.
    """
    if not argv:
        raise NewtError("No command given")
    logger.log(VERBOSE, "%s", argv[0])

    with ignore_signals(*INTERACTIVE_SIGNALS):
        try:
            proc = subprocess.Popen(list(argv))  # pylint: disable=consider-using-with
        except OSError as e:
            raise NewtError(str(e)) from e

        try:
            return proc.wait()
        except OSError as e:
            raise NewtError(str(e)) from e

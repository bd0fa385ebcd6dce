"""Error types shared by every newtkit helper.

All failures surface as a single exception family rooted at `NewtError`. An
instance carries the human-readable message together with a snapshot of the
call stacks of every live thread, taken when the error is constructed, so that
whoever finally reports it can show where things went wrong.
"""

from __future__ import annotations

import sys
import threading
import traceback

STACK_TRACE_LIMIT = 1 << 16  # bytes


def format_all_stacks(limit: int = STACK_TRACE_LIMIT) -> str:
    """Render the current stack of every live thread as text.

    Each thread block is headed by ``Thread <name> (<ident>):`` followed by the
    frames in the usual `traceback` layout, outermost call first.

    Args:
        limit: Maximum size of the rendered text in UTF-8 bytes. Anything past
            the limit is silently dropped.

    Returns:
        str: The stack dump, at most ``limit`` bytes long once encoded.
    """
    names = {thread.ident: thread.name for thread in threading.enumerate()}
    blocks = []
    frames = sys._current_frames()  # pylint: disable=protected-access
    for ident, frame in frames.items():
        header = f"Thread {names.get(ident, '<unknown>')} ({ident}):\n"
        blocks.append(header + "".join(traceback.format_stack(frame)))

    dump = "\n".join(blocks)
    encoded = dump.encode("utf-8")
    if len(encoded) <= limit:
        return dump
    return encoded[:limit].decode("utf-8", errors="ignore")


class NewtError(Exception):
    """Base error for newtkit: a message plus a stack snapshot.

    ``str(err)`` renders as ``text + "\\n" + stack_trace``. Chain the underlying
    exception with ``raise NewtError(...) from exc`` to keep the cause.

    Args:
        text: Human-readable description of the failure.
        capture_stack: Take a snapshot of all thread stacks now (default). Pass
            False where errors are built in bulk and the trace is not wanted.
    """

    def __init__(self, text: str, *, capture_stack: bool = True) -> None:
        super().__init__(text)
        self._text = text
        self._stack_trace = format_all_stacks() if capture_stack else ""

    @property
    def text(self) -> str:
        """The message without the stack trace."""
        return self._text

    @property
    def stack_trace(self) -> str:
        """Stack snapshot taken at construction time (may be empty)."""
        return self._stack_trace

    def __str__(self) -> str:
        return self._text + "\n" + self._stack_trace


class CommandError(NewtError):
    """Raised when a shell command cannot be spawned or exits non-zero.

    Attributes:
        output: Combined stdout/stderr captured before the failure.
        returncode: Exit status, or None if the process never started.
    """

    def __init__(
        self,
        text: str,
        *,
        output: bytes = b"",
        returncode: int | None = None,
        capture_stack: bool = True,
    ) -> None:
        super().__init__(text, capture_stack=capture_stack)
        self._output = output
        self._returncode = returncode

    @property
    def output(self) -> bytes:
        """Combined output produced before the command failed."""
        return self._output

    @property
    def returncode(self) -> int | None:
        """Exit status of the command, None when it never ran."""
        return self._returncode


class ReadLinesError(NewtError):
    """Raised when reading a file fails part-way through.

    Attributes:
        lines: Logical lines accumulated before the failure.
    """

    def __init__(
        self, text: str, *, lines: list[str], capture_stack: bool = True
    ) -> None:
        super().__init__(text, capture_stack=capture_stack)
        self._lines = list(lines)

    @property
    def lines(self) -> list[str]:
        """Copy of the lines read before the failure."""
        return list(self._lines)

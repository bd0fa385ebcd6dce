"""Line and token helpers for manifest-style text files."""

from __future__ import annotations

import os
from collections.abc import Iterable

from newtkit.errors import NewtError, ReadLinesError

CONTINUATION = "\\"


def read_lines(path: str | os.PathLike[str]) -> list[str]:
    """Read a text file into a list of logical lines.

    A line ending in a backslash is joined with the line that follows it:
    the backslash is dropped and nothing is inserted between the two
    pieces. Continuations chain, so ``a\\``, ``b\\``, ``c`` read as ``abc``.
    There is no way to keep a literal trailing backslash.

    Bytes that are not valid UTF-8 are kept as lone surrogates
    (``surrogateescape``), so ``line.encode("utf-8", "surrogateescape")``
    gives back the original bytes.

    Raises:
        NewtError: If the file cannot be opened.
        ReadLinesError: If reading fails part-way; ``err.lines`` holds the
            lines read up to that point.
    """
    try:
        f = open(path, "rb")  # pylint: disable=consider-using-with
    except OSError as e:
        raise NewtError(str(e)) from e

    lines: list[str] = []
    with f:
        try:
            for raw in f:
                line = _strip_eol(raw).decode("utf-8", errors="surrogateescape")
                if lines and lines[-1].endswith(CONTINUATION):
                    lines[-1] = lines[-1][:-1] + line
                else:
                    lines.append(line)
        except OSError as e:
            raise ReadLinesError(str(e), lines=lines) from e

    return lines


def _strip_eol(raw: bytes) -> bytes:
    if raw.endswith(b"\n"):
        raw = raw[:-1]
    if raw.endswith(b"\r"):
        raw = raw[:-1]
    return raw


def unique_strings(items: Iterable[str]) -> list[str]:
    """Drop duplicate strings, keeping the first occurrence of each in order."""
    seen: set[str] = set()
    result: list[str] = []
    for item in items:
        if item not in seen:
            seen.add(item)
            result.append(item)
    return result


def sort_fields(*ws_sep_strings: str) -> list[str]:
    """Split whitespace-delimited strings into one sorted list of unique tokens.

    Example:
        ``sort_fields("b a", "c  a") == ["a", "b", "c"]``
    """
    tokens: list[str] = []
    for s in ws_sep_strings:
        tokens.extend(s.split())
    return sorted(unique_strings(tokens))


def parse_equals_pair(value: str) -> tuple[str, str]:
    """Split ``NAME=VALUE`` into its two halves.

    Only the first two ``=``-separated parts are kept, so ``a=b=c`` gives
    ``("a", "b")``.

    Raises:
        NewtError: If ``value`` has no ``=``.
    """
    parts = value.split("=")
    if len(parts) < 2:
        raise NewtError(f"Expected NAME=VALUE, got {value!r}")
    return parts[0], parts[1]

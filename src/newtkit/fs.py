"""Filesystem queries.

Small wrappers over `os.stat` / `os.scandir` that follow newtkit's error
conventions: existence checks never raise, everything else raises
`NewtError` chained from the underlying `OSError`.
"""

from __future__ import annotations

import os
import shlex
from datetime import datetime, timezone

from newtkit.errors import NewtError
from newtkit.shell import run_shell_command

PathLike = str | os.PathLike[str]

EPOCH = datetime.fromtimestamp(0, tz=timezone.utc)


def exists(path: PathLike) -> bool:
    """Return True if ``path`` can be stat'ed.

    Any failure, including permission errors, counts as "does not exist".
    """
    try:
        os.stat(path)
    except OSError:
        return False
    return True


def not_exists(path: PathLike) -> bool:
    """Return True only if stat'ing ``path`` reports it missing.

    Failures other than "not found" (e.g. permission denied) return False,
    so a path is assumed to exist unless proven otherwise.
    """
    try:
        os.stat(path)
    except (FileNotFoundError, NotADirectoryError):
        return True
    except OSError:
        return False
    return False


def modification_time(path: PathLike) -> datetime:
    """Return the modification time of ``path`` as an aware UTC datetime.

    A missing path yields `EPOCH` rather than an error.

    Raises:
        NewtError: If stat fails for any reason other than absence.
    """
    try:
        st = os.stat(path)
    except (FileNotFoundError, NotADirectoryError):
        return EPOCH
    except OSError as e:
        raise NewtError(str(e)) from e
    return datetime.fromtimestamp(st.st_mtime, tz=timezone.utc)


def child_dirs(path: PathLike) -> list[str]:
    """List the names of the non-hidden directories directly under ``path``.

    Names starting with ``.`` are skipped, as are non-directories. Order is
    whatever the directory listing returns.

    Raises:
        NewtError: If the directory cannot be listed.
    """
    try:
        with os.scandir(path) as it:
            return [
                entry.name
                for entry in it
                if not entry.name.startswith(".") and _is_dir(entry)
            ]
    except OSError as e:
        raise NewtError(str(e)) from e


def _is_dir(entry: os.DirEntry[str]) -> bool:
    try:
        return entry.is_dir(follow_symlinks=False)
    except OSError:
        return False


def descendant_dirs_of_parent(
    root: PathLike, parent_name: str, full_path: bool
) -> list[str]:
    """Collect the child directories of every directory named ``parent_name``.

    Walks down from ``root``. When a directory's base name equals
    ``parent_name`` its immediate child directories are collected (as
    ``<dir>/<child>`` if ``full_path``, bare names otherwise) and the walk
    does not descend further into that branch.

    Example:
        With ``root/x/pkgs/p1``, ``root/x/pkgs/p2`` and ``root/y/pkgs/p3``,
        ``descendant_dirs_of_parent("root", "pkgs", False)`` returns
        ``["p1", "p2", "p3"]`` (in listing order).

    Returns:
        list[str]: Matching directories; empty if ``root`` does not exist.

    Raises:
        NewtError: On any listing failure during the walk.
    """
    root = os.path.normpath(os.fspath(root))
    if not_exists(root):
        return []

    children = child_dirs(root)
    if os.path.basename(root) == parent_name:
        if full_path:
            return [os.path.join(root, child) for child in children]
        return children

    dirs: list[str] = []
    for child in children:
        child_path = os.path.join(root, child)
        dirs.extend(descendant_dirs_of_parent(child_path, parent_name, full_path))
    return dirs


def copy_file(src: PathLike, dest: PathLike) -> None:
    """Copy ``src`` to ``dest`` with ``cp -Rf``, creating dest's parent first.

    Raises:
        CommandError: If either shell step fails.
    """
    parent = os.path.dirname(os.fspath(dest)) or "."
    run_shell_command(f"mkdir -p {shlex.quote(parent)}")
    src_arg = shlex.quote(os.fspath(src))
    dest_arg = shlex.quote(os.fspath(dest))
    run_shell_command(f"cp -Rf {src_arg} {dest_arg}")


def copy_dir(src: PathLike, dest: PathLike) -> None:
    """Copy a directory tree; same semantics as `copy_file`."""
    copy_file(src, dest)

"""Default marks and shared fixtures for tests under `tests/unit/`."""

from collections.abc import Callable
from pathlib import Path

import pytest

# pylint: disable=unused-argument

UNIT_ROOT = Path(__file__).parent.resolve()
MARKER_NAME = "unit"


@pytest.hookimpl(tryfirst=True)
def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Add default `unit` marks to items in `tests/unit/`."""
    for item in items:
        path = item.path.resolve()  # pytest>=8: pathlib.Path
        if UNIT_ROOT in path.parents:
            if not any(marker.name == MARKER_NAME for marker in item.iter_markers()):
                item.add_marker(pytest.mark.unit)


@pytest.fixture
def make_tree(tmp_path: Path) -> Callable[..., Path]:
    """Return a factory that builds a directory tree under ``tmp_path``.

    Paths ending in ``/`` become directories, anything else an empty file;
    parents are created as needed.

    Example:
        ```py
        root = make_tree("x/pkgs/p1/", "x/readme.txt")
        ```
    """

    def factory(*entries: str) -> Path:
        for entry in entries:
            target = tmp_path / entry
            if entry.endswith("/"):
                target.mkdir(parents=True, exist_ok=True)
            else:
                target.parent.mkdir(parents=True, exist_ok=True)
                target.touch()
        return tmp_path

    return factory

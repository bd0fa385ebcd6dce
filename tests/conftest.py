"""Global pytest fixtures for newtkit."""

from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest
from rich.logging import RichHandler

from newtkit.messages import get_verbosity, set_verbosity


@pytest.fixture(autouse=True)
def restore_process_state() -> Iterator[None]:
    """Undo process-wide changes made by `newtkit.logging.init`.

    `init` installs console/file handlers on the root logger and replaces the
    default messenger. Handlers it added are removed and closed, and the
    verbosity is reset, after every test so tests stay independent.
    """
    root = logging.getLogger()
    before = set(root.handlers)
    level = root.level
    verbosity = get_verbosity()
    yield
    for handler in list(root.handlers):
        if handler not in before and isinstance(
            handler, (RichHandler, logging.FileHandler)
        ):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)
    set_verbosity(verbosity)

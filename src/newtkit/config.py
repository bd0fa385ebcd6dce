"""YAML configuration loading.

`load_yaml_config` finds ``<name>.yml`` (or ``<name>.yaml``) in a directory,
parses it with PyYAML and wraps the result in a `Config`, a small
key-lookup handle. Keys are case-insensitive and nested mappings are reached
with dotted keys (``"pkg.deps"``).
"""

from __future__ import annotations

import math
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from newtkit.errors import NewtError

YAML_EXTENSIONS = (".yml", ".yaml")

BOOL_STRINGS = {
    **dict.fromkeys(("1", "t", "T", "TRUE", "true", "True"), True),
    **dict.fromkeys(("0", "f", "F", "FALSE", "false", "False"), False),
}


def _lower_keys(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {str(k).lower(): _lower_keys(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_lower_keys(v) for v in value]
    return value


class Config:
    """Read-only view over a parsed configuration mapping."""

    _MISSING = object()

    def __init__(
        self, settings: Mapping[str, Any], config_file: Path | None = None
    ) -> None:
        self._settings: dict[str, Any] = _lower_keys(settings)
        self.config_file = config_file

    def _lookup(self, key: str) -> Any:
        node: Any = self._settings
        for part in key.lower().split("."):
            if not isinstance(node, dict) or part not in node:
                return self._MISSING
            node = node[part]
        return node

    def is_set(self, key: str) -> bool:
        """Return True if ``key`` is present (even with a null value)."""
        return self._lookup(key) is not self._MISSING

    def get(self, key: str, default: Any = None) -> Any:
        """Return the raw value at ``key`` or ``default`` if absent."""
        value = self._lookup(key)
        return default if value is self._MISSING else value

    def get_string(self, key: str) -> str:
        value = self.get(key)
        if value is None or isinstance(value, (list, dict)):
            return ""
        if isinstance(value, bool):
            return "true" if value else "false"
        return str(value)

    def get_bool(self, key: str) -> bool:
        """Return ``key`` as a bool.

        Numbers are true when non-zero. Strings are read with the spellings
        in `BOOL_STRINGS`; any other value is False.
        """
        value = self.get(key)
        if isinstance(value, bool):
            return value
        if isinstance(value, (int, float)):
            return value != 0
        if isinstance(value, str):
            return BOOL_STRINGS.get(value.strip(), False)
        return False

    def get_int(self, key: str) -> int:
        """Return ``key`` as an int, or 0 when it is unset or not a number.

        Strings may carry a base prefix (``0x1f``, ``0o17``); floats are
        truncated.
        """
        value = self.get(key)
        if isinstance(value, (bool, int)):
            return int(value)
        if isinstance(value, float):
            return int(value) if math.isfinite(value) else 0
        if isinstance(value, str):
            try:
                return int(value.strip(), 0)
            except ValueError:
                return 0
        return 0

    def get_string_list(self, key: str) -> list[str]:
        """Return ``key`` as a list of strings.

        A scalar string is split on whitespace; a list has each item
        converted with `str`.
        """
        value = self.get(key)
        if value is None:
            return []
        if isinstance(value, list):
            return [str(v) for v in value]
        return str(value).split()

    def all_settings(self) -> dict[str, Any]:
        """Return a shallow copy of the whole settings mapping."""
        return dict(self._settings)

    def __repr__(self) -> str:
        return f"Config(config_file={str(self.config_file)!r})"


def find_config_file(directory: str | os.PathLike[str], name: str) -> Path | None:
    """Return the first ``<name>.yml`` / ``<name>.yaml`` in ``directory``."""
    for ext in YAML_EXTENSIONS:
        candidate = Path(directory) / f"{name}{ext}"
        if candidate.is_file():
            return candidate
    return None


def load_yaml_config(directory: str | os.PathLike[str], name: str) -> Config:
    """Load ``<name>.yml`` from ``directory`` into a `Config`.

    An empty file loads as an empty configuration.

    Raises:
        NewtError: If the file is missing, unreadable, not valid YAML, or
            its top level is not a mapping. The message names the expected
            ``<directory>/<name>.yml`` path.
    """
    expected = os.path.join(os.fspath(directory), name)

    def fail(reason: str) -> NewtError:
        return NewtError(f"Error reading {expected}.yml: {reason}")

    path = find_config_file(directory, name)
    if path is None:
        raise fail(f'Config File "{name}" Not Found in "{os.fspath(directory)}"')

    try:
        with path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
        raise fail(str(e)) from e

    if data is None:
        data = {}
    if not isinstance(data, Mapping):
        raise fail(f"top level is a {type(data).__name__}, expected a mapping")

    return Config(data, config_file=path)

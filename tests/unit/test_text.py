"""Unit tests for `newtkit.text` (line reading and string-list helpers)."""

import tempfile
from pathlib import Path

import pytest
from hypothesis import given
from hypothesis import strategies as st

from newtkit.errors import NewtError, ReadLinesError
from newtkit.text import parse_equals_pair, read_lines, sort_fields, unique_strings

# pylint: disable=magic-value-comparison


def write(tmp_path: Path, data: bytes) -> Path:
    path = tmp_path / "input.txt"
    path.write_bytes(data)
    return path


# ============================================================================
#                               read_lines
# ============================================================================


@pytest.mark.parametrize(
    ("data", "expected"),
    [
        (b"foo\\\nbar\nbaz", ["foobar", "baz"]),
        (b"a\\\nb\\\nc\nd\n", ["abc", "d"]),
        (b"one\ntwo\n", ["one", "two"]),
        (b"crlf\\\r\nline\r\n", ["crlfline"]),
        (b"keep  \\\n  spaces\n", ["keep    spaces"]),
        (b"a\\\n\nb\n", ["a", "b"]),
        (b"dangling\\", ["dangling\\"]),
        (b"\n\n", ["", ""]),
        (b"", []),
    ],
)
def test_read_lines_joins_continuations(tmp_path, data, expected):
    assert read_lines(write(tmp_path, data)) == expected


def test_read_lines_accepts_str_path(tmp_path):
    assert read_lines(str(write(tmp_path, b"x\n"))) == ["x"]


def test_read_lines_missing_file_raises(tmp_path):
    with pytest.raises(NewtError) as excinfo:
        read_lines(tmp_path / "missing.txt")
    assert not isinstance(excinfo.value, ReadLinesError)
    assert isinstance(excinfo.value.__cause__, FileNotFoundError)


def test_read_lines_keeps_non_utf8_bytes(tmp_path):
    path = write(tmp_path, b"first\n# (c) Caf\xe9 Ltd\nlast\n")
    result = read_lines(path)
    assert result == ["first", "# (c) Caf\udce9 Ltd", "last"]
    assert result[1].encode("utf-8", "surrogateescape") == b"# (c) Caf\xe9 Ltd"


class FailingFile:
    """Binary file stand-in whose reads fail after some lines."""

    def __init__(self, chunks):
        self._chunks = chunks

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def __iter__(self):
        yield from self._chunks
        raise OSError(5, "Input/output error")


def test_read_lines_failure_keeps_lines_read_so_far(monkeypatch, tmp_path):
    broken = FailingFile([b"first\n", b"sec\\\n", b"ond\n"])
    monkeypatch.setattr("newtkit.text.open", lambda *a, **kw: broken, raising=False)
    with pytest.raises(ReadLinesError, match="Input/output error") as excinfo:
        read_lines(tmp_path / "flaky")
    assert excinfo.value.lines == ["first", "second"]
    assert isinstance(excinfo.value.__cause__, OSError)


segment = st.text(
    alphabet=st.characters(
        exclude_characters="\n\r\\", exclude_categories=("Cs",)
    ),
    max_size=12,
)


@pytest.mark.property
@given(st.lists(st.lists(segment, min_size=1, max_size=4), max_size=8))
def test_read_lines_reassembles_continued_lines(logical_lines):
    """Splitting lines with trailing backslashes and reading back restores them."""
    physical = []
    for segments in logical_lines:
        physical.extend(s + "\\" for s in segments[:-1])
        physical.append(segments[-1])

    with tempfile.TemporaryDirectory() as tmp:
        path = Path(tmp) / "lines.txt"
        path.write_bytes("".join(p + "\n" for p in physical).encode("utf-8"))
        result = read_lines(path)

    assert result == ["".join(segments) for segments in logical_lines]


# ============================================================================
#                               unique_strings / sort_fields
# ============================================================================


def test_unique_strings_keeps_first_occurrence():
    assert unique_strings(["b", "a", "b", "c", "a"]) == ["b", "a", "c"]


def test_unique_strings_accepts_any_iterable():
    assert unique_strings(iter(["x", "x", ""])) == ["x", ""]
    assert unique_strings([]) == []


@pytest.mark.property
@given(st.lists(st.sampled_from(["a", "b", "c", "d", "A", ""])))
def test_unique_strings_properties(items):
    result = unique_strings(items)
    assert len(result) == len(set(result))
    assert set(result) == set(items)
    assert result == sorted(set(items), key=items.index)


def test_sort_fields_example():
    assert sort_fields("b a", "c  a") == ["a", "b", "c"]


def test_sort_fields_splits_on_any_whitespace():
    assert sort_fields("z\ty\n x", "", "   ") == ["x", "y", "z"]


def test_sort_fields_orders_by_codepoint():
    assert sort_fields("b B a A _") == ["A", "B", "_", "a", "b"]


def test_sort_fields_no_args():
    assert sort_fields() == []


# ============================================================================
#                               parse_equals_pair
# ============================================================================


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("name=value", ("name", "value")),
        ("name=", ("name", "")),
        ("a=b=c", ("a", "b")),
    ],
)
def test_parse_equals_pair(value, expected):
    assert parse_equals_pair(value) == expected


def test_parse_equals_pair_without_equals_raises():
    with pytest.raises(NewtError, match="Expected NAME=VALUE"):
        parse_equals_pair("novalue")

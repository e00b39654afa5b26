"""Tests for pull-based row iteration and output formatting."""

import json

import pytest

from api.cursor import RowCursor
from api.formatters import ResponseFormatter
from shared.exceptions import InvalidInputError
from shared.result import Err, ErrorKind


def make_cursor(n: int, batch_size: int = 2) -> RowCursor:
    return RowCursor(["name", "n"], [(f"row{i}", i) for i in range(n)], batch_size)


def test_batches_advance_the_offset():
    cursor = make_cursor(5)
    assert cursor.next_batch() == [("row0", 0), ("row1", 1)]
    assert cursor.remaining() == 3
    assert cursor.next_batch(10) == [("row2", 2), ("row3", 3), ("row4", 4)]
    assert cursor.exhausted
    assert cursor.next_batch() == []


def test_iteration_yields_only_remaining_rows():
    cursor = make_cursor(3)
    cursor.next_batch(1)
    assert [row[1] for row in cursor] == [1, 2]
    assert list(cursor) == []


def test_non_positive_batch_size_is_rejected():
    with pytest.raises(InvalidInputError):
        make_cursor(1, batch_size=0)


def test_format_json_drains_cursor():
    cursor = make_cursor(3)
    payload = json.loads(ResponseFormatter.format_json(cursor))
    assert payload == [{"name": "row0", "n": 0}, {"name": "row1", "n": 1}, {"name": "row2", "n": 2}]
    assert cursor.exhausted


def test_format_text_has_headers():
    text = ResponseFormatter.format_text(make_cursor(2))
    assert "name" in text.splitlines()[0]
    assert "row1" in text


def test_format_text_empty():
    assert ResponseFormatter.format_text(make_cursor(0)) == "(no rows)"


def test_format_error():
    assert ResponseFormatter.format_error(Err(ErrorKind.INVALID_INPUT, "boom")) == "[error] boom"

"""Tests for top-level comma splitting and unescaping."""

from __future__ import annotations

import pytest

from palconf.splitter import split_raw_array, unescape


def test_split_simple_items() -> None:
    it = split_raw_array("a,b,c")
    assert it.index == 0
    assert [it.next(), it.next(), it.next()] == ["a", "b", "c"]
    assert it.next() is None

    it.reset()
    assert it.index == 0
    assert list(it) == ["a", "b", "c"]


def test_split_keeps_parenthesized_payloads() -> None:
    items = list(split_raw_array("add(1,2),int(42),pow(2,3)"))
    assert items == ["add(1,2)", "int(42)", "pow(2,3)"]


def test_split_counts_nested_parentheses() -> None:
    items = list(split_raw_array("f(g(1,2),3),x"))
    assert items == ["f(g(1,2),3)", "x"]


def test_escaped_comma_does_not_split() -> None:
    items = list(split_raw_array("a\\,b,c"))
    assert items == ["a\\,b", "c"]


def test_empty_input_has_no_items() -> None:
    it = split_raw_array("")
    assert it.count() == 0
    assert it.next() is None


def test_trailing_comma_yields_empty_item() -> None:
    assert list(split_raw_array("a,")) == ["a", ""]
    assert list(split_raw_array(",")) == ["", ""]


def test_unbalanced_close_paren_suppresses_splitting() -> None:
    assert list(split_raw_array("a),b,c")) == ["a),b,c"]


@pytest.mark.parametrize(
    "raw",
    ["", "a", "a,b", "a,,b", " x , y ,z", "one,two,three,", "no commas here"],
)
def test_plain_input_matches_naive_split(raw: str) -> None:
    """Without parentheses or backslashes the splitter is str.split(',')."""
    expected = raw.split(",") if raw else []
    assert list(split_raw_array(raw)) == expected


@pytest.mark.parametrize(
    "raw",
    ["", "a", "a,b,", "add(1,2),int(42)", "a\\,b,c", "(,(,)),", "x)),y"],
)
def test_count_matches_iteration_and_does_not_consume(raw: str) -> None:
    it = split_raw_array(raw)
    n_items = it.count()
    assert it.index == 0
    assert n_items == len(list(it))
    assert it.count() == 0


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("", ""),
        ("a", "a"),
        ("a,b", "a,b"),
        ("a\\,b", "a,b"),
        ("a\\\\b", "a\\b"),
        ("a\\\\,b", "a\\,b"),
        ("a\\,\\,b", "a,,b"),
        ("a\\,\\,b\\,c", "a,,b,c"),
        ("a\\nb", "a\\nb"),
        ("(1\\, 2)", "(1, 2)"),
    ],
)
def test_unescape(raw: str, expected: str) -> None:
    assert unescape(raw) == expected


def test_unescape_is_idempotent_without_backslashes() -> None:
    raw = "add(1,2), plain text"
    assert unescape(raw) == raw
    assert unescape(unescape(raw)) == raw

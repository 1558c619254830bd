"""
Unit tests for the MIMEHeader multimap.
"""

import pytest

from ezpostal.headers import MIMEHeader


class TestLookup:
    """Names are matched case-insensitively."""

    def test_get_ignores_case(self):
        header = MIMEHeader()
        header.set("Content-Type", "text/plain")
        assert header.get("content-type") == "text/plain"
        assert header.get("CONTENT-TYPE") == "text/plain"

    def test_get_missing_returns_default(self):
        header = MIMEHeader()
        assert header.get("X-Missing") is None
        assert header.get("X-Missing", "fallback") == "fallback"

    def test_contains_ignores_case(self):
        header = MIMEHeader({"X-Tag": ["a"]})
        assert "x-tag" in header
        assert "X-Other" not in header

    def test_getitem_missing_raises_key_error(self):
        with pytest.raises(KeyError):
            MIMEHeader()["X-Missing"]


class TestAddAndSet:
    """add() keeps earlier values, set() replaces them."""

    def test_add_appends_values_in_order(self):
        header = MIMEHeader()
        header.add("X-Tag", "a")
        header.add("x-tag", "b")
        assert header.get_all("X-TAG") == ["a", "b"]

    def test_set_replaces_all_values(self):
        header = MIMEHeader({"X-Tag": ["a", "b"]})
        header.set("x-tag", "c")
        assert header.get_all("X-Tag") == ["c"]

    def test_first_spelling_is_kept(self):
        header = MIMEHeader()
        header.add("Content-ID", "<a>")
        header.set("content-id", "<b>")
        assert header.keys() == ["Content-ID"]

    def test_update_adds_string_as_single_value(self):
        header = MIMEHeader()
        header.update({"X-Priority": "1"})
        assert header.get_all("X-Priority") == ["1"]

    def test_get_all_returns_a_copy(self):
        header = MIMEHeader({"X-Tag": ["a"]})
        header.get_all("X-Tag").append("b")
        assert header.get_all("X-Tag") == ["a"]


class TestOrdering:
    """Emission order follows first insertion."""

    def test_items_follow_insertion_order(self):
        header = MIMEHeader()
        header.add("B", "1")
        header.add("A", "2")
        header.add("b", "3")
        assert list(header.items()) == [("B", "1"), ("B", "3"), ("A", "2")]

    def test_set_keeps_position(self):
        header = MIMEHeader()
        header.add("First", "1")
        header.add("Second", "2")
        header.set("first", "x")
        assert header.keys() == ["First", "Second"]

    def test_delete_removes_name(self):
        header = MIMEHeader({"A": ["1"], "B": ["2"]})
        del header["a"]
        assert header.keys() == ["B"]
        assert len(header) == 1

    def test_copy_is_independent(self):
        header = MIMEHeader({"A": ["1"]})
        clone = header.copy()
        clone.add("A", "2")
        assert header.get_all("A") == ["1"]
        assert clone != header

"""Tests for mrel.core.structured module."""

from __future__ import annotations

import pytest

from mrel.core.structured import as_obj_list, as_str_dict, get_bool, get_str, get_table, get_tables


class TestNarrowing:
    def test_as_str_dict(self) -> None:
        assert as_str_dict({"a": 1}) == {"a": 1}
        assert as_str_dict({1: "a"}) is None
        assert as_str_dict([1]) is None

    def test_as_obj_list(self) -> None:
        assert as_obj_list([1, "a"]) == [1, "a"]
        assert as_obj_list("abc") is None


class TestGetters:
    def test_get_str_strips(self) -> None:
        assert get_str({"k": "  v  "}, "k") == "v"
        assert get_str({"k": "   "}, "k") is None
        assert get_str({"k": 1}, "k") is None
        assert get_str({}, "k") is None

    def test_get_bool(self) -> None:
        assert get_bool({"k": False}, "k") is False
        assert get_bool({"k": "false"}, "k") is None

    def test_get_table(self) -> None:
        assert get_table({"t": {"x": 1}}, "t") == {"x": 1}
        assert get_table({"t": 3}, "t") is None

    def test_get_tables(self) -> None:
        assert get_tables({"m": [{"a": 1}, {"b": 2}]}, "m") == [{"a": 1}, {"b": 2}]
        assert get_tables({}, "m") is None

    def test_get_tables_rejects_non_table_entries(self) -> None:
        with pytest.raises(ValueError, match=r"m\[1\] must be a table"):
            get_tables({"m": [{"a": 1}, "oops"]}, "m")

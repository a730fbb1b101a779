"""Unit tests for identity.py - identity parsing and resolution."""

import pytest

from exceptions import ConversionError
from identity import format_identity, parse_identity, resolve_identity


class TestParseIdentity:
    """Tests for parse_identity and format_identity."""

    def test_numeric(self):
        assert parse_identity("42") == 42

    def test_round_trip(self):
        assert format_identity(parse_identity("1337")) == "1337"

    @pytest.mark.parametrize("identity", ["", "abc", "4.2", None])
    def test_non_numeric_raises(self, identity):
        with pytest.raises(ConversionError):
            parse_identity(identity)


class TestResolveIdentity:
    """Tests for resolve_identity function."""

    def test_exact_match_among_neighbours(self):
        records = [{"id": 41}, {"id": 42, "name": "x"}, {"id": 43}]
        assert resolve_identity("42", records) == {"id": 42, "name": "x"}

    def test_not_found(self):
        assert resolve_identity("7", [{"id": 70}, {"id": 17}]) is None

    def test_empty_collection(self):
        assert resolve_identity("1", []) is None

    def test_imprecise_filter_is_ignored(self):
        """Records returned by a loose server-side filter are not trusted."""
        assert resolve_identity("4", [{"id": 42}, {"id": 4}]) == {"id": 4}

    def test_first_match_wins(self):
        records = [{"id": 5, "name": "first"}, {"id": 5, "name": "second"}]
        assert resolve_identity("5", records)["name"] == "first"

    def test_string_comparison(self):
        assert resolve_identity("042", [{"id": 42}]) is None

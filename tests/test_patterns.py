"""Tests for pattern parsing."""

import pytest

from workflow_retention.patterns import is_all_sentinel, parse_pattern_list


class TestParsePatternList:
    """Tests for parse_pattern_list."""

    @pytest.mark.parametrize("pattern", [None, ""])
    def test_empty_pattern(self, pattern) -> None:
        """Test that an empty pattern gives an empty set."""
        assert parse_pattern_list(pattern) == frozenset()

    def test_entries_are_trimmed(self) -> None:
        """Test that whitespace around entries is removed."""
        assert parse_pattern_list(" failure ,cancelled,  timed_out") == {
            "failure",
            "cancelled",
            "timed_out",
        }

    def test_case_is_preserved(self) -> None:
        """Test that entries keep their case."""
        assert parse_pattern_list("Active") == {"Active"}

    def test_single_entry(self) -> None:
        """Test a pattern without commas."""
        assert parse_pattern_list("success") == {"success"}


class TestIsAllSentinel:
    """Tests for is_all_sentinel."""

    @pytest.mark.parametrize("pattern", ["ALL", "all", " All "])
    def test_all(self, pattern) -> None:
        """Test that ALL is recognised in any case."""
        assert is_all_sentinel(pattern) is True

    @pytest.mark.parametrize("pattern", [None, "", "active", "ALL,active"])
    def test_not_all(self, pattern) -> None:
        """Test that other patterns are not the sentinel."""
        assert is_all_sentinel(pattern) is False

"""Tests for duration parsing."""

import pytest

from display_resources import parse_duration, to_seconds


class TestParseDuration:
    """Tests for parse_duration function."""

    def test_units(self) -> None:
        """Test parsing each supported unit."""
        assert parse_duration("250ms") == 250
        assert parse_duration("30s") == 30_000
        assert parse_duration("5m") == 300_000
        assert parse_duration("2h") == 7_200_000
        assert parse_duration("1d") == 86_400_000

    def test_decimal_values(self) -> None:
        """Test that fractional amounts are accepted."""
        assert parse_duration("1.5s") == 1500
        assert parse_duration("0.5m") == 30_000

    def test_surrounding_whitespace_ignored(self) -> None:
        """Test that padding around the value is ignored."""
        assert parse_duration(" 10s ") == 10_000
        assert parse_duration("10 s") == 10_000

    def test_numbers_are_milliseconds(self) -> None:
        """Test that numbers pass through as milliseconds."""
        assert parse_duration(1000) == 1000
        assert parse_duration(0) == 0
        assert parse_duration(12.9) == 12

    def test_invalid_format(self) -> None:
        """Test that invalid formats raise ValueError."""
        for bad in ("invalid", "10x", "s10", "", "10", "-5s"):
            with pytest.raises(ValueError, match="Invalid duration"):
                parse_duration(bad)

    def test_negative_and_bool_rejected(self) -> None:
        """Test that negative numbers and booleans are not durations."""
        with pytest.raises(ValueError, match="Invalid duration"):
            parse_duration(-1)
        with pytest.raises(ValueError, match="Invalid duration"):
            parse_duration(True)


class TestToSeconds:
    """Tests for to_seconds function."""

    def test_converts(self) -> None:
        """Test conversion of durations to seconds."""
        assert to_seconds("2s") == 2.0
        assert to_seconds(10_000) == 10.0
        assert to_seconds("250ms") == 0.25

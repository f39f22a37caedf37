"""Tests for command parsing and leaderboard formatting."""

import pytest

from formatting import (
    ParsedCommand,
    format_points,
    format_time,
    is_likely_tmx_id,
    parse_command,
    truncate,
)


@pytest.mark.parametrize("content", [
    "hello there",
    "map 273080",
    "!tm map 1",
    "",
    "   ",
    "go d!help",
])
def test_parse_command_ignores_text_without_prefix(content):
    assert parse_command(content) is None


def test_parse_command_splits_name_and_args():
    assert parse_command("god!map 273080") == ParsedCommand("map", ["273080"])


def test_parse_command_prefix_is_case_insensitive():
    parsed = parse_command("  GOD!Map   273080   extra ")
    assert parsed.name == "map"
    assert parsed.args == ["273080", "extra"]


def test_parse_command_empty_remainder_yields_empty_name():
    assert parse_command("god!") == ParsedCommand("", [])
    assert parse_command("god!   ") == ParsedCommand("", [])


def test_parse_command_custom_prefix():
    assert parse_command("tm?all", prefix="tm?") == ParsedCommand("all", [])
    assert parse_command("god!all", prefix="tm?") is None


def test_format_time_examples():
    assert format_time(125000) == "02:05.000"
    assert format_time(999) == "00:00.999"
    assert format_time(0) == "00:00.000"
    assert format_time(3723456) == "62:03.456"


def test_format_time_accepts_numeric_strings():
    assert format_time("83456") == "01:23.456"


def test_format_time_falls_back_to_original_value():
    assert format_time(float("nan")) == "nan"
    assert format_time(None) == "None"
    assert format_time("fast") == "fast"


@pytest.mark.parametrize("value,expected", [
    ("273080", True),
    ("  273080 ", True),
    ("123", True),
    ("123456789012", True),
    ("12", False),
    ("12a", False),
    ("1234567890123", False),
    ("", False),
    (None, False),
    ("-273080", False),
])
def test_is_likely_tmx_id(value, expected):
    assert is_likely_tmx_id(value) is expected


def test_format_points_uses_thousands_separator():
    assert format_points(1000) == "1,000"
    assert format_points(1234567) == "1,234,567"
    assert format_points("2500") == "2,500"
    assert format_points(999) == "999"


def test_format_points_falls_back_to_raw_value():
    assert format_points(None) == "None"
    assert format_points("n/a") == "n/a"


def test_truncate_limits_reply_length():
    assert len(truncate("x" * 5000)) == 1500
    assert truncate("short") == "short"


@pytest.mark.parametrize("value", ["1_000", "1_000.5", "inf", "  -Infinity "])
def test_numbers_only_accept_plain_decimal_spellings(value):
    assert format_points(value) == value
    assert format_time(value) == value

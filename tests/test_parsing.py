"""Tests for numeric text input and display formatting."""

import pytest

from car_tco.parsing import format_input, format_number, parse_int, parse_number


@pytest.mark.parametrize(
    "text, expected",
    [
        ("1,000,000", 1_000_000),
        ("20000", 20_000),
        ("12.5", 12.5),
        ("  2,500.75", 2_500.75),
        ("-300", -300),
        (".5", 0.5),
        ("15abc", 15),
        ("1e3", 1_000),
    ],
)
def test_parse_number(text: str, expected: float) -> None:
    assert parse_number(text) == pytest.approx(expected)


@pytest.mark.parametrize("text", ["", "abc", ",", "-", ".", None, "1e999"])
def test_unparseable_input_is_zero(text) -> None:
    assert parse_number(text) == 0.0


def test_parse_int_truncates() -> None:
    assert parse_int("10.9") == 10
    assert parse_int("") == 0


def test_format_number() -> None:
    assert format_number(1_465_000) == "1,465,000"
    assert format_number(2.142857, 2) == "2.14"
    assert format_number(0) == "0"
    assert format_number(-0.2) == "0"
    assert format_number(-30_000) == "-30,000"


def test_format_input_drops_trailing_zeros() -> None:
    assert format_input(1_000_000) == "1,000,000"
    assert format_input(2.5) == "2.5"
    assert format_input(0) == "0"
    assert parse_number(format_input(1_234_567.25)) == 1_234_567.25

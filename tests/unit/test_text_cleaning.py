"""Unit tests for answer and text normalisation helpers."""
from __future__ import annotations

import pytest

from src.utils.text_cleaning import (
    contains_keyword,
    is_affirmative,
    is_valid_phone,
    parse_whole_number,
    phone_digits,
)


@pytest.mark.parametrize("answer", ["S", "s", "  s ", "S\t"])
def test_is_affirmative_ignores_case_and_whitespace(answer: str) -> None:
    assert is_affirmative(answer)


@pytest.mark.parametrize("answer", ["N", "", "si", "yes", None])
def test_is_affirmative_rejects_anything_else(answer) -> None:
    assert not is_affirmative(answer)


def test_phone_digits_strips_spaces_and_hyphens() -> None:
    assert phone_digits("600-123 456") == "600123456"


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("600123456", True),
        ("600 123 456", True),
        ("600-12-34-56", True),
        ("968 000 101 22", True),
        ("60012345", False),
        ("600 12a 456", False),
        ("+34 600 123 456", False),
        ("", False),
    ],
)
def test_is_valid_phone_requires_nine_digits(raw: str, expected: bool) -> None:
    assert is_valid_phone(raw) is expected


def test_contains_keyword_is_accent_and_case_insensitive() -> None:
    assert contains_keyword("Gran Vía, MÚRCIA centro", "murcia")
    assert not contains_keyword("Cartagena", "murcia")
    assert not contains_keyword("Murcia", "")


@pytest.mark.parametrize(("answer", "expected"), [("7", 7), (" 10 ", 10), ("007", 7)])
def test_parse_whole_number_accepts_plain_digits(answer: str, expected: int) -> None:
    assert parse_whole_number(answer) == expected


@pytest.mark.parametrize("answer", ["", "1_0", "-3", "+3", "7.5", "siete", "１０", "٧"])
def test_parse_whole_number_rejects_other_numerals(answer: str) -> None:
    assert parse_whole_number(answer) is None


def test_is_valid_phone_rejects_non_ascii_digits() -> None:
    assert not is_valid_phone("٦٠٠١٢٣٤٥٦")

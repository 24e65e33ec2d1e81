"""Utility functions for normalising console answers and free text."""
from __future__ import annotations

import re
import unicodedata

from src.utils.logger import logger

AFFIRMATIVE_TOKEN = "S"

_SEPARATOR_PATTERN = re.compile(r"[\s-]")
_PHONE_DIGITS_PATTERN = re.compile(r"[0-9]{9,}")
_WHOLE_NUMBER_PATTERN = re.compile(r"[0-9]+")
_MULTISPACE_PATTERN = re.compile(r"\s+")


def strip_accents(value: str) -> str:
    """Remove diacritics to ease string comparisons."""
    normalized = unicodedata.normalize("NFKD", value)
    return "".join(char for char in normalized if not unicodedata.combining(char))


def normalize_text(text: str) -> str:
    """Lower-case, strip accents and collapse whitespace."""
    normalized = strip_accents(text.lower())
    return _MULTISPACE_PATTERN.sub(" ", normalized).strip()


def is_affirmative(answer: str | None, token: str = AFFIRMATIVE_TOKEN) -> bool:
    """Return ``True`` when ``answer`` matches the affirmative token, ignoring case."""
    if answer is None:
        return False
    return answer.strip().casefold() == token.casefold()


def phone_digits(raw_phone: str) -> str:
    """Project a phone number onto its characters minus whitespace and hyphens."""
    return _SEPARATOR_PATTERN.sub("", raw_phone)


def is_valid_phone(raw_phone: str) -> bool:
    digits = phone_digits(raw_phone.strip())
    valid = _PHONE_DIGITS_PATTERN.fullmatch(digits) is not None
    logger.debug("Phone '{}' validated as {}", raw_phone, valid)
    return valid


def parse_whole_number(answer: str) -> int | None:
    """Parse a plain ASCII decimal answer such as ``"7"``; anything else yields ``None``."""
    candidate = answer.strip()
    if _WHOLE_NUMBER_PATTERN.fullmatch(candidate) is None:
        return None
    return int(candidate)


def contains_keyword(text: str, keyword: str) -> bool:
    """Accent- and case-insensitive substring check."""
    if not keyword:
        return False
    return normalize_text(keyword) in normalize_text(text)


__all__ = [
    "AFFIRMATIVE_TOKEN",
    "contains_keyword",
    "is_affirmative",
    "is_valid_phone",
    "normalize_text",
    "parse_whole_number",
    "phone_digits",
    "strip_accents",
]

"""Helpers for reading numbers written with non-ASCII numeral systems."""

from __future__ import annotations

import re
import unicodedata
from typing import Dict, Optional


# Kanji digits, including the positional zero used in years like 二〇二四.
KANJI_DIGITS: Dict[str, int] = {
    "〇": 0,
    "零": 0,
    "一": 1,
    "壱": 1,
    "二": 2,
    "弐": 2,
    "三": 3,
    "参": 3,
    "四": 4,
    "五": 5,
    "六": 6,
    "七": 7,
    "八": 8,
    "九": 9,
}

# Multipliers applied to the digit immediately before them.
KANJI_SMALL_UNITS: Dict[str, int] = {
    "十": 10,
    "拾": 10,
    "百": 100,
    "千": 1_000,
}

# Multipliers applied to the whole section accumulated so far.
KANJI_LARGE_UNITS: Dict[str, int] = {
    "万": 10_000,
    "億": 100_000_000,
    "兆": 1_000_000_000_000,
}

KANJI_CHARS = frozenset(KANJI_DIGITS) | frozenset(KANJI_SMALL_UNITS) | frozenset(KANJI_LARGE_UNITS)

_GROUPED_NUMBER = re.compile(r"^[+-]?\d{1,3}(,\d{3})+(\.\d+)?$")


def normalize_numeral_text(text: str) -> str:
    """Fold full-width digits, signs and decimal points to ASCII."""
    return unicodedata.normalize("NFKC", text).strip()


def contains_kanji_numeral(text: str) -> bool:
    return any(ch in KANJI_CHARS for ch in text)


def parse_kanji_numeral(text: str) -> Optional[int]:
    """Parse a kanji numeral such as 三百二十 or 一万二千 into an int.

    Arabic digits may be mixed in (1万2千). Returns None when the text holds
    anything else.
    """
    if not text:
        return None
    total = 0
    section = 0
    current = 0
    seen_digit = False
    for ch in text:
        if ch in KANJI_DIGITS:
            current = current * 10 + KANJI_DIGITS[ch]
            seen_digit = True
        elif ch.isdecimal():
            current = current * 10 + int(ch)
            seen_digit = True
        elif ch in KANJI_SMALL_UNITS:
            section += (current or 1) * KANJI_SMALL_UNITS[ch]
            current = 0
            seen_digit = True
        elif ch in KANJI_LARGE_UNITS:
            section += current
            total += (section or 1) * KANJI_LARGE_UNITS[ch]
            section = 0
            current = 0
            seen_digit = True
        else:
            return None
    if not seen_digit:
        return None
    return total + section + current


def strip_international_formatting(text: str) -> str:
    """Drop currency symbols and thousands separators (€1,234.50 -> 1234.50)."""
    cleaned = "".join(ch for ch in text if unicodedata.category(ch) != "Sc").strip()
    if _GROUPED_NUMBER.match(cleaned):
        cleaned = cleaned.replace(",", "")
    return cleaned


__all__ = [
    "KANJI_DIGITS",
    "KANJI_SMALL_UNITS",
    "KANJI_LARGE_UNITS",
    "normalize_numeral_text",
    "contains_kanji_numeral",
    "parse_kanji_numeral",
    "strip_international_formatting",
]

"""
Quantity token parsing: digit strings and English/French number words.

Policy:
1. Digit strings -> int
2. Single words from the combined table (one..twenty, tens, hundred / un..vingt, trente..cent)
3. Hyphenated compounds (twenty-five, vingt-trois, soixante-dix-sept, quatre-vingt-dix-neuf, deux-cents)
4. Anything else -> 1 (permissive default, see parse_number_with_status for the explicit flag)
"""
from __future__ import annotations

import re
from typing import Optional

from .models import ParsedNumber

DEFAULT_QUANTITY = 1

ENGLISH_NUMBER_WORDS = {
    "zero": 0,
    "one": 1, "two": 2, "three": 3, "four": 4, "five": 5,
    "six": 6, "seven": 7, "eight": 8, "nine": 9, "ten": 10,
    "eleven": 11, "twelve": 12, "thirteen": 13, "fourteen": 14, "fifteen": 15,
    "sixteen": 16, "seventeen": 17, "eighteen": 18, "nineteen": 19, "twenty": 20,
    "thirty": 30, "forty": 40, "fifty": 50, "sixty": 60, "seventy": 70,
    "eighty": 80, "ninety": 90,
    "hundred": 100, "hundreds": 100,
}

FRENCH_NUMBER_WORDS = {
    "zéro": 0,
    "un": 1, "une": 1, "deux": 2, "trois": 3, "quatre": 4, "cinq": 5,
    "six": 6, "sept": 7, "huit": 8, "neuf": 9, "dix": 10,
    "onze": 11, "douze": 12, "treize": 13, "quatorze": 14, "quinze": 15,
    "seize": 16, "dix-sept": 17, "dix-huit": 18, "dix-neuf": 19, "vingt": 20,
    "trente": 30, "quarante": 40, "cinquante": 50, "soixante": 60,
    "soixante-dix": 70, "septante": 70,
    "quatre-vingt": 80, "quatre-vingts": 80, "huitante": 80,
    "quatre-vingt-dix": 90, "nonante": 90,
    "cent": 100, "cents": 100,
}

NUMBER_WORDS = {**ENGLISH_NUMBER_WORDS, **FRENCH_NUMBER_WORDS}

# Dropped inside compounds: "soixante-et-onze", "vingt-et-un", "hundred-and-five"
_JOINERS = frozenset({"et", "and"})

_DIGITS = re.compile(r"^\d+$")


def _parse_compound(word: str) -> Optional[int]:
    """
    Resolve a hyphenated number word by greedy longest-prefix lookup.
    'hundred'/'cent' multiplies what precedes it; any other part is added and must be
    smaller than the previous part, which itself must be a tens or hundreds value.
    """
    parts = [p for p in word.split("-") if p and p not in _JOINERS]
    if not parts:
        return None

    total = 0
    last: Optional[int] = None
    i = 0
    while i < len(parts):
        value = None
        for j in range(len(parts), i, -1):
            value = NUMBER_WORDS.get("-".join(parts[i:j]))
            if value is not None:
                break
        if value is None:
            return None
        i = j

        if value == 100:
            if total >= 100:
                return None
            total = (total or 1) * 100
            last = 100
            continue
        if last is not None and (value >= last or last % 10):
            return None
        total += value
        last = value

    return total


def try_parse_number(token: Optional[str]) -> Optional[int]:
    """Strict parse: the integer value, or None when the token is not a quantity."""
    if token is None:
        return None
    t = str(token).strip().lower()
    if not t:
        return None
    if _DIGITS.match(t):
        return int(t)
    value = NUMBER_WORDS.get(t)
    if value is not None:
        return value
    if "-" in t:
        return _parse_compound(t)
    return None


def parse_number_with_status(token: Optional[str]) -> ParsedNumber:
    value = try_parse_number(token)
    if value is None:
        return ParsedNumber(value=DEFAULT_QUANTITY, parsed=False)
    return ParsedNumber(value=value, parsed=True)


def parse_number(token: Optional[str]) -> int:
    """
    Convert a quantity token to an integer.
    Unrecognized, empty or None tokens resolve to 1; callers cannot tell a
    fallback from a spoken "one" here (use parse_number_with_status for that).
    """
    return parse_number_with_status(token).value


def is_number_token(token: Optional[str]) -> bool:
    return try_parse_number(token) is not None

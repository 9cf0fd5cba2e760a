import pytest

from inventory_pipeline.number_words import (
    is_number_token,
    parse_number,
    parse_number_with_status,
    try_parse_number,
)

ENGLISH = {
    1: "one", 2: "two", 3: "three", 4: "four", 5: "five", 6: "six", 7: "seven",
    8: "eight", 9: "nine", 10: "ten", 11: "eleven", 12: "twelve", 13: "thirteen",
    14: "fourteen", 15: "fifteen", 16: "sixteen", 17: "seventeen", 18: "eighteen",
    19: "nineteen", 20: "twenty", 30: "thirty", 40: "forty", 50: "fifty",
    60: "sixty", 70: "seventy", 80: "eighty", 90: "ninety", 100: "hundred",
}

FRENCH = {
    1: "un", 2: "deux", 3: "trois", 4: "quatre", 5: "cinq", 6: "six", 7: "sept",
    8: "huit", 9: "neuf", 10: "dix", 11: "onze", 12: "douze", 13: "treize",
    14: "quatorze", 15: "quinze", 16: "seize", 17: "dix-sept", 18: "dix-huit",
    19: "dix-neuf", 20: "vingt", 30: "trente", 40: "quarante", 50: "cinquante",
    60: "soixante", 70: "soixante-dix", 80: "quatre-vingt", 90: "quatre-vingt-dix",
    100: "cent",
}


@pytest.mark.parametrize("value,word", sorted(ENGLISH.items()))
def test_english_words(value, word):
    assert parse_number(word) == value


@pytest.mark.parametrize("value,word", sorted(FRENCH.items()))
def test_french_words(value, word):
    assert parse_number(word) == value


def test_quatre_vingt_dix():
    assert parse_number("quatre-vingt-dix") == 90


@pytest.mark.parametrize(
    "word,expected",
    [
        ("twenty-five", 25),
        ("ninety-nine", 99),
        ("vingt-trois", 23),
        ("vingt-et-un", 21),
        ("soixante-et-onze", 71),
        ("soixante-dix-sept", 77),
        ("quatre-vingt-onze", 91),
        ("quatre-vingt-dix-neuf", 99),
        ("deux-cents", 200),
        ("cent-vingt", 120),
        ("two-hundred-fifty", 250),
        ("quatre-vingts", 80),
    ],
)
def test_hyphenated_compounds(word, expected):
    assert parse_number(word) == expected


def test_case_insensitive():
    assert parse_number("Thirty") == 30
    assert parse_number("QUATRE-VINGT-DIX") == 90
    assert parse_number("Cinq") == 5


@pytest.mark.parametrize("token", ["42", "0", "7", "1000"])
def test_digit_passthrough(token):
    assert parse_number(token) == int(token)


@pytest.mark.parametrize("token", [None, "", "   ", "xyzzy", "bottle", "five-three", "-"])
def test_default_fallback(token):
    assert parse_number(token) == 1


def test_fallback_is_flagged():
    assert parse_number_with_status("xyzzy").parsed is False
    assert parse_number_with_status("xyzzy").value == 1
    spoken = parse_number_with_status("one")
    assert spoken.parsed is True
    assert spoken.value == 1


def test_strict_parse_distinguishes_unknown_tokens():
    assert try_parse_number("wine") is None
    assert try_parse_number("zero") == 0
    assert is_number_token("douze")
    assert not is_number_token("de")

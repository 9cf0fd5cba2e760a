"""
Line item extraction from voice transcripts and OCR'd invoice text.
Ordered grammar rules over a token stream; the first rule that matches at a position
claims its tokens, and scanning resumes after them.

Grammars, in priority order:
1. <quantity> <unit> of <product>      "five bottles of wine", "trois bouteilles de vin"
2. <product> x <quantity> <unit>       "wine x 5 bottles", "Wine - 5 bottles"
3. <product> (<quantity> <unit>)       "Beer (2 boxes)"
4. <quantity> <product>                "3 lemons"
5. <unit> <quantity> <product>         "bottles 5 wine"

Any match may be followed by a printed price ("- 10000 JPY"), which is kept on the item.
Total and subtotal lines are skipped.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, replace
from typing import Optional

import structlog

from .logging_config import configure_default_logging
from .models import ExtractionResult, NormalizedItem, RawItem
from .number_words import try_parse_number
from .units import is_known_unit, normalize_unit

logger = structlog.get_logger()

BOUNDARY_TOKENS = frozenset({",", ";", ".", "!", "?", ":"})
CONNECTOR_WORDS = frozenset({"and", "et", "plus", "then", "puis", "also", "aussi", "&"})
OF_WORDS = frozenset({"of", "de", "d'", "du", "des"})
TIMES_SEPARATORS = frozenset({"x", "×", "*", "-"})
PAREN_TOKENS = frozenset({"(", ")"})
TOTAL_WORDS = frozenset({"total", "totals", "subtotal", "sub-total", "sous-total", "合計", "小計"})
# "wine in 2 rooms": the place is not part of the product
LOCATION_WORDS = frozenset({"in", "at", "dans", "à", "au", "aux"})

CURRENCIES = {
    "usd": "USD", "eur": "EUR", "gbp": "GBP", "jpy": "JPY", "cny": "CNY",
    "cad": "CAD", "chf": "CHF", "euro": "EUR", "euros": "EUR", "yen": "JPY",
    "$": "USD", "€": "EUR", "£": "GBP", "¥": "JPY", "円": "JPY",
}
CURRENCY_SYMBOLS = frozenset({"$", "€", "£", "¥", "円"})

# Longest run of tokens read as one spoken quantity ("quatre vingt dix neuf")
MAX_QUANTITY_TOKENS = 5

_NUMBER_JOINERS = frozenset({"et", "and"})
_LINE_END = frozenset({";", ".", "!", "?"})

_TOKEN = re.compile(r"\d+[.,]\d+|[^\s,;.!?:]+|[,;.!?:]")
_AMOUNT = re.compile(r"^\d+(?:[.,]\d+)?$")
_ELISION = re.compile(r"\bd['’]")
_TIMES_BEFORE_DIGIT = re.compile(r"(?<!\w)([x×*])(?=\d)")
_IGNORED_CHARS = re.compile(r"[\"“”«»\[\]{}]")
_SPLIT_CHARS = re.compile(r"([()$€£¥円])")
_NEWLINES = re.compile(r"[\r\n]+")


def tokenize(text: str | None) -> list[str]:
    """Lowercase and split text into word, decimal and punctuation tokens."""
    if not text:
        return []
    t = _IGNORED_CHARS.sub(" ", text.lower())
    t = _SPLIT_CHARS.sub(r" \1 ", t)
    # One invoice line never runs into the next
    t = _NEWLINES.sub(" ; ", t)
    t = _ELISION.sub("d' ", t)
    t = _TIMES_BEFORE_DIGIT.sub(r"\1 ", t)
    return _TOKEN.findall(t)


def _is_stop(token: str) -> bool:
    return (
        token in BOUNDARY_TOKENS
        or token in CONNECTOR_WORDS
        or token in TIMES_SEPARATORS
        or token in PAREN_TOKENS
        or token in TOTAL_WORDS
        or token in CURRENCY_SYMBOLS
    )


def _is_word(token: str) -> bool:
    """A token that can be part of a product name or stand as a unit."""
    return not _is_stop(token) and token not in OF_WORDS and try_parse_number(token) is None


def parse_amount(token: str) -> Optional[float]:
    """'15000' -> 15000.0, '29.99' / '29,99' -> 29.99, '10,000' -> 10000.0; None if not an amount."""
    if not _AMOUNT.match(token):
        return None
    if "," in token:
        whole, frac = token.split(",")
        token = whole + frac if len(frac) == 3 else f"{whole}.{frac}"
    return float(token)


@dataclass(frozen=True)
class _Quantity:
    value: int
    end: int


@dataclass(frozen=True)
class _Price:
    amount: float
    currency: Optional[str]
    end: int


@dataclass(frozen=True)
class GrammarMatch:
    rule: str
    raw_name: str
    quantity: int
    unit: str
    start: int
    end: int
    price: Optional[float] = None
    currency: Optional[str] = None


def read_quantity(tokens: list[str], i: int) -> Optional[_Quantity]:
    """
    Read a quantity starting at tokens[i]. Digit strings are a single token;
    number words may span several tokens and are joined as a hyphenated compound.
    """
    if i >= len(tokens) or _is_stop(tokens[i]) or tokens[i] in _NUMBER_JOINERS:
        return None
    first = tokens[i]
    if first.isdecimal():
        return _Quantity(int(first), i + 1)

    limit = min(len(tokens), i + MAX_QUANTITY_TOKENS)
    for j in range(limit, i, -1):
        span = tokens[i:j]
        if span[-1] in _NUMBER_JOINERS:
            continue
        if any(t.isdecimal() or (t not in _NUMBER_JOINERS and try_parse_number(t) is None) for t in span):
            continue
        value = try_parse_number("-".join(span))
        if value is not None:
            return _Quantity(value, j)
    return None


def read_price(tokens: list[str], i: int) -> Optional[_Price]:
    """
    Read a printed price "- <amount> [currency]" (or "- $ <amount>") at tokens[i].
    The price must close the item: it is followed by a boundary, a connector or the end.
    """
    if i >= len(tokens) or tokens[i] != "-":
        return None
    j = i + 1
    currency = None
    if j < len(tokens) and tokens[j] in CURRENCY_SYMBOLS:
        currency = CURRENCIES[tokens[j]]
        j += 1
    amount = parse_amount(tokens[j]) if j < len(tokens) else None
    if amount is None:
        return None
    j += 1
    if currency is None and j < len(tokens) and tokens[j] in CURRENCIES:
        currency = CURRENCIES[tokens[j]]
        j += 1
    if j < len(tokens) and tokens[j] not in BOUNDARY_TOKENS and tokens[j] not in CONNECTOR_WORDS:
        return None
    return _Price(amount, currency, j)


def _starts_located_quantity(tokens: list[str], j: int) -> bool:
    return tokens[j] in LOCATION_WORDS and read_quantity(tokens, j + 1) is not None


def read_product(tokens: list[str], start: int) -> int:
    """Return the end index of the product span starting at `start` (== start when empty)."""
    if start < len(tokens) and tokens[start] in OF_WORDS:
        return start
    j = start
    while (
        j < len(tokens)
        and not _is_stop(tokens[j])
        and try_parse_number(tokens[j]) is None
        and not _starts_located_quantity(tokens, j)
    ):
        j += 1
    return j


class GrammarRule:
    """One line-item word order. Subclasses implement match()."""
    name = "rule"

    def match(self, tokens: list[str], i: int) -> Optional[GrammarMatch]:
        raise NotImplementedError

    def _build(self, tokens: list[str], start: int, name_span: tuple[int, int],
               quantity: int, unit: str, end: int) -> GrammarMatch:
        return GrammarMatch(
            rule=self.name,
            raw_name=" ".join(tokens[name_span[0]:name_span[1]]),
            quantity=quantity,
            unit=unit,
            start=start,
            end=end,
        )


class QuantityUnitOfProduct(GrammarRule):
    """<quantity> <unit> of <product>; the connector is optional after a known unit."""
    name = "quantity_unit_of_product"

    def match(self, tokens, i):
        q = read_quantity(tokens, i)
        if q is None or q.end >= len(tokens):
            return None
        unit = tokens[q.end]
        if not _is_word(unit):
            return None
        product_start = q.end + 1
        if product_start < len(tokens) and tokens[product_start] in OF_WORDS:
            product_start += 1
        elif not is_known_unit(unit):
            return None
        product_end = read_product(tokens, product_start)
        if product_end == product_start:
            return None
        return self._build(tokens, i, (product_start, product_end), q.value, unit, product_end)


class ProductTimesQuantityUnit(GrammarRule):
    """<product> x <quantity> <unit>; the unit must be a known unit."""
    name = "product_times_quantity_unit"

    def match(self, tokens, i):
        if i >= len(tokens) or not _is_word(tokens[i]):
            return None
        k = read_product(tokens, i)
        if k >= len(tokens) or tokens[k] not in TIMES_SEPARATORS:
            return None
        q = read_quantity(tokens, k + 1)
        if q is None or q.end >= len(tokens) or not is_known_unit(tokens[q.end]):
            return None
        return self._build(tokens, i, (i, k), q.value, tokens[q.end], q.end + 1)


class ProductQuantityUnitInParens(GrammarRule):
    """<product> (<quantity> <unit>), as printed on invoice lines."""
    name = "product_quantity_unit_in_parens"

    def match(self, tokens, i):
        if i >= len(tokens) or not _is_word(tokens[i]):
            return None
        k = read_product(tokens, i)
        if k == i or k + 3 >= len(tokens) or tokens[k] != "(":
            return None
        q = read_quantity(tokens, k + 1)
        if q is None or q.end + 1 >= len(tokens):
            return None
        unit = tokens[q.end]
        if not _is_word(unit) or tokens[q.end + 1] != ")":
            return None
        return self._build(tokens, i, (i, k), q.value, unit, q.end + 2)


class QuantityProduct(GrammarRule):
    """<quantity> <product> with no unit token."""
    name = "quantity_product"

    def match(self, tokens, i):
        q = read_quantity(tokens, i)
        if q is None:
            return None
        product_end = read_product(tokens, q.end)
        if product_end == q.end:
            return None
        # A lone unit word is a count without a product ("3 cans")
        if product_end - q.end == 1 and is_known_unit(tokens[q.end]):
            return None
        # An amount of money ("15000 JPY") is not a line item
        if tokens[q.end] in CURRENCIES:
            return None
        return self._build(tokens, i, (q.end, product_end), q.value, "", product_end)


class UnitQuantityProduct(GrammarRule):
    """<unit> <quantity> <product>; the unit must be a known unit."""
    name = "unit_quantity_product"

    def match(self, tokens, i):
        if i >= len(tokens) or not _is_word(tokens[i]) or not is_known_unit(tokens[i]):
            return None
        q = read_quantity(tokens, i + 1)
        if q is None:
            return None
        product_end = read_product(tokens, q.end)
        if product_end == q.end:
            return None
        return self._build(tokens, i, (q.end, product_end), q.value, tokens[i], product_end)


DEFAULT_RULES: tuple[GrammarRule, ...] = (
    QuantityUnitOfProduct(),
    ProductTimesQuantityUnit(),
    ProductQuantityUnitInParens(),
    QuantityProduct(),
    UnitQuantityProduct(),
)


def _line_end(tokens: list[str], i: int) -> int:
    while i < len(tokens) and tokens[i] not in _LINE_END:
        i += 1
    return i


def _skip_non_item(tokens: list[str], i: int) -> int:
    """Index past text at tokens[i] that never yields an item (totals, places, stray prices), else i."""
    if tokens[i] in TOTAL_WORDS:
        return _line_end(tokens, i)
    if tokens[i] in LOCATION_WORDS:
        q = read_quantity(tokens, i + 1)
        if q is not None:
            return read_product(tokens, q.end)
    price = read_price(tokens, i)
    if price is not None:
        return price.end
    return i


def scan(tokens: list[str], rules: tuple[GrammarRule, ...] = DEFAULT_RULES) -> list[GrammarMatch]:
    """Left-to-right scan; a matched window is never revisited."""
    matches: list[GrammarMatch] = []
    i = 0
    while i < len(tokens):
        skipped = _skip_non_item(tokens, i)
        if skipped != i:
            i = skipped
            continue
        for rule in rules:
            m = rule.match(tokens, i)
            if m is not None:
                price = read_price(tokens, m.end)
                if price is not None:
                    m = replace(m, price=price.amount, currency=price.currency, end=price.end)
                matches.append(m)
                i = m.end
                break
        else:
            i += 1
    return matches


def extract_raw_items(text: str | None, rules: tuple[GrammarRule, ...] = DEFAULT_RULES) -> list[RawItem]:
    """Grammar matches as RawItems, units not yet normalized."""
    if not text or not text.strip():
        return []
    tokens = tokenize(text)
    return [
        RawItem(
            raw_name=m.raw_name,
            quantity=m.quantity,
            unit=m.unit,
            price=m.price,
            currency=m.currency,
            source_text=" ".join(tokens[m.start:m.end]),
        )
        for m in scan(tokens, rules)
    ]


def normalize_item(raw: RawItem) -> NormalizedItem:
    return NormalizedItem(
        name=raw.raw_name,
        quantity=raw.quantity,
        unit=normalize_unit(raw.unit),
        price=raw.price,
        currency=raw.currency,
        source_text=raw.source_text,
    )


def extract(text: str | None, rules: tuple[GrammarRule, ...] = DEFAULT_RULES) -> ExtractionResult:
    """Extract normalized line items from a transcript or OCR text, in source order."""
    configure_default_logging()
    items = tuple(normalize_item(raw) for raw in extract_raw_items(text, rules))
    logger.info("items_extracted", count=len(items), text_length=len(text or ""))
    return ExtractionResult(items=items)


def extract_items(text: str | None) -> list[NormalizedItem]:
    return list(extract(text).items)

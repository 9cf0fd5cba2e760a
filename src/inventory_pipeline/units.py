"""
Unit normalization for spoken and printed inventory units.

Policy:
1. Lowercase, then look the token up in UNIT_ALIASES (English, French, invoice abbreviations)
2. Not found: strip a plural suffix (-s, then -es) and retry; only recognized stems are singularized
3. Still not found: return the lowercased token unchanged (lossy passthrough, not an error)

Every canonical unit maps to itself, so normalize_unit is idempotent.
"""
from __future__ import annotations

from typing import Optional

# --- Canonical English units ---

CONTAINER_UNITS = frozenset({
    "bottle", "can", "box", "case", "crate", "pack", "bag", "carton",
    "jar", "barrel", "keg", "bucket", "tray", "roll",
})

COUNT_UNITS = frozenset({"piece", "unit", "dozen", "pair"})

MEASURE_UNITS = frozenset({"kg", "g", "l", "ml", "cl", "lb", "oz", "gallon"})

CANONICAL_UNITS = CONTAINER_UNITS | COUNT_UNITS | MEASURE_UNITS

# Raw (singular) token -> canonical unit
UNIT_ALIASES = {
    **{u: u for u in CANONICAL_UNITS},
    # English spellings and invoice abbreviations
    "btl": "bottle", "bt": "bottle",
    "tin": "can",
    "bx": "box",
    "cs": "case",
    "pk": "pack", "pkg": "pack", "package": "pack", "packet": "pack",
    "sack": "bag", "bg": "bag",
    "ctn": "carton", "ct": "carton",
    "pc": "piece", "pcs": "piece", "ea": "unit", "each": "unit", "item": "unit",
    "doz": "dozen", "dz": "dozen",
    "pr": "pair",
    "kilo": "kg", "kilogram": "kg", "kilogramme": "kg",
    "gram": "g", "gramme": "g", "gr": "g",
    "liter": "l", "litre": "l",
    "milliliter": "ml", "millilitre": "ml",
    "centiliter": "cl", "centilitre": "cl",
    "pound": "lb", "lbs": "lb",
    "ounce": "oz",
    "gal": "gallon",
    # French
    "bouteille": "bottle",
    "cannette": "can", "canette": "can",
    "boîte": "box", "boite": "box", "boxe": "box",
    "caisse": "case",
    "cageot": "crate", "cagette": "crate",
    "paquet": "pack", "sachet": "bag", "sac": "bag",
    "bocal": "jar", "bocaux": "jar", "pot": "jar",
    "fût": "barrel", "fut": "barrel", "tonneau": "barrel", "tonneaux": "barrel",
    "seau": "bucket", "seaux": "bucket",
    "barquette": "tray", "plateau": "tray", "plateaux": "tray",
    "rouleau": "roll", "rouleaux": "roll",
    "pièce": "piece",
    "unité": "unit", "unite": "unit",
    "douzaine": "dozen",
    "paire": "pair",
}

_PLURAL_SUFFIXES = ("s", "es")


def _lookup(token: str) -> Optional[str]:
    canonical = UNIT_ALIASES.get(token)
    if canonical is not None:
        return canonical
    for suffix in _PLURAL_SUFFIXES:
        if len(token) > len(suffix) + 1 and token.endswith(suffix):
            canonical = UNIT_ALIASES.get(token[: -len(suffix)])
            if canonical is not None:
                return canonical
    return None


def normalize_unit(token: Optional[str]) -> str:
    """Map a raw unit token to its canonical English unit. None -> ''."""
    if token is None:
        return ""
    t = str(token).strip().lower()
    if not t:
        return ""
    return _lookup(t) or t


def is_known_unit(token: Optional[str]) -> bool:
    """True if the token normalizes to a canonical unit."""
    if not token:
        return False
    return _lookup(str(token).strip().lower()) is not None

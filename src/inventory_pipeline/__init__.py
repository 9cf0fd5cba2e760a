"""
Inventory pipeline: transcript / OCR text -> line items -> unit normalization -> catalog matching.
"""

from .pipeline import process_text, reconcile, summarize
from .parsers import extract, extract_items
from .matching import find_best_match, score
from .number_words import parse_number
from .units import normalize_unit
from .models import CatalogProduct, MatchResult, NormalizedItem, ReconciliationResult

__all__ = [
    "process_text",
    "reconcile",
    "summarize",
    "extract",
    "extract_items",
    "find_best_match",
    "score",
    "parse_number",
    "normalize_unit",
    "CatalogProduct",
    "MatchResult",
    "NormalizedItem",
    "ReconciliationResult",
]

"""
Fuzzy product matching: normalized Levenshtein similarity against the catalog.
"""
from __future__ import annotations

from typing import Optional, Sequence

from .config import get_settings
from .models import CatalogProduct


def levenshtein_distance(a: str, b: str) -> int:
    """Edit distance with unit-cost insertion, deletion and substitution."""
    m, n = len(a), len(b)
    dp = [[0] * (n + 1) for _ in range(m + 1)]
    for i in range(m + 1):
        dp[i][0] = i
    for j in range(n + 1):
        dp[0][j] = j

    for i in range(1, m + 1):
        for j in range(1, n + 1):
            cost = 0 if a[i - 1] == b[j - 1] else 1
            dp[i][j] = min(
                dp[i - 1][j] + 1,
                dp[i][j - 1] + 1,
                dp[i - 1][j - 1] + cost,
            )
    return dp[m][n]


def _clean(s: Optional[str]) -> str:
    return (s or "").strip().lower()


def score(a: Optional[str], b: Optional[str]) -> float:
    """Similarity in [0, 1]: 1 - distance / longer length. Case-insensitive; two empty strings score 1.0."""
    a, b = _clean(a), _clean(b)
    longest = max(len(a), len(b))
    if longest == 0:
        return 1.0
    return 1.0 - levenshtein_distance(a, b) / longest


def find_best_match_with_score(
    name: Optional[str],
    catalog: Sequence[CatalogProduct],
    threshold: Optional[float] = None,
) -> tuple[Optional[CatalogProduct], float]:
    """
    Score `name` against every catalog product.
    Returns (best product, its score), or (None, best score) when it falls below threshold.
    Ties keep the first product seen.
    """
    if threshold is None:
        threshold = get_settings().match_threshold

    best: Optional[CatalogProduct] = None
    best_score = 0.0
    for product in catalog:
        s = score(name, product.name)
        if best is None or s > best_score:
            best, best_score = product, s

    if best is None or best_score < threshold:
        return None, best_score
    return best, best_score


def find_best_match(
    name: Optional[str],
    catalog: Sequence[CatalogProduct],
    threshold: Optional[float] = None,
) -> Optional[CatalogProduct]:
    product, _ = find_best_match_with_score(name, catalog, threshold)
    return product

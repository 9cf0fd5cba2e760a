"""
End-to-end pipeline: transcript/OCR text -> extract line items -> normalize units
-> match against the product catalog -> matched / unmatched / needs-review lists.
"""
from __future__ import annotations

from typing import Optional, Sequence

import structlog

from .catalog import CatalogLike, resolve_catalog
from .config import get_settings
from .logging_config import configure_default_logging
from .matching import find_best_match, score
from .models import MatchResult, NormalizedItem, ReconciliationResult
from .parsers import extract_items

logger = structlog.get_logger()

# Confidence is stored rounded so threshold comparisons see the value callers see
CONFIDENCE_DIGITS = 4


def reconcile(
    items: Sequence[NormalizedItem],
    catalog: CatalogLike,
    *,
    match_threshold: Optional[float] = None,
    review_threshold: Optional[float] = None,
) -> list[MatchResult]:
    """
    Match each item against the catalog, preserving input order.
    No match is a normal outcome (product_id=None, needs_review=True).
    The catalog is not read when there are no items; errors raised while
    reading it propagate to the caller.
    """
    if not items:
        return []

    configure_default_logging()
    settings = get_settings()
    if match_threshold is None:
        match_threshold = settings.match_threshold
    if review_threshold is None:
        review_threshold = settings.review_threshold

    products = resolve_catalog(catalog)

    results: list[MatchResult] = []
    for item in items:
        product = find_best_match(item.name, products, threshold=match_threshold)

        if product is not None:
            confidence = round(min(1.0, score(item.name, product.name)), CONFIDENCE_DIGITS)
            needs_review = confidence < review_threshold
            results.append(
                MatchResult(
                    product_id=product.id,
                    product_name=product.name,
                    raw_name=item.name,
                    quantity=item.quantity,
                    unit=item.unit,
                    confidence=confidence,
                    needs_review=needs_review,
                    possible_match=needs_review,
                    price=item.price,
                    currency=item.currency,
                    source_text=item.source_text,
                )
            )
        else:
            results.append(
                MatchResult(
                    product_id=None,
                    product_name=item.name,
                    raw_name=item.name,
                    quantity=item.quantity,
                    unit=item.unit,
                    confidence=0.0,
                    needs_review=True,
                    possible_match=False,
                    price=item.price,
                    currency=item.currency,
                    source_text=item.source_text,
                )
            )

    logger.info(
        "reconciliation_complete",
        total_items=len(results),
        matched=sum(1 for r in results if r.product_id is not None),
        review_needed=sum(1 for r in results if r.needs_review),
    )
    return results


def summarize(results: Sequence[MatchResult]) -> ReconciliationResult:
    """Group match results for the caller (persistence, review queue, unknown-items log)."""
    results = list(results)
    return ReconciliationResult(
        results=results,
        matched=[r for r in results if r.product_id is not None],
        unmatched=[r for r in results if r.product_id is None],
        needs_review=[r for r in results if r.needs_review],
        recognized_count=sum(1 for r in results if not r.needs_review),
        unrecognized_count=sum(1 for r in results if r.needs_review),
    )


def process_text(
    text: Optional[str],
    catalog: CatalogLike,
    *,
    match_threshold: Optional[float] = None,
    review_threshold: Optional[float] = None,
) -> ReconciliationResult:
    """Extract items from a transcript or OCR text and reconcile them against the catalog."""
    items = extract_items(text)
    results = reconcile(
        items,
        catalog,
        match_threshold=match_threshold,
        review_threshold=review_threshold,
    )
    return summarize(results)

"""
Pydantic models for extracted inventory items and catalog match results.
"""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ParsedNumber(BaseModel):
    """Quantity parse outcome. parsed=False means the value is the fallback default."""
    value: int
    parsed: bool


class RawItem(BaseModel):
    """Internal representation of one grammar match before unit normalization."""
    raw_name: str
    quantity: int = Field(default=1, ge=0)
    unit: str = ""
    price: Optional[float] = None
    currency: Optional[str] = None
    source_text: str = ""


class NormalizedItem(BaseModel):
    """Extracted line item with a canonical unit."""
    name: str = Field(description="Product name as spoken or printed")
    quantity: int = Field(default=1, ge=0)
    unit: str = Field(
        default="",
        description="Canonical unit, or the lowercased raw token when unrecognized",
    )
    price: Optional[float] = Field(default=None, description="Price printed on the line, if any")
    currency: Optional[str] = Field(default=None, description="ISO code of the printed price")
    source_text: str = Field(default="", description="Token window the item was read from")


class CatalogProduct(BaseModel):
    """Known product from the inventory catalog. Read-only to the pipeline."""
    id: str
    name: str
    unit: str = ""
    price: float = 0.0

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_str(cls, v):
        return str(v) if isinstance(v, (int, float)) else v


class MatchResult(BaseModel):
    """Structured output per extracted item after catalog matching."""
    product_id: Optional[str] = Field(
        default=None,
        description="Catalog id, null when no product cleared the match threshold",
    )
    product_name: str = Field(description="Catalog name, or the extracted name when unmatched")
    raw_name: str = Field(description="Product name as extracted from the text")
    quantity: int = Field(ge=0)
    unit: str = ""
    confidence: float = Field(ge=0.0, le=1.0)
    needs_review: bool = Field(
        default=False,
        description="True if a human should confirm before the inventory is updated",
    )
    possible_match: bool = Field(
        default=False,
        description="Catalog entry found but confidence is below the review threshold",
    )
    price: Optional[float] = None
    currency: Optional[str] = None
    source_text: str = ""


class ExtractionResult(BaseModel):
    """Ordered items from one extraction pass over a text."""
    model_config = ConfigDict(frozen=True)

    items: tuple[NormalizedItem, ...] = ()


class ReconciliationResult(BaseModel):
    """Caller-ready aggregate of one transcript or invoice text."""
    results: list[MatchResult] = Field(default_factory=list)
    matched: list[MatchResult] = Field(default_factory=list)
    unmatched: list[MatchResult] = Field(default_factory=list)
    needs_review: list[MatchResult] = Field(default_factory=list)
    recognized_count: int = 0
    unrecognized_count: int = 0


class ReviewAction(BaseModel):
    type: str
    description: str


class ReviewSuggestion(BaseModel):
    """Actions a reviewer can take for a flagged result."""
    item: MatchResult
    actions: list[ReviewAction]

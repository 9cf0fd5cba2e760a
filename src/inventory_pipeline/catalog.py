"""
Product catalog sources. The pipeline only reads from them.

A catalog is either a plain sequence of CatalogProduct (or dicts with id/name/unit/price)
or any object with a get_products() method, which is called lazily.
"""
from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import Any, Iterable, Protocol, Sequence, Union, runtime_checkable

import structlog
from pydantic import ValidationError

from .logging_config import configure_default_logging
from .models import CatalogProduct

logger = structlog.get_logger()


class CatalogError(Exception):
    """Product data could not be read from the catalog source."""


@runtime_checkable
class CatalogSource(Protocol):
    def get_products(self) -> list[CatalogProduct]:
        ...


CatalogLike = Union[Sequence[Union[CatalogProduct, dict]], CatalogSource]


def coerce_products(rows: Iterable[Union[CatalogProduct, dict]]) -> list[CatalogProduct]:
    """Validate dict rows into CatalogProduct, passing existing products through."""
    return [
        row if isinstance(row, CatalogProduct) else CatalogProduct.model_validate(row)
        for row in rows
    ]


def resolve_catalog(catalog: CatalogLike) -> list[CatalogProduct]:
    """Snapshot of the catalog. Errors from a CatalogSource propagate unchanged."""
    if isinstance(catalog, CatalogSource):
        return list(catalog.get_products())
    return coerce_products(catalog or [])


class StaticCatalog:
    """In-memory catalog snapshot."""

    def __init__(self, products: Iterable[Union[CatalogProduct, dict]]):
        self._products = coerce_products(products)

    def get_products(self) -> list[CatalogProduct]:
        return list(self._products)


def _read_json(path: Path) -> list[dict[str, Any]]:
    data = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(data, dict):
        data = data.get("products")
    if not isinstance(data, list):
        raise CatalogError(f"{path.name}: expected a list of products")
    return data


def _read_csv(path: Path) -> list[dict[str, Any]]:
    with open(path, newline="", encoding="utf-8") as f:
        rows = []
        for row in csv.DictReader(f):
            row = {k.strip().lower(): (v or "").strip() for k, v in row.items() if k}
            if not row.get("price"):
                row.pop("price", None)
            rows.append(row)
        return rows


class FileCatalog:
    """
    Catalog read from a JSON (list, or {"products": [...]}) or CSV (id,name,unit,price) file.
    The file is re-read on every get_products() call.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def get_products(self) -> list[CatalogProduct]:
        if not self.path.exists():
            raise CatalogError(f"Catalog file not found: {self.path}")
        try:
            if self.path.suffix.lower() == ".csv":
                rows = _read_csv(self.path)
            else:
                rows = _read_json(self.path)
            products = coerce_products(rows)
        except CatalogError:
            raise
        except (OSError, ValueError, ValidationError) as e:
            raise CatalogError(f"Could not load catalog {self.path.name}: {e}") from e

        configure_default_logging()
        logger.info("catalog_loaded", path=str(self.path), products=len(products))
        return products

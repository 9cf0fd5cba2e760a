"""Shared fixtures for pipeline tests."""

import sys
from pathlib import Path

import pytest
import structlog


def ensure_src_on_path() -> None:
    root = Path(__file__).resolve().parent.parent
    for path in (root / "src", root):
        if str(path) not in sys.path:
            sys.path.append(str(path))


ensure_src_on_path()

from inventory_pipeline import config  # noqa: E402
from inventory_pipeline.models import CatalogProduct  # noqa: E402


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    for name in (
        "INVENTORY_MATCH_THRESHOLD",
        "INVENTORY_REVIEW_THRESHOLD",
        "INVENTORY_LOG_LEVEL",
        "INVENTORY_LOG_JSON",
    ):
        monkeypatch.delenv(name, raising=False)
    config.reset_settings()
    yield
    config.reset_settings()
    # configure_logging binds the current stderr, which capsys closes after each test
    structlog.reset_defaults()


@pytest.fixture
def wine_catalog():
    return [CatalogProduct(id="1", name="Wine", unit="bottle", price=15)]


@pytest.fixture
def bar_catalog():
    return [
        CatalogProduct(id=1, name="Vodka Grey Goose", unit="bottle", price=29.99),
        CatalogProduct(id=2, name="Wine Cabernet", unit="bottle", price=15.99),
    ]

import pytest

from inventory_pipeline.matching import (
    find_best_match,
    find_best_match_with_score,
    levenshtein_distance,
    score,
)
from inventory_pipeline.models import CatalogProduct


@pytest.mark.parametrize(
    "a,b,expected",
    [
        ("", "", 0),
        ("abc", "", 3),
        ("", "abc", 3),
        ("kitten", "sitting", 3),
        ("flaw", "lawn", 2),
        ("wine", "wine", 0),
        ("gumbo", "gambol", 2),
    ],
)
def test_levenshtein_distance(a, b, expected):
    assert levenshtein_distance(a, b) == expected


def test_score_bounds_and_case():
    assert score("", "") == 1.0
    assert score("Wine", "wine") == 1.0
    assert score("abc", "xyz") == 0.0
    assert score("kitten", "sitting") == pytest.approx(1 - 3 / 7)


def test_score_is_symmetric():
    assert score("cabernet", "cabernay") == score("cabernay", "cabernet")


def test_exact_case_insensitive_match(wine_catalog):
    assert find_best_match("wine", wine_catalog) == wine_catalog[0]


def test_unrelated_name_returns_none(wine_catalog):
    assert find_best_match("completely-unrelated-xyz", wine_catalog) is None


def test_empty_catalog():
    assert find_best_match("wine", []) is None
    product, best = find_best_match_with_score("wine", [])
    assert product is None
    assert best == 0.0


def test_threshold_is_inclusive():
    # "abcd" vs "abxy": distance 2 over length 4 -> exactly 0.5
    catalog = [CatalogProduct(id="p", name="abxy")]
    assert find_best_match("abcd", catalog) == catalog[0]
    assert find_best_match("abcd", catalog, threshold=0.51) is None


def test_highest_score_wins():
    catalog = [
        CatalogProduct(id="1", name="Beer Lager"),
        CatalogProduct(id="2", name="Wine Cabernet"),
        CatalogProduct(id="3", name="Wine Merlot"),
    ]
    product, best = find_best_match_with_score("wine cabernet", catalog)
    assert product.id == "2"
    assert best == 1.0


def test_ties_keep_first_catalog_entry():
    catalog = [
        CatalogProduct(id="first", name="wina"),
        CatalogProduct(id="second", name="winb"),
    ]
    assert find_best_match("wine", catalog).id == "first"


def test_threshold_from_environment(monkeypatch, wine_catalog):
    from inventory_pipeline import config

    monkeypatch.setenv("INVENTORY_MATCH_THRESHOLD", "0.6")
    monkeypatch.setenv("INVENTORY_REVIEW_THRESHOLD", "0.8")
    config.reset_settings()
    # "winery" vs "wine" -> 1 - 2/6; "wxyz" vs "wine" -> 0.25
    assert find_best_match("winery", wine_catalog) == wine_catalog[0]
    assert find_best_match("wxyz", wine_catalog) is None

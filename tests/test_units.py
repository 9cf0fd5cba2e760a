import pytest

from inventory_pipeline.units import CANONICAL_UNITS, is_known_unit, normalize_unit


def test_none_and_empty():
    assert normalize_unit(None) == ""
    assert normalize_unit("") == ""


def test_case_and_plural_invariance():
    assert normalize_unit("Bottles") == normalize_unit("bottle") == "bottle"
    assert normalize_unit("BOUTEILLE") == "bottle"


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("bottles", "bottle"),
        ("cans", "can"),
        ("boxes", "box"),
        ("pieces", "piece"),
        ("cases", "case"),
        ("crates", "crate"),
        ("bouteilles", "bottle"),
        ("cannette", "can"),
        ("canettes", "can"),
        ("boîte", "box"),
        ("boîtes", "box"),
        ("boxe", "box"),
        ("caisses", "case"),
        ("pièces", "piece"),
        ("kilos", "kg"),
        ("grammes", "g"),
        ("Litres", "l"),
        ("btl", "bottle"),
        ("pcs", "piece"),
    ],
)
def test_known_units(raw, expected):
    assert normalize_unit(raw) == expected


def test_unknown_token_passes_through():
    assert normalize_unit("Glasses") == "glasses"
    assert normalize_unit("flagons") == "flagons"


@pytest.mark.parametrize(
    "raw",
    ["bottles", "BOUTEILLE", "glass", "glasses", "boxes", "flagons", "s", "es", "kgs", "Ménagère", ""],
)
def test_idempotent(raw):
    once = normalize_unit(raw)
    assert normalize_unit(once) == once


def test_canonical_units_map_to_themselves():
    for unit in CANONICAL_UNITS:
        assert normalize_unit(unit) == unit


def test_is_known_unit():
    assert is_known_unit("Bouteilles")
    assert is_known_unit("crates")
    assert not is_known_unit("wine")
    assert not is_known_unit(None)

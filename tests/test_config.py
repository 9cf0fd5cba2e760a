"""Unit tests for configuration."""

import pytest

from inventory_pipeline.config import get_settings, load_settings, reset_settings


def test_default_settings():
    settings = get_settings()

    assert settings.match_threshold == 0.5
    assert settings.review_threshold == 0.7
    assert settings.log_level == "INFO"
    assert settings.log_json is False


def test_custom_settings(monkeypatch):
    monkeypatch.setenv("INVENTORY_MATCH_THRESHOLD", "0.4")
    monkeypatch.setenv("INVENTORY_REVIEW_THRESHOLD", "0.9")
    monkeypatch.setenv("INVENTORY_LOG_LEVEL", "debug")
    monkeypatch.setenv("INVENTORY_LOG_JSON", "true")

    settings = load_settings()

    assert settings.match_threshold == 0.4
    assert settings.review_threshold == 0.9
    assert settings.log_level == "DEBUG"
    assert settings.log_json is True


def test_settings_are_cached_until_reset(monkeypatch):
    first = get_settings()
    monkeypatch.setenv("INVENTORY_REVIEW_THRESHOLD", "0.95")
    assert get_settings() is first
    reset_settings()
    assert get_settings().review_threshold == 0.95


def test_invalid_number(monkeypatch):
    monkeypatch.setenv("INVENTORY_MATCH_THRESHOLD", "half")
    with pytest.raises(ValueError, match="INVENTORY_MATCH_THRESHOLD"):
        load_settings()


def test_out_of_range(monkeypatch):
    monkeypatch.setenv("INVENTORY_REVIEW_THRESHOLD", "1.5")
    with pytest.raises(ValueError):
        load_settings()


def test_review_threshold_below_match_threshold(monkeypatch):
    monkeypatch.setenv("INVENTORY_MATCH_THRESHOLD", "0.8")
    monkeypatch.setenv("INVENTORY_REVIEW_THRESHOLD", "0.6")
    with pytest.raises(ValueError):
        load_settings()

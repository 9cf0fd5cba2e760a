"""
Pipeline settings from environment variables (and a local .env file).
"""
from __future__ import annotations

import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, model_validator

load_dotenv()

DEFAULT_MATCH_THRESHOLD = 0.5
DEFAULT_REVIEW_THRESHOLD = 0.7


class PipelineSettings(BaseModel):
    match_threshold: float = Field(
        default=DEFAULT_MATCH_THRESHOLD,
        ge=0.0,
        le=1.0,
        description="Minimum similarity for a catalog product to be accepted",
    )
    review_threshold: float = Field(
        default=DEFAULT_REVIEW_THRESHOLD,
        ge=0.0,
        le=1.0,
        description="Matches below this confidence are flagged for human review",
    )
    log_level: str = "INFO"
    log_json: bool = False

    @model_validator(mode="after")
    def _thresholds_ordered(self) -> "PipelineSettings":
        if self.review_threshold < self.match_threshold:
            raise ValueError("review_threshold must be >= match_threshold")
        return self


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


_settings: Optional[PipelineSettings] = None


def load_settings() -> PipelineSettings:
    """Read settings from the environment. Raises ValueError on invalid values."""
    return PipelineSettings(
        match_threshold=_env_float("INVENTORY_MATCH_THRESHOLD", DEFAULT_MATCH_THRESHOLD),
        review_threshold=_env_float("INVENTORY_REVIEW_THRESHOLD", DEFAULT_REVIEW_THRESHOLD),
        log_level=(os.getenv("INVENTORY_LOG_LEVEL") or "INFO").upper(),
        log_json=_env_bool("INVENTORY_LOG_JSON", False),
    )


def get_settings() -> PipelineSettings:
    """Return shared settings, loaded on first use."""
    global _settings
    if _settings is None:
        _settings = load_settings()
    return _settings


def reset_settings() -> None:
    """Drop cached settings so the next get_settings() re-reads the environment."""
    global _settings
    _settings = None

"""Runtime settings for the valuation API, read from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass

_FALSE = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class Settings:
    """
    VALUATION_LOG_LEVEL: root log level (default INFO).
    VALUATION_MAX_WORKERS: threads used to run scenarios in parallel (default 1).
    VALUATION_STRICT_REQUIREMENTS: hand functions only their declared market data (default on).
    """

    log_level: str = "INFO"
    max_workers: int = 1
    strict_requirements: bool = True


def load_settings() -> Settings:
    max_workers = int(os.environ.get("VALUATION_MAX_WORKERS", "1"))
    if max_workers < 1:
        raise ValueError("VALUATION_MAX_WORKERS must be >= 1")
    strict = os.environ.get("VALUATION_STRICT_REQUIREMENTS", "1").strip().lower() not in _FALSE
    return Settings(
        log_level=os.environ.get("VALUATION_LOG_LEVEL", "INFO").upper(),
        max_workers=max_workers,
        strict_requirements=strict,
    )

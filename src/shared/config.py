"""Configuration loader for Starfish Terminal.

Loads configuration from environment variables with sensible defaults.
"""

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class Config:
    """Application configuration loaded from environment variables.

    Attributes:
        environment: Current environment (dev/prod).
        gemini_api_key: API key for the Generative Language API.
        analysis_model: Model used for the narrative analysis.
        default_exchange_suffix: Suffix tried first for bare symbols.
        history_days: Calendar days of daily bars to fetch.
        analysis_history_days: Trailing enriched bars sent to the analysis.
        cache_ttl_seconds: How long fetched history is served from memory.
        rate_limit_total: Requests allowed per rate-limit window.
        rate_limit_window_seconds: Length of the rate-limit window.
        http_timeout_seconds: Timeout for outbound HTTP calls.
    """

    environment: str
    gemini_api_key: str
    analysis_model: str = "gemini-2.0-flash"
    default_exchange_suffix: str = ".NS"
    history_days: int = 90
    analysis_history_days: int = 30
    cache_ttl_seconds: int = 60
    rate_limit_total: int = 100
    rate_limit_window_seconds: int = 3600
    http_timeout_seconds: float = 30.0


def load_config() -> Config:
    """Load configuration from environment variables.

    Returns:
        Config object with all settings.

    Raises:
        ValueError: If a numeric environment variable cannot be parsed.
    """
    return Config(
        environment=os.getenv("ENVIRONMENT", "dev"),
        gemini_api_key=os.getenv("GEMINI_API_KEY", ""),
        analysis_model=os.getenv("ANALYSIS_MODEL", "gemini-2.0-flash"),
        default_exchange_suffix=os.getenv("DEFAULT_EXCHANGE_SUFFIX", ".NS"),
        history_days=int(os.getenv("HISTORY_DAYS", "90")),
        analysis_history_days=int(os.getenv("ANALYSIS_HISTORY_DAYS", "30")),
        cache_ttl_seconds=int(os.getenv("CACHE_TTL_SECONDS", "60")),
        rate_limit_total=int(os.getenv("RATE_LIMIT_TOTAL", "100")),
        rate_limit_window_seconds=int(os.getenv("RATE_LIMIT_WINDOW_SECONDS", "3600")),
        http_timeout_seconds=float(os.getenv("HTTP_TIMEOUT_SECONDS", "30.0")),
    )

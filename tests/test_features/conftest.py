"""Shared fixtures for indicator tests.

All data is static and deterministic. No network calls, no randomness.
"""

from datetime import date

import pandas as pd
import pytest


def _make_date_index(n: int) -> pd.DatetimeIndex:
    """Create a DatetimeIndex of n business days."""
    start = date(2024, 1, 2)  # A Tuesday
    dates = pd.bdate_range(start=start, periods=n)
    return dates


@pytest.fixture
def sample_closes() -> list[float]:
    """60 days of closes with a gradual, noisy uptrend."""
    n = 60
    move = [0.5, 0.8, -0.3, 1.0, 0.0, 0.6, -0.7, 0.4, 1.2, -0.5]
    closes = [100.0]
    for i in range(1, n):
        closes.append(closes[-1] + move[i % len(move)])
    return closes


@pytest.fixture
def sample_ohlcv(sample_closes: list[float]) -> pd.DataFrame:
    """60 days of realistic OHLCV data built on `sample_closes`."""
    n = len(sample_closes)
    close = pd.Series(sample_closes, dtype=float)
    open_ = close - 0.2
    high = close + 0.5
    low = open_ - 0.3
    volume = pd.Series([1_000_000 + (i * 10_000) for i in range(n)], dtype=float)

    return pd.DataFrame(
        {
            "open": open_.values,
            "high": high.values,
            "low": low.values,
            "close": close.values,
            "volume": volume.values,
        },
        index=_make_date_index(n),
    )


@pytest.fixture
def trending_up_closes() -> list[float]:
    """60 days of a strong, steady uptrend."""
    return [100.0 + i * 1.0 for i in range(60)]


@pytest.fixture
def all_gains_close() -> list[float]:
    """Close series where every day is an up day (for RSI = 100)."""
    return [100.0 + i for i in range(20)]


@pytest.fixture
def all_losses_close() -> list[float]:
    """Close series where every day is a down day (for RSI = 0)."""
    return [120.0 - i for i in range(20)]

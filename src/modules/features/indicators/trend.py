"""Trend indicators: SMA, EMA.

Pure functions over an ordered sequence of closing prices. No state or side
effects. Output index i always lines up with input index i; indices that
cannot be computed yet hold None.
"""

from collections.abc import Sequence

import pandas as pd

from src.modules.features.indicators.precision import (
    DEFAULT_DECIMALS,
    IndicatorSeries,
    round_series,
)


def sma(
    prices: Sequence[float],
    period: int,
    decimals: int | None = DEFAULT_DECIMALS,
) -> IndicatorSeries:
    """Calculate Simple Moving Average.

    Args:
        prices: Closing prices, oldest first.
        period: Window length.
        decimals: Decimal places of the output, or None for full precision.

    Returns:
        SMA series. First `period - 1` values are None. All None when
        period < 1 or there are fewer than `period` prices.
    """
    values = [float(p) for p in prices]
    n = len(values)
    if period < 1 or period > n:
        return [None] * n

    means = pd.Series(values).rolling(window=period, min_periods=period).mean()
    result: IndicatorSeries = [None if pd.isna(v) else float(v) for v in means]

    return round_series(result, decimals)


def ema(
    prices: Sequence[float],
    period: int,
    decimals: int | None = DEFAULT_DECIMALS,
) -> IndicatorSeries:
    """Calculate Exponential Moving Average.

    Seeded with the plain mean of the first `period` prices, then
    ema[i] = price[i] * k + ema[i-1] * (1 - k) with k = 2 / (period + 1).

    Args:
        prices: Closing prices, oldest first.
        period: EMA span.
        decimals: Decimal places of the output, or None for full precision.

    Returns:
        EMA series. First `period - 1` values are None. All None when
        period < 1 or there are fewer than `period` prices.
    """
    values = [float(p) for p in prices]
    n = len(values)
    if period < 1 or period > n:
        return [None] * n

    k = 2.0 / (period + 1)
    previous = sum(values[:period]) / period

    result: IndicatorSeries = [None] * (period - 1)
    result.append(previous)
    for price in values[period:]:
        previous = price * k + previous * (1 - k)
        result.append(previous)

    return round_series(result, decimals)

"""Momentum indicators: RSI, MACD.

Pure functions over an ordered sequence of closing prices. No state or side
effects. Output series are index-aligned with the input.
"""

from collections.abc import Sequence
from dataclasses import dataclass

from src.modules.features.indicators.precision import (
    DEFAULT_DECIMALS,
    IndicatorSeries,
    round_series,
)
from src.modules.features.indicators.trend import ema


@dataclass(frozen=True)
class MACDResult:
    """MACD line, signal line and histogram, each aligned with the prices."""

    macd_line: IndicatorSeries
    signal_line: IndicatorSeries
    histogram: IndicatorSeries


def _rsi_value(avg_gain: float, avg_loss: float) -> float:
    # No losses in the window saturates at 100, flat windows included.
    if avg_loss == 0:
        return 100.0
    return 100.0 - 100.0 / (1.0 + avg_gain / avg_loss)


def rsi(
    prices: Sequence[float],
    period: int = 14,
    decimals: int | None = DEFAULT_DECIMALS,
) -> IndicatorSeries:
    """Calculate Relative Strength Index (Wilder's smoothing).

    Args:
        prices: Closing prices, oldest first.
        period: Lookback period (default 14).
        decimals: Decimal places of the output, or None for full precision.

    Returns:
        RSI values between 0 and 100. First `period` values are None.
        All None when there are `period` prices or fewer.
    """
    values = [float(p) for p in prices]
    n = len(values)
    if period < 1 or n <= period:
        return [None] * n

    gain_sum = 0.0
    loss_sum = 0.0
    for i in range(1, period + 1):
        diff = values[i] - values[i - 1]
        if diff > 0:
            gain_sum += diff
        else:
            loss_sum -= diff

    avg_gain = gain_sum / period
    avg_loss = loss_sum / period

    result: IndicatorSeries = [None] * period
    result.append(_rsi_value(avg_gain, avg_loss))

    for i in range(period + 1, n):
        diff = values[i] - values[i - 1]
        gain = max(diff, 0.0)
        loss = max(-diff, 0.0)
        avg_gain = (avg_gain * (period - 1) + gain) / period
        avg_loss = (avg_loss * (period - 1) + loss) / period
        result.append(_rsi_value(avg_gain, avg_loss))

    return round_series(result, decimals)


def macd(
    prices: Sequence[float],
    fast: int = 12,
    slow: int = 26,
    signal: int = 9,
    decimals: int | None = DEFAULT_DECIMALS,
) -> MACDResult:
    """Calculate MACD line, signal line and histogram.

    Formula: MACD = EMA(fast) - EMA(slow); Signal = EMA(signal) of the defined
    part of the MACD line; Histogram = MACD - Signal.

    Args:
        prices: Closing prices, oldest first.
        fast: Fast EMA span (default 12).
        slow: Slow EMA span (default 26).
        signal: Signal line EMA span (default 9).
        decimals: Decimal places of the output, or None for full precision.

    Returns:
        MACDResult. The signal line warms up twice: once for the slow EMA
        and again for its own span over the MACD line.
    """
    n = len(prices)
    if fast < 1 or slow < 1 or signal < 1:
        empty: IndicatorSeries = [None] * n
        return MACDResult(macd_line=empty, signal_line=list(empty), histogram=list(empty))

    ema_fast = ema(prices, fast, decimals=None)
    ema_slow = ema(prices, slow, decimals=None)

    macd_line: IndicatorSeries = [
        f - s if f is not None and s is not None else None
        for f, s in zip(ema_fast, ema_slow)
    ]

    defined = [value for value in macd_line if value is not None]
    lead = n - len(defined)
    signal_line: IndicatorSeries = [None] * lead + ema(defined, signal, decimals=None)

    macd_line = round_series(macd_line, decimals)
    signal_line = round_series(signal_line, decimals)

    histogram: IndicatorSeries = [
        m - s if m is not None and s is not None else None
        for m, s in zip(macd_line, signal_line)
    ]

    return MACDResult(
        macd_line=macd_line,
        signal_line=signal_line,
        histogram=round_series(histogram, decimals),
    )

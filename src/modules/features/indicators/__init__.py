"""Technical indicators for the indicator engine.

All indicators are pure functions: a sequence of closing prices in, an
index-aligned list of ``float | None`` out. No state, no side effects.
"""

from src.modules.features.indicators.momentum import MACDResult, macd, rsi
from src.modules.features.indicators.precision import IndicatorSeries, round_series
from src.modules.features.indicators.trend import ema, sma

__all__ = [
    "sma",
    "ema",
    "rsi",
    "macd",
    "MACDResult",
    "IndicatorSeries",
    "round_series",
]

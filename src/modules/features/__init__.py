"""Indicator Engine: annotates daily bars with technical indicators.

Zips SMA, EMA, RSI (and optionally MACD) back onto an OHLCV DataFrame by index.
"""

from src.modules.features.engine import IndicatorEngine

__all__ = ["IndicatorEngine"]

"""Shared fixtures for analysis tests."""

import pytest

from src.modules.analysis.types import HistoryPoint, StockAnalysisInput
from src.modules.data.protocols import StockDetails


@pytest.fixture
def details() -> StockDetails:
    """Sample quote details."""
    return StockDetails(
        symbol="RELIANCE.NS",
        name="Reliance Industries Limited",
        price=2950.5,
        change=12.25,
        change_percent=0.42,
        pe_ratio=28.4,
        eps=103.9,
        dividend_yield=0.34,
        market_cap="19.96T",
        fifty_two_week_high=3024.9,
        fifty_two_week_low=2220.3,
    )


@pytest.fixture
def records() -> list[dict[str, object]]:
    """40 enriched bar records; indicators missing on the first few."""
    out: list[dict[str, object]] = []
    for i in range(40):
        out.append(
            {
                "date": f"2024-02-{i + 1:02d}" if i < 29 else f"2024-03-{i - 28:02d}",
                "open": 2900.0 + i,
                "high": 2910.0 + i,
                "low": 2890.0 + i,
                "close": 2905.0 + i,
                "volume": 1_000_000.0,
                "sma20": None if i < 19 else 2890.5 + i,
                "ema50": None,
                "rsi": None if i < 14 else 61.25,
            }
        )
    return out


@pytest.fixture
def analysis_input() -> StockAnalysisInput:
    """Small analysis input with one warm-up point."""
    return StockAnalysisInput(
        symbol="RELIANCE.NS",
        name="Reliance Industries Limited",
        price=2950.5,
        change_percent=0.42,
        market_cap="19.96T",
        pe_ratio=28.4,
        history=[
            HistoryPoint(date="2024-03-08", close=2940.0, rsi=None, sma20=None, ema50=None),
            HistoryPoint(date="2024-03-11", close=2950.5, rsi=58.31, sma20=2921.77, ema50=2880.1),
        ],
    )


@pytest.fixture
def analysis_payload() -> dict[str, str]:
    """A valid decoded model response."""
    return {
        "summary": "Uptrend intact above SMA20.",
        "technicalVerdict": "RSI 58 neutral-bullish; price above both averages.",
        "fundamentalHealth": "P/E 28 in line with sector.",
        "riskLevel": "MEDIUM",
        "sentiment": "BULLISH",
        "recommendation": "> HOLD. ADD ON PULLBACK TO SMA20.",
    }

"""Analysis data types.

Input handed to the narrative model and the validated verdict it returns.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from src.modules.data.protocols import StockDetails


class RiskLevel(Enum):
    """Risk profile assigned by the analysis."""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"


class Sentiment(Enum):
    """Overall market sentiment assigned by the analysis."""

    BULLISH = "BULLISH"
    NEUTRAL = "NEUTRAL"
    BEARISH = "BEARISH"


class AnalysisError(Exception):
    """Exception raised when the analysis cannot be generated."""

    def __init__(self, symbol: str, message: str) -> None:
        """Initialize AnalysisError.

        Args:
            symbol: Symbol being analyzed.
            message: Error description.
        """
        self.symbol = symbol
        super().__init__(f"Analysis failed for {symbol}: {message}")


@dataclass(frozen=True)
class HistoryPoint:
    """One enriched bar as seen by the analysis."""

    date: str
    close: float
    rsi: float | None = None
    sma20: float | None = None
    ema50: float | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize for the model request."""
        return {
            "date": self.date,
            "close": self.close,
            "rsi": self.rsi,
            "sma20": self.sma20,
            "ema50": self.ema50,
        }


@dataclass(frozen=True)
class StockAnalysisInput:
    """Everything the analysis sees about a symbol."""

    symbol: str
    name: str
    price: float
    change_percent: float
    market_cap: str | None = None
    pe_ratio: float | None = None
    history: list[HistoryPoint] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Serialize for the model request."""
        return {
            "symbol": self.symbol,
            "name": self.name,
            "price": self.price,
            "changePercent": self.change_percent,
            "marketCap": self.market_cap,
            "peRatio": self.pe_ratio,
            "history": [point.to_dict() for point in self.history],
        }


@dataclass(frozen=True)
class StockAnalysis:
    """Narrative verdict returned by the analysis model."""

    summary: str
    technical_verdict: str
    fundamental_health: str
    risk_level: RiskLevel
    sentiment: Sentiment
    recommendation: str

    @classmethod
    def from_dict(cls, symbol: str, data: Any) -> "StockAnalysis":
        """Validate a decoded model response.

        Args:
            symbol: Symbol being analyzed (for error messages).
            data: Decoded JSON object with camelCase keys.

        Returns:
            StockAnalysis instance.

        Raises:
            AnalysisError: If a field is missing, not a string, or an enum
                value is unknown.
        """
        if not isinstance(data, dict):
            raise AnalysisError(symbol, "Response is not a JSON object")

        text_fields = {
            "summary": "summary",
            "technicalVerdict": "technical_verdict",
            "fundamentalHealth": "fundamental_health",
            "recommendation": "recommendation",
        }
        values: dict[str, Any] = {}
        for key, attr in text_fields.items():
            value = data.get(key)
            if not isinstance(value, str):
                raise AnalysisError(symbol, f"Field '{key}' missing or not a string")
            values[attr] = value

        try:
            values["risk_level"] = RiskLevel(data.get("riskLevel"))
            values["sentiment"] = Sentiment(data.get("sentiment"))
        except ValueError as e:
            raise AnalysisError(symbol, str(e)) from e

        return cls(**values)

    def to_dict(self) -> dict[str, Any]:
        """Serialize with camelCase keys."""
        return {
            "summary": self.summary,
            "technicalVerdict": self.technical_verdict,
            "fundamentalHealth": self.fundamental_health,
            "riskLevel": self.risk_level.value,
            "sentiment": self.sentiment.value,
            "recommendation": self.recommendation,
        }


def build_analysis_input(
    details: StockDetails,
    records: list[dict[str, Any]],
    last_n: int = 30,
) -> StockAnalysisInput:
    """Assemble the analysis input from quote details and enriched bars.

    Args:
        details: Quote details for the symbol.
        records: Enriched bar records, oldest first.
        last_n: Number of trailing bars to include.

    Returns:
        StockAnalysisInput with the trailing `last_n` bars.
    """
    tail = records[-last_n:] if last_n > 0 else []
    history = [
        HistoryPoint(
            date=record["date"],
            close=record["close"],
            rsi=record.get("rsi"),
            sma20=record.get("sma20"),
            ema50=record.get("ema50"),
        )
        for record in tail
    ]

    return StockAnalysisInput(
        symbol=details.symbol,
        name=details.name,
        price=details.price,
        change_percent=details.change_percent,
        market_cap=details.market_cap if details.market_cap != "N/A" else None,
        pe_ratio=details.pe_ratio or None,
        history=history,
    )

"""Data Provider Protocols.

Defines the interfaces for daily-candle and quote providers, and the
symbol spelling rules shared by every Yahoo-backed provider.
"""

from dataclasses import dataclass
from datetime import date
from typing import Any, Protocol

import pandas as pd


class MarketDataProvider(Protocol):
    """Protocol for market data providers.

    All providers (Yahoo chart API, yfinance, etc.) must implement this
    interface to ensure consistent behavior and easy fallback switching.
    """

    @property
    def name(self) -> str:
        """Provider name for logging and error messages."""
        ...

    def get_daily_candles(
        self,
        ticker: str,
        start_date: date,
        end_date: date,
    ) -> pd.DataFrame:
        """Fetch daily OHLCV candles for a ticker.

        Args:
            ticker: Stock symbol (e.g., 'RELIANCE' or 'AAPL').
            start_date: Start date (inclusive).
            end_date: End date (inclusive).

        Returns:
            DataFrame with columns:
                - date (index): Trading date
                - open: Opening price
                - high: High price
                - low: Low price
                - close: Closing price (adjusted when available)
                - volume: Trading volume

        Raises:
            ProviderError: If the provider fails to fetch data.
        """
        ...


class QuoteProvider(Protocol):
    """Protocol for real-time quote/details providers."""

    @property
    def name(self) -> str:
        """Provider name for logging and error messages."""
        ...

    def get_quote(self, ticker: str) -> "StockDetails":
        """Fetch the latest quote and headline metrics for a ticker.

        Args:
            ticker: Stock symbol.

        Returns:
            StockDetails for the resolved symbol.

        Raises:
            ProviderError: If the symbol cannot be found or the call fails.
        """
        ...


@dataclass(frozen=True)
class StockDetails:
    """Headline quote metrics for a symbol."""

    symbol: str
    name: str
    price: float
    change: float
    change_percent: float
    pe_ratio: float
    eps: float
    dividend_yield: float
    market_cap: str
    fifty_two_week_high: float
    fifty_two_week_low: float

    def to_dict(self) -> dict[str, Any]:
        """Serialize with the camelCase keys the terminal front end reads."""
        return {
            "symbol": self.symbol,
            "name": self.name,
            "price": self.price,
            "change": self.change,
            "changePercent": self.change_percent,
            "peRatio": self.pe_ratio,
            "eps": self.eps,
            "dividendYield": self.dividend_yield,
            "marketCap": self.market_cap,
            "fiftyTwoWeekHigh": self.fifty_two_week_high,
            "fiftyTwoWeekLow": self.fifty_two_week_low,
        }


class ProviderError(Exception):
    """Exception raised when a provider fails to fetch data."""

    def __init__(self, provider: str, ticker: str, message: str) -> None:
        """Initialize ProviderError.

        Args:
            provider: Name of the failing provider.
            ticker: Ticker that was being fetched.
            message: Error description.
        """
        self.provider = provider
        self.ticker = ticker
        super().__init__(f"[{provider}] Failed to fetch {ticker}: {message}")


def symbol_candidates(symbol: str, default_suffix: str = ".NS") -> list[str]:
    """List the ticker spellings to try, most specific first.

    A symbol that already carries an exchange suffix (e.g. 'TCS.BO') is used
    as-is. A bare symbol is tried on the default exchange first and then
    as a global listing.

    Args:
        symbol: Symbol as typed by the user.
        default_suffix: Exchange suffix for bare symbols.

    Returns:
        Ordered, de-duplicated list of symbols.
    """
    symbol = symbol.strip()
    if "." in symbol:
        return [symbol]

    bare = symbol.upper()
    candidates = [f"{bare}{default_suffix}", bare] if default_suffix else [bare]
    return list(dict.fromkeys(candidates))

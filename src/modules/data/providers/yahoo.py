"""Yahoo Finance Market Data Provider.

Fallback data source using yfinance library (unofficial scraper).
"""

from datetime import date

import pandas as pd
import yfinance as yf

from src.modules.data.protocols import ProviderError, symbol_candidates
from src.shared.logger import get_logger

logger = get_logger(__name__)


class YahooProvider:
    """Yahoo Finance market data provider (Fallback).

    Uses yfinance library which scrapes Yahoo Finance.
    Be aware: may be rate-limited or blocked with heavy usage.
    """

    def __init__(self, default_suffix: str = ".NS") -> None:
        """Initialize YahooProvider.

        Args:
            default_suffix: Exchange suffix tried first for bare symbols.
        """
        self._default_suffix = default_suffix

    @property
    def name(self) -> str:
        """Provider name."""
        return "Yahoo"

    def get_daily_candles(
        self,
        ticker: str,
        start_date: date,
        end_date: date,
    ) -> pd.DataFrame:
        """Fetch daily OHLCV candles from Yahoo Finance.

        Args:
            ticker: Stock symbol, with or without exchange suffix.
            start_date: Start date (inclusive).
            end_date: End date (inclusive).

        Returns:
            Normalized DataFrame with OHLCV data.

        Raises:
            ProviderError: If no symbol candidate returns data.
        """
        logger.info(
            "Fetching data from Yahoo Finance (fallback)",
            extra={"ticker": ticker, "start": str(start_date), "end": str(end_date)},
        )

        # yfinance end_date is exclusive, so add 1 day
        end_date_exclusive = pd.Timestamp(end_date) + pd.Timedelta(days=1)

        try:
            for symbol in symbol_candidates(ticker, self._default_suffix):
                df = yf.Ticker(symbol).history(
                    start=start_date.isoformat(),
                    end=end_date_exclusive.strftime("%Y-%m-%d"),
                    interval="1d",
                )
                if not df.empty:
                    return self._normalize(df)
        except Exception as e:
            raise ProviderError(self.name, ticker, str(e)) from e

        raise ProviderError(self.name, ticker, "No data returned")

    def _normalize(self, df: pd.DataFrame) -> pd.DataFrame:
        """Normalize yfinance response to standard schema.

        Args:
            df: Raw yfinance DataFrame (auto-adjusted prices).

        Returns:
            Normalized DataFrame.
        """
        df = df.rename(
            columns={
                "Open": "open",
                "High": "high",
                "Low": "low",
                "Close": "close",
                "Volume": "volume",
            }
        )

        # Convert index to date
        df.index = df.index.date
        df.index.name = "date"

        standard_cols = ["open", "high", "low", "close", "volume"]
        available_cols = [col for col in standard_cols if col in df.columns]

        df = df[available_cols]
        return df[df["close"] > 0].sort_index()

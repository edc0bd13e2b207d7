"""Yahoo Finance Chart API Provider.

Primary data source: talks to the public Yahoo Finance chart and quote
endpoints directly over HTTP. Bare symbols resolve to the default exchange
first (e.g. 'RELIANCE' -> 'RELIANCE.NS') and fall back to the global listing.
"""

from datetime import date, datetime, timedelta, timezone
from typing import Any

import httpx
import pandas as pd

from src.modules.data.formatting import format_market_cap
from src.modules.data.protocols import ProviderError, StockDetails, symbol_candidates
from src.shared.logger import get_logger

logger = get_logger(__name__)

COMMON_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/121.0.0.0 Safari/537.36"
    ),
    "Accept": "application/json",
    "Referer": "https://finance.yahoo.com/",
    "Origin": "https://finance.yahoo.com",
}


class YahooChartProvider:
    """Yahoo Finance chart/quote provider (Primary).

    Unofficial public endpoints, no API key. Responses are unversioned, so
    every field is read defensively.
    """

    def __init__(
        self,
        default_suffix: str = ".NS",
        timeout: float = 30.0,
        base_url: str = "https://query1.finance.yahoo.com",
    ) -> None:
        """Initialize YahooChartProvider.

        Args:
            default_suffix: Exchange suffix tried first for bare symbols.
            timeout: HTTP timeout in seconds.
            base_url: Yahoo Finance API host.
        """
        self._default_suffix = default_suffix
        self._timeout = timeout
        self._base_url = base_url

    @property
    def name(self) -> str:
        """Provider name."""
        return "YahooChart"

    def get_daily_candles(
        self,
        ticker: str,
        start_date: date,
        end_date: date,
    ) -> pd.DataFrame:
        """Fetch daily OHLCV candles from the chart endpoint.

        Args:
            ticker: Stock symbol, with or without exchange suffix.
            start_date: Start date (inclusive).
            end_date: End date (inclusive).

        Returns:
            Normalized DataFrame with OHLCV data. Bars without a positive
            close are dropped.

        Raises:
            ProviderError: If every symbol candidate fails or returns no data.
        """
        logger.info(
            "Fetching data from Yahoo chart API",
            extra={"ticker": ticker, "start": str(start_date), "end": str(end_date)},
        )

        params = {
            "period1": _epoch_seconds(start_date),
            "period2": _epoch_seconds(end_date + timedelta(days=1)),
            "interval": "1d",
        }

        try:
            with httpx.Client(timeout=self._timeout, headers=COMMON_HEADERS) as client:
                candidates = symbol_candidates(ticker, self._default_suffix)
                for symbol in candidates:
                    response = client.get(
                        f"{self._base_url}/v8/finance/chart/{symbol}", params=params
                    )
                    if response.is_success or symbol == candidates[-1]:
                        break
                    logger.warning(
                        f"Chart lookup for {symbol} returned HTTP {response.status_code}, "
                        "trying next symbol",
                        extra={"ticker": ticker},
                    )
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as e:
            raise ProviderError(
                self.name,
                ticker,
                f"HTTP {e.response.status_code}: {e.response.text}",
            ) from e
        except httpx.RequestError as e:
            raise ProviderError(self.name, ticker, str(e)) from e

        result = _first((data.get("chart") or {}).get("result"))
        if not result or not result.get("timestamp"):
            raise ProviderError(self.name, ticker, "No data returned")

        return self._normalize(result)

    def get_quote(self, ticker: str) -> StockDetails:
        """Fetch the latest quote from the quote endpoint.

        Args:
            ticker: Stock symbol, with or without exchange suffix.

        Returns:
            StockDetails for the first symbol candidate Yahoo knows about.

        Raises:
            ProviderError: If no candidate resolves or the call fails.
        """
        logger.info("Fetching quote from Yahoo", extra={"ticker": ticker})

        quote: dict[str, Any] | None = None
        try:
            with httpx.Client(timeout=self._timeout, headers=COMMON_HEADERS) as client:
                candidates = symbol_candidates(ticker, self._default_suffix)
                for symbol in candidates:
                    response = client.get(
                        f"{self._base_url}/v7/finance/quote", params={"symbols": symbol}
                    )
                    if not response.is_success and symbol != candidates[-1]:
                        logger.warning(
                            f"Quote lookup for {symbol} returned HTTP {response.status_code}, "
                            "trying next symbol",
                            extra={"ticker": ticker},
                        )
                        continue
                    response.raise_for_status()
                    payload = response.json()
                    quote = _first((payload.get("quoteResponse") or {}).get("result"))
                    if quote:
                        break
        except httpx.HTTPStatusError as e:
            raise ProviderError(
                self.name,
                ticker,
                f"HTTP {e.response.status_code}: {e.response.text}",
            ) from e
        except httpx.RequestError as e:
            raise ProviderError(self.name, ticker, str(e)) from e

        if not quote:
            raise ProviderError(self.name, ticker, "Symbol not found")

        return StockDetails(
            symbol=quote.get("symbol", ticker),
            name=quote.get("longName") or quote.get("shortName") or quote.get("symbol", ticker),
            price=quote.get("regularMarketPrice") or 0.0,
            change=quote.get("regularMarketChange") or 0.0,
            change_percent=quote.get("regularMarketChangePercent") or 0.0,
            pe_ratio=quote.get("trailingPE") or 0.0,
            eps=quote.get("trailingEps") or 0.0,
            dividend_yield=quote.get("dividendYield") or 0.0,
            market_cap=format_market_cap(quote.get("marketCap")),
            fifty_two_week_high=quote.get("fiftyTwoWeekHigh") or 0.0,
            fifty_two_week_low=quote.get("fiftyTwoWeekLow") or 0.0,
        )

    def _normalize(self, result: dict[str, Any]) -> pd.DataFrame:
        """Normalize a chart result to the standard schema.

        Args:
            result: One entry of ``chart.result`` from the API response.

        Returns:
            Normalized DataFrame indexed by date.
        """
        timestamps = result["timestamp"]
        indicators = result.get("indicators") or {}
        quote = _first(indicators.get("quote")) or {}
        adjusted = (_first(indicators.get("adjclose")) or {}).get("adjclose") or []

        def field(name: str, i: int) -> float:
            values = quote.get(name) or []
            value = values[i] if i < len(values) else None
            return value if value is not None else 0.0

        rows = []
        for i, ts in enumerate(timestamps):
            close = adjusted[i] if i < len(adjusted) and adjusted[i] is not None else None
            rows.append(
                {
                    "date": datetime.fromtimestamp(ts, tz=timezone.utc).date(),
                    "open": field("open", i),
                    "high": field("high", i),
                    "low": field("low", i),
                    "close": close if close is not None else field("close", i),
                    "volume": field("volume", i),
                }
            )

        df = pd.DataFrame(rows, columns=["date", "open", "high", "low", "close", "volume"])
        df = df[df["close"] > 0].set_index("date")

        return df.sort_index()


def _first(items: list[Any] | None) -> Any:
    """Return the first element of a possibly missing list."""
    return items[0] if items else None


def _epoch_seconds(day: date) -> int:
    """Midnight UTC of a date, as Unix seconds."""
    return int(datetime(day.year, day.month, day.day, tzinfo=timezone.utc).timestamp())

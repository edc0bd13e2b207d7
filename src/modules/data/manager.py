"""Market Data Manager - history and quote orchestrator.

Handles provider failover, short-lived in-memory caching, rate-limit
bookkeeping and indicator enrichment of the fetched bars.
"""

import time
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Any

import pandas as pd

from src.modules.data.protocols import (
    MarketDataProvider,
    ProviderError,
    QuoteProvider,
    StockDetails,
    symbol_candidates,
)
from src.modules.data.providers.yahoo import YahooProvider
from src.modules.data.providers.yahoo_chart import YahooChartProvider
from src.modules.data.rate_limit import RateLimit, RateLimitTracker
from src.modules.features.engine import IndicatorEngine
from src.shared.config import Config
from src.shared.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class HistoryResult:
    """Enriched daily bars for a symbol plus the request budget.

    Attributes:
        symbol: Symbol as requested.
        bars: Enriched DataFrame (empty when every provider failed).
        records: One dict per bar, ready to serialize.
        rate_limit: Budget after this request.
        error: Provider failure message, if the fetch failed.
    """

    symbol: str
    bars: pd.DataFrame
    records: list[dict[str, Any]]
    rate_limit: RateLimit
    error: str | None = field(default=None)

    def to_dict(self) -> dict[str, Any]:
        """Serialize as the history API body."""
        return {"data": self.records, "rateLimit": self.rate_limit.to_dict()}


@dataclass(frozen=True)
class DetailsResult:
    """Quote details for a symbol plus the request budget."""

    details: StockDetails
    rate_limit: RateLimit

    def to_dict(self) -> dict[str, Any]:
        """Serialize as the details API body."""
        return {"data": self.details.to_dict(), "rateLimit": self.rate_limit.to_dict()}


class MarketDataManager:
    """Fetches daily history and quotes for the terminal.

    This is the main entry point for market data. It:
    1. Serves recent history from an in-memory cache when still fresh
    2. Tries the primary provider, falls back if it fails
    3. Enriches the bars with SMA/EMA/RSI via the IndicatorEngine
    4. Reports the request budget with every response
    """

    def __init__(
        self,
        config: Config,
        primary_provider: MarketDataProvider,
        fallback_provider: MarketDataProvider,
        quote_provider: QuoteProvider,
        engine: IndicatorEngine | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize MarketDataManager.

        Args:
            config: Application configuration.
            primary_provider: Primary market data provider (e.g., Yahoo chart API).
            fallback_provider: Fallback provider (e.g., yfinance).
            quote_provider: Provider for quote details.
            engine: Indicator engine (default: SMA20/EMA50/RSI14).
            clock: Monotonic time source (injectable for testing).
        """
        self._config = config
        self._primary = primary_provider
        self._fallback = fallback_provider
        self._quotes = quote_provider
        self._engine = engine or IndicatorEngine()
        self._clock = clock
        self._rate_limit = RateLimitTracker(
            total=config.rate_limit_total,
            window_seconds=config.rate_limit_window_seconds,
            clock=clock,
        )
        self._cache: dict[str, tuple[float, pd.DataFrame]] = {}

    @property
    def engine(self) -> IndicatorEngine:
        """Indicator engine used for enrichment."""
        return self._engine

    def get_history(self, symbol: str) -> HistoryResult:
        """Fetch and enrich daily history for a symbol.

        A provider failure is not raised: the result carries empty data and
        the error message, so the chart simply renders nothing.

        Args:
            symbol: Symbol as typed by the user.

        Returns:
            HistoryResult with enriched bars and the request budget.
        """
        rate_limit = self._rate_limit.consume()
        key = symbol_candidates(symbol, self._config.default_exchange_suffix)[0]

        bars = self._get_cached(key)
        if bars is None:
            end_date = date.today()
            start_date = end_date - timedelta(days=self._config.history_days)

            try:
                raw = self._fetch_with_failover(symbol, start_date, end_date)
            except ProviderError as e:
                logger.error(f"History fetch failed for {symbol}: {e}")
                empty = self._engine.enrich(pd.DataFrame(columns=["close"], dtype=float))
                return HistoryResult(
                    symbol=symbol,
                    bars=empty,
                    records=[],
                    rate_limit=rate_limit,
                    error=str(e),
                )

            bars = self._engine.enrich(raw)
            self._cache[key] = (self._clock(), bars)
            logger.info(f"Fetched {len(bars)} bars for {symbol}")
        else:
            logger.info(f"Serving {symbol} history from cache")

        return HistoryResult(
            symbol=symbol,
            bars=bars.copy(),
            records=self._engine.to_records(bars),
            rate_limit=rate_limit,
        )

    def get_details(self, symbol: str) -> DetailsResult:
        """Fetch quote details for a symbol.

        Args:
            symbol: Symbol as typed by the user.

        Returns:
            DetailsResult with quote details and the request budget.

        Raises:
            ProviderError: If the quote provider fails.
        """
        rate_limit = self._rate_limit.consume()
        try:
            details = self._quotes.get_quote(symbol)
        except ProviderError as e:
            logger.error(f"Details fetch failed for {symbol}: {e}")
            raise
        return DetailsResult(details=details, rate_limit=rate_limit)

    def _get_cached(self, key: str) -> pd.DataFrame | None:
        """Return cached bars if they are younger than the configured TTL.

        Args:
            key: Normalized symbol.

        Returns:
            Cached enriched bars, or None when missing or stale.
        """
        entry = self._cache.get(key)
        if entry is None:
            return None

        fetched_at, bars = entry
        if self._clock() - fetched_at >= self._config.cache_ttl_seconds:
            del self._cache[key]
            return None
        return bars

    def _fetch_with_failover(
        self,
        ticker: str,
        start_date: date,
        end_date: date,
    ) -> pd.DataFrame:
        """Fetch data with provider failover.

        Args:
            ticker: Stock symbol.
            start_date: Fetch start date.
            end_date: Fetch end date.

        Returns:
            DataFrame with OHLCV data.

        Raises:
            ProviderError: If all providers fail.
        """
        try:
            return self._primary.get_daily_candles(ticker, start_date, end_date)
        except ProviderError as e:
            logger.warning(f"Primary provider failed: {e}, trying fallback")

        try:
            return self._fallback.get_daily_candles(ticker, start_date, end_date)
        except ProviderError as e:
            logger.error(f"Fallback provider also failed: {e}")
            raise


def build_market_data_manager(config: Config) -> MarketDataManager:
    """Wire the default providers: Yahoo chart API first, yfinance as fallback.

    Args:
        config: Application configuration.

    Returns:
        Ready-to-use MarketDataManager.
    """
    chart = YahooChartProvider(
        default_suffix=config.default_exchange_suffix,
        timeout=config.http_timeout_seconds,
    )
    return MarketDataManager(
        config=config,
        primary_provider=chart,
        fallback_provider=YahooProvider(default_suffix=config.default_exchange_suffix),
        quote_provider=chart,
    )

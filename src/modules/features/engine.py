"""Indicator Engine: annotates daily bars with technical indicators.

Computes SMA, EMA, RSI (and optionally MACD) from the close column of an
OHLCV DataFrame and zips each series back onto the bars by position.
This is the single entry point for indicator enrichment.
"""

from datetime import date, datetime
from typing import Any

import pandas as pd

from src.modules.features.indicators.momentum import macd, rsi
from src.modules.features.indicators.precision import DEFAULT_DECIMALS, IndicatorSeries
from src.modules.features.indicators.trend import ema, sma
from src.shared.logger import get_logger

logger = get_logger(__name__)

# Required column in input DataFrame
REQUIRED_COLUMNS = {"close"}

BAR_COLUMNS = ["open", "high", "low", "close", "volume"]

MACD_COLUMNS = ["macd", "macd_signal", "macd_hist"]


class IndicatorEngine:
    """Adds indicator columns to an OHLCV DataFrame.

    Missing values are stored with the nullable ``Float64`` dtype, so a
    warm-up slot is ``pd.NA`` rather than a NaN that could pass for a price.

    Usage:
        engine = IndicatorEngine()
        enriched = engine.enrich(bars_df)
        records = engine.to_records(enriched)
    """

    def __init__(
        self,
        sma_period: int = 20,
        ema_period: int = 50,
        rsi_period: int = 14,
        decimals: int | None = DEFAULT_DECIMALS,
        include_macd: bool = False,
    ) -> None:
        """Initialize IndicatorEngine.

        Args:
            sma_period: SMA window (column ``sma{n}``).
            ema_period: EMA span (column ``ema{n}``).
            rsi_period: RSI lookback (column ``rsi``).
            decimals: Decimal places of every indicator, or None.
            include_macd: If True, also add macd, macd_signal and macd_hist.
        """
        self._sma_period = sma_period
        self._ema_period = ema_period
        self._rsi_period = rsi_period
        self._decimals = decimals
        self._include_macd = include_macd

    @property
    def sma_column(self) -> str:
        """Name of the SMA column."""
        return f"sma{self._sma_period}"

    @property
    def ema_column(self) -> str:
        """Name of the EMA column."""
        return f"ema{self._ema_period}"

    @property
    def indicator_columns(self) -> list[str]:
        """All columns this engine adds, in output order."""
        columns = [self.sma_column, self.ema_column, "rsi"]
        if self._include_macd:
            columns += MACD_COLUMNS
        return columns

    def enrich(self, bars: pd.DataFrame) -> pd.DataFrame:
        """Compute indicators for the input bars.

        Args:
            bars: DataFrame with at least a ``close`` column, oldest bar first.

        Returns:
            New DataFrame with all original columns plus indicator columns.
            Indicator values that are still warming up are ``pd.NA``.

        Raises:
            ValueError: If the close column is missing.
        """
        missing = REQUIRED_COLUMNS - set(bars.columns)
        if missing:
            raise ValueError(f"Missing required columns: {missing}")

        closes = bars["close"].astype(float).tolist()
        result = bars.copy()

        result[self.sma_column] = self._column(sma(closes, self._sma_period, self._decimals))
        result[self.ema_column] = self._column(ema(closes, self._ema_period, self._decimals))
        result["rsi"] = self._column(rsi(closes, self._rsi_period, self._decimals))

        if self._include_macd:
            macd_result = macd(closes, decimals=self._decimals)
            result["macd"] = self._column(macd_result.macd_line)
            result["macd_signal"] = self._column(macd_result.signal_line)
            result["macd_hist"] = self._column(macd_result.histogram)

        logger.info(
            f"Computed {len(self.indicator_columns)} indicators for {len(bars)} bars",
            extra={"columns": self.indicator_columns},
        )

        return result

    def to_records(self, enriched: pd.DataFrame) -> list[dict[str, Any]]:
        """Flatten an enriched DataFrame into one dict per bar.

        Args:
            enriched: Output of `enrich`, indexed by date.

        Returns:
            List of records with an ISO ``date`` key, the bar columns that are
            present and every indicator column. Missing values become None.
        """
        columns = [c for c in BAR_COLUMNS if c in enriched.columns]
        columns += [c for c in self.indicator_columns if c in enriched.columns]

        records: list[dict[str, Any]] = []
        for index, row in enriched[columns].iterrows():
            record: dict[str, Any] = {"date": _format_date(index)}
            for column in columns:
                value = row[column]
                record[column] = None if pd.isna(value) else float(value)
            records.append(record)
        return records

    @staticmethod
    def _column(series: IndicatorSeries) -> pd.arrays.FloatingArray:
        return pd.array(series, dtype="Float64")


def _format_date(value: Any) -> str:
    """Render a bar index value as an ISO date string."""
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return str(value)

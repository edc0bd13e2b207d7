"""Tests for individual technical indicators.

Each indicator function is tested for:
- Correct output on known data
- Edge cases (empty, short input, all-gains, all-losses, flat)
- Degenerate parameters (never raise, all None)
- None warm-up period behavior and index alignment
"""

import pandas as pd
import pytest

from src.modules.features.indicators.momentum import MACDResult, macd, rsi
from src.modules.features.indicators.trend import ema, sma

# ========================================================================
# SMA Tests
# ========================================================================


class TestSMA:
    """Tests for Simple Moving Average."""

    def test_sma_known_values(self) -> None:
        """Three-day mean of 1..5."""
        assert sma([1, 2, 3, 4, 5], 3) == [None, None, 2.0, 3.0, 4.0]

    def test_sma_output_length(self, sample_closes: list[float]) -> None:
        """Output should have same length as input."""
        assert len(sma(sample_closes, 20)) == len(sample_closes)

    def test_sma_warm_up_nones(self, sample_closes: list[float]) -> None:
        """First period - 1 values should be None."""
        result = sma(sample_closes, 20)
        assert all(v is None for v in result[:19])
        assert all(v is not None for v in result[19:])

    def test_sma_short_input(self) -> None:
        """Fewer prices than the window gives all None."""
        assert sma([1.0, 2.0], 3) == [None, None]

    def test_sma_period_equals_length(self) -> None:
        """Exactly one value when the window spans the whole input."""
        assert sma([2.0, 4.0, 6.0], 3) == [None, None, 4.0]

    @pytest.mark.parametrize("period", [0, -3])
    def test_sma_non_positive_period(self, period: int) -> None:
        """Non-positive period gives all None instead of raising."""
        assert sma([1.0, 2.0, 3.0], period) == [None, None, None]

    def test_sma_empty_input(self) -> None:
        """Empty input gives empty output."""
        assert sma([], 5) == []

    def test_sma_rounds_to_two_decimals(self) -> None:
        """Output is rounded by default, full precision on request."""
        assert sma([1.0, 2.0, 2.0], 3) == [None, None, 1.67]
        raw = sma([1.0, 2.0, 2.0], 3, decimals=None)
        assert raw[2] == pytest.approx(5.0 / 3.0)

    def test_sma_accepts_series_with_offset_index(self) -> None:
        """A pandas Series is read by position, not label."""
        prices = pd.Series([1.0, 2.0, 3.0], index=[10, 11, 12])
        assert sma(prices, 2) == [None, 1.5, 2.5]

    def test_sma_long_window_matches_plain_mean(self) -> None:
        """A wide window over a long series equals the mean of each window."""
        prices = [100.0 + (i % 37) * 0.25 for i in range(2_000)]
        result = sma(prices, 500, decimals=None)
        assert result[:499] == [None] * 499
        for i in (499, 1_000, 1_999):
            assert result[i] == pytest.approx(sum(prices[i - 499 : i + 1]) / 500)

    def test_sma_huge_values_do_not_raise(self) -> None:
        """Values far beyond the default decimal precision still round."""
        result = sma([1e30, 1e30, 1e30], 2)
        assert result[0] is None
        assert result[1:] == [pytest.approx(1e30), pytest.approx(1e30)]

    def test_sma_does_not_mutate_input(self, sample_closes: list[float]) -> None:
        """Input is left untouched and repeated calls agree."""
        before = list(sample_closes)
        first = sma(sample_closes, 10)
        second = sma(sample_closes, 10)
        assert sample_closes == before
        assert first == second
        assert first is not second


# ========================================================================
# EMA Tests
# ========================================================================


class TestEMA:
    """Tests for Exponential Moving Average."""

    def test_ema_known_values(self) -> None:
        """k = 0.5 for a 3-period EMA, seeded with the mean of 1, 2, 3."""
        assert ema([1, 2, 3, 4, 5], 3) == [None, None, 2.0, 3.0, 4.0]

    def test_ema_recurrence(self) -> None:
        """Each value is price * k + previous * (1 - k)."""
        assert ema([2.0, 4.0, 6.0, 8.0], 2) == [None, 3.0, 5.0, 7.0]

    def test_ema_seeded_with_mean_not_first_price(self) -> None:
        """The seed is the plain mean of the first period prices."""
        assert ema([10.0, 20.0, 30.0], 2)[1] == 15.0

    def test_ema_seed_matches_sma(self, sample_closes: list[float]) -> None:
        """EMA and SMA agree at index period - 1."""
        assert ema(sample_closes, 20)[19] == sma(sample_closes, 20)[19]
        assert ema(sample_closes, 20, decimals=None)[19] == pytest.approx(
            sma(sample_closes, 20, decimals=None)[19]
        )

    def test_ema_warm_up_nones(self, sample_closes: list[float]) -> None:
        """First period - 1 values should be None."""
        result = ema(sample_closes, 50)
        assert len(result) == len(sample_closes)
        assert all(v is None for v in result[:49])
        assert all(v is not None for v in result[49:])

    def test_ema_short_input(self) -> None:
        """Fewer prices than the span gives all None."""
        assert ema([1.0, 2.0, 3.0], 5) == [None, None, None]

    def test_ema_non_positive_period(self) -> None:
        """Non-positive period gives all None instead of raising."""
        assert ema([1.0, 2.0, 3.0], 0) == [None, None, None]

    def test_ema_empty_input(self) -> None:
        """Empty input gives empty output."""
        assert ema([], 3) == []

    def test_ema_tracks_uptrend_below_price(self, trending_up_closes: list[float]) -> None:
        """EMA lags a steady uptrend."""
        result = ema(trending_up_closes, 10)
        for price, value in zip(trending_up_closes[9:], result[9:]):
            assert value is not None
            assert value < price

    def test_ema_does_not_mutate_input(self, sample_closes: list[float]) -> None:
        """Input is left untouched and repeated calls agree."""
        before = list(sample_closes)
        assert ema(sample_closes, 12) == ema(sample_closes, 12)
        assert sample_closes == before


# ========================================================================
# RSI Tests
# ========================================================================


class TestRSI:
    """Tests for Relative Strength Index."""

    def test_rsi_known_values(self) -> None:
        """Wilder smoothing on an alternating series."""
        assert rsi([1.0, 2.0, 1.0, 2.0, 1.0], period=2) == [None, None, 50.0, 75.0, 37.5]

    def test_rsi_first_value_is_rounded(self) -> None:
        """The seed value at index period is rounded like the rest."""
        assert rsi([1.0, 3.0, 2.0], period=2) == [None, None, 66.67]
        raw = rsi([1.0, 3.0, 2.0], period=2, decimals=None)
        assert raw[2] == pytest.approx(200.0 / 3.0)

    def test_rsi_output_range(self, sample_closes: list[float]) -> None:
        """RSI values should be between 0 and 100."""
        valid = [v for v in rsi(sample_closes) if v is not None]
        assert valid
        assert all(0 <= v <= 100 for v in valid)

    def test_rsi_warm_up_nones(self, sample_closes: list[float]) -> None:
        """First 14 values should be None."""
        result = rsi(sample_closes, period=14)
        assert all(v is None for v in result[:14])
        assert all(v is not None for v in result[14:])

    def test_rsi_all_gains(self, all_gains_close: list[float]) -> None:
        """RSI should be exactly 100 when all days are up."""
        result = rsi(all_gains_close, period=14)
        assert result[:14] == [None] * 14
        assert result[14:] == [100.0] * 6

    def test_rsi_all_losses(self, all_losses_close: list[float]) -> None:
        """RSI should be exactly 0 when all days are down."""
        result = rsi(all_losses_close, period=14)
        assert result[14:] == [0.0] * 6

    def test_rsi_flat_prices_saturate(self) -> None:
        """No losses at all (flat window) saturates at 100."""
        result = rsi([5.0] * 10, period=3)
        assert result[:3] == [None] * 3
        assert result[3:] == [100.0] * 7

    def test_rsi_insufficient_data(self) -> None:
        """period prices or fewer gives all None."""
        assert rsi([1.0, 2.0, 3.0], period=3) == [None, None, None]
        assert rsi([1.0, 2.0], period=14) == [None, None]

    def test_rsi_first_computable_length(self) -> None:
        """period + 1 prices yields exactly one value, at index period."""
        result = rsi([1.0, 2.0, 3.0, 2.0], period=3)
        assert result[:3] == [None, None, None]
        assert result[3] is not None

    def test_rsi_non_positive_period(self) -> None:
        """Non-positive period gives all None instead of raising."""
        assert rsi([1.0, 2.0, 3.0], period=0) == [None, None, None]

    def test_rsi_empty_input(self) -> None:
        """Empty input gives empty output."""
        assert rsi([]) == []

    def test_rsi_custom_period(self, sample_closes: list[float]) -> None:
        """Custom period should shift the warm-up window."""
        result = rsi(sample_closes, period=7)
        assert all(v is None for v in result[:7])
        assert all(v is not None for v in result[7:])

    def test_rsi_does_not_mutate_input(self, sample_closes: list[float]) -> None:
        """Input is left untouched and repeated calls agree."""
        before = list(sample_closes)
        assert rsi(sample_closes) == rsi(sample_closes)
        assert sample_closes == before


# ========================================================================
# MACD Tests
# ========================================================================


class TestMACD:
    """Tests for MACD line, signal and histogram."""

    def test_macd_known_values(self) -> None:
        """Small spans on a linear series give a constant MACD line."""
        result = macd([1.0, 2.0, 3.0, 4.0, 5.0, 6.0], fast=2, slow=3, signal=2)

        assert isinstance(result, MACDResult)
        assert result.macd_line == [None, None, 0.5, 0.5, 0.5, 0.5]
        assert result.signal_line == [None, None, None, 0.5, 0.5, 0.5]
        assert result.histogram == [None, None, None, 0.0, 0.0, 0.0]

    def test_macd_output_length(self, sample_closes: list[float]) -> None:
        """All three series should have same length as input."""
        result = macd(sample_closes)
        assert len(result.macd_line) == len(sample_closes)
        assert len(result.signal_line) == len(sample_closes)
        assert len(result.histogram) == len(sample_closes)

    def test_macd_double_warm_up(self, sample_closes: list[float]) -> None:
        """MACD line starts at slow - 1; signal and histogram wait signal - 1 more."""
        result = macd(sample_closes)
        assert all(v is None for v in result.macd_line[:25])
        assert all(v is not None for v in result.macd_line[25:])

        warm_up = 26 + 9 - 2  # 33
        assert all(v is None for v in result.signal_line[:warm_up])
        assert all(v is not None for v in result.signal_line[warm_up:])
        assert all(v is None for v in result.histogram[:warm_up])
        assert all(v is not None for v in result.histogram[warm_up:])

    def test_macd_histogram_is_line_minus_signal(self, sample_closes: list[float]) -> None:
        """Histogram equals MACD minus signal wherever both exist."""
        for decimals in (2, None):
            result = macd(sample_closes, decimals=decimals)
            for m, s, h in zip(result.macd_line, result.signal_line, result.histogram):
                if m is None or s is None:
                    assert h is None
                else:
                    assert h == pytest.approx(m - s, abs=1e-9)

    def test_macd_trending_up(self, trending_up_closes: list[float]) -> None:
        """Fast EMA stays above slow EMA in a steady uptrend."""
        result = macd(trending_up_closes)
        valid = [v for v in result.macd_line if v is not None]
        assert valid
        assert all(v > 0 for v in valid)

    def test_macd_custom_periods(self, sample_closes: list[float]) -> None:
        """Custom periods should work and shift warm-up."""
        result = macd(sample_closes, fast=5, slow=10, signal=3)
        warm_up = 10 + 3 - 2  # 11
        assert all(v is None for v in result.histogram[:warm_up])
        assert all(v is not None for v in result.histogram[warm_up:])

    def test_macd_short_input(self) -> None:
        """Too little data for the slow EMA gives all None."""
        result = macd([100.0] * 20)
        assert result.macd_line == [None] * 20
        assert result.signal_line == [None] * 20
        assert result.histogram == [None] * 20

    def test_macd_empty_input(self) -> None:
        """Empty input gives empty series."""
        result = macd([])
        assert result == MACDResult(macd_line=[], signal_line=[], histogram=[])

    def test_macd_bad_periods(self) -> None:
        """Non-positive spans give all None instead of raising."""
        result = macd([100.0] * 50, fast=0)
        assert result.macd_line == [None] * 50
        assert result.histogram == [None] * 50

    def test_macd_does_not_mutate_input(self, sample_closes: list[float]) -> None:
        """Input is left untouched and repeated calls agree."""
        before = list(sample_closes)
        assert macd(sample_closes) == macd(sample_closes)
        assert sample_closes == before

"""Trailing rounding step for indicator series.

Rounds half away from zero on the exact binary value of each float, which is
how chart consumers have always seen these numbers printed (``2.125 -> 2.13``,
``1.005 -> 1.0``). Python's ``round`` would send exact ties to even instead.
"""

import math
from decimal import ROUND_HALF_UP, Decimal, localcontext

IndicatorSeries = list[float | None]

DEFAULT_DECIMALS = 2


def round_value(value: float, decimals: int) -> float:
    """Round a single value to a fixed number of decimal places.

    Args:
        value: Value to round.
        decimals: Number of decimal places (>= 0).

    Returns:
        Rounded value. Infinities and NaN are returned unchanged.
    """
    if not math.isfinite(value):
        return value

    exact = Decimal(value)
    quantum = Decimal(1).scaleb(-decimals)
    with localcontext() as ctx:
        # Enough digits for the integer part plus the kept decimals.
        ctx.prec = max(ctx.prec, exact.adjusted() + decimals + 2)
        return float(exact.quantize(quantum, rounding=ROUND_HALF_UP))


def round_series(series: IndicatorSeries, decimals: int | None) -> IndicatorSeries:
    """Round every defined value of a series, leaving None markers untouched.

    Args:
        series: Indicator series.
        decimals: Decimal places, or None to return an unrounded copy.

    Returns:
        New series of the same length.
    """
    if decimals is None:
        return list(series)
    return [None if value is None else round_value(value, decimals) for value in series]

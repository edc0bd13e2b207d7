"""Display formatting for quote metrics."""


def format_market_cap(value: float | None) -> str:
    """Abbreviate a market capitalization (e.g. 2.51T, 845.20B, 12.00M).

    Args:
        value: Market cap in currency units, or None when unknown.

    Returns:
        Abbreviated string, or 'N/A' for a missing or zero value.
    """
    if not value:
        return "N/A"
    if value >= 1e12:
        return f"{value / 1e12:.2f}T"
    if value >= 1e9:
        return f"{value / 1e9:.2f}B"
    if value >= 1e6:
        return f"{value / 1e6:.2f}M"
    return str(int(value)) if float(value).is_integer() else str(value)

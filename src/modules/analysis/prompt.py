"""Prompt rendering for the narrative analysis."""

from src.modules.analysis.types import StockAnalysisInput

SYSTEM_INSTRUCTION = (
    "You are the STARFISH Core Intelligence, a high-frequency trading AI terminal."
)

RESPONSE_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "summary": {
            "type": "STRING",
            "description": "A concise executive summary of the stock status.",
        },
        "technicalVerdict": {
            "type": "STRING",
            "description": "Analysis of chart patterns and technical indicators (RSI, SMA, EMA).",
        },
        "fundamentalHealth": {
            "type": "STRING",
            "description": "Assessment based on price action and available metrics.",
        },
        "riskLevel": {
            "type": "STRING",
            "enum": ["LOW", "MEDIUM", "HIGH", "CRITICAL"],
            "description": "Calculated risk profile.",
        },
        "sentiment": {
            "type": "STRING",
            "enum": ["BULLISH", "NEUTRAL", "BEARISH"],
            "description": "Overall market sentiment.",
        },
        "recommendation": {
            "type": "STRING",
            "description": "A terminal-style final directive.",
        },
    },
    "required": [
        "summary",
        "technicalVerdict",
        "fundamentalHealth",
        "riskLevel",
        "sentiment",
        "recommendation",
    ],
}


def _fmt(value: float | None) -> str:
    if value is None:
        return "null"
    return str(int(value)) if float(value).is_integer() else str(value)


def render_prompt(analysis_input: StockAnalysisInput) -> str:
    """Render the user prompt for one symbol.

    Args:
        analysis_input: Quote details and trailing enriched bars.

    Returns:
        Prompt text.
    """
    market_cap = analysis_input.market_cap or "N/A"
    pe_ratio = _fmt(analysis_input.pe_ratio) if analysis_input.pe_ratio else "N/A"

    lines = [
        f"Analyze the following market data for {analysis_input.name} ({analysis_input.symbol}).",
        "",
        "CURRENT STATUS:",
        f"- Price: ${_fmt(analysis_input.price)} ({_fmt(analysis_input.change_percent)}%)",
        f"- Market Cap: {market_cap}",
        f"- P/E Ratio: {pe_ratio}",
        "",
        "HISTORICAL OVERVIEW (Technical Snapshot):",
    ]
    for point in analysis_input.history:
        lines.append(
            f"- Date: {point.date}, Close: {_fmt(point.close)}, "
            f"RSI: {_fmt(point.rsi)}, SMA20: {_fmt(point.sma20)}"
        )
    lines += [
        "",
        "Identify momentum shifts, potential breakouts, or breakdown risks using technical "
        "indicators. Since fundamental data might be limited, prioritize price action and "
        'trend analysis. Adopt a "terminal" tone. No fluff.',
    ]
    return "\n".join(lines)

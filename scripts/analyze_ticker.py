"""Print enriched daily bars (and optionally the AI verdict) for a symbol.

Usage:
    python -m scripts.analyze_ticker RELIANCE
    python -m scripts.analyze_ticker AAPL --last 10 --macd
    python -m scripts.analyze_ticker TCS --analyze   # needs GEMINI_API_KEY
"""

from __future__ import annotations

import argparse
import sys

from src.modules.analysis.analyst import GeminiAnalyst
from src.modules.analysis.types import AnalysisError, build_analysis_input
from src.modules.data.manager import MarketDataManager
from src.modules.data.protocols import ProviderError
from src.modules.data.providers.yahoo import YahooProvider
from src.modules.data.providers.yahoo_chart import YahooChartProvider
from src.modules.features.engine import IndicatorEngine
from src.shared.config import load_config


def _cell(value: object) -> str:
    if value is None:
        return "-"
    if isinstance(value, float):
        return f"{value:.2f}"
    return str(value)


def print_table(records: list[dict[str, object]], columns: list[str]) -> None:
    """Print records as a fixed-width table.

    Args:
        records: Enriched bar records.
        columns: Columns to show, in order.
    """
    widths = {c: max([len(c)] + [len(_cell(r.get(c))) for r in records]) for c in columns}
    print("  ".join(c.rjust(widths[c]) for c in columns))
    for record in records:
        print("  ".join(_cell(record.get(c)).rjust(widths[c]) for c in columns))


def main() -> int:
    """CLI entry point."""
    parser = argparse.ArgumentParser(description="Show technical indicators for a symbol")
    parser.add_argument("symbol", help="Ticker symbol (bare symbols try the default exchange first)")
    parser.add_argument("--last", type=int, default=20, help="Number of trailing bars to print")
    parser.add_argument("--macd", action="store_true", help="Include MACD columns")
    parser.add_argument("--analyze", action="store_true", help="Request the AI verdict")
    args = parser.parse_args()

    config = load_config()
    chart = YahooChartProvider(
        default_suffix=config.default_exchange_suffix,
        timeout=config.http_timeout_seconds,
    )
    engine = IndicatorEngine(include_macd=args.macd)
    manager = MarketDataManager(
        config=config,
        primary_provider=chart,
        fallback_provider=YahooProvider(default_suffix=config.default_exchange_suffix),
        quote_provider=chart,
        engine=engine,
    )

    history = manager.get_history(args.symbol)
    if not history.records:
        print(f"No history for {args.symbol}: {history.error}", file=sys.stderr)
        return 1

    print(f"{args.symbol}: {len(history.records)} bars\n")
    columns = ["date", "close"] + engine.indicator_columns
    print_table(history.records[-args.last :], columns)

    if not args.analyze:
        return 0

    try:
        details = manager.get_details(args.symbol).details
        analysis_input = build_analysis_input(
            details, history.records, last_n=config.analysis_history_days
        )
        analysis = GeminiAnalyst.from_config(config).analyze(analysis_input)
    except (ProviderError, AnalysisError) as e:
        print(f"Analysis unavailable: {e}", file=sys.stderr)
        return 1

    print(f"\n[{analysis.sentiment.value} | RISK {analysis.risk_level.value}]")
    print(f"SUMMARY: {analysis.summary}")
    print(f"TECHNICAL: {analysis.technical_verdict}")
    print(f"FUNDAMENTAL: {analysis.fundamental_health}")
    print(f"DIRECTIVE: {analysis.recommendation}")
    return 0


if __name__ == "__main__":
    sys.exit(main())

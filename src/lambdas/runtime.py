"""Per-process state shared by the terminal's Lambda handlers.

Warm containers reuse one MarketDataManager so its history cache and
rate-limit budget survive between invocations.
"""

from typing import Any

from src.modules.data.manager import MarketDataManager, build_market_data_manager
from src.shared.config import load_config

_manager: MarketDataManager | None = None


def get_manager() -> MarketDataManager:
    """Return the process-wide MarketDataManager, creating it on first use."""
    global _manager
    if _manager is None:
        _manager = build_market_data_manager(load_config())
    return _manager


def reset_manager() -> None:
    """Drop the process-wide manager (next call rebuilds it from config)."""
    global _manager
    _manager = None


def get_symbol(event: dict[str, Any]) -> str | None:
    """Read the requested symbol from a direct or API Gateway event.

    Args:
        event: Invocation payload.

    Returns:
        Stripped symbol, or None when absent or blank.
    """
    symbol = event.get("symbol")
    if symbol is None:
        symbol = (event.get("queryStringParameters") or {}).get("symbol")
    if not isinstance(symbol, str) or not symbol.strip():
        return None
    return symbol.strip()

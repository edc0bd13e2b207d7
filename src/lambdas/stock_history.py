"""Stock History Lambda Handler.

Returns daily bars enriched with SMA20, EMA50 and RSI for one symbol.
"""

from typing import Any

from src.lambdas.runtime import get_manager, get_symbol
from src.shared.logger import get_logger

logger = get_logger(__name__)


def handler(event: dict[str, Any], context: Any) -> dict[str, Any]:
    """Lambda handler for enriched price history.

    Args:
        event: Payload with a ``symbol`` (directly or in query parameters).
        context: Lambda context.

    Returns:
        Response with ``data`` (enriched bars, empty when every provider
        failed) and ``rateLimit``.
    """
    symbol = get_symbol(event)
    if symbol is None:
        return {"statusCode": 400, "body": "Missing 'symbol'"}

    logger.info("Starting Stock History Lambda", extra={"ticker": symbol})

    try:
        result = get_manager().get_history(symbol)
    except Exception as e:
        logger.exception("Fatal error in Stock History Lambda")
        return {"statusCode": 500, "body": f"Internal Server Error: {str(e)}"}

    if result.error:
        logger.warning(f"Returning empty history for {symbol}: {result.error}")

    return {"statusCode": 200, "body": result.to_dict()}

"""Stock Details Lambda Handler.

Returns the latest quote and headline metrics for one symbol.
"""

from typing import Any

from src.lambdas.runtime import get_manager, get_symbol
from src.modules.data.protocols import ProviderError
from src.shared.logger import get_logger

logger = get_logger(__name__)


def handler(event: dict[str, Any], context: Any) -> dict[str, Any]:
    """Lambda handler for quote details.

    Args:
        event: Payload with a ``symbol`` (directly or in query parameters).
        context: Lambda context.

    Returns:
        Response with ``data`` (quote details) and ``rateLimit``; 404 when
        the symbol cannot be resolved.
    """
    symbol = get_symbol(event)
    if symbol is None:
        return {"statusCode": 400, "body": "Missing 'symbol'"}

    logger.info("Starting Stock Details Lambda", extra={"ticker": symbol})

    try:
        result = get_manager().get_details(symbol)
    except ProviderError as e:
        return {"statusCode": 404, "body": str(e)}
    except Exception as e:
        logger.exception("Fatal error in Stock Details Lambda")
        return {"statusCode": 500, "body": f"Internal Server Error: {str(e)}"}

    return {"statusCode": 200, "body": result.to_dict()}

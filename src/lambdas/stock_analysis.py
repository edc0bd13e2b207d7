"""Stock Analysis Lambda Handler.

Fetches quote details and enriched history for a symbol, then asks the
narrative model for a verdict on the trailing bars.
"""

from typing import Any

from src.lambdas.runtime import get_manager, get_symbol
from src.modules.analysis.analyst import GeminiAnalyst
from src.modules.analysis.types import AnalysisError, build_analysis_input
from src.modules.data.protocols import ProviderError
from src.shared.config import load_config
from src.shared.logger import get_logger

logger = get_logger(__name__)


def handler(event: dict[str, Any], context: Any) -> dict[str, Any]:
    """Lambda handler for the narrative analysis.

    Args:
        event: Payload with a ``symbol`` (directly or in query parameters).
        context: Lambda context.

    Returns:
        Response with the analysis as ``body``; 404 when the symbol cannot
        be resolved, 502 when the model fails.
    """
    symbol = get_symbol(event)
    if symbol is None:
        return {"statusCode": 400, "body": "Missing 'symbol'"}

    logger.info("Starting Stock Analysis Lambda", extra={"ticker": symbol})

    try:
        config = load_config()
        manager = get_manager()

        details = manager.get_details(symbol).details
        history = manager.get_history(symbol)
        if not history.records:
            return {"statusCode": 404, "body": f"No history available for {symbol}"}

        analysis_input = build_analysis_input(
            details, history.records, last_n=config.analysis_history_days
        )
        analysis = GeminiAnalyst.from_config(config).analyze(analysis_input)

    except ProviderError as e:
        return {"statusCode": 404, "body": str(e)}
    except AnalysisError as e:
        logger.error(f"Analysis failed: {e}")
        return {"statusCode": 502, "body": str(e)}
    except Exception as e:
        logger.exception("Fatal error in Stock Analysis Lambda")
        return {"statusCode": 500, "body": f"Internal Server Error: {str(e)}"}

    return {"statusCode": 200, "body": analysis.to_dict()}

"""Narrative analysis via the Generative Language API.

Sends the technical snapshot of one symbol to a Gemini model and validates
the structured verdict it returns.
"""

import json
from typing import Any

import httpx

from src.modules.analysis.prompt import RESPONSE_SCHEMA, SYSTEM_INSTRUCTION, render_prompt
from src.modules.analysis.types import AnalysisError, StockAnalysis, StockAnalysisInput
from src.shared.config import Config
from src.shared.logger import get_logger

logger = get_logger(__name__)


class GeminiAnalyst:
    """Generates a terminal-style verdict for a symbol.

    The model is asked for JSON matching RESPONSE_SCHEMA; anything else is
    treated as a failed analysis.
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-2.0-flash",
        timeout: float = 30.0,
        temperature: float = 0.4,
        base_url: str = "https://generativelanguage.googleapis.com/v1beta",
    ) -> None:
        """Initialize GeminiAnalyst.

        Args:
            api_key: Generative Language API key.
            model: Model name.
            timeout: HTTP timeout in seconds.
            temperature: Sampling temperature.
            base_url: API base URL.
        """
        self._api_key = api_key
        self._model = model
        self._timeout = timeout
        self._temperature = temperature
        self._base_url = base_url

    @classmethod
    def from_config(cls, config: Config) -> "GeminiAnalyst":
        """Create an analyst from application configuration."""
        return cls(
            api_key=config.gemini_api_key,
            model=config.analysis_model,
            timeout=config.http_timeout_seconds,
        )

    def analyze(self, analysis_input: StockAnalysisInput) -> StockAnalysis:
        """Run the analysis for one symbol.

        Args:
            analysis_input: Quote details and trailing enriched bars.

        Returns:
            Validated StockAnalysis.

        Raises:
            AnalysisError: If the API call fails or the response is unusable.
        """
        symbol = analysis_input.symbol
        logger.info(
            "Requesting analysis",
            extra={"ticker": symbol, "model": self._model, "bars": len(analysis_input.history)},
        )

        payload = {
            "systemInstruction": {"parts": [{"text": SYSTEM_INSTRUCTION}]},
            "contents": [{"role": "user", "parts": [{"text": render_prompt(analysis_input)}]}],
            "generationConfig": {
                "temperature": self._temperature,
                "responseMimeType": "application/json",
                "responseSchema": RESPONSE_SCHEMA,
            },
        }

        try:
            with httpx.Client(timeout=self._timeout) as client:
                response = client.post(
                    f"{self._base_url}/models/{self._model}:generateContent",
                    headers={"x-goog-api-key": self._api_key},
                    json=payload,
                )
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as e:
            raise AnalysisError(
                symbol, f"HTTP {e.response.status_code}: {e.response.text}"
            ) from e
        except httpx.RequestError as e:
            raise AnalysisError(symbol, str(e)) from e

        text = self._extract_text(data)
        if not text:
            raise AnalysisError(symbol, "AI failed to generate analysis")

        try:
            decoded = json.loads(text)
        except json.JSONDecodeError as e:
            raise AnalysisError(symbol, f"Invalid JSON in response: {e}") from e

        analysis = StockAnalysis.from_dict(symbol, decoded)
        logger.info(
            "Analysis complete",
            extra={
                "ticker": symbol,
                "sentiment": analysis.sentiment.value,
                "risk_level": analysis.risk_level.value,
            },
        )
        return analysis

    @staticmethod
    def _extract_text(data: dict[str, Any]) -> str | None:
        """Pull the generated text out of a generateContent response."""
        candidates = data.get("candidates") or []
        if not candidates:
            return None
        parts = (candidates[0].get("content") or {}).get("parts") or []
        text = "".join(part.get("text", "") for part in parts)
        return text or None

# marketplace/services/gemini_client.py
import requests

from marketplace.utils.settings import (
    AI_TIMEOUT_SECONDS,
    GEMINI_API_KEY,
    GEMINI_BASE_URL,
    GEMINI_FAST_MODEL,
)
from marketplace.utils.logging import get_logger

logger = get_logger(__name__)


class AIUnavailableError(RuntimeError):
    pass


class GeminiClient:
    """
    Klient REST generateContent. Jedna proba na wywolanie, bez retry i bez cache -
    wywolujacy (ai_service) ma fallback na kazdy blad.
    """

    def __init__(self, api_key: str | None = None, base_url: str | None = None, timeout: int = AI_TIMEOUT_SECONDS):
        self.api_key = api_key if api_key is not None else GEMINI_API_KEY
        self.base_url = (base_url or GEMINI_BASE_URL).rstrip("/")
        self.timeout = timeout

    def generate(
        self,
        prompt: str,
        model: str = GEMINI_FAST_MODEL,
        json_response: bool = False,
        response_schema: dict | None = None,
    ) -> str:
        if not self.api_key:
            raise AIUnavailableError("GEMINI_API_KEY is not configured")

        url = f"{self.base_url}/models/{model}:generateContent"
        logger.info(f"GeminiClient POST {url}")

        body = {"contents": [{"role": "user", "parts": [{"text": prompt}]}]}
        if json_response:
            config = {"responseMimeType": "application/json"}
            if response_schema:
                config["responseSchema"] = response_schema
            body["generationConfig"] = config

        resp = requests.post(
            url,
            json=body,
            headers={"x-goog-api-key": self.api_key},
            timeout=self.timeout,
        )
        resp.raise_for_status()
        return self._text(resp.json())

    @staticmethod
    def _text(payload: dict) -> str:
        candidates = payload.get("candidates") or []
        if not candidates:
            return ""
        parts = (candidates[0].get("content") or {}).get("parts") or []
        return "".join(p.get("text", "") for p in parts)

from typing import Any

import httpx

from techdoc.enrichment.client_base import BaseEnrichmentClient
from techdoc.enrichment.exceptions import (
    EnrichmentError,
    EnrichmentNetworkError,
    EnrichmentResponseError,
)


class GeminiClientAdapter(BaseEnrichmentClient):
    """Enrichment client for the Gemini generateContent REST endpoint."""

    def __init__(
        self,
        *,
        api_key: str,
        model: str,
        timeout_seconds: int,
        base_url: str,
        http_client: httpx.Client | None = None,
    ) -> None:
        self._api_key = api_key
        self._model = model
        self._base_url = base_url.rstrip("/")
        self._http = http_client or httpx.Client(timeout=timeout_seconds)

    def generate(self, prompt: str) -> str:
        if not self._api_key:
            raise EnrichmentError("Gemini API key is not configured")

        url = f"{self._base_url}/models/{self._model}:generateContent"
        body = {"contents": [{"parts": [{"text": prompt}]}]}
        try:
            response = self._http.post(url, params={"key": self._api_key}, json=body)
        except httpx.HTTPError as exc:
            raise EnrichmentNetworkError(f"AI provider network error: {exc}") from exc

        if response.is_error:
            raise EnrichmentNetworkError(
                f"AI provider API error: HTTP {response.status_code} - {response.text[:200]}"
            )

        try:
            envelope = response.json()
        except ValueError as exc:
            raise EnrichmentResponseError(f"Invalid JSON envelope: {exc}") from exc
        return self._extract_text(envelope)

    @staticmethod
    def _extract_text(envelope: Any) -> str:
        try:
            text = envelope["candidates"][0]["content"]["parts"][0]["text"]
        except (KeyError, IndexError, TypeError) as exc:
            raise EnrichmentResponseError(f"Unexpected response envelope: {exc!r}") from exc
        if not isinstance(text, str) or not text:
            raise EnrichmentResponseError("AI returned empty response")
        return text

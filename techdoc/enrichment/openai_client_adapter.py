import httpx
import openai

from techdoc.enrichment.client_base import BaseEnrichmentClient
from techdoc.enrichment.exceptions import EnrichmentError, EnrichmentNetworkError


class OpenAIClientAdapter(BaseEnrichmentClient):
    """Enrichment client adapter built on OpenAI-compatible chat API."""

    def __init__(
        self,
        *,
        api_key: str,
        model: str,
        timeout_seconds: int,
        temperature: float = 0.2,
        base_url: str | None = None,
    ) -> None:
        self._model = model
        self._temperature = temperature
        self._client = openai.OpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
        )

    def generate(self, prompt: str) -> str:
        try:
            response = self._client.chat.completions.create(
                model=self._model,
                temperature=self._temperature,
                messages=[{"role": "user", "content": prompt}],
            )
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise EnrichmentNetworkError(f"AI provider network error: {exc}") from exc
        except openai.APIError as exc:
            raise EnrichmentNetworkError(f"AI provider API error: {exc}") from exc

        if not response.choices:
            raise EnrichmentError("AI returned no choices")
        content = response.choices[0].message.content
        if content is None:
            raise EnrichmentError("AI returned empty response")
        return content

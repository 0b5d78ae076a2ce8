"""AI-powered summary and tag generation with a local fallback."""

from pathlib import Path

from techdoc.enrichment.client_base import BaseEnrichmentClient
from techdoc.enrichment.fallback import build_fallback
from techdoc.enrichment.models import EnrichmentResult, EnrichmentSource
from techdoc.enrichment.prompt_loader import load_prompt_template
from techdoc.enrichment.response_parser import parse_enrichment_reply
from techdoc.logging.logger import Log


class Enricher:
    """Summarizes and tags extracted text using an AI provider.

    Provider failures of any kind (network, status, malformed reply) fall back
    to a deterministic local summary, so enrichment never raises.
    """

    def __init__(
        self,
        *,
        client: BaseEnrichmentClient,
        language: str = "Russian",
        max_input_chars: int = 4000,
        prompt_template_path: Path | None = None,
    ) -> None:
        self._client = client
        self._language = language
        self._max_input_chars = max_input_chars
        self._prompt_template = load_prompt_template(prompt_template_path)

    def enrich(self, text: str) -> EnrichmentResult:
        """Return a summary and tags for text."""
        if not text or not text.strip():
            return EnrichmentResult.empty()

        prompt = self._build_prompt(text)
        Log.debug(f"Enrichment prompt:\n{prompt}")
        try:
            raw_response = self._client.generate(prompt)
            Log.debug(f"AI raw response:\n{raw_response}")
            summary, tags = parse_enrichment_reply(raw_response)
        except Exception as exc:
            Log.warning(f"Enrichment via AI provider failed, using local fallback: {exc}")
            return build_fallback(text)

        Log.info(f"Enrichment complete: {len(tags)} tags")
        return EnrichmentResult(summary=summary, tags=tags, source=EnrichmentSource.REMOTE)

    def _build_prompt(self, text: str) -> str:
        return self._prompt_template.format(
            language=self._language,
            text=text[: self._max_input_chars],
        )

from typing import ClassVar

from techdoc.config.settings import Settings
from techdoc.enrichment.client_base import BaseEnrichmentClient
from techdoc.enrichment.enricher import Enricher
from techdoc.enrichment.example_client_adapter import ExampleClientAdapter
from techdoc.enrichment.gemini_client_adapter import GeminiClientAdapter
from techdoc.enrichment.openai_client_adapter import OpenAIClientAdapter


class EnricherFactory:
    """Creates the configured enricher and its provider client."""

    PROVIDERS: ClassVar[tuple[str, ...]] = ("gemini", "openai", "openai_compatible", "example")

    @classmethod
    def create(cls, settings: Settings) -> Enricher:
        """Create a configured enricher from application settings."""
        return Enricher(
            client=cls._create_client(settings),
            language=settings.enrichment_language,
            max_input_chars=settings.enrichment_max_input_chars,
        )

    @classmethod
    def _create_client(cls, settings: Settings) -> BaseEnrichmentClient:
        provider = settings.enrichment_provider.lower()
        if provider == "example":
            return ExampleClientAdapter()
        if provider == "gemini":
            return GeminiClientAdapter(
                api_key=settings.gemini_api_key,
                model=settings.gemini_model_name,
                timeout_seconds=settings.enrichment_timeout_seconds,
                base_url=settings.gemini_base_url,
            )
        if provider in ("openai", "openai_compatible"):
            return OpenAIClientAdapter(
                api_key=settings.openai_api_key,
                model=settings.openai_model_name,
                timeout_seconds=settings.enrichment_timeout_seconds,
                temperature=settings.openai_temperature,
                base_url=cls._resolve_base_url(provider, settings),
            )
        raise ValueError(
            f"Unknown enrichment provider '{provider}'. Choose from: {list(cls.PROVIDERS)}"
        )

    @staticmethod
    def _resolve_base_url(provider: str, settings: Settings) -> str | None:
        if provider == "openai":
            return None
        url = settings.openai_compatible_base_url.strip()
        if not url:
            raise ValueError(
                "openai_compatible_base_url is required for "
                "enrichment_provider=openai_compatible"
            )
        return url

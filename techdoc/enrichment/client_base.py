from abc import ABC, abstractmethod


class BaseEnrichmentClient(ABC):
    """Contract for provider-specific generative-text clients."""

    @abstractmethod
    def generate(self, prompt: str) -> str:
        """Send a single free-text prompt and return the model's reply text.

        Raises:
            EnrichmentError: on any failure, EnrichmentNetworkError for transport
                problems and non-success statuses.
        """

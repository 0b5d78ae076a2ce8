"""Example enrichment client adapter.

Use this module as a reference when implementing new provider adapters.
Implement BaseEnrichmentClient and register the provider in EnricherFactory.
"""

import json
from typing import ClassVar

from techdoc.enrichment.client_base import BaseEnrichmentClient


class ExampleClientAdapter(BaseEnrichmentClient):
    """Example adapter that returns a fixed valid enrichment reply.

    No network calls. Useful for local development and tests.
    """

    DEFAULT_RESPONSE: ClassVar[dict[str, object]] = {
        "summary": "Example summary of the uploaded document.",
        "tags": ["example", "document", "technical", "scan", "upload"],
    }

    def generate(self, prompt: str) -> str:
        _ = prompt
        return "Here is the analysis:\n" + json.dumps(self.DEFAULT_RESPONSE)

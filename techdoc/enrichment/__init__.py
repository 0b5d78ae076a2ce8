from techdoc.enrichment.enricher import Enricher
from techdoc.enrichment.factory import EnricherFactory
from techdoc.enrichment.models import EnrichmentResult, EnrichmentSource

__all__ = ["Enricher", "EnricherFactory", "EnrichmentResult", "EnrichmentSource"]

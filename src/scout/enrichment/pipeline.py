"""Concurrent enrichment pipeline.

Every configured layer is fetched for a lead at once, and leads are
processed concurrently up to a bound. Fetching is the only concurrent
part: once all of a lead's fetches have settled, the results are merged
one at a time in configured layer order, so the outcome does not depend
on which source answered first.
"""

import asyncio
from typing import Callable, Sequence

from ..config import Settings, get_settings
from ..exceptions import EnrichmentConfigError
from ..forensics.merge import SupplementalData, apply_layers
from ..logging import get_context_logger
from ..models.lead import Lead
from .apollo import ApolloLayer
from .base import EnrichmentLayer
from .scraper import ScraperLayer

logger = get_context_logger(__name__, component="enrichment_pipeline")

# Layer name -> factory building the layer from settings
LAYER_REGISTRY: dict[str, Callable[[Settings], EnrichmentLayer]] = {
    "apollo": ApolloLayer.from_settings,
    "scraper": ScraperLayer.from_settings,
}


def build_layers(names: Sequence[str], settings: Settings | None = None) -> list[EnrichmentLayer]:
    """Instantiate layers by name, preserving order.

    Raises:
        EnrichmentConfigError: If a name is not registered
    """
    settings = settings or get_settings()
    layers = []
    for name in names:
        factory = LAYER_REGISTRY.get(name.strip().lower())
        if factory is None:
            raise EnrichmentConfigError(name, sorted(LAYER_REGISTRY))
        layers.append(factory(settings))
    return layers


class EnrichmentPipeline:
    """Runs enrichment layers over leads and merges the results."""

    def __init__(self, layers: Sequence[EnrichmentLayer], concurrency: int = 5):
        if concurrency < 1:
            raise ValueError("concurrency must be at least 1")
        self.layers = list(layers)
        self.concurrency = concurrency

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "EnrichmentPipeline":
        settings = settings or get_settings()
        return cls(
            build_layers(settings.enrichment_layers, settings),
            concurrency=settings.enrichment_concurrency,
        )

    async def _fetch_isolated(self, layer: EnrichmentLayer, lead: Lead) -> SupplementalData:
        """Fetch one layer; any failure degrades to empty data."""
        try:
            return await layer.fetch(lead)
        except Exception as e:
            logger.warning(
                f"Layer {layer.name} failed for {lead.company_name}: {e}",
                extra={"layer": layer.name, "lead_id": lead.id},
            )
            return SupplementalData.empty(layer.provenance_for(lead))

    async def enrich_lead(self, lead: Lead) -> Lead:
        """Enrich one lead with every layer; returns a new lead."""
        results = await asyncio.gather(
            *(self._fetch_isolated(layer, lead) for layer in self.layers)
        )
        return apply_layers(lead, results)

    async def enrich_leads(self, leads: Sequence[Lead]) -> list[Lead]:
        """Enrich many leads concurrently; output order matches input order."""
        semaphore = asyncio.Semaphore(self.concurrency)

        async def bounded(lead: Lead) -> Lead:
            async with semaphore:
                return await self.enrich_lead(lead)

        enriched = await asyncio.gather(*(bounded(lead) for lead in leads))
        logger.info(
            f"Enriched {len(enriched)} lead(s) with {len(self.layers)} layer(s)",
            extra={"layers": [layer.name for layer in self.layers]},
        )
        return list(enriched)

    async def aclose(self) -> None:
        for layer in self.layers:
            await layer.aclose()

    async def __aenter__(self) -> "EnrichmentPipeline":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

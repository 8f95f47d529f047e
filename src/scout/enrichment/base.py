"""Base class for enrichment layers.

A layer fetches one source's supplemental data for a lead. Layers are
applied through the same merge contract, so which sources run (and in
what order) is configuration rather than separate code paths.
"""

from abc import ABC, abstractmethod

from ..forensics.merge import LayerProvenance, SupplementalData
from ..models.lead import Lead


class EnrichmentLayer(ABC):
    """Abstract base class for enrichment layers.

    Subclasses must not raise for upstream failures; the pipeline still
    guards every fetch, but a layer that degrades to empty data itself
    can log a more useful reason.
    """

    name: str

    @abstractmethod
    def provenance_for(self, lead: Lead) -> LayerProvenance:
        """Return the trust class this layer's data carries for a lead."""
        ...

    @abstractmethod
    async def fetch(self, lead: Lead) -> SupplementalData:
        """Fetch supplemental data for a lead.

        Args:
            lead: The lead being enriched (read only)

        Returns:
            SupplementalData tagged with this layer's provenance; empty
            when the source has nothing for the lead
        """
        ...

    async def aclose(self) -> None:
        """Release any held resources."""
        return None

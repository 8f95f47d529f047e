"""Enrichment collaborators and the concurrent enrichment pipeline.

Layers fetch supplemental data over the network (Apollo.io, the company
website); the pipeline fans those fetches out and hands the results to
the forensic merge engine.
"""

from .apollo import ApolloClient, ApolloLayer
from .base import EnrichmentLayer
from .pipeline import LAYER_REGISTRY, EnrichmentPipeline, build_layers
from .scraper import ScraperLayer, SocialLinkScraper, extract_social_links

__all__ = [
    "EnrichmentLayer",
    "ApolloClient",
    "ApolloLayer",
    "SocialLinkScraper",
    "ScraperLayer",
    "extract_social_links",
    "EnrichmentPipeline",
    "LAYER_REGISTRY",
    "build_layers",
]

"""Apollo.io enrichment client.

Company enrichment and decision-maker search keyed by domain. Every
failure (missing key, 404, rate limit, timeout, bad JSON) is logged and
degrades to "no data"; nothing propagates to the caller.

API Docs: https://docs.apollo.io/reference
"""

import asyncio
from typing import Any

import httpx
from pydantic import ValidationError

from ..config import Settings, get_settings
from ..forensics.merge import APOLLO_PROVENANCE, LayerProvenance, SupplementalData
from ..forensics.normalize import normalize_domain
from ..logging import get_context_logger, log_enrichment_result
from ..models.enrichment import ApolloEnrichmentResult, ApolloOrganization, ApolloPerson
from ..models.lead import Lead
from .base import EnrichmentLayer

logger = get_context_logger(__name__, source="apollo")

DEFAULT_TITLES = ["CEO", "CMO", "VP Marketing", "Marketing Director", "Brand Manager"]


class ApolloClient:
    """Async client for the Apollo.io REST API."""

    BASE_URL = "https://api.apollo.io/api/v1"

    def __init__(
        self,
        api_key: str,
        base_url: str = BASE_URL,
        timeout: float = 30.0,
        http_client: httpx.AsyncClient | None = None,
    ):
        """Initialize the client.

        Args:
            api_key: Apollo API key; an empty key disables every call
            base_url: API base URL
            timeout: Request timeout in seconds
            http_client: Pre-built client (tests inject a mock transport)
        """
        self.api_key = api_key.strip()
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._http_client = http_client

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "ApolloClient":
        settings = settings or get_settings()
        return cls(
            api_key=settings.apollo_api_key,
            base_url=settings.apollo_base_url,
            timeout=settings.apollo_timeout_seconds,
        )

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key and self.api_key.strip())

    @property
    def http_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=httpx.Timeout(self.timeout),
                headers={
                    "Content-Type": "application/json",
                    "Cache-Control": "no-cache",
                    "x-api-key": self.api_key,
                },
            )
        return self._http_client

    async def close(self):
        """Close HTTP client."""
        if self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None

    async def _post(self, path: str, payload: dict[str, Any], target: str) -> dict[str, Any] | None:
        """POST to the API; returns the JSON body or None on any failure."""
        try:
            response = await self.http_client.post(path, json=payload)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            if status == 404:
                logger.warning(f"Apollo: nothing found for {target}")
            elif status == 429:
                logger.warning(
                    f"Apollo: rate limited on {path}",
                    extra={"retry_after": e.response.headers.get("Retry-After")},
                )
            else:
                logger.error(f"Apollo: {path} failed for {target} with HTTP {status}")
            return None
        except httpx.RequestError as e:
            logger.error(f"Apollo: request error on {path} for {target}: {e}")
            return None
        except ValueError as e:
            logger.error(f"Apollo: invalid JSON from {path} for {target}: {e}")
            return None

        return data if isinstance(data, dict) else None

    async def enrich_company(self, domain: str) -> ApolloOrganization | None:
        """Enrich a single company by domain."""
        clean_domain = normalize_domain(domain)
        if not self.is_configured:
            logger.warning("Apollo API key not configured")
            return None
        if not clean_domain:
            return None

        data = await self._post("/organizations/enrich", {"domain": clean_domain}, clean_domain)
        if not data or not data.get("organization"):
            return None

        try:
            return ApolloOrganization.model_validate(data["organization"])
        except ValidationError as e:
            logger.warning(f"Apollo: unusable organization for {clean_domain}: {e.error_count()} error(s)")
            return None

    async def find_decision_makers(
        self,
        domain: str,
        job_titles: list[str] | None = None,
        limit: int = 5,
    ) -> list[ApolloPerson]:
        """Find decision makers at a company.

        Args:
            domain: Company domain or website URL
            job_titles: Titles to search for
            limit: Maximum number of people to return

        Returns:
            People found, in Apollo's ranking order
        """
        clean_domain = normalize_domain(domain)
        if not self.is_configured or not clean_domain:
            return []

        data = await self._post(
            "/mixed_people/search",
            {
                "organization_domains": [clean_domain],
                "person_titles": job_titles or DEFAULT_TITLES,
                "page": 1,
                "per_page": limit,
            },
            clean_domain,
        )
        if not data:
            return []

        people = []
        for raw in data.get("people") or []:
            try:
                people.append(ApolloPerson.model_validate(raw))
            except ValidationError:
                logger.debug(f"Apollo: skipping malformed person record for {clean_domain}")
        return people[:limit]

    async def bulk_enrich_companies(self, domains: list[str]) -> list[ApolloOrganization | None]:
        """Enrich several companies in one request.

        Returns:
            One entry per input domain, None where enrichment failed
        """
        clean_domains = [normalize_domain(d) for d in domains]
        if not self.is_configured:
            return [None] * len(domains)

        data = await self._post(
            "/organizations/bulk_enrich",
            {"domains": [d for d in clean_domains if d]},
            f"{len(domains)} domains",
        )
        if not data:
            return [None] * len(domains)

        by_domain: dict[str, ApolloOrganization] = {}
        for raw in data.get("organizations") or []:
            try:
                org = ApolloOrganization.model_validate(raw)
            except ValidationError:
                continue
            key = normalize_domain(org.primary_domain or org.website_url)
            if key:
                by_domain[key] = org

        return [by_domain.get(d) if d else None for d in clean_domains]

    async def full_enrichment(
        self,
        domain: str,
        job_titles: list[str] | None = None,
        limit: int = 5,
    ) -> ApolloEnrichmentResult:
        """Company data and decision makers for one domain, fetched concurrently."""
        clean_domain = normalize_domain(domain)
        if not clean_domain:
            return ApolloEnrichmentResult(success=False, error="No domain provided")
        if not self.is_configured:
            return ApolloEnrichmentResult(success=False, error="Apollo API key not configured")

        organization, people = await asyncio.gather(
            self.enrich_company(clean_domain),
            self.find_decision_makers(clean_domain, job_titles, limit),
        )

        success = organization is not None or bool(people)
        log_enrichment_result(
            "apollo",
            clean_domain,
            success,
            fields_found=(1 if organization else 0) + len(people),
        )
        return ApolloEnrichmentResult(
            organization=organization,
            people=people,
            success=success,
            error=None if success else "No data found",
            credits_used=(1 if organization else 0) + (1 if people else 0),
        )


class ApolloLayer(EnrichmentLayer):
    """Enrichment layer backed by Apollo.io (treated as a directory source)."""

    name = "apollo"

    def __init__(
        self,
        client: ApolloClient,
        job_titles: list[str] | None = None,
        people_limit: int = 5,
    ):
        self.client = client
        self.job_titles = job_titles
        self.people_limit = people_limit

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "ApolloLayer":
        settings = settings or get_settings()
        return cls(
            ApolloClient.from_settings(settings),
            job_titles=settings.apollo_decision_maker_titles,
            people_limit=settings.apollo_people_limit,
        )

    def provenance_for(self, lead: Lead) -> LayerProvenance:
        return APOLLO_PROVENANCE

    async def fetch(self, lead: Lead) -> SupplementalData:
        if not normalize_domain(lead.website):
            return SupplementalData.empty(APOLLO_PROVENANCE)
        result = await self.client.full_enrichment(lead.website, self.job_titles, self.people_limit)
        return SupplementalData.from_apollo(result, APOLLO_PROVENANCE)

    async def aclose(self) -> None:
        await self.client.close()

"""Integration tests for the Apollo.io client over a mocked transport.

Run with: pytest tests/integration/test_apollo_client.py -v
"""

import httpx
import pytest

from scout.enrichment.apollo import ApolloClient, ApolloLayer
from scout.models import DataSource

from fixtures.http import RecordingHandler, apollo_client_for
from fixtures.leads import APOLLO_ORGANIZATION, make_lead


class TestEnrichCompany:
    """Tests for company enrichment."""

    @pytest.mark.asyncio
    async def test_enriches_normalized_domain(self, apollo_ok_handler):
        """Test the request carries a bare domain and the API key."""
        client = apollo_client_for(apollo_ok_handler)

        org = await client.enrich_company("https://www.Acme.com/about")

        assert org.name == "Acme Outdoor Co"
        assert org.best_phone == "+15551112222"
        assert apollo_ok_handler.bodies("/organizations/enrich") == [{"domain": "acme.com"}]
        assert apollo_ok_handler.requests[0].headers["x-api-key"] == "test-key"
        await client.close()

    @pytest.mark.asyncio
    async def test_not_found(self):
        handler = RecordingHandler({"/organizations/enrich": httpx.Response(404)})
        client = apollo_client_for(handler)

        assert await client.enrich_company("acme.com") is None

    @pytest.mark.asyncio
    async def test_server_error(self):
        handler = RecordingHandler({"/organizations/enrich": httpx.Response(500, text="oops")})
        client = apollo_client_for(handler)

        assert await client.enrich_company("acme.com") is None

    @pytest.mark.asyncio
    async def test_timeout(self):
        """Test transport errors are logged and swallowed at the boundary."""
        handler = RecordingHandler({"/organizations/enrich": httpx.ReadTimeout("slow")})
        client = apollo_client_for(handler)

        assert await client.enrich_company("acme.com") is None

    @pytest.mark.asyncio
    async def test_invalid_json(self):
        handler = RecordingHandler({"/organizations/enrich": httpx.Response(200, text="<html>")})
        client = apollo_client_for(handler)

        assert await client.enrich_company("acme.com") is None

    @pytest.mark.asyncio
    async def test_missing_key_makes_no_request(self, apollo_ok_handler):
        client = apollo_client_for(apollo_ok_handler, api_key="  ")

        assert await client.enrich_company("acme.com") is None
        assert apollo_ok_handler.requests == []


class TestFindDecisionMakers:
    """Tests for people search."""

    @pytest.mark.asyncio
    async def test_default_titles(self, apollo_ok_handler):
        client = apollo_client_for(apollo_ok_handler)

        people = await client.find_decision_makers("acme.com")

        assert [p.email for p in people] == ["dana@acme.com", "sam@acme.com"]
        body = apollo_ok_handler.bodies("/mixed_people/search")[0]
        assert body["organization_domains"] == ["acme.com"]
        assert body["person_titles"] == ["CEO", "CMO", "VP Marketing", "Marketing Director", "Brand Manager"]
        assert body["per_page"] == 5

    @pytest.mark.asyncio
    async def test_limit_applied(self, apollo_ok_handler):
        client = apollo_client_for(apollo_ok_handler)

        people = await client.find_decision_makers("acme.com", ["CEO"], limit=1)

        assert len(people) == 1

    @pytest.mark.asyncio
    async def test_error_is_empty(self):
        handler = RecordingHandler({"/mixed_people/search": httpx.ConnectError("refused")})
        client = apollo_client_for(handler)

        assert await client.find_decision_makers("acme.com") == []


class TestBulkEnrich:
    """Tests for bulk company enrichment."""

    @pytest.mark.asyncio
    async def test_results_align_with_input(self):
        handler = RecordingHandler(
            {
                "/organizations/bulk_enrich": httpx.Response(
                    200,
                    json={"organizations": [APOLLO_ORGANIZATION, {"name": "Beta", "primary_domain": "beta.io"}]},
                )
            }
        )
        client = apollo_client_for(handler)

        orgs = await client.bulk_enrich_companies(["beta.io", "", "https://www.acme.com", "nobody.com"])

        assert [o.name if o else None for o in orgs] == ["Beta", None, "Acme Outdoor Co", None]
        assert handler.bodies("/organizations/bulk_enrich") == [
            {"domains": ["beta.io", "acme.com", "nobody.com"]}
        ]

    @pytest.mark.asyncio
    async def test_failure_is_all_none(self):
        handler = RecordingHandler({"/organizations/bulk_enrich": httpx.Response(429)})
        client = apollo_client_for(handler)

        assert await client.bulk_enrich_companies(["a.com", "b.com"]) == [None, None]


class TestFullEnrichment:
    """Tests for the combined lookup."""

    @pytest.mark.asyncio
    async def test_success(self, apollo_ok_handler):
        client = apollo_client_for(apollo_ok_handler)

        result = await client.full_enrichment("acme.com")

        assert result.success is True
        assert result.credits_used == 2
        assert len(result.people) == 2

    @pytest.mark.asyncio
    async def test_partial_success(self):
        """Test people alone count as success."""
        handler = RecordingHandler(
            {"/mixed_people/search": httpx.Response(200, json={"people": [{"email": "a@x.com"}]})}
        )
        client = apollo_client_for(handler)

        result = await client.full_enrichment("acme.com")

        assert result.success is True
        assert result.organization is None
        assert result.credits_used == 1

    @pytest.mark.asyncio
    async def test_nothing_found(self):
        client = apollo_client_for(RecordingHandler({}))

        result = await client.full_enrichment("acme.com")

        assert result.success is False
        assert result.error == "No data found"
        assert result.credits_used == 0

    @pytest.mark.asyncio
    async def test_no_domain(self, apollo_ok_handler):
        client = apollo_client_for(apollo_ok_handler)

        result = await client.full_enrichment("   ")

        assert result.success is False
        assert apollo_ok_handler.requests == []

    def test_from_settings(self, monkeypatch):
        monkeypatch.setenv("APOLLO_API_KEY", "env-key")
        monkeypatch.setenv("APOLLO_TIMEOUT_SECONDS", "12")

        client = ApolloClient.from_settings()

        assert client.is_configured
        assert client.timeout == 12.0

    def test_blank_key_from_settings_is_unconfigured(self, monkeypatch):
        monkeypatch.setenv("APOLLO_API_KEY", "   ")

        assert not ApolloClient.from_settings().is_configured


class TestApolloLayer:
    """Tests for the Apollo enrichment layer."""

    @pytest.mark.asyncio
    async def test_fetch_tags_directory_provenance(self, apollo_ok_handler):
        layer = ApolloLayer(apollo_client_for(apollo_ok_handler))

        data = await layer.fetch(make_lead())

        assert data.provenance.source == DataSource.DIRECTORY
        assert data.provenance.confidence == 0.9
        assert data.provenance.label == "Apollo.io"
        assert data.phone == "+15551112222"
        await layer.aclose()

    @pytest.mark.asyncio
    async def test_lead_without_website_skips_lookup(self, apollo_ok_handler):
        layer = ApolloLayer(apollo_client_for(apollo_ok_handler))

        data = await layer.fetch(make_lead(website=None))

        assert data.is_empty
        assert apollo_ok_handler.requests == []

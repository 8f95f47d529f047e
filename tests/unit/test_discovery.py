"""Unit tests for building leads from discovery output.

Run with: pytest tests/unit/test_discovery.py -v
"""

import json

from scout.forensics.discovery import lead_from_discovery, parse_discovery_response
from scout.models import DataSource, Lead, VerificationStatus

from fixtures.leads import SAMPLE_DISCOVERY_TEXT, SAMPLE_LEAD_RECORD


class TestParseDiscoveryResponse:
    """Tests for parse_discovery_response."""

    def test_skips_records_without_name(self):
        leads = parse_discovery_response(SAMPLE_DISCOVERY_TEXT)

        assert [lead.company_name for lead in leads] == ["Summit Coffee Roasters", "Riverbend Bikes"]

    def test_normalizes_contact_fields(self):
        lead = parse_discovery_response(SAMPLE_DISCOVERY_TEXT)[0]

        assert lead.website == "https://summitcoffee.com/"
        assert lead.social_links.instagram == "summitcoffee"
        assert lead.social_links.linked_in == "https://linkedin.com/company/summit"

    def test_maps_evidence(self):
        """Test evidence is read from both supported locations."""
        lead = parse_discovery_response(SAMPLE_DISCOVERY_TEXT)[0]

        assert lead.email_field.evidence.source == DataSource.OFFICIAL_WEBSITE
        assert lead.email_field.evidence.confidence == 0.92
        assert lead.email_field.evidence.source_url == "https://summitcoffee.com/contact"
        assert lead.phone_field.evidence.source == DataSource.GOOGLE_BUSINESS
        assert lead.phone_field.evidence.confidence == 0.9

    def test_fields_without_evidence_are_unknown(self):
        lead = parse_discovery_response(SAMPLE_DISCOVERY_TEXT)[0]

        assert lead.website_field.evidence.source == DataSource.UNKNOWN
        assert lead.website_field.evidence.confidence == 0.5
        assert lead.instagram_field.value == "summitcoffee"

    def test_score_is_clamped(self):
        leads = parse_discovery_response(SAMPLE_DISCOVERY_TEXT)

        assert leads[0].dna_score == 88
        assert leads[1].dna_score == 100

    def test_new_leads_are_pending(self):
        for lead in parse_discovery_response(SAMPLE_DISCOVERY_TEXT):
            assert lead.verification_status == VerificationStatus.PENDING
            assert lead.id.startswith("prospect_")
            assert len(lead.id) == len("prospect_") + 9

    def test_unwraps_leads_key(self):
        text = json.dumps({"leads": [{"companyName": "Acme"}, {"companyName": "Beta"}]})

        assert len(parse_discovery_response(text)) == 2

    def test_single_object(self):
        leads = parse_discovery_response('{"companyName": "Acme"}')

        assert len(leads) == 1
        assert leads[0].description == ""

    def test_unusable_output(self):
        assert parse_discovery_response("No prospects found today.") == []
        assert parse_discovery_response("42") == []

    def test_non_object_items_skipped(self):
        leads = parse_discovery_response('["Acme", null, {"companyName": "Beta"}]')

        assert [lead.company_name for lead in leads] == ["Beta"]

    def test_grounding_sources_attached(self):
        grounding = [{"uri": "https://news.example/acme", "title": "Acme sponsors 10k"}, {"bad": 1}]

        lead = parse_discovery_response('{"companyName": "Acme"}', grounding)[0]

        assert [g.uri for g in lead.grounding_sources] == ["https://news.example/acme"]

    def test_scalar_grounding_sources_ignored(self):
        leads = parse_discovery_response('[{"companyName": "Acme", "groundingSources": 3}]')

        assert leads[0].company_name == "Acme"
        assert leads[0].grounding_sources == []

    def test_string_grounding_sources_ignored(self):
        lead = lead_from_discovery({"companyName": "Acme", "groundingSources": "https://news.example"})

        assert lead.grounding_sources == []


class TestLeadFromDiscovery:
    """Tests for single-record conversion."""

    def test_missing_name(self):
        assert lead_from_discovery({"companyName": "   "}) is None

    def test_description_falls_back_to_reasoning(self):
        lead = lead_from_discovery({"companyName": "Acme", "matchReasoning": "Runs a 5k"})

        assert lead.description == "Runs a 5k"
        assert lead.match_reasoning == "Runs a 5k"

    def test_bad_score_is_zero(self):
        assert lead_from_discovery({"companyName": "Acme", "dnaScore": "high"}).dna_score == 0

    def test_social_links_not_mapping(self):
        lead = lead_from_discovery({"companyName": "Acme", "socialLinks": "instagram.com/acme"})

        assert lead.social_links.instagram is None


class TestLeadRecords:
    """Tests for the persisted camelCase record shape."""

    def test_legacy_linkedin_key(self):
        """Test socialLinks.linkedin loads into linkedIn."""
        lead = Lead.from_record(SAMPLE_LEAD_RECORD)

        assert lead.social_links.linked_in == "https://linkedin.com/company/summit"
        assert lead.to_record()["socialLinks"]["linkedIn"] == "https://linkedin.com/company/summit"

    def test_record_keys_are_camel_case(self):
        record = Lead.from_record(SAMPLE_LEAD_RECORD).to_record()

        assert record["companyName"] == "Summit Coffee Roasters"
        assert record["emailField"]["evidence"]["sourceUrl"] == "https://summitcoffee.com/contact"
        assert record["verificationStatus"] == "PENDING"
        assert "phone" not in record

    def test_out_of_range_confidence_is_clamped(self):
        """Test stored evidence is clamped on load, never rejected."""
        record = {
            "companyName": "Acme",
            "email": "a@x.com",
            "emailField": {"value": "a@x.com", "evidence": {"source": "manual", "confidence": 1.2}},
            "phone": "555-0100",
            "phoneField": {"value": "555-0100", "evidence": {"source": "directory", "confidence": -0.3}},
        }

        lead = Lead.from_record(record)

        assert lead.email_field.evidence.confidence == 1.0
        assert lead.phone_field.evidence.confidence == 0.0

    def test_unusable_confidence_uses_source_default(self):
        record = {
            "companyName": "Acme",
            "website": "https://acme.com",
            "websiteField": {
                "value": "https://acme.com",
                "evidence": {"source": "official_website", "confidence": "high"},
            },
            "email": "a@x.com",
            "emailField": {"value": "a@x.com", "evidence": {"source": "directory"}},
        }

        lead = Lead.from_record(record)

        assert lead.website_field.evidence.confidence == 0.9
        assert lead.email_field.evidence.confidence == 0.7

    def test_unknown_evidence_source_loads_as_unknown(self):
        record = {
            "companyName": "Acme",
            "email": "a@x.com",
            "emailField": {"value": "a@x.com", "evidence": {"source": "rumor"}},
        }

        evidence = Lead.from_record(record).email_field.evidence

        assert evidence.source == DataSource.UNKNOWN
        assert evidence.confidence == 0.5

    def test_contact_intelligence_confidence_is_clamped(self):
        record = {
            "companyName": "Acme",
            "enrichedContacts": [
                {"id": "c1", "type": "EMAIL", "value": "a@x.com", "confidence": 7, "source": "Apollo.io"},
                {"id": "c2", "type": "PHONE", "value": "555", "confidence": None, "source": "Apollo.io"},
            ],
        }

        contacts = Lead.from_record(record).enriched_contacts

        assert [c.confidence for c in contacts] == [1.0, 0.5]

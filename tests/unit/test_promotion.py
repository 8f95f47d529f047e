"""Unit tests for promoting leads into the sponsor pipeline.

Run with: pytest tests/unit/test_promotion.py -v
"""

from scout.forensics.evidence import map_forensic_field
from scout.forensics.promotion import build_dossier, promote_lead, sync_dossier_from_lead
from scout.forensics.verification import (
    apply_verification,
    begin_verification,
    parse_verification_response,
)
from scout.models import DataSource, Deal, PipelineStage, SocialLinks, Sponsor, VerificationStatus

from fixtures.leads import make_lead


class TestPromoteLead:
    """Tests for promote_lead."""

    def test_copies_contact_data_and_evidence(self):
        lead = make_lead(
            email="hello@acme.com",
            email_field=map_forensic_field("hello@acme.com", {"source": "official_website"}),
            contact_name="Dana Reyes",
            social_links=SocialLinks(instagram="acme"),
        )

        sponsor, deal = promote_lead(lead, industry="Outdoor")

        assert sponsor.company_name == "Acme Outdoor Co"
        assert sponsor.email == "hello@acme.com"
        assert sponsor.contact_name == "Dana Reyes"
        assert sponsor.industry == "Outdoor"
        assert sponsor.social_links.instagram == "acme"
        assert sponsor.email_field == lead.email_field
        assert sponsor.id.startswith("sp_")

    def test_deal_defaults(self):
        lead = make_lead()

        sponsor, deal = promote_lead(lead)

        assert deal.sponsor_id == sponsor.id
        assert deal.stage == PipelineStage.DISCOVERY
        assert deal.amount == 2500
        assert deal.tier == "Prospect"
        assert sponsor.industry == "Discovery Match"
        assert sponsor.primary_signal_source == "Discovery Agent"
        assert deal.notes == "Sponsors local trail runs"
        assert deal.forensic_dossier.source_lead_id == lead.id

    def test_missing_contact_values_become_empty_strings(self):
        sponsor, _ = promote_lead(make_lead())

        assert sponsor.email == ""
        assert sponsor.contact_name == ""

    def test_lead_is_copied_not_moved(self):
        """Test editing the sponsor leaves the lead untouched."""
        lead = make_lead(social_links=SocialLinks(instagram="acme"))

        sponsor, _ = promote_lead(lead)
        sponsor.social_links.instagram = "changed"

        assert lead.social_links.instagram == "acme"


class TestDossierSync:
    """Tests for refreshing deals after re-verification."""

    def test_build_dossier(self):
        lead = make_lead(
            verification_status=VerificationStatus.VERIFIED,
            verification_reasoning="Registry match",
            forensic_audit_trail=["step 1"],
        )

        dossier = build_dossier(lead, created_at="2026-01-01T00:00:00+00:00")

        assert dossier.to_record() == {
            "sourceLeadId": lead.id,
            "verificationStatus": "VERIFIED",
            "verificationReasoning": "Registry match",
            "forensicAuditTrail": ["step 1"],
            "createdAt": "2026-01-01T00:00:00+00:00",
        }

    def test_refreshes_linked_deal_and_sponsor(self):
        lead = make_lead()
        sponsor, deal = promote_lead(lead)
        created_at = deal.forensic_dossier.created_at
        other_sponsor = Sponsor(company_name="Other")
        other_deal = Deal(sponsor_id=other_sponsor.id)

        reverified = lead.model_copy(
            update={
                "website": "https://acme-outdoor.com",
                "email": "team@acme-outdoor.com",
                "social_links": SocialLinks(twitter="https://twitter.com/acme"),
                "verification_status": VerificationStatus.VERIFIED,
                "forensic_audit_trail": ["checked"],
            }
        )

        deals, sponsors = sync_dossier_from_lead(
            [deal, other_deal], [sponsor, other_sponsor], reverified
        )

        assert deals[0].forensic_dossier.verification_status == VerificationStatus.VERIFIED
        assert deals[0].forensic_dossier.forensic_audit_trail == ["checked"]
        assert deals[0].forensic_dossier.created_at == created_at
        assert deals[1] is other_deal
        assert sponsors[0].website == "https://acme-outdoor.com"
        assert sponsors[0].email == "team@acme-outdoor.com"
        assert sponsors[0].social_links.twitter == "https://twitter.com/acme"
        assert sponsors[1] is other_sponsor
        assert deal.forensic_dossier.verification_status == VerificationStatus.PENDING

    def test_empty_lead_email_keeps_sponsor_email(self):
        lead = make_lead()
        sponsor, deal = promote_lead(lead)
        sponsor = sponsor.model_copy(update={"email": "kept@acme.com"})

        _, sponsors = sync_dossier_from_lead([deal], [sponsor], lead)

        assert sponsors[0].email == "kept@acme.com"

    def test_corrected_values_carry_their_evidence(self):
        """Test a verification correction replaces the sponsor's evidence too."""
        lead = make_lead(
            website="https://old.com",
            website_field=map_forensic_field("https://old.com", {"source": "directory"}),
            social_links=SocialLinks(instagram="oldacme"),
            instagram_field=map_forensic_field("oldacme", {"source": "social"}),
        )
        sponsor, deal = promote_lead(lead)
        result = parse_verification_response(
            '{"status": "VERIFIED", "correctedData": {"website": "new.com", '
            '"socialLinks": {"instagram": "newacme"}}}'
        )
        verified = apply_verification(begin_verification(lead), result)

        _, sponsors = sync_dossier_from_lead([deal], [sponsor], verified)

        synced = sponsors[0]
        assert synced.website == "https://new.com"
        assert synced.website_field.value == "https://new.com"
        assert synced.website_field.evidence.source == DataSource.MANUAL
        assert synced.website_field.evidence.confidence == 0.95
        assert synced.social_links.instagram == "newacme"
        assert synced.instagram_field.value == "newacme"
        assert sponsor.website_field.value == "https://old.com"

    def test_uncorrected_fields_keep_sponsor_evidence(self):
        lead = make_lead(
            email="hello@acme.com",
            email_field=map_forensic_field("hello@acme.com", {"source": "official_website"}),
        )
        sponsor, deal = promote_lead(lead)
        sponsor = sponsor.model_copy(
            update={
                "phone": "555-0100",
                "phone_field": map_forensic_field("555-0100", {"source": "manual"}),
            }
        )

        _, sponsors = sync_dossier_from_lead([deal], [sponsor], lead)

        assert sponsors[0].email_field == lead.email_field
        assert sponsors[0].phone_field.value == "555-0100"

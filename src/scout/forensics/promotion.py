"""Promotion of leads into the sponsor pipeline.

Promotion copies a lead; the lead stays in the vault untouched so later
verification passes can be synced back onto the deal.
"""

from ..models.lead import EVIDENCE_FIELD_NAMES, SOCIAL_PLATFORMS, Lead
from ..models.pipeline import Deal, ForensicDossier, PipelineStage, Sponsor, utc_now_iso

# Defaults for a sponsor opened from a discovery match
DISCOVERY_INDUSTRY = "Discovery Match"
DISCOVERY_SIGNAL_SOURCE = "Discovery Agent"
DISCOVERY_DEAL_AMOUNT = 2500
DISCOVERY_DEAL_TIER = "Prospect"


def build_dossier(lead: Lead, created_at: str | None = None) -> ForensicDossier:
    return ForensicDossier(
        source_lead_id=lead.id,
        verification_status=lead.verification_status,
        verification_reasoning=lead.verification_reasoning,
        forensic_audit_trail=list(lead.forensic_audit_trail),
        created_at=created_at or utc_now_iso(),
    )


def promote_lead(
    lead: Lead,
    stage: PipelineStage = PipelineStage.DISCOVERY,
    amount: float = DISCOVERY_DEAL_AMOUNT,
    tier: str = DISCOVERY_DEAL_TIER,
    industry: str = DISCOVERY_INDUSTRY,
) -> tuple[Sponsor, Deal]:
    """Copy a lead into a new sponsor and open a deal for it."""
    copy = lead.model_copy(deep=True)
    sponsor = Sponsor(
        company_name=copy.company_name,
        contact_name=copy.contact_name or "",
        email=copy.email or "",
        phone=copy.phone,
        address=copy.address,
        industry=industry,
        website=copy.website,
        social_links=copy.social_links,
        latest_signal=copy.latest_signal,
        primary_signal_source=DISCOVERY_SIGNAL_SOURCE,
        enriched_contacts=copy.enriched_contacts,
        **{shadow: getattr(copy, shadow) for shadow in EVIDENCE_FIELD_NAMES.values()},
    )
    deal = Deal(
        sponsor_id=sponsor.id,
        stage=stage,
        amount=amount,
        tier=tier,
        notes=copy.match_reasoning,
        forensic_dossier=build_dossier(copy),
    )
    return sponsor, deal


def _adopt(sponsor: Sponsor, lead: Lead, name: str) -> None:
    """Take the lead's value and its evidence together."""
    shadow = EVIDENCE_FIELD_NAMES[name]
    value = lead.contact_value(name)
    if name in SOCIAL_PLATFORMS:
        setattr(sponsor.social_links, name, value)
    else:
        setattr(sponsor, name, value)
    evidence = getattr(lead, shadow)
    setattr(sponsor, shadow, evidence.model_copy(deep=True) if evidence else None)


def sync_dossier_from_lead(
    deals: list[Deal],
    sponsors: list[Sponsor],
    lead: Lead,
) -> tuple[list[Deal], list[Sponsor]]:
    """Refresh dossiers and sponsor contact data after a lead is re-verified.

    The lead's website, email and social links replace the sponsor's
    wherever the lead has a value. Each replaced value brings the lead's
    evidence record along so evidence never describes a stale value.

    Returns:
        (updated deals, updated sponsors); unrelated records are returned as-is
    """
    updated_deals = []
    linked_sponsor_ids = set()
    for deal in deals:
        dossier = deal.forensic_dossier
        if dossier is None or dossier.source_lead_id != lead.id:
            updated_deals.append(deal)
            continue
        refreshed = deal.model_copy(deep=True)
        refreshed.forensic_dossier = build_dossier(lead, created_at=dossier.created_at)
        updated_deals.append(refreshed)
        linked_sponsor_ids.add(deal.sponsor_id)

    updated_sponsors = []
    for sponsor in sponsors:
        if sponsor.id not in linked_sponsor_ids:
            updated_sponsors.append(sponsor)
            continue
        refreshed = sponsor.model_copy(deep=True)
        for name in ("website", "email", *SOCIAL_PLATFORMS):
            if lead.contact_value(name):
                _adopt(refreshed, lead, name)
        updated_sponsors.append(refreshed)

    return updated_deals, updated_sponsors

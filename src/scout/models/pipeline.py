"""Pipeline records a lead is promoted into.

Promotion copies a lead's contact data into a Sponsor and opens a Deal
carrying the forensic dossier; the lead itself is left untouched.
"""

from datetime import datetime, timezone
from enum import Enum
from uuid import uuid4

from pydantic import Field

from .base import RecordModel
from .lead import ContactIntelligence, EvidenceFields, SocialLinks, VerificationStatus


class PipelineStage(str, Enum):
    DISCOVERY = "DISCOVERY"
    OUTREACH_STARTED = "OUTREACH_STARTED"
    NEGOTIATION = "NEGOTIATION"
    CONTRACT_SENT = "CONTRACT_SENT"
    SIGNED = "SIGNED"
    ACTIVE = "ACTIVE"


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class ForensicDossier(RecordModel):
    """Verification summary attached to a deal."""

    source_lead_id: str | None = None
    verification_status: VerificationStatus | None = None
    verification_reasoning: str | None = None
    forensic_audit_trail: list[str] = Field(default_factory=list)
    created_at: str = Field(default_factory=utc_now_iso)


class Sponsor(EvidenceFields):
    """A promoted lead in the sponsor pipeline."""

    id: str = Field(default_factory=lambda: f"sp_{uuid4().hex[:12]}")
    company_name: str
    contact_name: str = ""
    email: str = ""
    phone: str | None = None
    address: str | None = None
    industry: str = ""
    website: str | None = None
    social_links: SocialLinks = Field(default_factory=SocialLinks)
    last_intelligence_refresh: str | None = None
    latest_signal: str | None = None
    primary_signal_source: str | None = None
    enriched_contacts: list[ContactIntelligence] = Field(default_factory=list)


class Deal(RecordModel):
    """A sponsorship deal for one sponsor."""

    id: str = Field(default_factory=lambda: f"dl_{uuid4().hex[:12]}")
    sponsor_id: str
    stage: PipelineStage = PipelineStage.DISCOVERY
    amount: float = 0
    tier: str = "Prospect"
    next_follow_up: str | None = None
    notes: str = ""
    current_sequence_step: int = 1
    contract_end_date: str | None = None
    forensic_dossier: ForensicDossier | None = None
    follow_up_note: str | None = None
    email_draft: str | None = None
    dm_draft: str | None = None

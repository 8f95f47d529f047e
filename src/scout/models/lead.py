"""Lead models for Scout.

A Lead is a discovered prospective sponsor, before and after enrichment.
"""

from enum import Enum
from uuid import uuid4

from pydantic import AliasChoices, Field, field_validator

from .base import RecordModel
from .evidence import (
    UNKNOWN_SOURCE_CONFIDENCE,
    ContactField,
    FieldEvidence,
    clamp_confidence,
    numeric_confidence,
)


class ContactMethodType(str, Enum):
    """Supported contact methods for enriched lead intelligence."""

    EMAIL = "EMAIL"
    PHONE = "PHONE"
    LINKEDIN = "LINKEDIN"
    INSTAGRAM = "INSTAGRAM"
    TWITTER = "TWITTER"
    OTHER = "OTHER"


class VerificationStatus(str, Enum):
    """Lifecycle of the forensic verification pass."""

    PENDING = "PENDING"
    VERIFYING = "VERIFYING"
    VERIFIED = "VERIFIED"
    FAILED = "FAILED"
    COLLISION_DETECTED = "COLLISION_DETECTED"

    @property
    def is_terminal(self) -> bool:
        """Check if the verification pass has finished."""
        return self in TERMINAL_STATUSES


TERMINAL_STATUSES = frozenset(
    {
        VerificationStatus.VERIFIED,
        VerificationStatus.FAILED,
        VerificationStatus.COLLISION_DETECTED,
    }
)


class GroundingLink(RecordModel):
    """Search grounding source; passed through untouched."""

    uri: str
    title: str = ""


class ContactIntelligence(RecordModel):
    """A single typed contact point with its own source and confidence."""

    id: str
    type: ContactMethodType
    value: str
    confidence: float = Field(default=None, validate_default=True)
    source: str
    last_verified: str | None = None
    is_primary: bool = False

    @field_validator("confidence", mode="before")
    @classmethod
    def _clamp(cls, value):
        confidence = numeric_confidence(value)
        if confidence is None:
            return UNKNOWN_SOURCE_CONFIDENCE
        return clamp_confidence(confidence)


class SocialLinks(RecordModel):
    """One handle or URL per social platform."""

    instagram: str | None = None
    linked_in: str | None = Field(
        default=None,
        validation_alias=AliasChoices("linkedIn", "linkedin", "linked_in"),
        serialization_alias="linkedIn",
    )
    twitter: str | None = None
    facebook: str | None = None
    youtube: str | None = None
    tiktok: str | None = None


# Social platforms in the order they are merged and reported
SOCIAL_PLATFORMS: tuple[str, ...] = (
    "instagram",
    "linked_in",
    "twitter",
    "facebook",
    "youtube",
    "tiktok",
)


class EvidenceFields(RecordModel):
    """Evidence shadow fields shared by leads and sponsors."""

    email_field: ContactField | None = None
    phone_field: ContactField | None = None
    address_field: ContactField | None = None
    contact_name_field: ContactField | None = None
    website_field: ContactField | None = None
    instagram_field: ContactField | None = None
    linked_in_field: ContactField | None = Field(
        default=None,
        validation_alias=AliasChoices("linkedInField", "linkedinField", "linked_in_field"),
        serialization_alias="linkedInField",
    )
    twitter_field: ContactField | None = None
    facebook_field: ContactField | None = None
    youtube_field: ContactField | None = None
    tiktok_field: ContactField | None = None


# Maps a contact attribute (scalar or social platform) to its shadow field
EVIDENCE_FIELD_NAMES: dict[str, str] = {
    "email": "email_field",
    "phone": "phone_field",
    "address": "address_field",
    "contact_name": "contact_name_field",
    "website": "website_field",
    **{platform: f"{platform}_field" for platform in SOCIAL_PLATFORMS},
}


def new_lead_id() -> str:
    """Generate a prospect identifier."""
    return f"prospect_{uuid4().hex[:9]}"


class Lead(EvidenceFields):
    """A discovered prospective sponsor."""

    id: str = Field(default_factory=new_lead_id)
    company_name: str
    description: str = ""
    website: str | None = None
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    contact_name: str | None = None
    social_links: SocialLinks = Field(default_factory=SocialLinks)

    dna_score: int = Field(default=0, ge=0, le=100)
    match_reasoning: str = ""
    saved_at: str | None = None
    latest_signal: str | None = None
    latest_signal_evidence: FieldEvidence | None = None

    grounding_sources: list[GroundingLink] = Field(default_factory=list)
    enriched_contacts: list[ContactIntelligence] = Field(default_factory=list)
    sources: list[str] = Field(default_factory=list)

    verification_status: VerificationStatus = VerificationStatus.PENDING
    verification_reasoning: str | None = None
    forensic_audit_trail: list[str] = Field(default_factory=list)

    @field_validator("verification_status", mode="before")
    @classmethod
    def _missing_status_is_pending(cls, value):
        return VerificationStatus.PENDING if value is None else value

    def contact_value(self, name: str) -> str | None:
        """Get a scalar contact value or social link by attribute name."""
        if name in SOCIAL_PLATFORMS:
            return getattr(self.social_links, name)
        return getattr(self, name)

    def evidence_for(self, name: str) -> ContactField | None:
        """Get the evidence shadow field for a contact attribute."""
        return getattr(self, EVIDENCE_FIELD_NAMES[name])

"""Data models for Scout."""

from .base import RecordModel
from .enrichment import (
    ApolloEnrichmentResult,
    ApolloOrganization,
    ApolloPerson,
    ApolloPhoneNumber,
    CorrectedData,
    CorrectedValue,
    ScrapedSocialLinks,
    VerificationResult,
)
from .evidence import ContactField, DataSource, FieldEvidence, RawEvidence
from .lead import (
    EVIDENCE_FIELD_NAMES,
    SOCIAL_PLATFORMS,
    TERMINAL_STATUSES,
    ContactIntelligence,
    ContactMethodType,
    GroundingLink,
    Lead,
    SocialLinks,
    VerificationStatus,
    new_lead_id,
)
from .pipeline import Deal, ForensicDossier, PipelineStage, Sponsor

__all__ = [
    "RecordModel",
    # Evidence
    "DataSource",
    "FieldEvidence",
    "ContactField",
    "RawEvidence",
    # Lead
    "Lead",
    "SocialLinks",
    "ContactIntelligence",
    "ContactMethodType",
    "GroundingLink",
    "VerificationStatus",
    "TERMINAL_STATUSES",
    "SOCIAL_PLATFORMS",
    "EVIDENCE_FIELD_NAMES",
    "new_lead_id",
    # Collaborators
    "ApolloOrganization",
    "ApolloPerson",
    "ApolloPhoneNumber",
    "ApolloEnrichmentResult",
    "ScrapedSocialLinks",
    "CorrectedValue",
    "CorrectedData",
    "VerificationResult",
    # Pipeline
    "PipelineStage",
    "ForensicDossier",
    "Sponsor",
    "Deal",
]

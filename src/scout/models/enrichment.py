"""Collaborator payload models.

Apollo.io payloads keep Apollo's own snake_case keys. Every field is
optional and unknown keys are ignored: these shapes come from services
we do not control and are validated defensively at the boundary.
"""

from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .base import RecordModel
from .evidence import RawEvidence
from .lead import VerificationStatus


class ApolloModel(BaseModel):
    """Lenient base for Apollo.io payloads."""

    model_config = ConfigDict(extra="ignore")


class ApolloPhoneNumber(ApolloModel):
    raw_number: str | None = None
    sanitized_number: str | None = None
    type: str | None = None


class ApolloPrimaryPhone(ApolloModel):
    number: str | None = None
    sanitized_number: str | None = None


class ApolloOrganization(ApolloModel):
    """Apollo.io organization record."""

    id: str | None = None
    name: str | None = None
    website_url: str | None = None
    primary_domain: str | None = None
    primary_phone: ApolloPrimaryPhone | None = None
    phone: str | None = None
    linkedin_url: str | None = None
    facebook_url: str | None = None
    twitter_url: str | None = None
    industry: str | None = None
    industries: list[str] | None = None
    keywords: list[str] | None = None
    estimated_num_employees: int | None = None
    annual_revenue_printed: str | None = None
    street_address: str | None = None
    city: str | None = None
    state: str | None = None
    postal_code: str | None = None
    country: str | None = None
    founded_year: int | None = None
    short_description: str | None = None
    logo_url: str | None = None

    @property
    def best_phone(self) -> str | None:
        """Organization phone, falling back to the primary phone record."""
        if self.phone:
            return self.phone
        if self.primary_phone:
            return self.primary_phone.sanitized_number or self.primary_phone.number
        return None


class ApolloPerson(ApolloModel):
    """Apollo.io person/contact record."""

    id: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    name: str | None = None
    title: str | None = None
    email: str | None = None
    email_status: str | None = None
    phone_numbers: list[ApolloPhoneNumber] = Field(default_factory=list)
    linkedin_url: str | None = None
    twitter_url: str | None = None
    facebook_url: str | None = None
    organization_name: str | None = None
    seniority: str | None = None
    departments: list[str] | None = None

    @field_validator("phone_numbers", mode="before")
    @classmethod
    def _null_phone_list(cls, value):
        return value or []

    @property
    def email_verified(self) -> bool:
        return self.email_status == "verified"


class ApolloEnrichmentResult(ApolloModel):
    """Combined company + decision maker lookup."""

    organization: ApolloOrganization | None = None
    people: list[ApolloPerson] = Field(default_factory=list)
    success: bool = False
    error: str | None = None
    credits_used: int = 0


class ScrapedSocialLinks(RecordModel):
    """Best-effort social links found on a company website."""

    instagram: str | None = None
    facebook: str | None = None
    twitter: str | None = None
    linked_in: str | None = None
    youtube: str | None = None
    tiktok: str | None = None

    @property
    def found_count(self) -> int:
        return sum(1 for value in self.model_dump().values() if value)


class CorrectedValue(RecordModel):
    """A corrected field from the verification collaborator.

    Accepts either a bare string or ``{"value": ..., "evidence": {...}}``.
    """

    value: str
    evidence: RawEvidence | None = None

    @model_validator(mode="before")
    @classmethod
    def _wrap_plain_value(cls, data: Any) -> Any:
        if isinstance(data, str):
            return {"value": data}
        return data

    @field_validator("evidence", mode="before")
    @classmethod
    def _object_evidence(cls, value):
        return value if isinstance(value, (Mapping, RawEvidence)) else None


def _usable_correction(value: Any) -> bool:
    if isinstance(value, str):
        return bool(value.strip())
    if isinstance(value, Mapping):
        inner = value.get("value")
        return isinstance(inner, str) and bool(inner.strip())
    return isinstance(value, CorrectedValue)


class CorrectedData(RecordModel):
    website: CorrectedValue | None = None
    email: CorrectedValue | None = None
    social_links: dict[str, CorrectedValue] = Field(default_factory=dict)

    @field_validator("website", "email", mode="before")
    @classmethod
    def _blank_is_missing(cls, value):
        return value if _usable_correction(value) else None

    @field_validator("social_links", mode="before")
    @classmethod
    def _drop_blank_links(cls, value):
        if not isinstance(value, Mapping):
            return {}
        return {key: link for key, link in value.items() if _usable_correction(link)}


class VerificationResult(RecordModel):
    """Output of the external verification collaborator.

    Only ``status`` decides the verdict. The descriptive fields are
    coerced rather than validated so a sloppy reply keeps its verdict
    and its corrections.
    """

    status: VerificationStatus
    reasoning: str = ""
    audit_trail: list[str] = Field(default_factory=list)
    corrected_data: CorrectedData | None = None

    @field_validator("reasoning", mode="before")
    @classmethod
    def _text_reasoning(cls, value):
        if value is None:
            return ""
        return value if isinstance(value, str) else str(value)

    @field_validator("audit_trail", mode="before")
    @classmethod
    def _list_audit_trail(cls, value):
        if value is None:
            return []
        if isinstance(value, str):
            return [value] if value.strip() else []
        if isinstance(value, (list, tuple)):
            return [entry if isinstance(entry, str) else str(entry) for entry in value if entry is not None]
        return [str(value)]

    @field_validator("corrected_data", mode="before")
    @classmethod
    def _object_corrections(cls, value):
        return value if isinstance(value, (Mapping, CorrectedData)) else None

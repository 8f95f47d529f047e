"""Multi-source merge engine.

Layers supplemental data (enrichment API, website scrape) onto a base
lead. The policy is first-writer-wins: a populated field is never
overwritten by a later layer, whatever that layer's trust level. Layers
only fill gaps, except for the description, which is cumulative.

Merge order is the caller's layer order: discovery data is the base,
then enrichment, then the scrape.
"""

from datetime import datetime, timezone
from typing import Any, Iterable, Mapping

from pydantic import BaseModel, ConfigDict, Field

from ..logging import log_merge_decision
from ..models.enrichment import ApolloEnrichmentResult, ScrapedSocialLinks
from ..models.evidence import DataSource
from ..models.lead import (
    EVIDENCE_FIELD_NAMES,
    SOCIAL_PLATFORMS,
    ContactIntelligence,
    ContactMethodType,
    Lead,
    SocialLinks,
)
from .evidence import map_forensic_field

VERIFIED_EMAIL_CONFIDENCE = 0.95
UNVERIFIED_EMAIL_CONFIDENCE = 0.75
PERSON_PHONE_CONFIDENCE = 0.8
PERSON_LINKEDIN_CONFIDENCE = 0.9


class LayerProvenance(BaseModel):
    """Trust class of one supplemental layer."""

    model_config = ConfigDict(frozen=True)

    name: str
    label: str
    source: DataSource
    confidence: float = Field(ge=0.0, le=1.0)
    source_url: str | None = None
    description_label: str = "Company Info"

    def raw_evidence(self, confidence: float | None = None) -> dict[str, Any]:
        return {
            "source": self.source.value,
            "confidence": self.confidence if confidence is None else confidence,
            "source_url": self.source_url,
        }


APOLLO_PROVENANCE = LayerProvenance(
    name="apollo",
    label="Apollo.io",
    source=DataSource.DIRECTORY,
    confidence=0.9,
    source_url="https://www.apollo.io",
)


def scrape_provenance(website: str | None) -> LayerProvenance:
    """Provenance for links scraped from the company's own website."""
    return LayerProvenance(
        name="scraper",
        label="Website Scrape",
        source=DataSource.OFFICIAL_WEBSITE,
        confidence=0.85,
        source_url=website,
    )


class SupplementalContact(BaseModel):
    """A person returned by a people-search style source."""

    title: str | None = None
    email: str | None = None
    email_verified: bool = False
    phones: list[str] = Field(default_factory=list)
    linkedin_url: str | None = None


class SupplementalData(BaseModel):
    """One layer's worth of data, tagged with its provenance."""

    provenance: LayerProvenance
    phone: str | None = None
    address: str | None = None
    description: str | None = None
    social_links: SocialLinks = Field(default_factory=SocialLinks)
    people: list[SupplementalContact] = Field(default_factory=list)

    @classmethod
    def empty(cls, provenance: LayerProvenance) -> "SupplementalData":
        return cls(provenance=provenance)

    @property
    def is_empty(self) -> bool:
        return not (
            self.phone
            or self.address
            or self.description
            or self.people
            or any(getattr(self.social_links, p) for p in SOCIAL_PLATFORMS)
        )

    @classmethod
    def from_apollo(
        cls,
        result: ApolloEnrichmentResult,
        provenance: LayerProvenance = APOLLO_PROVENANCE,
    ) -> "SupplementalData":
        """Convert an Apollo.io company + people lookup."""
        if not result.success:
            return cls.empty(provenance)

        data = cls(provenance=provenance)
        org = result.organization
        if org:
            data.phone = org.best_phone
            # A bare city/state is not an address
            if org.street_address:
                data.address = ", ".join(
                    part
                    for part in (
                        org.street_address,
                        org.city,
                        org.state,
                        org.postal_code,
                        org.country,
                    )
                    if part
                )
            data.description = org.short_description
            data.social_links = SocialLinks(
                linked_in=org.linkedin_url,
                twitter=org.twitter_url,
                facebook=org.facebook_url,
            )

        data.people = [
            SupplementalContact(
                title=person.title,
                email=person.email,
                email_verified=person.email_verified,
                phones=[p.sanitized_number for p in person.phone_numbers if p.sanitized_number],
                linkedin_url=person.linkedin_url,
            )
            for person in result.people
        ]
        return data

    @classmethod
    def from_scrape(cls, scraped: ScrapedSocialLinks, website: str | None) -> "SupplementalData":
        """Convert social links scraped from a website."""
        return cls(
            provenance=scrape_provenance(website),
            social_links=SocialLinks(
                instagram=scraped.instagram,
                linked_in=scraped.linked_in,
                twitter=scraped.twitter,
                facebook=scraped.facebook,
                youtube=scraped.youtube,
                tiktok=scraped.tiktok,
            ),
        )


def _is_blank(value: Any) -> bool:
    return not isinstance(value, str) or not value.strip()


def _set_contact_value(lead: Lead, name: str, value: str) -> None:
    if name in SOCIAL_PLATFORMS:
        setattr(lead.social_links, name, value)
    else:
        setattr(lead, name, value)


def _fill_field(
    lead: Lead,
    name: str,
    value: str | None,
    provenance: LayerProvenance,
    confidence: float | None = None,
) -> bool:
    """Fill an empty field; never touch a populated one."""
    if _is_blank(value):
        return False
    if not _is_blank(lead.contact_value(name)):
        log_merge_decision(lead.id, name, provenance.label, "kept")
        return False

    value = value.strip()
    _set_contact_value(lead, name, value)
    setattr(
        lead,
        EVIDENCE_FIELD_NAMES[name],
        map_forensic_field(value, provenance.raw_evidence(confidence)),
    )
    log_merge_decision(lead.id, name, provenance.label, "filled")
    return True


def _append_description(lead: Lead, text: str | None, provenance: LayerProvenance) -> None:
    if _is_blank(text):
        return
    addition = f"{provenance.description_label}: {text.strip()}"
    blocks = [block.strip() for block in lead.description.split("\n\n")]
    if addition in blocks:
        return
    if lead.description.strip():
        lead.description = f"{lead.description}\n\n{addition}"
    else:
        lead.description = addition
    log_merge_decision(lead.id, "description", provenance.label, "appended")


def convert_contacts(
    people: list[SupplementalContact],
    lead: Lead,
    provenance: LayerProvenance,
    verified_at: str | None = None,
) -> tuple[Lead, list[ContactIntelligence]]:
    """Turn people-search results into contact intelligence.

    The lead's scalar email (and phone) are set only when empty, and only
    from the first person, who is treated as the primary contact. Each
    contact type gets exactly one primary entry: the first one populated,
    unless the lead already has a primary of that type.

    Returns:
        (updated copy of the lead, new contact entries)
    """
    enriched = lead.model_copy(deep=True)
    contacts: list[ContactIntelligence] = []
    primary_types = {c.type for c in lead.enriched_contacts if c.is_primary}
    verified_at = verified_at or datetime.now(timezone.utc).isoformat()

    def add(contact_type: ContactMethodType, **fields: Any) -> None:
        is_primary = contact_type not in primary_types
        primary_types.add(contact_type)
        contacts.append(
            ContactIntelligence(type=contact_type, is_primary=is_primary, **fields)
        )

    for person_index, person in enumerate(people):
        source = f"{provenance.label} - {person.title or 'Contact'}"

        if not _is_blank(person.email):
            email_confidence = (
                VERIFIED_EMAIL_CONFIDENCE if person.email_verified else UNVERIFIED_EMAIL_CONFIDENCE
            )
            add(
                ContactMethodType.EMAIL,
                id=f"{provenance.name}-email-{person_index}",
                value=person.email.strip(),
                confidence=email_confidence,
                source=source,
                last_verified=verified_at,
            )
            if person_index == 0:
                _fill_field(enriched, "email", person.email, provenance, email_confidence)

        for phone_index, phone in enumerate(person.phones):
            if _is_blank(phone):
                continue
            add(
                ContactMethodType.PHONE,
                id=f"{provenance.name}-phone-{person_index}-{phone_index}",
                value=phone.strip(),
                confidence=PERSON_PHONE_CONFIDENCE,
                source=source,
            )
            if person_index == 0 and phone_index == 0:
                _fill_field(enriched, "phone", phone, provenance, PERSON_PHONE_CONFIDENCE)

        if not _is_blank(person.linkedin_url):
            add(
                ContactMethodType.LINKEDIN,
                id=f"{provenance.name}-linkedin-{person_index}",
                value=person.linkedin_url.strip(),
                confidence=PERSON_LINKEDIN_CONFIDENCE,
                source=source,
            )

    return enriched, contacts


def merge_supplemental_data(base: Lead, supplemental: SupplementalData) -> Lead:
    """Layer one supplemental source onto a lead.

    Pure: returns a new lead and leaves ``base`` untouched.
    """
    if supplemental.is_empty:
        return base.model_copy(deep=True)

    provenance = supplemental.provenance
    lead = base.model_copy(deep=True)

    _fill_field(lead, "phone", supplemental.phone, provenance)
    _fill_field(lead, "address", supplemental.address, provenance)
    for platform in SOCIAL_PLATFORMS:
        _fill_field(lead, platform, getattr(supplemental.social_links, platform), provenance)
    _append_description(lead, supplemental.description, provenance)

    if supplemental.people:
        lead, contacts = convert_contacts(supplemental.people, lead, provenance)
        lead.enriched_contacts = [*lead.enriched_contacts, *contacts]

    if provenance.label not in lead.sources:
        lead.sources.append(provenance.label)

    return lead


def apply_layers(base: Lead, layers: Iterable[SupplementalData]) -> Lead:
    """Merge layers in order; earlier layers win every contested field."""
    lead = base
    for layer in layers:
        lead = merge_supplemental_data(lead, layer)
    return lead.model_copy(deep=True) if lead is base else lead


def merge_social_links(
    existing: Mapping[str, str | None],
    scraped: Mapping[str, str | None],
) -> dict[str, str | None]:
    """Fill-only merge of raw social link dicts; existing values always win."""
    keys = list(dict.fromkeys([*existing.keys(), *scraped.keys()]))
    return {key: existing.get(key) or scraped.get(key) for key in keys}

"""Canonical leads from raw discovery output.

The discovery collaborator (generative search with grounding) returns
JSON-ish text describing prospects. Nothing about its shape is trusted:
records without a company name are skipped, scores are clamped, and
every contact field goes through the evidence mapper.
"""

import logging
from typing import Any, Iterable, Mapping

from pydantic import ValidationError

from ..models.lead import (
    EVIDENCE_FIELD_NAMES,
    SOCIAL_PLATFORMS,
    GroundingLink,
    Lead,
    SocialLinks,
)
from .evidence import map_forensic_field
from .extraction import extract_json
from .normalize import normalize_social_value, normalize_url

logger = logging.getLogger(__name__)

# Keys that wrap a list of prospects in an object response
_LIST_KEYS = ("leads", "prospects", "results")

# Discovery payload keys for each contact attribute
_SCALAR_KEYS = {
    "email": "email",
    "phone": "phone",
    "address": "address",
    "contact_name": "contactName",
    "website": "website",
}

_SOCIAL_KEYS = {
    "instagram": ("instagram",),
    "linked_in": ("linkedIn", "linkedin"),
    "twitter": ("twitter", "x"),
    "facebook": ("facebook",),
    "youtube": ("youtube",),
    "tiktok": ("tiktok",),
}


def _text(value: Any) -> str | None:
    if isinstance(value, str):
        return value.strip() or None
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return None


def _score(value: Any) -> int:
    try:
        score = int(round(float(value)))
    except (TypeError, ValueError, OverflowError):
        return 0
    return min(100, max(0, score))


def _field_evidence(raw: Mapping[str, Any], key: str) -> Any:
    """Evidence from ``raw["evidence"][key]`` or ``raw["<key>Evidence"]``."""
    evidence = raw.get("evidence")
    if isinstance(evidence, Mapping) and key in evidence:
        return evidence[key]
    return raw.get(f"{key}Evidence")


def _grounding(values: Any) -> list[GroundingLink]:
    # A bare string or object is not a list of sources
    if isinstance(values, (str, bytes, Mapping)) or not isinstance(values, Iterable):
        return []
    links = []
    for item in values:
        try:
            links.append(GroundingLink.model_validate(item))
        except ValidationError:
            continue
    return links


def lead_from_discovery(
    raw: Mapping[str, Any],
    grounding_sources: Iterable[Any] | None = None,
) -> Lead | None:
    """Build a canonical lead from one discovery record.

    Returns:
        Lead, or None when the record has no company name
    """
    company_name = _text(raw.get("companyName") or raw.get("company_name") or raw.get("name"))
    if not company_name:
        return None

    values: dict[str, str | None] = {}
    for name, key in _SCALAR_KEYS.items():
        values[name] = _text(raw.get(key))
    values["website"] = normalize_url(values["website"])

    social_raw = raw.get("socialLinks") or raw.get("social_links") or {}
    if not isinstance(social_raw, Mapping):
        social_raw = {}
    for platform, keys in _SOCIAL_KEYS.items():
        found = next((_text(social_raw.get(k)) for k in keys if _text(social_raw.get(k))), None)
        values[platform] = normalize_social_value(found)

    evidence_keys = {**_SCALAR_KEYS, **{p: keys[0] for p, keys in _SOCIAL_KEYS.items()}}
    shadow_fields = {
        EVIDENCE_FIELD_NAMES[name]: map_forensic_field(value, _field_evidence(raw, evidence_keys[name]))
        for name, value in values.items()
    }

    reasoning = _text(raw.get("matchReasoning")) or ""
    lead = Lead(
        company_name=company_name,
        description=_text(raw.get("description")) or reasoning,
        match_reasoning=reasoning,
        dna_score=_score(raw.get("dnaScore")),
        latest_signal=_text(raw.get("latestSignal")),
        social_links=SocialLinks(**{p: values[p] for p in SOCIAL_PLATFORMS}),
        grounding_sources=_grounding(grounding_sources or raw.get("groundingSources")),
        **{name: values[name] for name in _SCALAR_KEYS},
        **shadow_fields,
    )
    return lead


def parse_discovery_response(
    text: Any,
    grounding_sources: Iterable[Any] | None = None,
) -> list[Lead]:
    """Parse discovery output into leads; unusable output yields []."""
    payload = extract_json(text)
    if payload is None:
        logger.warning("Discovery returned no usable structured output")
        return []

    if isinstance(payload, Mapping):
        wrapped = next((payload[k] for k in _LIST_KEYS if isinstance(payload.get(k), list)), None)
        records = wrapped if wrapped is not None else [payload]
    elif isinstance(payload, list):
        records = payload
    else:
        return []

    grounding = list(grounding_sources) if grounding_sources is not None else None
    leads = []
    for index, record in enumerate(records):
        if not isinstance(record, Mapping):
            logger.debug(f"Skipping non-object discovery record at {index}")
            continue
        lead = lead_from_discovery(record, grounding)
        if lead is None:
            logger.debug(f"Skipping discovery record {index} without a company name")
            continue
        leads.append(lead)

    return leads

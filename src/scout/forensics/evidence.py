"""Evidence mapping: how much do we trust a field value.

Every contact field on a lead goes through ``map_forensic_field`` so that
source classification, default confidence and clamping are uniform. The
same rules are applied by ``FieldEvidence`` when stored records are
loaded.
"""

from typing import Any

from ..models.evidence import (
    ContactField,
    FieldEvidence,
    RawEvidence,
    clamp_confidence,
    classify_source,
    default_confidence,
    numeric_confidence,
)
from .normalize import normalize_url

__all__ = [
    "clamp_confidence",
    "classify_source",
    "default_confidence",
    "map_forensic_field",
]


def map_forensic_field(value: str | None, evidence: Any = None) -> ContactField | None:
    """Wrap a raw field value with normalized evidence.

    Args:
        value: Extracted field value
        evidence: Raw evidence mapping, RawEvidence or FieldEvidence (optional)

    Returns:
        ContactField, or None when the value is empty after trimming
    """
    if not isinstance(value, str) or not value.strip():
        return None

    raw = RawEvidence.coerce(evidence)
    source = classify_source(raw.source if raw else None)

    confidence = numeric_confidence(raw.confidence if raw else None)
    if confidence is None:
        confidence = default_confidence(source)

    source_url = None
    if raw and isinstance(raw.source_url, str):
        source_url = normalize_url(raw.source_url)

    return ContactField(
        value=value.strip(),
        evidence=FieldEvidence(
            source=source,
            confidence=clamp_confidence(confidence),
            source_url=source_url,
        ),
    )

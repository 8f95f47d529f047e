"""Evidence models for Scout.

Every contact field on a lead can carry its own evidence record so
provenance is tracked per field, not just per record.
"""

import math
from enum import Enum
from numbers import Real
from typing import Any, Mapping

from pydantic import Field, ValidationInfo, field_validator

from .base import RecordModel


class DataSource(str, Enum):
    """Where a field value was observed."""

    OFFICIAL_WEBSITE = "official_website"
    GOOGLE_BUSINESS = "google_business"
    DIRECTORY = "directory"
    SOCIAL = "social"
    MANUAL = "manual"
    UNKNOWN = "unknown"


# Sources we trust more than the rest when the caller gives no confidence
HIGH_TRUST_SOURCES = frozenset({DataSource.OFFICIAL_WEBSITE, DataSource.GOOGLE_BUSINESS})

HIGH_TRUST_CONFIDENCE = 0.9
KNOWN_SOURCE_CONFIDENCE = 0.7
UNKNOWN_SOURCE_CONFIDENCE = 0.5


def classify_source(raw_source: Any) -> DataSource:
    """Map a collaborator-supplied source label onto the known sources."""
    if isinstance(raw_source, DataSource):
        return raw_source
    if isinstance(raw_source, str):
        try:
            return DataSource(raw_source.strip().lower())
        except ValueError:
            pass
    return DataSource.UNKNOWN


def default_confidence(source: DataSource) -> float:
    """Confidence applied when the source gives no usable number."""
    if source in HIGH_TRUST_SOURCES:
        return HIGH_TRUST_CONFIDENCE
    if source == DataSource.UNKNOWN:
        return UNKNOWN_SOURCE_CONFIDENCE
    return KNOWN_SOURCE_CONFIDENCE


def clamp_confidence(value: float) -> float:
    return min(1.0, max(0.0, float(value)))


def numeric_confidence(value: Any) -> float | None:
    """Read a confidence as a float; None when it is not a usable number."""
    # bool is a Real subclass but never a confidence
    if isinstance(value, bool) or not isinstance(value, Real):
        return None
    if math.isnan(value):
        return None
    return float(value)


class FieldEvidence(RecordModel):
    """Justification for a single field value.

    Stored records are trusted for shape but not for range: an
    out-of-range confidence is clamped and a missing or non-numeric one
    falls back to the source's default.
    """

    source: DataSource = DataSource.UNKNOWN
    confidence: float = Field(default=None, validate_default=True)
    source_url: str | None = None

    @field_validator("source", mode="before")
    @classmethod
    def _unknown_source(cls, value):
        return classify_source(value)

    @field_validator("confidence", mode="before")
    @classmethod
    def _clamp(cls, value, info: ValidationInfo):
        confidence = numeric_confidence(value)
        if confidence is None:
            return default_confidence(info.data.get("source", DataSource.UNKNOWN))
        return clamp_confidence(confidence)


class ContactField(RecordModel):
    """A field value together with its evidence."""

    value: str
    evidence: FieldEvidence


class RawEvidence(RecordModel):
    """Evidence as supplied by an untrusted collaborator.

    Nothing about the shape is trusted: the source may be any string,
    the confidence may be missing, non-numeric or out of range.
    """

    source: Any = None
    confidence: Any = None
    source_url: Any = None

    @classmethod
    def coerce(cls, value: Any) -> "RawEvidence | None":
        """Build raw evidence from a mapping or evidence model, else None."""
        if value is None:
            return None
        if isinstance(value, RawEvidence):
            return value
        if isinstance(value, FieldEvidence):
            return cls(
                source=value.source.value,
                confidence=value.confidence,
                source_url=value.source_url,
            )
        if isinstance(value, Mapping):
            return cls.model_validate(dict(value))
        return None

"""Re-verification pass.

The verification collaborator is the one source allowed to overwrite
existing fields: its whole purpose is to fix earlier mistakes. Status
moves PENDING -> VERIFYING -> {VERIFIED, FAILED, COLLISION_DETECTED};
a finished lead only re-enters VERIFYING when a caller restarts it.
"""

import logging
from typing import Any

from pydantic import ValidationError

from ..exceptions import VerificationStateError
from ..logging import log_verification_event
from ..models.enrichment import CorrectedData, CorrectedValue, VerificationResult
from ..models.evidence import DataSource
from ..models.lead import (
    EVIDENCE_FIELD_NAMES,
    SOCIAL_PLATFORMS,
    TERMINAL_STATUSES,
    Lead,
    VerificationStatus,
)
from .evidence import map_forensic_field
from .extraction import extract_json
from .normalize import normalize_social_value, normalize_url

logger = logging.getLogger(__name__)

# Evidence for corrected values that arrive without their own
CORRECTION_EVIDENCE = {"source": DataSource.MANUAL.value, "confidence": 0.95}

_ALLOWED_TRANSITIONS: dict[VerificationStatus, frozenset[VerificationStatus]] = {
    VerificationStatus.PENDING: frozenset({VerificationStatus.VERIFYING}),
    VerificationStatus.VERIFYING: TERMINAL_STATUSES,
    **{status: frozenset({VerificationStatus.VERIFYING}) for status in TERMINAL_STATUSES},
}

# Collaborators are inconsistent about the casing of linkedIn
_SOCIAL_KEYS = {
    "instagram": "instagram",
    "linkedin": "linked_in",
    "linked_in": "linked_in",
    "twitter": "twitter",
    "x": "twitter",
    "facebook": "facebook",
    "youtube": "youtube",
    "tiktok": "tiktok",
}


def can_transition(current: VerificationStatus, target: VerificationStatus) -> bool:
    return target in _ALLOWED_TRANSITIONS.get(current, frozenset())


def begin_verification(lead: Lead) -> Lead:
    """Start (or restart) verification; returns a copy at VERIFYING."""
    current = lead.verification_status
    if not can_transition(current, VerificationStatus.VERIFYING):
        raise VerificationStateError(current.value, VerificationStatus.VERIFYING.value)

    updated = lead.model_copy(deep=True)
    updated.verification_status = VerificationStatus.VERIFYING
    log_verification_event(lead.id, current.value, VerificationStatus.VERIFYING.value)
    return updated


def _correction_evidence(corrected: CorrectedValue) -> Any:
    return corrected.evidence if corrected.evidence is not None else CORRECTION_EVIDENCE


def _overwrite(lead: Lead, name: str, value: str | None, corrected: CorrectedValue) -> bool:
    field = map_forensic_field(value, _correction_evidence(corrected))
    if field is None:
        return False
    if name in SOCIAL_PLATFORMS:
        setattr(lead.social_links, name, field.value)
    else:
        setattr(lead, name, field.value)
    setattr(lead, EVIDENCE_FIELD_NAMES[name], field)
    return True


def apply_corrections(lead: Lead, corrected: CorrectedData) -> tuple[Lead, list[str]]:
    """Overwrite website, email and social links from corrected data.

    Returns:
        (updated copy, names of the fields that were overwritten)
    """
    updated = lead.model_copy(deep=True)
    changed: list[str] = []

    if corrected.website and _overwrite(
        updated, "website", normalize_url(corrected.website.value), corrected.website
    ):
        changed.append("website")

    if corrected.email and _overwrite(updated, "email", corrected.email.value, corrected.email):
        changed.append("email")

    for key, link in corrected.social_links.items():
        platform = _SOCIAL_KEYS.get(key.strip().lower())
        if platform is None:
            logger.debug(f"Ignoring correction for unknown platform '{key}'")
            continue
        if _overwrite(updated, platform, normalize_social_value(link.value), link):
            changed.append(platform)

    return updated, changed


def apply_verification(lead: Lead, result: VerificationResult) -> Lead:
    """Apply a finished verification result to a lead under verification.

    Raises:
        VerificationStateError: lead is not VERIFYING or result is not terminal
    """
    current = lead.verification_status
    if current != VerificationStatus.VERIFYING or not result.status.is_terminal:
        raise VerificationStateError(current.value, result.status.value)

    updated, changed = apply_corrections(lead, result.corrected_data or CorrectedData())

    updated.verification_status = result.status
    updated.verification_reasoning = result.reasoning or None
    updated.forensic_audit_trail = list(result.audit_trail)

    log_verification_event(lead.id, current.value, result.status.value, changed)
    return updated


def parse_verification_response(text: Any) -> VerificationResult:
    """Parse collaborator output; unusable output becomes a FAILED result."""
    payload = extract_json(text)
    if not isinstance(payload, dict):
        return VerificationResult(
            status=VerificationStatus.FAILED,
            reasoning="Verification returned no usable structured output",
        )

    status = payload.get("status")
    if isinstance(status, str):
        payload = {**payload, "status": status.strip().upper()}

    try:
        result = VerificationResult.model_validate(payload)
    except ValidationError as e:
        logger.warning(f"Rejected verification payload: {e.error_count()} error(s)")
        return VerificationResult(
            status=VerificationStatus.FAILED,
            reasoning=f"Verification returned an unrecognized result (status={status!r})",
        )

    if not result.status.is_terminal:
        return VerificationResult(
            status=VerificationStatus.FAILED,
            reasoning=f"Verification returned a non-final status: {result.status.value}",
            audit_trail=result.audit_trail,
        )
    return result

"""Forensic identity and field-provenance resolution.

Pure, synchronous transformations over in-memory records:
normalization, evidence mapping, identity keys, multi-source merging,
verification and JSON recovery.
"""

from .discovery import lead_from_discovery, parse_discovery_response
from .evidence import clamp_confidence, classify_source, default_confidence, map_forensic_field
from .extraction import extract_json
from .identity import (
    get_identity_keys,
    is_already_processed,
    processed_identity_keys,
    shares_identity,
)
from .merge import (
    APOLLO_PROVENANCE,
    LayerProvenance,
    SupplementalContact,
    SupplementalData,
    apply_layers,
    convert_contacts,
    merge_social_links,
    merge_supplemental_data,
    scrape_provenance,
)
from .normalize import normalize_domain, normalize_handle, normalize_social, normalize_url
from .promotion import build_dossier, promote_lead, sync_dossier_from_lead
from .verification import (
    apply_corrections,
    apply_verification,
    begin_verification,
    can_transition,
    parse_verification_response,
)

__all__ = [
    # Normalizer
    "normalize_url",
    "normalize_handle",
    "normalize_domain",
    "normalize_social",
    # Evidence
    "map_forensic_field",
    "classify_source",
    "default_confidence",
    "clamp_confidence",
    # Identity
    "get_identity_keys",
    "processed_identity_keys",
    "is_already_processed",
    "shares_identity",
    # Merge
    "LayerProvenance",
    "SupplementalContact",
    "SupplementalData",
    "APOLLO_PROVENANCE",
    "scrape_provenance",
    "merge_supplemental_data",
    "convert_contacts",
    "apply_layers",
    "merge_social_links",
    # Verification
    "begin_verification",
    "apply_verification",
    "apply_corrections",
    "can_transition",
    "parse_verification_response",
    # Extraction / discovery
    "extract_json",
    "lead_from_discovery",
    "parse_discovery_response",
    # Promotion
    "build_dossier",
    "promote_lead",
    "sync_dossier_from_lead",
]

"""Deduplication identity for leads and sponsors.

An entity gets every strong key it qualifies for (domain, Instagram
handle) so that an "already in pipeline" check succeeds when any one of
them was seen before. Entities with no strong identity fall back to an
exact name + address key, so the key list is never empty.
"""

from typing import Any, Iterable

from .normalize import normalize_domain, normalize_social

DOMAIN_PREFIX = "dom:"
INSTAGRAM_PREFIX = "ig:"
NAME_PREFIX = "name:"

_INSTAGRAM_HOST = "instagram.com/"


def _instagram_handle(raw: str | None) -> str | None:
    """Normalized Instagram handle, also when given a profile URL."""
    handle = normalize_social(raw)
    if not handle:
        return None
    if _INSTAGRAM_HOST in handle:
        handle = handle.split(_INSTAGRAM_HOST, 1)[1]
        handle = handle.split("/", 1)[0].split("?", 1)[0].lstrip("@")
    return handle or None


def _social_instagram(entity: Any) -> str | None:
    social_links = getattr(entity, "social_links", None)
    return getattr(social_links, "instagram", None) if social_links else None


def get_identity_keys(entity: Any) -> list[str]:
    """Derive dedup keys for a lead or sponsor.

    Args:
        entity: Anything with ``company_name``, ``website``, ``address``
            and ``social_links`` attributes

    Returns:
        Non-empty list of keys; compare as a set
    """
    keys: list[str] = []

    domain = normalize_domain(getattr(entity, "website", None))
    if domain:
        keys.append(f"{DOMAIN_PREFIX}{domain}")

    handle = _instagram_handle(_social_instagram(entity))
    if handle:
        keys.append(f"{INSTAGRAM_PREFIX}{handle}")

    if not keys:
        name = (getattr(entity, "company_name", None) or "").strip().lower()
        address = (getattr(entity, "address", None) or "").strip().lower()
        keys.append(f"{NAME_PREFIX}{name}|{address}")

    return keys


def processed_identity_keys(*collections: Iterable[Any]) -> set[str]:
    """Union of identity keys across sponsors, vaulted leads, etc."""
    keys: set[str] = set()
    for collection in collections:
        for entity in collection:
            keys.update(get_identity_keys(entity))
    return keys


def is_already_processed(entity: Any, known_keys: set[str]) -> bool:
    """Check if any identity key of the entity was seen before."""
    return any(key in known_keys for key in get_identity_keys(entity))


def shares_identity(left: Any, right: Any) -> bool:
    """Check if two entities have at least one identity key in common."""
    return bool(set(get_identity_keys(left)) & set(get_identity_keys(right)))

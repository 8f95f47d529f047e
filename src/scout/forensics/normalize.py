"""Canonical forms for URLs, domains and social handles.

All functions are total: they never raise, and return None for input
that normalizes to nothing.
"""

import re
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

_SCHEME_RE = re.compile(r"^https?://", re.IGNORECASE)
_WWW_RE = re.compile(r"^www\.", re.IGNORECASE)
_DOMAIN_END_RE = re.compile(r"[/?#]")

TRACKING_PARAMS = frozenset({"fbclid", "gclid"})
TRACKING_PREFIXES = ("utm_",)


def _is_tracking_param(name: str) -> bool:
    lowered = name.lower()
    return lowered in TRACKING_PARAMS or lowered.startswith(TRACKING_PREFIXES)


def normalize_url(raw: str | None) -> str | None:
    """Normalize a URL for storage and comparison.

    Prepends ``https://`` when no http(s) scheme is present and strips
    tracking query parameters (``utm_*``, ``fbclid``, ``gclid``). When the
    URL cannot be parsed, the prefixed string is returned unchanged.
    """
    if not isinstance(raw, str):
        return None
    url = raw.strip()
    if not url:
        return None
    if not _SCHEME_RE.match(url):
        url = f"https://{url}"

    try:
        parts = urlsplit(url)
        if not parts.netloc:
            return url
        query = parse_qsl(parts.query, keep_blank_values=True)
        kept = [(name, value) for name, value in query if not _is_tracking_param(name)]
        if len(kept) == len(query):
            return url
        return urlunsplit(parts._replace(query=urlencode(kept)))
    except ValueError:
        return url


def normalize_handle(raw: str | None) -> str | None:
    """Trim a bare social handle, dropping one leading ``@`` and trailing slashes."""
    if not isinstance(raw, str):
        return None
    handle = raw.strip()
    if handle.startswith("@"):
        handle = handle[1:]
    handle = handle.rstrip("/").strip()
    return handle or None


def normalize_domain(raw: str | None) -> str | None:
    """Reduce a URL or host to a bare lowercase domain.

    ``https://www.Acme.com/about?x=1`` becomes ``acme.com``.
    """
    if not isinstance(raw, str):
        return None
    domain = raw.strip().lower()
    domain = _SCHEME_RE.sub("", domain)
    domain = _WWW_RE.sub("", domain)
    domain = _DOMAIN_END_RE.split(domain, maxsplit=1)[0].strip()
    if not domain or any(ch.isspace() for ch in domain):
        return None
    return domain


def normalize_social(raw: str | None) -> str | None:
    """Normalize a social handle for comparison (handle rules + lowercase)."""
    handle = normalize_handle(raw)
    return handle.lower() if handle else None


def looks_like_url(value: str) -> bool:
    """Check if a social value is a URL rather than a bare handle."""
    stripped = value.strip()
    return bool(_SCHEME_RE.match(stripped)) or (
        "/" in stripped and "." in stripped.split("/", 1)[0]
    )


def normalize_social_value(raw: str | None) -> str | None:
    """Normalize a social link that may be either a URL or a bare handle."""
    if not isinstance(raw, str) or not raw.strip():
        return None
    if looks_like_url(raw):
        return normalize_url(raw)
    return normalize_handle(raw)

"""Website scraper for social media links.

Fallback for when discovery misses a company's social profiles: fetch
the company website and pull links out of the markup (usually the
footer). Anchor hrefs are checked first, then the raw HTML, so a link
buried in a script blob still counts when nothing better exists.
"""

import re
from urllib.parse import quote

import httpx
from bs4 import BeautifulSoup

from ..config import Settings, get_settings
from ..forensics.merge import LayerProvenance, SupplementalData, scrape_provenance
from ..forensics.normalize import normalize_url
from ..logging import get_context_logger, log_enrichment_result
from ..models.enrichment import ScrapedSocialLinks
from ..models.lead import Lead
from .base import EnrichmentLayer

logger = get_context_logger(__name__, source="scraper")

# Hosts are anchored so that e.g. "dropbox.com/" never reads as x.com;
# one subdomain label such as "www." or "m." may precede the host
_HOST_PREFIX = r"(?<![\w.-])(?:https?://)?(?:[\w-]+\.)?"

SOCIAL_PATTERNS: dict[str, re.Pattern] = {
    "instagram": re.compile(_HOST_PREFIX + r"instagram\.com/([a-zA-Z0-9_.]+)", re.IGNORECASE),
    "facebook": re.compile(_HOST_PREFIX + r"facebook\.com/([a-zA-Z0-9_\-.]+)", re.IGNORECASE),
    "twitter": re.compile(_HOST_PREFIX + r"(?:twitter|x)\.com/([a-zA-Z0-9_]+)", re.IGNORECASE),
    "linked_in": re.compile(
        _HOST_PREFIX + r"linkedin\.com/(?:company|in)/([a-zA-Z0-9_\-]+)", re.IGNORECASE
    ),
    "youtube": re.compile(
        _HOST_PREFIX + r"youtube\.com/(?:c/|channel/|user/|@)?([a-zA-Z0-9_\-]+)", re.IGNORECASE
    ),
    "tiktok": re.compile(_HOST_PREFIX + r"tiktok\.com/@([a-zA-Z0-9_.]+)", re.IGNORECASE),
}

# Share widgets and player pages, not profiles
SKIP_HANDLES: dict[str, frozenset[str]] = {
    "facebook": frozenset({"sharer", "dialog", "share", "plugins"}),
    "twitter": frozenset({"intent", "share", "widgets"}),
    "youtube": frozenset({"watch", "embed", "playlist"}),
}

CANONICAL_URLS = {
    "instagram": "https://instagram.com/{}",
    "facebook": "https://facebook.com/{}",
    "twitter": "https://twitter.com/{}",
    "linked_in": "https://linkedin.com/company/{}",
    "youtube": "https://youtube.com/@{}",
    "tiktok": "https://tiktok.com/@{}",
}


def _first_handle(platform: str, text: str) -> str | None:
    skip = SKIP_HANDLES.get(platform, frozenset())
    for match in SOCIAL_PATTERNS[platform].finditer(text):
        handle = match.group(1)
        if "/" in handle or len(handle) <= 2:
            continue
        if handle.lower() in skip:
            continue
        return handle
    return None


def extract_social_links(html: str) -> ScrapedSocialLinks:
    """Extract the first valid profile link per platform from HTML."""
    if not html:
        return ScrapedSocialLinks()

    soup = BeautifulSoup(html, "html.parser")
    hrefs = "\n".join(str(a["href"]) for a in soup.find_all("a", href=True))

    found = {}
    for platform in SOCIAL_PATTERNS:
        handle = _first_handle(platform, hrefs) or _first_handle(platform, html)
        if handle:
            found[platform] = CANONICAL_URLS[platform].format(handle)

    return ScrapedSocialLinks(**found)


class SocialLinkScraper:
    """Fetches a website (directly, then via a raw proxy) and extracts social links."""

    def __init__(
        self,
        timeout: float = 10.0,
        proxy_url: str | None = "https://api.allorigins.win/raw?url=",
        proxy_timeout: float = 15.0,
        user_agent: str = "Mozilla/5.0 (compatible; ScoutBot/1.0)",
        http_client: httpx.AsyncClient | None = None,
    ):
        self.timeout = timeout
        self.proxy_url = proxy_url
        self.proxy_timeout = proxy_timeout
        self.user_agent = user_agent
        self._http_client = http_client

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "SocialLinkScraper":
        settings = settings or get_settings()
        return cls(
            timeout=settings.scraper_timeout_seconds,
            proxy_url=settings.scraper_proxy_url or None,
            proxy_timeout=settings.scraper_proxy_timeout_seconds,
            user_agent=settings.scraper_user_agent,
        )

    @property
    def http_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(follow_redirects=True)
        return self._http_client

    async def close(self):
        """Close HTTP client."""
        if self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None

    async def _get_text(self, url: str, timeout: float, headers: dict[str, str] | None = None) -> str:
        response = await self.http_client.get(url, headers=headers, timeout=timeout)
        response.raise_for_status()
        return response.text

    async def fetch_html(self, url: str) -> str | None:
        """Fetch page HTML, falling back to the proxy once; None when both fail."""
        try:
            return await self._get_text(url, self.timeout, {"User-Agent": self.user_agent})
        except httpx.HTTPError as e:
            if not self.proxy_url:
                logger.warning(f"Scraper: direct fetch failed for {url}: {e}")
                return None
            logger.warning(f"Scraper: direct fetch failed for {url} ({e}), trying proxy")

        try:
            return await self._get_text(f"{self.proxy_url}{quote(url, safe='')}", self.proxy_timeout)
        except httpx.HTTPError as e:
            logger.error(f"Scraper: direct fetch and proxy both failed for {url}: {e}")
            return None

    async def scrape(self, website: str | None) -> ScrapedSocialLinks:
        """Scrape social links from a website; failures yield no links."""
        url = normalize_url(website)
        if not url:
            logger.warning("Scraper: no website URL provided")
            return ScrapedSocialLinks()

        html = await self.fetch_html(url)
        if html is None:
            log_enrichment_result("scraper", url, False, error="fetch failed")
            return ScrapedSocialLinks()

        links = extract_social_links(html)
        log_enrichment_result(
            "scraper",
            url,
            links.found_count > 0,
            fields_found=links.found_count,
            error=None if links.found_count else "no social links found",
        )
        return links


class ScraperLayer(EnrichmentLayer):
    """Enrichment layer backed by the company's own website."""

    name = "scraper"

    def __init__(self, scraper: SocialLinkScraper):
        self.scraper = scraper

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "ScraperLayer":
        return cls(SocialLinkScraper.from_settings(settings))

    def provenance_for(self, lead: Lead) -> LayerProvenance:
        return scrape_provenance(normalize_url(lead.website))

    async def fetch(self, lead: Lead) -> SupplementalData:
        website = normalize_url(lead.website)
        if not website:
            return SupplementalData.empty(self.provenance_for(lead))
        scraped = await self.scraper.scrape(website)
        return SupplementalData.from_scrape(scraped, website)

    async def aclose(self) -> None:
        await self.scraper.close()

"""
Base class for site-specific adapters.
"""

from abc import ABC, abstractmethod
from urllib.parse import urlparse

from ..fetcher import Fetcher
from ..metadata import PageMetadata, extract_page_metadata
from ..models import ContentType, ExtractedMetadata


def hostname_title(url: str) -> str:
    """Hostname without a leading www., used as a last-resort title."""
    try:
        hostname = urlparse(url).hostname
    except ValueError:
        hostname = None
    if not hostname:
        return "Untitled"
    return hostname[4:] if hostname.startswith("www.") else hostname


class SiteExtractor(ABC):
    """Base class for adapters that replace the generic HTML pipeline for a site."""

    # Domains this extractor handles
    DOMAINS: list[str] = []

    content_type: ContentType = ContentType.ARTICLE
    site_name: str | None = None

    def __init__(self, fetcher: Fetcher):
        self.fetcher = fetcher

    @classmethod
    def can_handle(cls, url: str) -> bool:
        """Check if this extractor can handle the given URL."""
        url_lower = url.lower()
        return any(domain in url_lower for domain in cls.DOMAINS)

    @abstractmethod
    async def extract(self, url: str) -> ExtractedMetadata:
        """
        Extract metadata for the URL.

        Raises on failure; the caller turns that into a minimal record.
        """
        pass

    async def _fetch_page_metadata(self, url: str) -> tuple[str, PageMetadata]:
        """Fetch the page and run the generic metadata extractor over it."""
        response = await self.fetcher.fetch_with_retry(url)
        return response.url, extract_page_metadata(response.text(), response.url)

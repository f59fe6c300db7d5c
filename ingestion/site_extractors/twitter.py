"""
Twitter/X adapter.

Tweets are rendered client-side, so we get what we can from meta tags.
"""

from urllib.parse import urlparse

from ..models import ContentType, ExtractedMetadata
from .base import SiteExtractor


def handle_from_url(url: str) -> str | None:
    """Account handle from a status URL (first path segment)."""
    path_parts = [p for p in urlparse(url).path.split("/") if p]
    if not path_parts or path_parts[0] in ("i", "home", "search", "intent"):
        return None
    return f"@{path_parts[0]}"


class TwitterExtractor(SiteExtractor):
    """Metadata for Twitter/X posts."""

    DOMAINS = ["twitter.com", "x.com"]
    content_type = ContentType.TWITTER
    site_name = "Twitter"

    async def extract(self, url: str) -> ExtractedMetadata:
        _, page = await self._fetch_page_metadata(url)

        cover_image = page.cover_image
        # Skip avatar images
        if cover_image and "profile_images" in cover_image:
            cover_image = None

        return ExtractedMetadata(
            content_type=self.content_type,
            title=page.title,
            description=page.description,
            cover_image=cover_image,
            author=page.author or handle_from_url(url),
            site_name=self.site_name,
        )

"""
YouTube adapter: oEmbed lookup with a generic-page fallback.
"""

import logging
from urllib.parse import parse_qs, quote, urlparse

from ..models import ContentType, ExtractedMetadata
from .base import SiteExtractor

logger = logging.getLogger(__name__)

OEMBED_ENDPOINT = "https://www.youtube.com/oembed"


def parse_video_id(url: str) -> str | None:
    """Video ID from watch, youtu.be, shorts, embed and live URLs."""
    parsed = urlparse(url)
    host = (parsed.hostname or "").lower()
    path_parts = [p for p in parsed.path.split("/") if p]

    if host.endswith("youtu.be"):
        return path_parts[0] if path_parts else None

    if "youtube.com" in host:
        if parsed.path == "/watch":
            return parse_qs(parsed.query).get("v", [None])[0] or None
        if len(path_parts) >= 2 and path_parts[0] in ("shorts", "embed", "live", "v"):
            return path_parts[1]

    return None


class YouTubeExtractor(SiteExtractor):
    """Metadata for YouTube videos."""

    DOMAINS = ["youtube.com", "youtu.be"]
    content_type = ContentType.YOUTUBE
    site_name = "YouTube"

    def __init__(self, fetcher, oembed_timeout: float = 10):
        super().__init__(fetcher)
        self.oembed_timeout = oembed_timeout

    async def extract(self, url: str) -> ExtractedMetadata:
        video_id = parse_video_id(url)

        try:
            return await self._extract_oembed(url, video_id)
        except Exception as e:
            logger.warning(f"YouTube oEmbed lookup failed for {url}, falling back to page: {e}")

        return await self._extract_page(url, video_id)

    async def _extract_oembed(self, url: str, video_id: str | None) -> ExtractedMetadata:
        if not video_id:
            raise ValueError("No video ID in URL")

        oembed_url = f"{OEMBED_ENDPOINT}?url={quote(url, safe='')}&format=json"
        data = await self.fetcher.fetch_json(oembed_url, timeout=self.oembed_timeout)
        if not isinstance(data, dict):
            raise ValueError("Unexpected oEmbed response")

        return ExtractedMetadata(
            content_type=self.content_type,
            title=data.get("title") or None,
            description=data.get("description") or None,
            cover_image=data.get("thumbnail_url") or None,
            author=data.get("author_name") or None,
            site_name=self.site_name,
        )

    async def _extract_page(self, url: str, video_id: str | None) -> ExtractedMetadata:
        page_url, page = await self._fetch_page_metadata(url)

        cover_image = page.cover_image
        if not cover_image and video_id:
            cover_image = f"https://img.youtube.com/vi/{video_id}/maxresdefault.jpg"

        return ExtractedMetadata(
            content_type=self.content_type,
            title=page.title,
            description=page.description,
            favicon=page.favicon,
            cover_image=cover_image,
            site_name=page.site_name or self.site_name,
            author=page.author,
            published_date=page.published_date,
        )

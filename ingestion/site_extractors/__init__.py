"""
Site-specific adapters for sources the generic HTML pipeline handles badly.

- YouTube: oEmbed lookup, page-metadata fallback
- Twitter/X: page meta tags only
"""

from ..fetcher import Fetcher
from .base import SiteExtractor, hostname_title
from .twitter import TwitterExtractor
from .youtube import YouTubeExtractor, parse_video_id

# Registry of all extractors
SITE_EXTRACTORS: list[type[SiteExtractor]] = [
    YouTubeExtractor,
    TwitterExtractor,
]


def get_extractor_for_url(url: str, fetcher: Fetcher, oembed_timeout: float = 10) -> SiteExtractor | None:
    """Get the appropriate site-specific extractor for a URL, if available."""
    for extractor_class in SITE_EXTRACTORS:
        if extractor_class.can_handle(url):
            if extractor_class is YouTubeExtractor:
                return YouTubeExtractor(fetcher, oembed_timeout=oembed_timeout)
            return extractor_class(fetcher)
    return None


__all__ = [
    "SiteExtractor",
    "SITE_EXTRACTORS",
    "get_extractor_for_url",
    "hostname_title",
    "parse_video_id",
    "YouTubeExtractor",
    "TwitterExtractor",
]

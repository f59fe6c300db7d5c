"""
Tests for the YouTube and Twitter/X adapters.
"""

import re

import pytest
from aioresponses import aioresponses

from ingestion.exceptions import TransientFetchError
from ingestion.models import ContentType
from ingestion.site_extractors import (
    TwitterExtractor,
    YouTubeExtractor,
    get_extractor_for_url,
    hostname_title,
    parse_video_id,
)
from ingestion.site_extractors.twitter import handle_from_url

VIDEO_URL = "https://www.youtube.com/watch?v=abc123XYZ"
OEMBED_RE = re.compile(r"^https://www\.youtube\.com/oembed\?.*")
TWEET_URL = "https://x.com/someone/status/1234567890"


class TestParseVideoId:

    @pytest.mark.parametrize("url,expected", [
        ("https://www.youtube.com/watch?v=abc123XYZ", "abc123XYZ"),
        ("https://www.youtube.com/watch?feature=share&v=abc123XYZ", "abc123XYZ"),
        ("https://youtu.be/abc123XYZ", "abc123XYZ"),
        ("https://www.youtube.com/shorts/abc123XYZ", "abc123XYZ"),
        ("https://www.youtube.com/embed/abc123XYZ", "abc123XYZ"),
        ("https://www.youtube.com/live/abc123XYZ", "abc123XYZ"),
        ("https://www.youtube.com/@channel", None),
        ("https://www.youtube.com/watch", None),
    ])
    def test_parse(self, url, expected):
        assert parse_video_id(url) == expected


class TestRegistry:

    def test_youtube(self, fetcher):
        extractor = get_extractor_for_url("https://youtu.be/abc", fetcher, oembed_timeout=3)
        assert isinstance(extractor, YouTubeExtractor)
        assert extractor.oembed_timeout == 3

    def test_twitter(self, fetcher):
        assert isinstance(get_extractor_for_url(TWEET_URL, fetcher), TwitterExtractor)

    def test_no_adapter(self, fetcher):
        assert get_extractor_for_url("https://site.example/", fetcher) is None

    def test_hostname_title(self):
        assert hostname_title("https://www.site.example/a") == "site.example"
        assert hostname_title("https://blog.site.example/a") == "blog.site.example"
        assert hostname_title("not a url") == "Untitled"


class TestYouTubeExtractor:

    @pytest.mark.asyncio
    async def test_oembed(self, fetcher):
        with aioresponses() as m:
            m.get(OEMBED_RE, payload={
                "title": "A Great Video",
                "author_name": "Some Channel",
                "thumbnail_url": "https://i.ytimg.com/vi/abc123XYZ/hqdefault.jpg",
            })

            result = await YouTubeExtractor(fetcher).extract(VIDEO_URL)

            requested = [str(url) for _, url in m.requests]

        assert result.content_type == ContentType.YOUTUBE
        assert result.title == "A Great Video"
        assert result.author == "Some Channel"
        assert result.cover_image == "https://i.ytimg.com/vi/abc123XYZ/hqdefault.jpg"
        assert result.site_name == "YouTube"
        assert result.description is None
        assert len(requested) == 1
        assert "format=json" in requested[0]

    @pytest.mark.asyncio
    async def test_falls_back_to_page_metadata(self, fetcher):
        page = """<html><head>
            <meta property="og:title" content="Page Title">
            <meta property="og:description" content="From the page">
            <meta property="og:image" content="https://i.ytimg.com/vi/abc123XYZ/og.jpg">
        </head><body></body></html>"""

        with aioresponses() as m:
            m.get(OEMBED_RE, status=404)
            m.get(VIDEO_URL, body=page, content_type="text/html")

            result = await YouTubeExtractor(fetcher).extract(VIDEO_URL)

        assert result.title == "Page Title"
        assert result.description == "From the page"
        assert result.cover_image == "https://i.ytimg.com/vi/abc123XYZ/og.jpg"
        assert result.site_name == "YouTube"

    @pytest.mark.asyncio
    async def test_fallback_thumbnail_from_video_id(self, fetcher):
        with aioresponses() as m:
            m.get(OEMBED_RE, status=500)
            m.get(VIDEO_URL, body="<html><head><title>Video</title></head></html>", content_type="text/html")

            result = await YouTubeExtractor(fetcher).extract(VIDEO_URL)

        assert result.title == "Video"
        assert result.cover_image == "https://img.youtube.com/vi/abc123XYZ/maxresdefault.jpg"

    @pytest.mark.asyncio
    async def test_both_paths_failing_raises(self, fetcher):
        with aioresponses() as m:
            m.get(OEMBED_RE, status=500)
            m.get(VIDEO_URL, status=500, repeat=True)

            with pytest.raises(TransientFetchError):
                await YouTubeExtractor(fetcher).extract(VIDEO_URL)


class TestTwitterExtractor:

    def test_handle_from_url(self):
        assert handle_from_url(TWEET_URL) == "@someone"
        assert handle_from_url("https://x.com/i/web/status/1") is None
        assert handle_from_url("https://x.com/") is None

    @pytest.mark.asyncio
    async def test_meta_tags(self, fetcher):
        page = """<html><head>
            <meta property="og:title" content="Someone on X">
            <meta property="og:description" content="The tweet text.">
            <meta property="og:image" content="https://pbs.twimg.com/media/photo.jpg">
        </head></html>"""

        with aioresponses() as m:
            m.get(TWEET_URL, body=page, content_type="text/html")

            result = await TwitterExtractor(fetcher).extract(TWEET_URL)

        assert result.content_type == ContentType.TWITTER
        assert result.title == "Someone on X"
        assert result.description == "The tweet text."
        assert result.cover_image == "https://pbs.twimg.com/media/photo.jpg"
        assert result.author == "@someone"
        assert result.site_name == "Twitter"

    @pytest.mark.asyncio
    async def test_avatar_is_not_a_cover(self, fetcher):
        page = '<html><head><meta property="og:image" content="https://pbs.twimg.com/profile_images/1/a.jpg"></head></html>'

        with aioresponses() as m:
            m.get(TWEET_URL, body=page, content_type="text/html")

            result = await TwitterExtractor(fetcher).extract(TWEET_URL)

        assert result.cover_image is None

    @pytest.mark.asyncio
    async def test_page_author_wins_over_handle(self, fetcher):
        page = '<html><head><meta name="author" content="Someone Real"></head></html>'

        with aioresponses() as m:
            m.get(TWEET_URL, body=page, content_type="text/html")

            result = await TwitterExtractor(fetcher).extract(TWEET_URL)

        assert result.author == "Someone Real"

"""
Content Extractor - turn a URL or an uploaded file into ExtractedMetadata.

URL path:
    validate -> classify -> cache -> fetch -> (site adapter | PDF | HTML
    pipeline) -> metadata -> derived stats -> cache write

File path:
    classify -> format parser -> derived stats (never cached)

Both entry points are a single result boundary: any failure past input
validation is logged, reported to the optional failure hook and turned
into a minimal record carrying the classifier's content type and a
hostname- or filename-derived title.
"""

import asyncio
import logging
from typing import Callable
from urllib.parse import urlparse

from bs4 import BeautifulSoup

from .cache import ResultCache
from .classifier import classify_file, classify_url, file_stem
from .config import config
from .fetcher import Fetcher, FetchResponse
from .html_pipeline import extract_article
from .metadata import extract_page_metadata
from .models import ContentType, ExtractedMetadata
from .parsers import parse_document, parse_pdf
from .sanitizer import extract_images
from .site_extractors import get_extractor_for_url, hostname_title
from .url_validator import validate_url

logger = logging.getLogger(__name__)

# (stage, url or file name, exception)
FailureHook = Callable[[str, str, Exception], None]

SITE_ADAPTER_TYPES = {ContentType.YOUTUBE, ContentType.TWITTER}


class ContentExtractor:
    """Runs the ingestion pipeline for URLs and uploaded files."""

    def __init__(
        self,
        fetcher: Fetcher | None = None,
        cache: ResultCache | None = None,
        tokenize: bool | None = None,
        block_private_networks: bool | None = None,
        oembed_timeout: float | None = None,
        failure_hook: FailureHook | None = None,
    ):
        self.fetcher = fetcher or Fetcher(
            timeout=config.FETCH_TIMEOUT,
            max_retries=config.FETCH_MAX_RETRIES,
            backoff_base=config.FETCH_BACKOFF_BASE,
            max_bytes=config.MAX_RESPONSE_BYTES,
            user_agent=config.USER_AGENT,
        )
        self.cache = cache if cache is not None else ResultCache(
            ttl_seconds=config.CACHE_TTL_SECONDS,
            max_size=config.CACHE_MAX_SIZE,
        )
        self.tokenize = config.TOKENIZE_CONTENT if tokenize is None else tokenize
        self.block_private_networks = (
            config.BLOCK_PRIVATE_NETWORKS if block_private_networks is None else block_private_networks
        )
        self.oembed_timeout = config.OEMBED_TIMEOUT if oembed_timeout is None else oembed_timeout
        self.failure_hook = failure_hook

    # ─────────────────────────────────────────────────────────────
    # URL path
    # ─────────────────────────────────────────────────────────────

    async def extract_from_url(self, url: str, use_cache: bool = True) -> ExtractedMetadata:
        """
        Extract metadata and content for a URL.

        Args:
            url: The URL to ingest (also the cache key, used verbatim)
            use_cache: Serve a result cached within the TTL instead of fetching

        Returns:
            ExtractedMetadata; degraded to {content_type, title} on any failure

        Raises:
            InvalidInputError: If the URL is malformed (before any network activity)
        """
        validate_url(url, block_private=self.block_private_networks)
        content_type = classify_url(url)

        if use_cache:
            cached = self.cache.get(url)
            if cached is not None:
                logger.debug(f"Cache hit for {url}")
                return cached

        try:
            metadata = await self._extract_url(url, content_type)
        except Exception as e:
            self._report_failure("url", url, e)
            return ExtractedMetadata(content_type=content_type, title=hostname_title(url))

        self.cache.set(url, metadata)
        return metadata

    async def _extract_url(self, url: str, content_type: ContentType) -> ExtractedMetadata:
        if content_type in SITE_ADAPTER_TYPES:
            site_extractor = get_extractor_for_url(url, self.fetcher, self.oembed_timeout)
            if site_extractor:
                return await site_extractor.extract(url)

        response = await self.fetcher.fetch_with_retry(url)
        logger.info(f"Fetched {url} ({len(response.body)} bytes, {response.attempts} attempt(s))")

        if response.is_pdf:
            return await self._from_pdf_response(response)

        return await asyncio.to_thread(self._from_html, response.text(), response.url, content_type)

    async def _from_pdf_response(self, response: FetchResponse) -> ExtractedMetadata:
        parsed = await asyncio.to_thread(parse_pdf, response.body)

        path_name = urlparse(response.url).path.rstrip("/").rsplit("/", 1)[-1]
        title = file_stem(path_name) if path_name else hostname_title(response.url)

        metadata = ExtractedMetadata(
            content_type=ContentType.PDF,
            title=title,
            content=parsed.content,
            author=parsed.author,
        )
        metadata.set_total_pages(parsed.total_pages)
        return metadata.with_text_stats(parsed.text)

    def _from_html(self, html: str, base_url: str, content_type: ContentType) -> ExtractedMetadata:
        soup = BeautifulSoup(html, "html.parser")
        page = extract_page_metadata(soup, base_url)

        metadata = ExtractedMetadata(
            content_type=content_type,
            title=page.title,
            description=page.description,
            favicon=page.favicon,
            cover_image=page.cover_image,
            site_name=page.site_name,
            author=page.author,
            published_date=page.published_date,
        )

        article = extract_article(html, base_url, tokenize=self.tokenize)
        logger.debug(f"Extracted {base_url} with {article.extractor_used}")

        metadata.content = article.content
        metadata.images = article.images
        if article.title:
            metadata.title = article.title
        if not metadata.title:
            metadata.title = hostname_title(base_url)

        return metadata.with_text_stats(article.text)

    # ─────────────────────────────────────────────────────────────
    # File path
    # ─────────────────────────────────────────────────────────────

    async def extract_from_file(
        self,
        buffer: bytes,
        file_name: str,
        mime_type: str | None = None,
    ) -> ExtractedMetadata:
        """
        Extract metadata and content from an uploaded document.

        The file-type gate (is_allowed_file_type) is the caller's job and must
        run first. This method never raises.
        """
        file_name = file_name or ""
        content_type = classify_file(file_name, mime_type)
        fallback_title = file_stem(file_name)

        try:
            parsed = await parse_document(bytes(buffer), file_name, content_type)
        except Exception as e:
            self._report_failure("file", file_name, e)
            return ExtractedMetadata(content_type=content_type, title=fallback_title, content="")

        metadata = ExtractedMetadata(
            content_type=content_type,
            title=parsed.title or fallback_title,
            description=parsed.description,
            content=parsed.content,
            author=parsed.author,
            images=extract_images(parsed.content),
        )
        metadata.set_total_pages(parsed.total_pages)
        return metadata.with_text_stats(parsed.text)

    # ─────────────────────────────────────────────────────────────
    # Observability
    # ─────────────────────────────────────────────────────────────

    def _report_failure(self, stage: str, target: str, error: Exception) -> None:
        logger.warning(f"Extraction degraded for {target} ({stage}): {type(error).__name__}: {error}")
        if self.failure_hook is None:
            return
        try:
            self.failure_hook(stage, target, error)
        except Exception:
            logger.exception("Extraction failure hook raised")


_default_extractor: ContentExtractor | None = None


def get_default_extractor() -> ContentExtractor:
    """Process-wide extractor backing the module-level convenience functions."""
    global _default_extractor
    if _default_extractor is None:
        _default_extractor = ContentExtractor()
    return _default_extractor


async def extract_from_url(url: str, use_cache: bool = True) -> ExtractedMetadata:
    """Convenience function to extract a single URL."""
    return await get_default_extractor().extract_from_url(url, use_cache=use_cache)


async def extract_from_file(buffer: bytes, file_name: str, mime_type: str | None = None) -> ExtractedMetadata:
    """Convenience function to extract a single uploaded file."""
    return await get_default_extractor().extract_from_file(buffer, file_name, mime_type)

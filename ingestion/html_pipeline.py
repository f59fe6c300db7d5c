"""
HTML article extraction.

Primary path is trafilatura's reader-mode extraction, which returns cleaned
HTML that is then sanitized, image-normalized and optionally token-wrapped.
When it finds nothing (or blows up) we fall back to a list of common
article containers, and finally to the whole <body> text.
"""

import logging
import re

from dataclasses import dataclass, field

import trafilatura
from bs4 import BeautifulSoup, Tag
from trafilatura.settings import use_config

from .sanitizer import (
    block_text,
    extract_images,
    html_to_text,
    normalize_image_urls,
    sanitize_html,
    wrap_tokens,
)

logger = logging.getLogger(__name__)

# Tried in order; the first container with enough text wins
CONTAINER_SELECTORS = [
    "article",
    "[role=article]",
    ".content",
    ".post-content",
    ".entry-content",
    ".article-content",
    "main",
    "[class*=content], [id*=content]",
]

NOISE_SELECTORS = [
    "script", "style", "nav", "header", "footer", "aside", "noscript",
    "[class*='advert']", "[id*='advert']", "[class*='sponsor']",
]

# Matched per class token: "ad", "ads", "ad-slot", "ads_top", "sidebar-ad"
AD_CLASS_RE = re.compile(r"^ads?([-_]|$)|[-_]ads?$")

MIN_CONTAINER_TEXT = 100


@dataclass
class ArticleExtraction:
    """Main content of an HTML page."""
    content: str  # cleaned HTML (reader-mode) or plain text (fallbacks)
    text: str  # plain-text rendering used for word counts
    title: str | None = None
    images: list[str] = field(default_factory=list)
    extractor_used: str = "trafilatura"


def _trafilatura_config():
    config = use_config()
    # SIGALRM-based timeout only works on the main thread; extraction runs in a worker
    config.set("DEFAULT", "EXTRACTION_TIMEOUT", "0")
    return config


def extract_article(html: str, base_url: str = "", tokenize: bool = False) -> ArticleExtraction:
    """Extract the primary readable content from an HTML page."""
    result = _extract_with_trafilatura(html, base_url, tokenize)
    if result:
        return result

    return _extract_with_selectors(html)


def _fragment(html: str) -> str:
    """Inner HTML of <body> when given a whole document."""
    soup = BeautifulSoup(html, "html.parser")
    if soup.body is None:
        return html
    return soup.body.decode_contents()


def _extract_with_trafilatura(html: str, base_url: str, tokenize: bool) -> ArticleExtraction | None:
    """Reader-mode extraction. Returns None if nothing usable was found."""
    try:
        content = trafilatura.extract(
            html,
            url=base_url or None,
            output_format="html",
            include_links=True,
            include_images=True,
            include_tables=True,
            favor_recall=True,
            config=_trafilatura_config(),
        )
    except Exception as e:
        logger.warning(f"Reader-mode extraction failed for {base_url or '<document>'}: {e}")
        return None

    if not content or not content.strip():
        return None

    content = _fragment(sanitize_html(content))
    content = normalize_image_urls(content, base_url)
    text = html_to_text(content)
    images = extract_images(content)

    if tokenize:
        content = wrap_tokens(content)

    title = None
    try:
        metadata = trafilatura.extract_metadata(html, default_url=base_url or None)
        if metadata and metadata.title:
            title = metadata.title.strip() or None
    except Exception as e:
        logger.debug(f"Reader-mode metadata unavailable for {base_url or '<document>'}: {e}")

    return ArticleExtraction(
        content=content,
        text=text,
        title=title,
        images=images,
        extractor_used="trafilatura",
    )


def _strip_noise(element: Tag) -> None:
    for selector in NOISE_SELECTORS:
        for noise in element.select(selector):
            noise.decompose()
    for noise in element.find_all(class_=AD_CLASS_RE):
        noise.decompose()


def _extract_with_selectors(html: str) -> ArticleExtraction:
    """Container-selector heuristics, then body text."""
    soup = BeautifulSoup(html or "", "html.parser")

    for selector in CONTAINER_SELECTORS:
        candidate = soup.select_one(selector)
        if candidate is None:
            continue
        _strip_noise(candidate)
        text = block_text(candidate)
        if len(text) > MIN_CONTAINER_TEXT:
            logger.debug(f"Using fallback container '{selector}'")
            return ArticleExtraction(content=text, text=text, extractor_used="selector")

    body = soup.body or soup
    _strip_noise(body)
    text = block_text(body)
    return ArticleExtraction(content=text, text=text, extractor_used="body")

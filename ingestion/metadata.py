"""
Page metadata extraction with ordered, first-match-wins selector lists.

Each field is described by a list of small extractor functions. They are
tried in list order and the first non-empty (trimmed) value wins, so the
order of a list is the precedence, not the order of matches in the page.
"""

import re
from dataclasses import dataclass
from typing import Callable
from urllib.parse import urljoin, urlparse

from bs4 import BeautifulSoup, Tag

FieldExtractor = Callable[[BeautifulSoup, str], str | None]


@dataclass
class PageMetadata:
    """Descriptive fields found in a page's markup."""
    title: str | None = None
    description: str | None = None
    favicon: str | None = None
    cover_image: str | None = None
    site_name: str | None = None
    author: str | None = None
    published_date: str | None = None


def _clean(value) -> str | None:
    if value is None:
        return None
    if isinstance(value, list):
        value = " ".join(value)
    value = str(value).strip()
    return value or None


def _element_value(element: Tag | None) -> str | None:
    """Prefer a machine-readable attribute, fall back to visible text."""
    if element is None:
        return None
    for attr in ("content", "datetime"):
        if value := _clean(element.get(attr)):
            return value
    return _clean(element.get_text(" ", strip=True))


# ─────────────────────────────────────────────────────────────
# Extractor factories
# ─────────────────────────────────────────────────────────────

def meta(key: str) -> FieldExtractor:
    """<meta property=key> or <meta name=key>, content attribute."""
    key_lower = key.lower()

    def _matches(value) -> bool:
        return isinstance(value, str) and value.strip().lower() == key_lower

    def extract(soup: BeautifulSoup, base_url: str) -> str | None:
        for tag in soup.find_all("meta"):
            if _matches(tag.get("property")) or _matches(tag.get("name")):
                if value := _clean(tag.get("content")):
                    return value
        return None

    return extract


def tag_text(name: str) -> FieldExtractor:
    """Text of the first <name> element."""
    def extract(soup: BeautifulSoup, base_url: str) -> str | None:
        element = soup.find(name)
        if element is None:
            return None
        return _clean(element.get_text(" ", strip=True))

    return extract


def attr_value(attrs: dict, name: str | bool = True) -> FieldExtractor:
    """Value of the first element matching attrs (content/datetime attr, else text)."""
    def extract(soup: BeautifulSoup, base_url: str) -> str | None:
        for element in soup.find_all(name, attrs=attrs):
            if value := _element_value(element):
                return value
        return None

    return extract


def time_datetime() -> FieldExtractor:
    """datetime attribute of the first <time datetime=...> element."""
    def extract(soup: BeautifulSoup, base_url: str) -> str | None:
        for element in soup.find_all("time", datetime=True):
            if value := _clean(element.get("datetime")):
                return value
        return None

    return extract


def class_contains(*needles: str) -> FieldExtractor:
    """Text of the first element whose class attribute contains any needle."""
    pattern = re.compile("|".join(re.escape(n) for n in needles), re.IGNORECASE)

    def extract(soup: BeautifulSoup, base_url: str) -> str | None:
        for element in soup.find_all(class_=pattern):
            if element.name in ("meta", "link", "script", "style", "body", "html"):
                continue
            if value := _element_value(element):
                return value
        return None

    return extract


def link_rel(rel: str) -> FieldExtractor:
    """href of the first <link> whose rel is exactly `rel`, resolved to absolute."""
    wanted = rel.lower()

    def extract(soup: BeautifulSoup, base_url: str) -> str | None:
        for link in soup.find_all("link", href=True):
            rel_value = link.get("rel") or []
            if isinstance(rel_value, str):
                rel_value = rel_value.split()
            if " ".join(rel_value).lower() != wanted:
                continue
            href = _clean(link.get("href"))
            if not href:
                continue
            try:
                return urljoin(base_url, href) if base_url else href
            except ValueError:
                return href
        return None

    return extract


def origin_favicon() -> FieldExtractor:
    """Synthesized /favicon.ico on the page's origin."""
    def extract(soup: BeautifulSoup, base_url: str) -> str | None:
        parsed = urlparse(base_url or "")
        if not parsed.scheme or not parsed.netloc:
            return None
        return f"{parsed.scheme}://{parsed.netloc}/favicon.ico"

    return extract


# ─────────────────────────────────────────────────────────────
# Field precedence
# ─────────────────────────────────────────────────────────────

TITLE_EXTRACTORS: list[FieldExtractor] = [
    meta("og:title"),
    meta("twitter:title"),
    tag_text("title"),
    tag_text("h1"),
]

DESCRIPTION_EXTRACTORS: list[FieldExtractor] = [
    meta("og:description"),
    meta("twitter:description"),
    meta("description"),
]

FAVICON_EXTRACTORS: list[FieldExtractor] = [
    link_rel("icon"),
    link_rel("shortcut icon"),
    link_rel("apple-touch-icon"),
    link_rel("apple-touch-icon-precomposed"),
    origin_favicon(),
]

COVER_IMAGE_EXTRACTORS: list[FieldExtractor] = [
    meta("og:image"),
    meta("twitter:image"),
    meta("og:image:url"),
]

SITE_NAME_EXTRACTORS: list[FieldExtractor] = [
    meta("og:site_name"),
    meta("application-name"),
]

AUTHOR_EXTRACTORS: list[FieldExtractor] = [
    meta("author"),
    meta("article:author"),
    meta("og:article:author"),
    attr_value({"rel": "author"}),
    class_contains("author"),
    attr_value({"itemprop": "author"}),
]

PUBLISHED_DATE_EXTRACTORS: list[FieldExtractor] = [
    meta("article:published_time"),
    meta("published_time"),
    meta("date"),
    meta("og:published_time"),
    time_datetime(),
    attr_value({"itemprop": "datePublished"}),
    class_contains("date", "published"),
]


def first_match(soup: BeautifulSoup, base_url: str, extractors: list[FieldExtractor]) -> str | None:
    """Run extractors in order, returning the first non-empty value."""
    for extractor in extractors:
        if value := extractor(soup, base_url):
            return value
    return None


def extract_page_metadata(html: str | BeautifulSoup, base_url: str = "") -> PageMetadata:
    """Extract descriptive fields from a page."""
    soup = html if isinstance(html, BeautifulSoup) else BeautifulSoup(html or "", "html.parser")

    return PageMetadata(
        title=first_match(soup, base_url, TITLE_EXTRACTORS),
        description=first_match(soup, base_url, DESCRIPTION_EXTRACTORS),
        favicon=first_match(soup, base_url, FAVICON_EXTRACTORS),
        cover_image=first_match(soup, base_url, COVER_IMAGE_EXTRACTORS),
        site_name=first_match(soup, base_url, SITE_NAME_EXTRACTORS),
        author=first_match(soup, base_url, AUTHOR_EXTRACTORS),
        published_date=first_match(soup, base_url, PUBLISHED_DATE_EXTRACTORS),
    )

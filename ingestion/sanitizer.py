"""
HTML sanitization and normalization.

- sanitize_html: drop script/style blocks, inline event handlers and
  javascript:/data:text/html URIs
- normalize_image_urls: make <img src> absolute against the page URL
- wrap_tokens: give every word an addressable <span> for highlighting
- extract_images / html_to_text: read-only views of finished content
"""

import itertools
import re
from urllib.parse import urljoin, urlparse

from bs4 import BeautifulSoup, NavigableString, Tag

from .models import MAX_IMAGES

_HTML_TAG_RE = re.compile(r"<[a-zA-Z][^>]*>")
_UNSAFE_URI_RE = re.compile(r"^(javascript:|data:text/html)", re.IGNORECASE)
_URI_NOISE_RE = re.compile(r"[\x00-\x20]+")
_WHITESPACE_SPLIT_RE = re.compile(r"(\s+)")
_INLINE_SPACE_RE = re.compile(r"[ \t\r\f\v]+")

# Subtrees whose text is never rendered as prose
NON_PROSE_TAGS = {"script", "style", "noscript", "iframe", "object", "embed"}

TOKEN_CLASS = "tok"


def is_html(content: str | None) -> bool:
    """Cheap tag-presence check."""
    return bool(content) and bool(_HTML_TAG_RE.search(content))


def _is_unsafe_uri(value: str) -> bool:
    # Browsers ignore embedded whitespace/control characters in schemes
    return bool(_UNSAFE_URI_RE.match(_URI_NOISE_RE.sub("", value)))


def sanitize_html(html: str) -> str:
    """Remove executable markup from an HTML fragment."""
    if not html:
        return html

    soup = BeautifulSoup(html, "html.parser")

    for tag in soup.find_all(["script", "style"]):
        tag.decompose()

    for tag in soup.find_all(True):
        for attr in list(tag.attrs):
            if attr.lower().startswith("on"):
                del tag.attrs[attr]
                continue
            value = tag.attrs[attr]
            if isinstance(value, list):
                value = " ".join(value)
            if isinstance(value, str) and _is_unsafe_uri(value):
                del tag.attrs[attr]

    return str(soup)


def _is_absolute(src: str) -> bool:
    parsed = urlparse(src)
    return bool(parsed.scheme and parsed.netloc)


def normalize_image_urls(html: str, base_url: str) -> str:
    """Resolve relative <img src> values against base_url. Data URIs are left alone."""
    if not html or not base_url:
        return html

    soup = BeautifulSoup(html, "html.parser")

    for img in soup.find_all("img", src=True):
        src = img["src"].strip()
        if not src or src.lower().startswith("data:") or _is_absolute(src):
            continue
        try:
            img["src"] = urljoin(base_url, src)
        except ValueError:
            # Unresolvable - keep the original reference
            continue

    return str(soup)


def wrap_tokens(html: str, prefix: str = "tok") -> str:
    """
    Wrap each non-whitespace token of rendered text in a uniquely-ID'd span.

    IDs are `{prefix}-0`, `{prefix}-1`, ... in document order. Whitespace
    stays plain text so the rendered output is unchanged. Non-HTML input is
    returned untouched.
    """
    if not is_html(html):
        return html

    soup = BeautifulSoup(html, "html.parser")
    counter = itertools.count()

    for node in list(soup.find_all(string=True)):
        # Comments, doctypes, CDATA and script/style strings are subclasses
        if type(node) is not NavigableString:
            continue
        if not node.strip():
            continue
        if any(parent.name in NON_PROSE_TAGS for parent in node.parents):
            continue

        pieces = []
        for part in _WHITESPACE_SPLIT_RE.split(str(node)):
            if not part:
                continue
            if part.isspace():
                pieces.append(NavigableString(part))
                continue
            span = soup.new_tag("span", attrs={"id": f"{prefix}-{next(counter)}", "class": TOKEN_CLASS})
            span.string = part
            pieces.append(span)

        node.replace_with(*pieces)

    return str(soup)


def extract_images(html: str | None, limit: int = MAX_IMAGES) -> list[str]:
    """First `limit` non-data-URI image sources, in document order."""
    if not is_html(html):
        return []

    soup = BeautifulSoup(html, "html.parser")
    images: list[str] = []

    for img in soup.find_all("img", src=True):
        src = img["src"].strip()
        if not src or src.lower().startswith("data:"):
            continue
        images.append(src)
        if len(images) >= limit:
            break

    return images


def block_text(element: Tag | BeautifulSoup) -> str:
    """Visible text of an element with paragraph breaks preserved."""
    text = element.get_text(separator="\n")
    lines = [_INLINE_SPACE_RE.sub(" ", line).strip() for line in text.splitlines()]
    return "\n\n".join(line for line in lines if line)


def html_to_text(content: str | None) -> str:
    """Plain-text rendering of HTML content; plain text passes through."""
    if not content:
        return ""
    if not is_html(content):
        return content

    soup = BeautifulSoup(content, "html.parser")
    for tag in soup.find_all(["script", "style"]):
        tag.decompose()
    return soup.get_text(separator=" ")

"""
Content classification - map a URL or an uploaded file to a ContentType.

Pure functions, no I/O.
"""

from pathlib import PurePath

from .exceptions import UnsupportedFormatError
from .models import ContentType

ALLOWED_MIME_TYPES = {
    "application/pdf",
    "text/html",
    "text/plain",
    "text/markdown",
    "application/epub+zip",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "application/msword",
}

ALLOWED_EXTENSIONS = {
    ".pdf",
    ".html",
    ".htm",
    ".txt",
    ".md",
    ".markdown",
    ".epub",
    ".docx",
    ".doc",
}

_EXTENSION_TYPES = {
    ".pdf": ContentType.PDF,
    ".epub": ContentType.EBOOK,
    ".docx": ContentType.BOOK,
    ".doc": ContentType.BOOK,
    ".md": ContentType.ARTICLE,
    ".markdown": ContentType.ARTICLE,
    ".html": ContentType.ARTICLE,
    ".htm": ContentType.ARTICLE,
    ".txt": ContentType.ARTICLE,
}

_ARTICLE_MIME_TYPES = {"text/markdown", "text/x-markdown", "text/html", "text/plain"}


def file_extension(file_name: str) -> str:
    """Lower-cased extension including the dot, or "" when there is none."""
    return PurePath(file_name).suffix.lower()


def file_stem(file_name: str) -> str:
    """File name without its final extension."""
    return PurePath(file_name).stem or file_name


def _normalize_mime(mime_type: str | None) -> str:
    if not mime_type:
        return ""
    return mime_type.split(";", 1)[0].strip().lower()


def classify_url(url: str) -> ContentType:
    """
    Classify a URL by substring match, in priority order.

    YouTube and Twitter/X hosts win over a .pdf suffix, which wins over
    newsletter platforms. Everything else is an ARTICLE.
    """
    url_lower = url.lower()

    if "youtube.com" in url_lower or "youtu.be" in url_lower:
        return ContentType.YOUTUBE
    if "twitter.com" in url_lower or "x.com" in url_lower:
        return ContentType.TWITTER
    if url_lower.endswith(".pdf"):
        return ContentType.PDF
    if "newsletter" in url_lower or "substack" in url_lower:
        return ContentType.NEWSLETTER

    return ContentType.ARTICLE


def classify_file(file_name: str, mime_type: str | None = None) -> ContentType:
    """Classify an uploaded file by MIME type, falling back to its extension."""
    mime = _normalize_mime(mime_type)

    if mime:
        if mime == "application/pdf":
            return ContentType.PDF
        if mime == "application/epub+zip":
            return ContentType.EBOOK
        if "wordprocessingml" in mime or "msword" in mime:
            return ContentType.BOOK
        if mime in _ARTICLE_MIME_TYPES:
            return ContentType.ARTICLE

    return _EXTENSION_TYPES.get(file_extension(file_name), ContentType.ARTICLE)


def is_allowed_file_type(file_name: str, mime_type: str | None = None) -> bool:
    """True when either the MIME type or the extension is in the allowed set."""
    if _normalize_mime(mime_type) in ALLOWED_MIME_TYPES:
        return True
    return file_extension(file_name) in ALLOWED_EXTENSIONS


def require_allowed_file_type(file_name: str, mime_type: str | None = None) -> None:
    """
    Hard gate for uploads.

    Raises:
        UnsupportedFormatError: If neither MIME type nor extension is allowed
    """
    if not is_allowed_file_type(file_name, mime_type):
        raise UnsupportedFormatError(file_name, mime_type)

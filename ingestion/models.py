"""
Data model for extraction results.
"""

import copy
import math
from dataclasses import dataclass, field
from enum import Enum

# Average reading speed used for reading_time
WORDS_PER_MINUTE = 200

MAX_IMAGES = 10


class ContentType(str, Enum):
    """Logical category of an ingested item."""
    ARTICLE = "ARTICLE"
    BLOG = "BLOG"
    PDF = "PDF"
    YOUTUBE = "YOUTUBE"
    TWITTER = "TWITTER"
    NEWSLETTER = "NEWSLETTER"
    BOOK = "BOOK"
    EBOOK = "EBOOK"


# Content types for which a page/chapter count is meaningful
PAGED_CONTENT_TYPES = frozenset({ContentType.PDF, ContentType.BOOK, ContentType.EBOOK})


def count_words(text: str | None) -> int:
    """Count whitespace-separated tokens, ignoring empty ones."""
    if not text:
        return 0
    return len(text.split())


def reading_time_seconds(word_count: int) -> int:
    """Reading time in seconds at WORDS_PER_MINUTE."""
    return math.ceil(word_count / WORDS_PER_MINUTE * 60)


@dataclass
class ExtractedMetadata:
    """Normalized metadata + content record for one URL or file."""
    content_type: ContentType
    title: str | None = None
    description: str | None = None
    favicon: str | None = None
    cover_image: str | None = None
    site_name: str | None = None
    content: str | None = None  # plain text or lightly-cleaned HTML
    word_count: int | None = None
    reading_time: int | None = None  # seconds
    total_pages: int | None = None  # PDF / BOOK / EBOOK only
    author: str | None = None
    published_date: str | None = None  # raw string as found in the page
    images: list[str] = field(default_factory=list)

    def __post_init__(self):
        self.content_type = ContentType(self.content_type)
        if self.content_type not in PAGED_CONTENT_TYPES:
            self.total_pages = None
        if self.images:
            self.images = list(self.images)[:MAX_IMAGES]

    def with_text_stats(self, text: str | None) -> "ExtractedMetadata":
        """Set word_count and reading_time together from a plain-text rendering."""
        self.word_count = count_words(text)
        self.reading_time = reading_time_seconds(self.word_count)
        return self

    def set_total_pages(self, total_pages: int | None) -> None:
        if self.content_type in PAGED_CONTENT_TYPES:
            self.total_pages = total_pages

    def snapshot(self) -> "ExtractedMetadata":
        """Independent deep copy, used by the cache."""
        return copy.deepcopy(self)

    def to_dict(self) -> dict:
        """Wire shape for the downstream store: camelCase keys, absent fields omitted."""
        data = {
            "contentType": self.content_type.value,
            "title": self.title,
            "description": self.description,
            "favicon": self.favicon,
            "coverImage": self.cover_image,
            "siteName": self.site_name,
            "content": self.content,
            "wordCount": self.word_count,
            "readingTime": self.reading_time,
            "totalPages": self.total_pages,
            "author": self.author,
            "publishedDate": self.published_date,
            "images": list(self.images) if self.images else None,
        }
        return {k: v for k, v in data.items() if v is not None}

"""
EPUB documents via EbookLib.

Chapters are read one at a time in spine order. Each chapter is a separate
await point, so a long book never monopolizes the event loop, and a broken
chapter is logged and skipped rather than failing the whole book.
"""

import asyncio
import logging
import os
import tempfile

from bs4 import BeautifulSoup
from ebooklib import epub

from ..exceptions import ParseError
from ..sanitizer import block_text
from .base import ParsedDocument

logger = logging.getLogger(__name__)


def _read_book(data: bytes) -> epub.EpubBook:
    # read_epub expects a path on disk
    with tempfile.NamedTemporaryFile(suffix=".epub", delete=False) as f:
        f.write(data)
        path = f.name
    try:
        return epub.read_epub(path, options={"ignore_ncx": True})
    finally:
        os.unlink(path)


def _first_dc(book: epub.EpubBook, name: str) -> str | None:
    """First value of a Dublin Core field (fields may repeat)."""
    values = book.get_metadata("DC", name) or []
    for value in values:
        text = value[0] if isinstance(value, tuple) else value
        if text and str(text).strip():
            return str(text).strip()
    return None


def _chapter_text(item: epub.EpubItem) -> str | None:
    """Plain text of a chapter, or None if the chapter has no markup at all."""
    markup = item.get_content()
    if not markup:
        return None
    soup = BeautifulSoup(markup, "html.parser")
    return block_text(soup.body or soup)


async def parse_epub(data: bytes) -> ParsedDocument:
    """
    Extract text, chapter count and book metadata from an EPUB.

    Raises:
        ParseError: If the container itself cannot be read
    """
    try:
        book = await asyncio.to_thread(_read_book, data)
    except Exception as e:
        raise ParseError(f"Failed to open EPUB: {e}") from e

    chapters: list[str] = []
    chapter_count = 0

    for entry in book.spine:
        idref = entry[0] if isinstance(entry, tuple) else entry
        item = book.get_item_with_id(idref)
        if item is None:
            logger.warning(f"EPUB spine entry '{idref}' has no matching item, skipping")
            continue

        try:
            text = await asyncio.to_thread(_chapter_text, item)
        except Exception as e:
            logger.warning(f"Error extracting EPUB chapter '{idref}': {e}")
            continue

        if text is None:
            continue

        chapter_count += 1
        if text:
            chapters.append(text)

    content = "\n\n".join(chapters).strip()

    return ParsedDocument(
        content=content,
        text=content,
        total_pages=chapter_count,
        title=_first_dc(book, "title"),
        author=_first_dc(book, "creator"),
        description=_first_dc(book, "description"),
    )

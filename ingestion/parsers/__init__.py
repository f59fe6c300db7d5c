"""
Document parsers - one per uploaded file format.

- PDF: PyMuPDF text + page count
- EPUB: EbookLib spine walk, chapter count + Dublin Core metadata
- DOCX/DOC: python-docx raw text
- Markdown: markdown-it-py rendered HTML
- HTML: reader-mode extraction
- Anything else: decoded as text

parse_document picks the parser from the file's category and extension.
CPU-bound parsers run in a worker thread.
"""

import asyncio

from ..classifier import file_extension
from ..models import ContentType
from .base import ParsedDocument
from .epub import parse_epub
from .html import parse_html
from .markdown import parse_markdown
from .pdf import parse_pdf
from .text import decode_text, parse_text
from .word import parse_word

HTML_EXTENSIONS = {".html", ".htm"}
MARKDOWN_EXTENSIONS = {".md", ".markdown"}
WORD_EXTENSIONS = {".docx", ".doc"}


async def parse_document(data: bytes, file_name: str, content_type: ContentType) -> ParsedDocument:
    """
    Parse an uploaded document.

    Raises:
        ParseError: (or any parser exception) if the document cannot be parsed
    """
    ext = file_extension(file_name)

    if content_type == ContentType.PDF:
        return await asyncio.to_thread(parse_pdf, data)

    if content_type == ContentType.EBOOK:
        if ext == ".epub":
            return await parse_epub(data)
        return parse_text(data)

    if content_type == ContentType.BOOK:
        if ext in WORD_EXTENSIONS:
            return await asyncio.to_thread(parse_word, data)
        return parse_text(data)

    if ext in HTML_EXTENSIONS:
        return await asyncio.to_thread(parse_html, data)
    if ext in MARKDOWN_EXTENSIONS:
        return await asyncio.to_thread(parse_markdown, data)
    return parse_text(data)


__all__ = [
    "ParsedDocument",
    "parse_document",
    "parse_pdf",
    "parse_epub",
    "parse_word",
    "parse_markdown",
    "parse_html",
    "parse_text",
    "decode_text",
]

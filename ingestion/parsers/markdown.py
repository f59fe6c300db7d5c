"""
Markdown documents, rendered to HTML.
"""

from markdown_it import MarkdownIt

from ..sanitizer import html_to_text, sanitize_html
from .base import ParsedDocument
from .text import decode_text

_renderer = MarkdownIt("commonmark", {"html": True}).enable("table")


def parse_markdown(data: bytes) -> ParsedDocument:
    """Render Markdown to sanitized HTML; the HTML is the content."""
    source = decode_text(data)
    html = sanitize_html(_renderer.render(source))
    return ParsedDocument(content=html, text=html_to_text(html))

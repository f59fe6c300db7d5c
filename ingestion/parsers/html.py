"""
Uploaded HTML documents.
"""

from ..html_pipeline import extract_article
from ..metadata import extract_page_metadata
from .base import ParsedDocument
from .text import decode_text


def parse_html(data: bytes) -> ParsedDocument:
    """Reader-mode extraction of an uploaded page, with body-text fallback."""
    html = decode_text(data)
    article = extract_article(html)
    page = extract_page_metadata(html)

    return ParsedDocument(
        content=article.content,
        text=article.text,
        title=article.title or page.title,
        author=page.author,
        description=page.description,
    )

"""
PDF documents via PyMuPDF.
"""

import re

import fitz  # PyMuPDF

from ..exceptions import ParseError
from .base import ParsedDocument


def parse_pdf(data: bytes) -> ParsedDocument:
    """
    Extract the full text and page count of a PDF.

    Raises:
        ParseError: If the document cannot be opened or read
    """
    try:
        doc = fitz.open(stream=data, filetype="pdf")
    except Exception as e:
        raise ParseError(f"Failed to open PDF: {e}") from e

    try:
        text_parts = []
        for page in doc:
            text = page.get_text()
            if text.strip():
                text_parts.append(text)

        total_pages = doc.page_count
        metadata = doc.metadata or {}
    except Exception as e:
        raise ParseError(f"Failed to extract PDF text: {e}") from e
    finally:
        doc.close()

    content = "\n\n".join(text_parts)
    # Clean up excessive whitespace
    content = re.sub(r"\n{3,}", "\n\n", content).strip()

    # Embedded title is ignored; callers title PDFs by file name
    return ParsedDocument(
        content=content,
        text=content,
        total_pages=total_pages,
        author=(metadata.get("author") or "").strip() or None,
    )

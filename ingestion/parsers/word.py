"""
Word-processing documents via python-docx. Raw text only.
"""

import io

from docx import Document

from ..exceptions import ParseError
from .base import ParsedDocument


def parse_word(data: bytes) -> ParsedDocument:
    """
    Extract paragraph text from a DOCX file, discarding formatting.

    Legacy binary .doc files are not OOXML and fail here.

    Raises:
        ParseError: If the document cannot be read
    """
    try:
        doc = Document(io.BytesIO(data))
    except Exception as e:
        raise ParseError(f"Failed to extract DOCX text: {e}") from e

    paragraphs = [para.text.strip() for para in doc.paragraphs]
    content = "\n\n".join(p for p in paragraphs if p)

    return ParsedDocument(content=content, text=content)

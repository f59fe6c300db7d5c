"""
Plain-text documents.
"""

from .base import ParsedDocument


def decode_text(data: bytes) -> str:
    """Decode as UTF-8 (BOM tolerated), falling back to Latin-1."""
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError:
        return data.decode("latin-1")


def parse_text(data: bytes) -> ParsedDocument:
    content = decode_text(data)
    return ParsedDocument(content=content, text=content)

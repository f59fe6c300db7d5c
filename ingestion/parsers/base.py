"""
Shared types for document parsers.
"""

from dataclasses import dataclass


@dataclass
class ParsedDocument:
    """Output of a format parser."""
    content: str  # plain text, or HTML for formats that render to HTML
    text: str  # plain-text rendering used for word counts
    total_pages: int | None = None
    title: str | None = None
    author: str | None = None
    description: str | None = None

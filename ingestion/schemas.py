"""
Pydantic models for API request/response validation.
"""

from pydantic import BaseModel, Field


class ExtractUrlRequest(BaseModel):
    """Request to ingest a URL."""
    url: str
    use_cache: bool = True


class ExtractedMetadataResponse(BaseModel):
    """Wire shape of ExtractedMetadata; absent fields are omitted."""
    contentType: str
    title: str | None = None
    description: str | None = None
    favicon: str | None = None
    coverImage: str | None = None
    siteName: str | None = None
    content: str | None = None
    wordCount: int | None = None
    readingTime: int | None = None
    totalPages: int | None = None
    author: str | None = None
    publishedDate: str | None = None
    images: list[str] | None = Field(default=None, max_length=10)

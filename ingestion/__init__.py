"""
Content ingestion & extraction.

Turns a remote URL or an uploaded document into an ExtractedMetadata record:

    from ingestion import extract_from_url, extract_from_file, is_allowed_file_type

    metadata = await extract_from_url("https://example.com/post")

    if is_allowed_file_type(name, mime):
        metadata = await extract_from_file(data, name, mime)
"""

__version__ = "1.0.0"

from .cache import ResultCache
from .classifier import classify_file, classify_url, is_allowed_file_type, require_allowed_file_type
from .exceptions import (
    FetchError,
    FetchTimeoutError,
    IngestionError,
    InvalidInputError,
    OversizedResponseError,
    ParseError,
    TransientFetchError,
    UnsupportedFormatError,
)
from .extractor import ContentExtractor, extract_from_file, extract_from_url
from .fetcher import Fetcher, FetchResponse
from .hashing import hash_file, hash_url
from .models import ContentType, ExtractedMetadata

__all__ = [
    "ContentExtractor",
    "ContentType",
    "ExtractedMetadata",
    "Fetcher",
    "FetchResponse",
    "ResultCache",
    "extract_from_url",
    "extract_from_file",
    "is_allowed_file_type",
    "require_allowed_file_type",
    "classify_url",
    "classify_file",
    "hash_url",
    "hash_file",
    "IngestionError",
    "InvalidInputError",
    "UnsupportedFormatError",
    "FetchError",
    "FetchTimeoutError",
    "OversizedResponseError",
    "TransientFetchError",
    "ParseError",
]

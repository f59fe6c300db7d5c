"""
Configuration and application state management.
"""

import os
from typing import TYPE_CHECKING

from dotenv import load_dotenv
from fastapi import HTTPException

if TYPE_CHECKING:
    from .extractor import ContentExtractor

# Load environment variables
load_dotenv()


def _parse_bool(value: str | None, default: bool = False) -> bool:
    """Parse boolean from environment variable."""
    if value is None:
        return default
    return value.lower() in ("true", "1", "yes", "on")


DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/120.0.0.0 Safari/537.36"
)


class Config:
    """Ingestion configuration from environment."""
    # Fetching
    FETCH_TIMEOUT: float = float(os.getenv("FETCH_TIMEOUT", "30"))  # seconds, per attempt
    FETCH_MAX_RETRIES: int = int(os.getenv("FETCH_MAX_RETRIES", "3"))
    FETCH_BACKOFF_BASE: float = float(os.getenv("FETCH_BACKOFF_BASE", "1.0"))  # seconds
    MAX_RESPONSE_BYTES: int = int(os.getenv("MAX_RESPONSE_BYTES", str(10 * 1024 * 1024)))
    USER_AGENT: str = os.getenv("USER_AGENT", DEFAULT_USER_AGENT)

    # YouTube oEmbed lookup
    OEMBED_TIMEOUT: float = float(os.getenv("OEMBED_TIMEOUT", "10"))

    # Result cache (URL path only)
    CACHE_TTL_SECONDS: int = int(os.getenv("CACHE_TTL_SECONDS", str(24 * 60 * 60)))
    CACHE_MAX_SIZE: int = int(os.getenv("CACHE_MAX_SIZE", "1024"))

    # Wrap each word of HTML content in an addressable span
    TOKENIZE_CONTENT: bool = _parse_bool(os.getenv("TOKENIZE_CONTENT"), default=False)

    # Reject URLs pointing at loopback/private/link-local addresses
    BLOCK_PRIVATE_NETWORKS: bool = _parse_bool(os.getenv("BLOCK_PRIVATE_NETWORKS"), default=False)

    PORT: int = int(os.getenv("PORT", "5005"))
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")


config = Config()


class AppState:
    """Shared application state."""
    extractor: "ContentExtractor | None" = None


state = AppState()


def get_extractor() -> "ContentExtractor":
    """Dependency to get the shared extractor instance."""
    if not state.extractor:
        raise HTTPException(status_code=500, detail="Extractor not initialized")
    return state.extractor

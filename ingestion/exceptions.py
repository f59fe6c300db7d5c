"""
Exception types for the ingestion pipeline.

Only InvalidInputError and UnsupportedFormatError ever reach callers of the
public entry points. Everything else is raised internally and absorbed by the
extractor into a degraded metadata record.
"""


class IngestionError(Exception):
    """Base class for all ingestion errors."""
    pass


class InvalidInputError(IngestionError):
    """Raised when a URL is malformed. Raised before any network activity."""
    pass


class UnsupportedFormatError(IngestionError):
    """Raised by the file-type gate when a file is not an allowed type."""

    def __init__(self, file_name: str, mime_type: str | None = None):
        self.file_name = file_name
        self.mime_type = mime_type
        super().__init__(
            f"Unsupported file type: {file_name}"
            + (f" ({mime_type})" if mime_type else "")
        )


class FetchError(IngestionError):
    """Base class for failures while fetching a URL."""

    def __init__(self, message: str, url: str, attempts: int = 1):
        self.url = url
        self.attempts = attempts
        super().__init__(message)


class FetchTimeoutError(FetchError):
    """An attempt exceeded its timeout. Terminal: never retried."""
    pass


class OversizedResponseError(FetchError):
    """The response exceeded the size ceiling. Terminal: never retried."""
    pass


class TransientFetchError(FetchError):
    """Connection errors, non-2xx statuses, etc. Raised once retries are exhausted."""
    pass


class ParseError(IngestionError):
    """A format parser could not make sense of its input."""
    pass

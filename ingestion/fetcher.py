"""
Content Fetcher - retrieve raw bytes for a URL.

Handles:
- HTTP fetching with browser-like headers and redirect following
- A per-attempt timeout and a response-size ceiling
- Exponential-backoff retries for transient failures

Timeouts and oversized responses are terminal: retrying cannot fix them,
so they abort the call immediately. Everything else is retried until the
attempt budget runs out.
"""

import asyncio
import logging
from dataclasses import dataclass

import aiohttp
from bs4.dammit import EncodingDetector
from tenacity import (
    AsyncRetrying,
    retry_if_not_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from .config import DEFAULT_USER_AGENT
from .exceptions import (
    FetchTimeoutError,
    OversizedResponseError,
    TransientFetchError,
)

logger = logging.getLogger(__name__)

MAX_RESPONSE_BYTES = 10 * 1024 * 1024
CHUNK_SIZE = 64 * 1024

# Retrying cannot fix these
TERMINAL_ERRORS = (asyncio.TimeoutError, OversizedResponseError)


@dataclass
class FetchResponse:
    """Raw result of a successful fetch."""
    url: str  # final URL after redirects
    status: int
    body: bytes
    content_type: str = ""
    charset: str | None = None
    attempts: int = 1

    def text(self) -> str:
        """
        Decode the body.

        Tries the header charset, then an in-document declaration
        (<meta charset> or an XML prolog), then UTF-8.
        """
        declared = EncodingDetector.find_declared_encoding(self.body, is_html=True)
        for encoding in (self.charset, declared, "utf-8"):
            if not encoding:
                continue
            try:
                return self.body.decode(encoding)
            except (LookupError, UnicodeDecodeError):
                continue
        return self.body.decode("utf-8", errors="replace")

    @property
    def is_pdf(self) -> bool:
        return self.content_type == "application/pdf" or self.body[:5] == b"%PDF-"


class Fetcher:
    """Fetches URLs with timeout, size-limit and retry discipline."""

    def __init__(
        self,
        timeout: float = 30,
        max_retries: int = 3,
        backoff_base: float = 1.0,
        max_bytes: int = MAX_RESPONSE_BYTES,
        user_agent: str | None = None,
    ):
        self.timeout = timeout
        self.max_retries = max_retries
        self.backoff_base = backoff_base
        self.max_bytes = max_bytes
        self.user_agent = user_agent or DEFAULT_USER_AGENT
        self.headers = {
            "User-Agent": self.user_agent,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/avif,image/webp,*/*;q=0.8",
            "Accept-Language": "en-US,en;q=0.9",
            "Accept-Encoding": "gzip, deflate",
            "Connection": "keep-alive",
            "Upgrade-Insecure-Requests": "1",
        }

    async def fetch_with_retry(self, url: str, max_retries: int | None = None) -> FetchResponse:
        """
        Fetch a URL, retrying transient failures with exponential backoff.

        Args:
            url: The URL to fetch
            max_retries: Total number of attempts (defaults to the fetcher's setting)

        Returns:
            FetchResponse with the body and the number of attempts used

        Raises:
            FetchTimeoutError: An attempt timed out (no further attempts are made)
            OversizedResponseError: The body exceeded max_bytes (no further attempts)
            TransientFetchError: Every attempt failed for some other reason
        """
        attempts_allowed = max(1, self.max_retries if max_retries is None else max_retries)
        attempt_number = 0

        retrying = AsyncRetrying(
            stop=stop_after_attempt(attempts_allowed),
            wait=wait_exponential(multiplier=self.backoff_base),
            retry=retry_if_not_exception_type(TERMINAL_ERRORS),
            before_sleep=lambda state: logger.debug(
                f"Fetch attempt {state.attempt_number} for {url} failed "
                f"({state.outcome.exception()}), retrying in {state.next_action.sleep}s"
            ),
            sleep=self._sleep,
            reraise=True,
        )

        try:
            async for attempt in retrying:
                attempt_number = attempt.retry_state.attempt_number
                with attempt:
                    response = await self._fetch_once(url)
                    response.attempts = attempt_number
                    return response
        except asyncio.TimeoutError as e:
            logger.warning(f"Timed out fetching {url} (attempt {attempt_number}), giving up")
            raise FetchTimeoutError(
                f"Timed out after {self.timeout}s fetching {url}", url, attempt_number
            ) from e
        except OversizedResponseError as e:
            e.attempts = attempt_number
            logger.warning(f"Response too large for {url}, giving up")
            raise
        except Exception as e:
            raise TransientFetchError(
                f"Failed to fetch {url} after {attempt_number} attempts: {e}",
                url,
                attempt_number,
            ) from e

    async def _sleep(self, delay: float) -> None:
        await asyncio.sleep(delay)

    async def _fetch_once(self, url: str) -> FetchResponse:
        """Single bounded attempt."""
        async with aiohttp.ClientSession(headers=self.headers) as session:
            async with session.get(
                url,
                timeout=aiohttp.ClientTimeout(total=self.timeout),
                allow_redirects=True
            ) as resp:
                resp.raise_for_status()

                if resp.content_length is not None and resp.content_length > self.max_bytes:
                    raise OversizedResponseError(
                        f"Content-Length {resp.content_length} exceeds {self.max_bytes} bytes",
                        url,
                    )

                chunks: list[bytes] = []
                size = 0
                async for chunk in resp.content.iter_chunked(CHUNK_SIZE):
                    size += len(chunk)
                    if size > self.max_bytes:
                        raise OversizedResponseError(
                            f"Response body exceeds {self.max_bytes} bytes", url
                        )
                    chunks.append(chunk)

                return FetchResponse(
                    url=str(resp.url),
                    status=resp.status,
                    body=b"".join(chunks),
                    content_type=resp.content_type or "",
                    charset=resp.charset,
                )

    async def fetch_json(self, url: str, timeout: float = 10) -> dict:
        """
        Single-attempt JSON GET (used for oEmbed lookups).

        Raises:
            FetchTimeoutError: If the request times out
            aiohttp.ClientError: On connection errors or non-2xx statuses
        """
        try:
            async with aiohttp.ClientSession(headers={"User-Agent": self.user_agent}) as session:
                async with session.get(
                    url,
                    timeout=aiohttp.ClientTimeout(total=timeout),
                    allow_redirects=True
                ) as resp:
                    resp.raise_for_status()
                    return await resp.json(content_type=None)
        except asyncio.TimeoutError as e:
            raise FetchTimeoutError(f"Timed out after {timeout}s fetching {url}", url) from e

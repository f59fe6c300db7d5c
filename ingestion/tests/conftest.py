"""
Pytest fixtures for ingestion tests.
"""

import io

import fitz
import pytest
from docx import Document
from ebooklib import epub
from fastapi.testclient import TestClient

from ingestion.cache import ResultCache
from ingestion.config import state
from ingestion.extractor import ContentExtractor
from ingestion.fetcher import Fetcher
from ingestion.server import app


class FakeClock:
    """Manually advanced clock for cache expiry tests."""

    def __init__(self, now: float = 1_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class NoSleepFetcher(Fetcher):
    """Fetcher that records backoff delays instead of sleeping."""

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.delays: list[float] = []

    async def _sleep(self, delay: float) -> None:
        self.delays.append(delay)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    return ResultCache(ttl_seconds=24 * 60 * 60, max_size=100, clock=clock)


@pytest.fixture
def fetcher():
    return NoSleepFetcher(timeout=5, max_retries=3, backoff_base=1.0)


@pytest.fixture
def extractor(fetcher, cache):
    """Extractor with an isolated cache and no real backoff waits."""
    return ContentExtractor(
        fetcher=fetcher,
        cache=cache,
        tokenize=False,
        block_private_networks=False,
    )


@pytest.fixture
def article_html():
    """A small but complete article page."""
    paragraphs = "\n".join(
        f"<p>Paragraph {i} of the sample article talks about reading, writing and "
        f"keeping notes on everything worth remembering later on.</p>"
        for i in range(1, 6)
    )
    return f"""<!DOCTYPE html>
<html>
<head>
    <title>Sample Article</title>
    <meta property="og:title" content="Sample Article">
    <meta property="og:description" content="An article used in tests.">
    <meta property="og:image" content="https://site.example/cover.jpg">
    <meta property="og:site_name" content="Site Example">
    <meta name="author" content="Jane Writer">
    <meta property="article:published_time" content="2024-03-01T10:00:00Z">
    <link rel="icon" href="/static/favicon.png">
</head>
<body>
    <nav><a href="/">Home</a> <a href="/about">About</a></nav>
    <article>
        <h1>Sample Article</h1>
        {paragraphs}
        <img src="img.png" alt="inline">
    </article>
    <footer>Copyright Site Example</footer>
</body>
</html>"""


@pytest.fixture
def client(extractor):
    """Test client wired to an isolated extractor."""
    original_extractor = state.extractor
    state.extractor = extractor

    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client

    state.extractor = original_extractor


# ─────────────────────────────────────────────────────────────
# Document builders
# ─────────────────────────────────────────────────────────────

@pytest.fixture
def pdf_bytes():
    """Two-page PDF with an author and an embedded title."""
    doc = fitz.open()
    for text in ("First page of the report.", "Second page with more words."):
        page = doc.new_page()
        page.insert_text((72, 72), text)
    doc.set_metadata({"author": "Pat Author", "title": "Embedded Title"})
    data = doc.tobytes()
    doc.close()
    return data


@pytest.fixture
def docx_bytes():
    doc = Document()
    doc.add_paragraph("First paragraph of the draft.")
    doc.add_paragraph("")
    doc.add_paragraph("Second paragraph.")
    buffer = io.BytesIO()
    doc.save(buffer)
    return buffer.getvalue()


@pytest.fixture
def epub_bytes(tmp_path):
    """Two-chapter EPUB with Dublin Core title, creator and description."""
    book = epub.EpubBook()
    book.set_identifier("test-book-1")
    book.set_title("Test Book")
    book.set_language("en")
    book.add_author("Ada Author")
    book.add_metadata("DC", "description", "A short book used in tests.")

    chapters = []
    for i, body in enumerate(
        ["<h1>Chapter One</h1><p>The first chapter begins here.</p>",
         "<h1>Chapter Two</h1><p>The second chapter ends the book.</p>"],
        start=1,
    ):
        chapter = epub.EpubHtml(uid=f"c{i}", title=f"Chapter {i}", file_name=f"c{i}.xhtml", lang="en")
        chapter.content = f"<html><head><title>Chapter {i}</title></head><body>{body}</body></html>"
        book.add_item(chapter)
        chapters.append(chapter)

    book.toc = tuple(chapters)
    book.add_item(epub.EpubNcx())
    book.add_item(epub.EpubNav())
    book.spine = chapters

    path = tmp_path / "book.epub"
    epub.write_epub(str(path), book)
    return path.read_bytes()

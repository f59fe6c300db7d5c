"""
Tests for first-match-wins page metadata extraction.
"""

from ingestion.metadata import extract_page_metadata

BASE = "https://site.example/posts/1"


def page(head: str = "", body: str = "") -> str:
    return f"<html><head>{head}</head><body>{body}</body></html>"


class TestTitle:

    def test_og_title_wins(self):
        html = page('<meta property="og:title" content="OG"><meta name="twitter:title" content="TW">'
                    "<title>Doc</title>", "<h1>Heading</h1>")
        assert extract_page_metadata(html, BASE).title == "OG"

    def test_list_order_not_document_order(self):
        """twitter:title appearing first in the page still loses to og:title."""
        html = page('<meta name="twitter:title" content="TW"><meta property="og:title" content="OG">')
        assert extract_page_metadata(html, BASE).title == "OG"

    def test_falls_through_empty_values(self):
        html = page('<meta property="og:title" content="   "><title>  Doc  </title>')
        assert extract_page_metadata(html, BASE).title == "Doc"

    def test_h1_last(self):
        assert extract_page_metadata(page(body="<h1>Heading</h1>"), BASE).title == "Heading"

    def test_absent(self):
        assert extract_page_metadata(page(body="<p>x</p>"), BASE).title is None


class TestDescriptionAndImages:

    def test_description_precedence(self):
        html = page('<meta name="description" content="plain">'
                    '<meta name="twitter:description" content="tw">')
        assert extract_page_metadata(html, BASE).description == "tw"

    def test_cover_image_precedence(self):
        html = page('<meta property="og:image:url" content="https://site.example/u.png">'
                    '<meta name="twitter:image" content="https://site.example/t.png">')
        assert extract_page_metadata(html, BASE).cover_image == "https://site.example/t.png"

    def test_site_name(self):
        html = page('<meta name="application-name" content="App">')
        assert extract_page_metadata(html, BASE).site_name == "App"

    def test_meta_key_case_insensitive(self):
        html = page('<meta property="OG:Title" content="Shouting">')
        assert extract_page_metadata(html, BASE).title == "Shouting"


class TestFavicon:

    def test_icon_resolved_to_absolute(self):
        html = page('<link rel="icon" href="/favicon.png">')
        assert extract_page_metadata(html, BASE).favicon == "https://site.example/favicon.png"

    def test_shortcut_icon_beats_apple_touch_icon(self):
        html = page('<link rel="apple-touch-icon" href="/apple.png"><link rel="shortcut icon" href="/short.ico">')
        assert extract_page_metadata(html, BASE).favicon == "https://site.example/short.ico"

    def test_synthesized_from_origin(self):
        assert extract_page_metadata(page(), BASE).favicon == "https://site.example/favicon.ico"

    def test_no_base_url_no_synthesized_favicon(self):
        assert extract_page_metadata(page()).favicon is None


class TestAuthorAndDate:

    def test_meta_author(self):
        html = page('<meta name="author" content="Meta Author">', '<span class="author">Byline</span>')
        assert extract_page_metadata(html, BASE).author == "Meta Author"

    def test_rel_author(self):
        html = page(body='<a rel="author" href="/u/1">Linked Author</a>')
        assert extract_page_metadata(html, BASE).author == "Linked Author"

    def test_author_class(self):
        html = page(body='<div class="post-author-name"> Class Author </div>')
        assert extract_page_metadata(html, BASE).author == "Class Author"

    def test_itemprop_author(self):
        html = page(body='<span itemprop="author">Schema Author</span>')
        assert extract_page_metadata(html, BASE).author == "Schema Author"

    def test_published_meta(self):
        html = page('<meta property="article:published_time" content="2024-05-01T08:00:00Z">',
                    '<time datetime="2020-01-01">Jan 1</time>')
        assert extract_page_metadata(html, BASE).published_date == "2024-05-01T08:00:00Z"

    def test_time_element(self):
        html = page(body='<p>Posted <time datetime="2023-07-04">July 4th</time></p>')
        assert extract_page_metadata(html, BASE).published_date == "2023-07-04"

    def test_itemprop_date_published(self):
        html = page(body='<meta itemprop="datePublished" content="2022-02-02">')
        assert extract_page_metadata(html, BASE).published_date == "2022-02-02"

    def test_date_class_text_kept_raw(self):
        html = page(body='<span class="entry-date">March 3, 2021</span>')
        assert extract_page_metadata(html, BASE).published_date == "March 3, 2021"


class TestInputs:

    def test_accepts_parsed_soup(self):
        from bs4 import BeautifulSoup

        soup = BeautifulSoup(page("<title>Soup</title>"), "html.parser")
        assert extract_page_metadata(soup, BASE).title == "Soup"

    def test_empty_html(self):
        result = extract_page_metadata("", BASE)
        assert result.title is None
        assert result.author is None

"""Tests for feed field normalization (CDATA, HTML, entities, whitespace)."""

import pytest


class TestCleanText:
    """Tests for clean_text()."""

    def test_empty_values(self):
        from src.common.text import clean_text

        assert clean_text(None) == ""
        assert clean_text("") == ""

    def test_cdata_and_markup_removed(self):
        from src.common.text import clean_text

        assert clean_text("<![CDATA[<b>Hello</b>  world]]>") == "Hello world"

    def test_entities_decoded(self):
        from src.common.text import clean_text

        assert clean_text("AT&amp;T backs &quot;Nimbus&quot;") == 'AT&T backs "Nimbus"'

    def test_entities_decode_same_with_or_without_markup(self):
        from src.common.text import clean_text

        assert clean_text("AT&amp;amp;T <b>backs</b> Nimbus") == "AT&T backs Nimbus"
        assert clean_text("AT&amp;amp;T backs Nimbus") == "AT&T backs Nimbus"

    def test_bare_url_kept(self):
        from src.common.text import clean_text

        assert clean_text("https://news.example.com/brightgrid") == "https://news.example.com/brightgrid"

    def test_whitespace_collapsed(self):
        from src.common.text import clean_text

        assert clean_text("  Acme \n\t raises   $5M  ") == "Acme raises $5M"

    @pytest.mark.parametrize("raw,expected", [
        ("&amp;lt;", "<"),
        ("&#39;quoted&#39;", "'quoted'"),
        ("a&#x2F;b", "a/b"),
        ("&gt;", ">"),
    ])
    def test_decode_entities(self, raw, expected):
        from src.common.text import decode_entities

        assert decode_entities(raw) == expected

    def test_strip_html_leaves_plain_text_alone(self):
        from src.common.text import strip_html

        assert strip_html("no markup & plain") == "no markup & plain"


class TestUrlHelpers:
    """Tests for feed URL construction and host extraction."""

    def test_search_url_quotes_firm_name(self):
        from urllib.parse import parse_qs, urlparse
        from src.common.url_utils import build_feed_search_url

        url = build_feed_search_url("Acme Ventures")
        parsed = urlparse(url)
        params = parse_qs(parsed.query)

        assert parsed.netloc == "news.google.com"
        assert params["q"][0].startswith('"Acme Ventures" ')
        assert "funding" in params["q"][0]
        assert params["hl"] == ["en-US"]
        assert params["ceid"] == ["US:en"]

    def test_extract_host(self):
        from src.common.url_utils import extract_host

        assert extract_host("https://www.example.com/story") == "example.com"
        assert extract_host("https://news.example.com/a?b=1") == "news.example.com"

    def test_extract_host_fallback(self):
        from src.common.url_utils import extract_host, UNKNOWN_SOURCE

        assert extract_host("") == UNKNOWN_SOURCE
        assert extract_host("not a url") == UNKNOWN_SOURCE

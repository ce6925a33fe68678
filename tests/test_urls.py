"""Tests for URL normalization helpers."""

import pytest

from seo_headings.urls import is_asset, is_local, normalize_url, origin_of, origin_string


class TestNormalizeUrl:
    """Test cases for normalize_url."""

    def test_full_normalization(self):
        assert normalize_url("HTTP://Example.com/a//b/?x=1#frag") == "http://example.com/a/b"

    def test_root_keeps_slash(self):
        assert normalize_url("https://Example.com") == "https://example.com/"
        assert normalize_url("https://example.com/") == "https://example.com/"

    def test_default_port_removed(self):
        assert normalize_url("http://example.com:80/a/") == "http://example.com/a"
        assert normalize_url("https://example.com:443/") == "https://example.com/"

    def test_custom_port_kept(self):
        assert normalize_url("http://example.com:8080/a") == "http://example.com:8080/a"

    def test_path_case_preserved(self):
        assert normalize_url("https://example.com/About/Team/") == "https://example.com/About/Team"

    def test_trailing_double_slash(self):
        assert normalize_url("http://x.com/a//") == "http://x.com/a"

    @pytest.mark.parametrize("value", ["not a url", "/relative/path", "", "mailto:someone@example.com"])
    def test_unparsable_returned_unchanged(self, value):
        assert normalize_url(value) == value

    def test_bad_port_returned_unchanged(self):
        assert normalize_url("http://example.com:99999999/") == "http://example.com:99999999/"

    @pytest.mark.parametrize("value", [
        "HTTP://Example.com/a//b/?x=1#frag",
        "https://example.com",
        "http://x.com/a//",
        "http://example.com:8080//deep///path/",
        "https://example.com/page#section",
        "relative/path",
    ])
    def test_idempotent(self, value):
        once = normalize_url(value)
        assert normalize_url(once) == once


class TestOriginHelpers:
    """Test cases for origin and asset helpers."""

    def test_origin_of(self):
        assert origin_of("HTTPS://Example.com:443/path?q=1") == ("https", "example.com")

    def test_origin_string(self):
        assert origin_string("https://example.com/a/b") == "https://example.com"

    def test_is_local(self):
        origin = ("https", "example.com")
        assert is_local("https://EXAMPLE.com/page", origin)
        assert not is_local("http://example.com/page", origin)
        assert not is_local("https://blog.example.com/page", origin)

    @pytest.mark.parametrize("url,expected", [
        ("https://example.com/logo.PNG", True),
        ("https://example.com/files/report.pdf", True),
        ("https://example.com/about", False),
        ("https://example.com/page.html", False),
    ])
    def test_is_asset(self, url, expected):
        assert is_asset(url) is expected

"""Tests for the single-page analyzer."""

from unittest.mock import Mock

import pytest

from seo_headings.analyzer import PageAnalyzer, error_result
from seo_headings.models import ExtractedPage, Heading, PageCounts, RawHeading

PAGE_HTML = """
<html>
    <head><title>Test Page</title></head>
    <body>
        <h1>Main Heading</h1>
        <h3>Nested emphasis heading</h3>
        <h2>Second level</h2>
        <h4>  </h4>
        <a href="/about">About</a>
    </body>
</html>
"""


class TestPageAnalyzer:
    """Test cases for PageAnalyzer."""

    def test_full_analysis(self):
        analysis = PageAnalyzer().analyze("https://example.com/", PAGE_HTML, 200)
        result = analysis.result

        assert result.url == "https://example.com/"
        assert result.http_status == 200
        assert result.page_title == "Test Page"
        assert result.counts == PageCounts(h1=1, h2=1, h3=1)
        assert result.total_headings == 3
        assert result.headings == {
            "h1": ["Main Heading"],
            "h2": ["Second level"],
            "h3": ["Nested emphasis heading"],
            "h4": [],
            "h5": [],
            "h6": [],
        }
        assert result.heading_structure == [
            Heading("h1", 1, "Main Heading", 1, 12, 2),
            Heading("h3", 3, "Nested emphasis heading", 2, 23, 3),
            Heading("h2", 2, "Second level", 3, 12, 2),
        ]
        assert result.heading_score == 45
        assert result.heading_issues == ["heading hierarchy skipped levels"]
        assert result.heading_recommendations == [
            "Improve heading structure and hierarchy for better SEO",
        ]
        assert result.error is None

    def test_internal_links_not_in_result(self):
        analysis = PageAnalyzer().analyze("https://example.com/", PAGE_HTML, 200)

        assert [link.url for link in analysis.internal_links] == ["https://example.com/about"]
        assert "internal_links" not in analysis.result.to_dict()

    def test_optional_fields_excluded(self):
        analyzer = PageAnalyzer(
            include_heading_text=False,
            include_heading_structure=False,
            include_heading_score=False,
        )
        result = analyzer.analyze("https://example.com/", PAGE_HTML, 200).result

        assert result.headings is None
        assert result.heading_structure is None
        assert result.heading_score is None
        # Issues still come from the full structure
        assert result.heading_issues == ["heading hierarchy skipped levels"]
        assert result.heading_recommendations == []
        assert result.total_headings == 3

    def test_page_without_headings(self):
        result = PageAnalyzer().analyze("https://example.com/", "<html><body><p>Text</p></body></html>", 200).result

        assert result.total_headings == 0
        assert result.heading_score == 0
        assert result.heading_issues == ["missing H1"]

    def test_single_h1_page(self):
        html = "<html><body><h1>Welcome to the site</h1></body></html>"
        result = PageAnalyzer().analyze("https://example.com/", html, 200).result

        assert result.heading_score == 20
        assert result.heading_issues == []

    def test_uses_injected_extractor(self):
        extractor = Mock()
        extractor.extract.return_value = ExtractedPage(
            title="Widgets",
            headings=[RawHeading("h1", 1, "Widgets for every need")],
            links=[],
        )
        result = PageAnalyzer(extractor=extractor).analyze("https://example.com/w", "<ignored>", 404).result

        extractor.extract.assert_called_once_with("<ignored>", "https://example.com/w")
        assert result.http_status == 404
        assert result.heading_score == 40


class TestErrorResult:
    """Test cases for error_result."""

    def test_zeroed_fields(self):
        result = error_result("https://example.com/down", 503, "Connection reset")

        assert result.error == "Connection reset"
        assert result.http_status == 503
        assert result.counts == PageCounts()
        assert result.total_headings == 0
        assert result.heading_structure == []
        assert result.heading_score == 0
        assert result.heading_issues == []
        assert result.heading_recommendations == []

    @pytest.mark.parametrize("level", [0, 7])
    def test_counts_reject_unknown_level(self, level):
        with pytest.raises(KeyError):
            PageCounts()[level]

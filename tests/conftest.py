"""Shared fixtures: an in-memory site and a fetcher that serves it."""

from typing import Dict, List, Union

import pytest

from seo_headings.fetch import FetchResponse


class FakeFetcher:
    """Serves canned pages keyed by URL and records every request."""

    def __init__(self, pages: Dict[str, Union[FetchResponse, Exception]]):
        self.pages = pages
        self.calls: List[str] = []

    def __call__(self, url: str) -> FetchResponse:
        self.calls.append(url)
        page = self.pages.get(url)
        if page is None:
            return FetchResponse(status_code=404, html="<html><title>Not found</title></html>")
        if isinstance(page, Exception):
            raise page
        return page


def page_html(title: str, headings: str = "", links: List[str] = ()) -> str:
    anchors = "".join(f'<a href="{href}">{href}</a>' for href in links)
    return f"<html><head><title>{title}</title></head><body>{headings}{anchors}</body></html>"


@pytest.fixture
def site() -> Dict[str, FetchResponse]:
    """Six same-domain pages, breadth-first order: /, /a, /b, /c, /d, /e, /f."""
    def ok(html: str) -> FetchResponse:
        return FetchResponse(status_code=200, html=html)

    return {
        "https://example.com/": ok(page_html(
            "Home",
            "<h1>Welcome to the example site</h1><h2>Latest articles</h2>",
            ["/a", "/b", "/c", "https://other.org/x", "/logo.png"],
        )),
        "https://example.com/a": ok(page_html(
            "Page A", "<h1>Article number one</h1>", ["/d", "/e", "/"],
        )),
        "https://example.com/b": ok(page_html(
            "Page B", "<h1>Article number two</h1>", ["/a/", "/f?ref=b"],
        )),
        "https://example.com/c": ok(page_html("Page C", "<h1>Article number three</h1>")),
        "https://example.com/d": ok(page_html("Page D", "<h1>Article number four</h1>")),
        "https://example.com/e": ok(page_html("Page E", "<h1>Article number five</h1>")),
        "https://example.com/f": ok(page_html("Page F", "<h1>Article number six</h1>")),
    }


@pytest.fixture
def fake_fetcher():
    return FakeFetcher

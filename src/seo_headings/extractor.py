"""
HTML heading extraction.

The scoring and crawl code only depend on the ``HeadingExtractor`` protocol,
so the parsing library can be swapped without touching them.
"""
from __future__ import annotations

import re
from typing import List, Protocol
from urllib.parse import urldefrag, urljoin, urlparse

from bs4 import BeautifulSoup

from seo_headings.models import ExtractedPage, Link, RawHeading
from seo_headings.urls import normalize_url, origin_of

HEADING_TAG = re.compile(r"^h[1-6]$")


class HeadingExtractor(Protocol):
    def extract(self, html: str, base_url: str) -> ExtractedPage:
        ...


class SoupHeadingExtractor:
    """Extract title, headings and same-origin links with BeautifulSoup."""

    def __init__(self, parser: str = "lxml") -> None:
        self.parser = parser

    def extract(self, html: str, base_url: str) -> ExtractedPage:
        soup = BeautifulSoup(html or "", self.parser)
        return ExtractedPage(
            title=parse_title(soup),
            headings=parse_headings(soup),
            links=parse_links(soup, base_url),
        )


def parse_title(soup: BeautifulSoup) -> str:
    """Return the trimmed <title> text, or an empty string."""
    if soup.title is None:
        return ""
    return soup.title.get_text().strip()


def parse_headings(soup: BeautifulSoup) -> List[RawHeading]:
    """Extract non-empty h1..h6 elements in document order."""
    headings: List[RawHeading] = []
    for tag in soup.find_all(HEADING_TAG):
        text = tag.get_text().strip()
        if not text:
            continue
        name = tag.name.lower()
        headings.append(RawHeading(tag=name, level=int(name[1]), text=text))
    return headings


def parse_links(soup: BeautifulSoup, base_url: str) -> List[Link]:
    """Extract same-origin <a href> targets, skipping hash-only variants of the page."""
    page_url = normalize_url(urldefrag(base_url)[0])
    page_origin = origin_of(base_url)
    links: List[Link] = []

    for anchor in soup.find_all("a", href=True):
        href = anchor["href"].strip()
        if not href or href.endswith("#"):
            continue

        try:
            target = urljoin(base_url, href)
            parsed = urlparse(target)
        except ValueError:
            continue

        if parsed.scheme not in ("http", "https"):
            continue

        without_fragment, fragment = urldefrag(target)
        if fragment and normalize_url(without_fragment) == page_url:
            continue

        if origin_of(target) != page_origin:
            continue

        links.append(Link(url=target, anchor_text=anchor.get_text().strip()))

    return links

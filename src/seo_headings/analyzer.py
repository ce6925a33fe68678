"""
Single-page heading analysis.
"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Dict, List, Optional

from seo_headings.extractor import HeadingExtractor, SoupHeadingExtractor
from seo_headings.models import Heading, PageAnalysis, PageCounts, PageResult
from seo_headings.scoring import detect_issues, generate_recommendations, score_headings


def utc_now_iso() -> str:
    """Return current UTC time in ISO format."""
    return datetime.now(timezone.utc).replace(microsecond=0).isoformat()


class PageAnalyzer:
    """Runs extraction, scoring, issue detection and recommendations for one page.

    The ``include_*`` options only decide which optional fields are filled in
    on the returned ``PageResult``; the heading structure is always built
    because the score and the issues are computed from it.
    """

    def __init__(
        self,
        extractor: Optional[HeadingExtractor] = None,
        include_heading_text: bool = True,
        include_heading_structure: bool = True,
        include_heading_score: bool = True,
    ) -> None:
        self.extractor = extractor or SoupHeadingExtractor()
        self.include_heading_text = include_heading_text
        self.include_heading_structure = include_heading_structure
        self.include_heading_score = include_heading_score

    def analyze(self, url: str, html: str, status_code: int) -> PageAnalysis:
        page = self.extractor.extract(html, url)

        structure = [Heading.from_raw(raw, position) for position, raw in enumerate(page.headings, start=1)]
        counts = PageCounts.from_headings(structure)

        score = score_headings(structure, page.title) if self.include_heading_score else None
        issues = detect_issues(counts, structure)
        recommendations = generate_recommendations(counts, structure, score)

        result = PageResult(
            url=url,
            http_status=status_code,
            scanned_at=utc_now_iso(),
            counts=counts,
            total_headings=counts.total,
            headings=_texts_by_tag(structure) if self.include_heading_text else None,
            heading_structure=structure if self.include_heading_structure else None,
            heading_score=score,
            heading_issues=issues,
            heading_recommendations=recommendations,
            page_title=page.title,
        )
        return PageAnalysis(result=result, internal_links=list(page.links))


def _texts_by_tag(structure: List[Heading]) -> Dict[str, List[str]]:
    texts: Dict[str, List[str]] = {f"h{level}": [] for level in range(1, 7)}
    for heading in structure:
        texts[heading.tag].append(heading.text)
    return texts


def error_result(url: str, status_code: int, message: str) -> PageResult:
    """Build the zeroed result recorded for a page that could not be fetched."""
    return PageResult(
        url=url,
        http_status=status_code,
        scanned_at=utc_now_iso(),
        heading_structure=[],
        heading_score=0,
        error=message,
    )

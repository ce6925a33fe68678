"""
Data structures shared by the extractor, analyzer, crawl loop and aggregator.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

HEADING_LEVELS = (1, 2, 3, 4, 5, 6)


@dataclass(frozen=True, slots=True)
class RawHeading:
    """A heading as it comes out of the HTML, before positions are assigned."""
    tag: str
    level: int
    text: str


@dataclass(frozen=True, slots=True)
class Link:
    """Same-origin anchor found on a page."""
    url: str
    anchor_text: str


@dataclass(frozen=True, slots=True)
class ExtractedPage:
    title: str
    headings: List[RawHeading]
    links: List[Link]


@dataclass(frozen=True, slots=True)
class Heading:
    """Non-empty heading in document order."""
    tag: str
    level: int
    text: str
    position: int
    length: int
    word_count: int

    @classmethod
    def from_raw(cls, raw: RawHeading, position: int) -> Heading:
        return cls(
            tag=raw.tag,
            level=raw.level,
            text=raw.text,
            position=position,
            length=len(raw.text),
            word_count=len(raw.text.split()),
        )


@dataclass(slots=True)
class PageCounts:
    """Occurrence count of non-empty headings per level."""
    h1: int = 0
    h2: int = 0
    h3: int = 0
    h4: int = 0
    h5: int = 0
    h6: int = 0

    def __getitem__(self, level: int) -> int:
        if level not in HEADING_LEVELS:
            raise KeyError(level)
        return getattr(self, f"h{level}")

    @property
    def total(self) -> int:
        return sum(self[level] for level in HEADING_LEVELS)

    @classmethod
    def from_headings(cls, headings: List[Heading]) -> PageCounts:
        counts = cls()
        for heading in headings:
            setattr(counts, heading.tag, getattr(counts, heading.tag) + 1)
        return counts


@dataclass(frozen=True, slots=True)
class PageResult:
    """Result data for a single crawled page."""
    url: str
    http_status: int
    scanned_at: str
    counts: PageCounts = field(default_factory=PageCounts)
    total_headings: int = 0
    headings: Optional[Dict[str, List[str]]] = None
    heading_structure: Optional[List[Heading]] = None
    heading_score: Optional[int] = None
    heading_issues: List[str] = field(default_factory=list)
    heading_recommendations: List[str] = field(default_factory=list)
    page_title: str = ""
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(slots=True)
class PageAnalysis:
    """Page result plus the internal links used to grow the crawl frontier."""
    result: PageResult
    internal_links: List[Link] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class IssueOccurrence:
    issue: str
    page: str
    severity: str


@dataclass(frozen=True, slots=True)
class AnalysisSummary:
    has_heading_issues: bool
    needs_h1_improvement: bool
    has_good_structure: bool
    average_score_grade: str


@dataclass(frozen=True, slots=True)
class DomainAnalysis:
    """Domain-level statistics folded from every page result."""
    domain_name: str
    total_pages_analyzed: int

    total_headings: int
    total_h1: int
    total_h2: int
    total_h3: int
    total_h4: int
    total_h5: int
    total_h6: int

    average_headings_per_page: int
    average_h1_per_page: float
    average_h2_per_page: float
    average_h3_per_page: float
    average_heading_score: int

    pages_with_h1: int
    pages_with_h1_percentage: int
    pages_with_multiple_h1: int
    pages_with_multiple_h1_percentage: int
    pages_with_no_h1: int
    pages_with_no_h1_percentage: int
    pages_with_h2: int
    pages_with_h2_percentage: int
    pages_with_h3: int
    pages_with_h3_percentage: int
    pages_with_good_structure: int
    pages_with_good_structure_percentage: int

    total_heading_issues: int
    critical_issues: int
    warning_issues: int
    info_issues: int
    issues_by_type: Dict[str, List[IssueOccurrence]]

    analysis_summary: AnalysisSummary


@dataclass(frozen=True, slots=True)
class AnalysisInfo:
    total_pages_processed: int
    completed_at: str
    engine_version: str
    data_format_version: str


@dataclass(frozen=True, slots=True)
class Report:
    domain: DomainAnalysis
    pages: List[PageResult]
    analysis: AnalysisInfo

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

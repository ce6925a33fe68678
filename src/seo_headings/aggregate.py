"""
Domain-level aggregation of page results.
"""
from __future__ import annotations

import math
from typing import Dict, List, Sequence

from seo_headings.models import AnalysisSummary, DomainAnalysis, IssueOccurrence, PageResult
from seo_headings.scoring import issue_severity, score_grade


def round_half_up(value: float, digits: int = 0) -> float:
    """Round like a spreadsheet would: halves always go up."""
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def _average(total: int, count: int) -> int:
    return int(round_half_up(total / count)) if count else 0


def _percentage(count: int, total: int) -> int:
    return int(round_half_up(count / total * 100)) if total else 0


def aggregate_domain(pages: Sequence[PageResult], domain_name: str) -> DomainAnalysis:
    """Fold every page result into one domain summary.

    The result does not depend on the order of ``pages`` except for the order
    of occurrences inside ``issues_by_type``.
    """
    total_pages = len(pages)

    level_totals = {
        level: sum(page.counts[level] for page in pages) for level in range(1, 7)
    }
    total_headings = sum(page.total_headings for page in pages)

    def per_page(level: int) -> float:
        return round_half_up(level_totals[level] / total_pages, 2) if total_pages else 0.0

    scores = [page.heading_score for page in pages if page.heading_score is not None]
    average_score = _average(sum(scores), len(scores))

    pages_with_h1 = sum(1 for page in pages if page.counts.h1 > 0)
    pages_with_multiple_h1 = sum(1 for page in pages if page.counts.h1 > 1)
    pages_with_no_h1 = sum(1 for page in pages if page.counts.h1 == 0)
    pages_with_h2 = sum(1 for page in pages if page.counts.h2 > 0)
    pages_with_h3 = sum(1 for page in pages if page.counts.h3 > 0)
    pages_with_good_structure = sum(
        1 for page in pages if page.counts.h1 == 1 and page.counts.h2 > 0
    )

    occurrences: List[IssueOccurrence] = [
        IssueOccurrence(issue=issue, page=page.url, severity=issue_severity(issue))
        for page in pages
        for issue in page.heading_issues
    ]
    issues_by_type: Dict[str, List[IssueOccurrence]] = {}
    for occurrence in occurrences:
        issues_by_type.setdefault(occurrence.issue, []).append(occurrence)

    severities = [o.severity for o in occurrences]

    return DomainAnalysis(
        domain_name=domain_name,
        total_pages_analyzed=total_pages,
        total_headings=total_headings,
        total_h1=level_totals[1],
        total_h2=level_totals[2],
        total_h3=level_totals[3],
        total_h4=level_totals[4],
        total_h5=level_totals[5],
        total_h6=level_totals[6],
        average_headings_per_page=_average(total_headings, total_pages),
        average_h1_per_page=per_page(1),
        average_h2_per_page=per_page(2),
        average_h3_per_page=per_page(3),
        average_heading_score=average_score,
        pages_with_h1=pages_with_h1,
        pages_with_h1_percentage=_percentage(pages_with_h1, total_pages),
        pages_with_multiple_h1=pages_with_multiple_h1,
        pages_with_multiple_h1_percentage=_percentage(pages_with_multiple_h1, total_pages),
        pages_with_no_h1=pages_with_no_h1,
        pages_with_no_h1_percentage=_percentage(pages_with_no_h1, total_pages),
        pages_with_h2=pages_with_h2,
        pages_with_h2_percentage=_percentage(pages_with_h2, total_pages),
        pages_with_h3=pages_with_h3,
        pages_with_h3_percentage=_percentage(pages_with_h3, total_pages),
        pages_with_good_structure=pages_with_good_structure,
        pages_with_good_structure_percentage=_percentage(pages_with_good_structure, total_pages),
        total_heading_issues=len(occurrences),
        critical_issues=severities.count("critical"),
        warning_issues=severities.count("warning"),
        info_issues=severities.count("info"),
        issues_by_type=issues_by_type,
        analysis_summary=AnalysisSummary(
            has_heading_issues=bool(occurrences),
            needs_h1_improvement=pages_with_no_h1 > 0 or pages_with_multiple_h1 > 0,
            has_good_structure=pages_with_good_structure > 0,
            average_score_grade=score_grade(average_score),
        ),
    )

"""
Heading structure scoring, issue detection and recommendations.

Everything in this module is a pure function of its arguments.
"""
from __future__ import annotations

from typing import List, Optional, Sequence

from seo_headings.models import Heading, PageCounts

MISSING_H1 = "missing H1"
MULTIPLE_H1 = "multiple H1 tags"
SKIPPED_LEVELS = "heading hierarchy skipped levels"
TEXT_TOO_SHORT = "heading text too short"
TEXT_TOO_LONG = "heading text too long"
TOO_MANY_CONSECUTIVE = "too many consecutive same level headings"

CRITICAL_ISSUES = (MISSING_H1, MULTIPLE_H1, SKIPPED_LEVELS)
WARNING_ISSUES = (TOO_MANY_CONSECUTIVE, TEXT_TOO_SHORT, TEXT_TOO_LONG)

MIN_HEADING_LENGTH = 10
MAX_HEADING_LENGTH = 100

GRADE_THRESHOLDS = ((90, "A"), (80, "B"), (70, "C"), (60, "D"))


def score_headings(headings: Sequence[Heading], title: str) -> int:
    """Score a page's heading structure from 0 to 100."""
    score = 0

    # H1 presence (20 points)
    h1_count = sum(1 for h in headings if h.tag == "h1")
    if h1_count == 1:
        score += 20
    elif h1_count > 1:
        score += 10

    # Hierarchy (30 points)
    hierarchy = 0
    previous_level = 0
    same_level_run = 0
    max_level = 0
    for heading in headings:
        if previous_level != 0 and heading.level > previous_level + 1:
            hierarchy -= 5
        elif heading.level == previous_level:
            same_level_run += 1
            if same_level_run > 2:
                hierarchy -= 2
        else:
            same_level_run = 0
        previous_level = heading.level
        max_level = max(max_level, heading.level)

    # A lone heading has no hierarchy to reward.
    if len(headings) > 1:
        hierarchy += min(max_level * 5, 20)
    hierarchy = max(hierarchy, 0)
    score += min(hierarchy, 30)

    # Title relevance (20 points)
    if title:
        title_words = set(title.lower().split())
        if any(word in title_words for h in headings for word in h.text.lower().split()):
            score += 20

    # Content distribution (30 points)
    if len(headings) >= 3:
        score += 15
        if sum(1 for h in headings if h.tag == "h2") >= 2:
            score += 10
        if sum(1 for h in headings if h.tag == "h3") >= 3:
            score += 5

    return max(0, min(100, score))


def detect_issues(counts: PageCounts, headings: Sequence[Heading]) -> List[str]:
    """Return the distinct heading issues of a page in detection order."""
    issues: List[str] = []

    if counts.h1 == 0:
        issues.append(MISSING_H1)
    if counts.h1 > 1:
        issues.append(MULTIPLE_H1)

    previous_level = 0
    for heading in headings:
        if previous_level != 0 and heading.level > previous_level + 1:
            issues.append(SKIPPED_LEVELS)
        previous_level = heading.level

    for heading in headings:
        if heading.length < MIN_HEADING_LENGTH:
            issues.append(TEXT_TOO_SHORT)
        elif heading.length > MAX_HEADING_LENGTH:
            issues.append(TEXT_TOO_LONG)

    # The run counter restarts whenever the level changes.
    same_level_run = 0
    current_level = 0
    for heading in headings:
        if heading.level == current_level:
            same_level_run += 1
            if same_level_run > 2:
                issues.append(TOO_MANY_CONSECUTIVE)
        else:
            same_level_run = 0
            current_level = heading.level

    return list(dict.fromkeys(issues))


def generate_recommendations(
    counts: PageCounts,
    headings: Sequence[Heading],
    score: Optional[int],
) -> List[str]:
    """Turn counts, structure and score into advisory text."""
    recommendations: List[str] = []

    if counts.h1 == 0:
        recommendations.append("Add a single H1 tag to each page for better SEO")
    elif counts.h1 > 1:
        recommendations.append("Use only one H1 tag per page for better SEO structure")

    if headings:
        if counts.h2 == 0 and len(headings) > 1:
            recommendations.append("Consider adding H2 tags to organize content better")
        if counts.h2 > 2 and counts.h3 == 0:
            recommendations.append("Consider adding H3 tags to create better content hierarchy")

    if score is not None:
        if score < 50:
            recommendations.append("Improve heading structure and hierarchy for better SEO")
        elif score < 80:
            recommendations.append("Good heading structure, consider minor improvements")
        else:
            recommendations.append("Excellent heading structure!")

    if any(h.length < MIN_HEADING_LENGTH for h in headings):
        recommendations.append("Some headings are too short - aim for 10-100 characters")
    if any(h.length > MAX_HEADING_LENGTH for h in headings):
        recommendations.append(
            "Some headings are too long - consider shortening to under 100 characters"
        )

    return recommendations


def issue_severity(issue: str) -> str:
    """Classify an issue as critical, warning or info."""
    lowered = issue.lower()
    if any(known.lower() in lowered for known in CRITICAL_ISSUES):
        return "critical"
    if any(known.lower() in lowered for known in WARNING_ISSUES):
        return "warning"
    return "info"


def score_grade(score: int) -> str:
    """Letter grade for an average heading score."""
    for threshold, grade in GRADE_THRESHOLDS:
        if score >= threshold:
            return grade
    return "F"

"""
Crawl loop and analysis orchestration.
"""
from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Iterable, List, Optional, Set, Tuple

from seo_headings.aggregate import aggregate_domain
from seo_headings.analyzer import PageAnalyzer, error_result, utc_now_iso
from seo_headings.config import AnalysisConfig, ConfigError
from seo_headings.extractor import HeadingExtractor
from seo_headings.fetch import Fetcher, HttpFetcher, status_for_error
from seo_headings.models import AnalysisInfo, Link, PageAnalysis, PageResult, Report
from seo_headings.urls import is_asset, is_local, normalize_url, origin_of, origin_string

logger = logging.getLogger(__name__)

ENGINE_VERSION = "1.0.0"
DATA_FORMAT_VERSION = "1.0"


class AnalysisError(RuntimeError):
    """Raised when a run fails outside of the per-page error handling."""


@dataclass(slots=True)
class CrawlState:
    """Visited set and FIFO frontier of a single crawl run."""
    frontier: Deque[str] = field(default_factory=deque)
    visited: Set[str] = field(default_factory=set)
    queued: Set[str] = field(default_factory=set)
    processed_count: int = 0

    @classmethod
    def start(cls, seed_url: str) -> CrawlState:
        state = cls()
        state.enqueue(seed_url)
        return state

    def enqueue(self, url: str) -> bool:
        """Queue a URL unless it was already visited or queued."""
        if url in self.visited or url in self.queued:
            return False
        self.frontier.append(url)
        self.queued.add(url)
        return True

    def next_url(self) -> Optional[str]:
        """Pop the next unvisited URL and mark it visited."""
        while self.frontier:
            url = self.frontier.popleft()
            self.queued.discard(url)
            if url in self.visited:
                continue
            self.visited.add(url)
            return url
        return None


def process_page(url: str, fetch: Fetcher, analyzer: PageAnalyzer) -> PageAnalysis:
    """Fetch and analyze one page; failures become an error result."""
    try:
        response = fetch(url)
        return analyzer.analyze(url, response.html, response.status_code)
    except Exception as e:
        status = status_for_error(e)
        logger.warning("Error analyzing %s (status %s): %s", url, status, e)
        return PageAnalysis(result=error_result(url, status, str(e) or type(e).__name__))


def expand_frontier(state: CrawlState, links: Iterable[Link], start_origin: Tuple[str, str]) -> int:
    """Queue same-origin page links; returns how many were new."""
    added = 0
    for link in links:
        target = normalize_url(link.url)
        if not is_local(target, start_origin) or is_asset(target):
            continue
        if state.enqueue(target):
            logger.debug("Added to crawl queue: %s", target)
            added += 1
    return added


def crawl(
    start_url: str,
    fetch: Fetcher,
    analyzer: PageAnalyzer,
    max_pages: int,
    follow_links: bool,
) -> List[PageResult]:
    """
    Analyze pages breadth-first starting from a URL.

    Exactly one page is processed when ``follow_links`` is off. Pages that
    fail to load still count against ``max_pages``.
    """
    start_url = normalize_url(start_url)
    start_origin = origin_of(start_url)
    budget = max_pages if follow_links else 1

    state = CrawlState.start(start_url)
    results: List[PageResult] = []

    while state.frontier and state.processed_count < budget:
        url = state.next_url()
        if url is None:
            break

        logger.info("Processing: %s (%d/%d)", url, state.processed_count + 1, budget)
        analysis = process_page(url, fetch, analyzer)
        result = analysis.result
        results.append(result)
        state.processed_count += 1

        new_links = 0
        if follow_links and result.error is None:
            new_links = expand_frontier(state, analysis.internal_links, start_origin)

        logger.info(
            "  → %s %s: %d headings, score %s (+%d links)",
            result.http_status, url, result.total_headings, result.heading_score, new_links,
        )

    return results


def run_analysis(
    config: AnalysisConfig,
    fetch: Optional[Fetcher] = None,
    extractor: Optional[HeadingExtractor] = None,
) -> Report:
    """
    Crawl from ``config.start_url`` and build the full report.

    Raises:
        ConfigError: the input is invalid; nothing was fetched.
        AnalysisError: the run failed outside of per-page error handling.
    """
    config.validate()
    start_url = normalize_url(config.start_url)
    scheme, netloc = origin_of(start_url)
    if scheme not in ("http", "https") or not netloc:
        raise ConfigError(f"Invalid start URL: {config.start_url}")

    analyzer = PageAnalyzer(
        extractor=extractor,
        include_heading_text=config.include_heading_text,
        include_heading_structure=config.include_heading_structure,
        include_heading_score=config.include_heading_score,
    )
    own_fetcher = fetch is None
    if own_fetcher:
        fetch = HttpFetcher(
            user_agent=config.user_agent,
            timeout_ms=config.timeout_ms,
            max_redirects=config.max_redirects,
        )

    logger.info(
        "Crawl mode: %s",
        "Multi-page crawling enabled" if config.crawl_urls else "Single page analysis only",
    )
    logger.info("Maximum pages to process: %d", config.page_budget)

    try:
        pages = crawl(
            start_url=start_url,
            fetch=fetch,
            analyzer=analyzer,
            max_pages=config.max_pages,
            follow_links=config.crawl_urls,
        )
        domain = aggregate_domain(pages, origin_string(start_url))
    except Exception as e:
        logger.error("General error: %s", e)
        raise AnalysisError(f"Analysis of {start_url} failed: {e}") from e
    finally:
        if own_fetcher:
            fetch.close()

    logger.info(
        "Domain %s: %d pages, average score %d/100, pages with H1 %d%%, critical issues %d",
        domain.domain_name,
        domain.total_pages_analyzed,
        domain.average_heading_score,
        domain.pages_with_h1_percentage,
        domain.critical_issues,
    )

    return Report(
        domain=domain,
        pages=pages,
        analysis=AnalysisInfo(
            total_pages_processed=len(pages),
            completed_at=utc_now_iso(),
            engine_version=ENGINE_VERSION,
            data_format_version=DATA_FORMAT_VERSION,
        ),
    )

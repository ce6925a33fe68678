"""
Crawls pages of a site breadth-first and scores their heading structure.
Outputs a JSON report with per-page scores, issues and a domain summary.
"""
__version__ = "1.0.0"

from seo_headings.config import AnalysisConfig, ConfigError
from seo_headings.core import AnalysisError, CrawlState, crawl, run_analysis
from seo_headings.models import DomainAnalysis, Heading, PageCounts, PageResult, Report
from seo_headings.scoring import detect_issues, generate_recommendations, score_headings
from seo_headings.urls import normalize_url

__all__ = [
    "AnalysisConfig",
    "AnalysisError",
    "ConfigError",
    "CrawlState",
    "DomainAnalysis",
    "Heading",
    "PageCounts",
    "PageResult",
    "Report",
    "crawl",
    "detect_issues",
    "generate_recommendations",
    "normalize_url",
    "run_analysis",
    "score_headings",
]

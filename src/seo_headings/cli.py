"""
Command-line interface for the headings analyzer.
"""
from __future__ import annotations

import argparse
import json
import os
import sys
from datetime import datetime
from pathlib import Path
from typing import List, Optional
from urllib.parse import urlparse

from seo_headings.config import AnalysisConfig, ConfigError
from seo_headings.core import AnalysisError, run_analysis
from seo_headings.logging_config import setup_logging
from seo_headings.models import DomainAnalysis, Report


def print_summary(domain: DomainAnalysis) -> None:
    """Print domain summary to stderr."""
    sys.stderr.write("=" * 50 + "\n")
    sys.stderr.write("HEADINGS SUMMARY\n")
    sys.stderr.write("=" * 50 + "\n\n")

    sys.stderr.write(f"Domain:                 {domain.domain_name}\n")
    sys.stderr.write(f"Pages analyzed:         {domain.total_pages_analyzed}\n")
    sys.stderr.write(f"Total headings:         {domain.total_headings}\n")
    sys.stderr.write(
        f"Average score:          {domain.average_heading_score}/100 "
        f"({domain.analysis_summary.average_score_grade})\n"
    )
    sys.stderr.write(
        f"Pages with H1:          {domain.pages_with_h1}/{domain.total_pages_analyzed} "
        f"({domain.pages_with_h1_percentage}%)\n\n"
    )

    if domain.issues_by_type:
        sys.stderr.write("Issues by type:\n")
        for issue, occurrences in sorted(domain.issues_by_type.items()):
            sys.stderr.write(f"  [{occurrences[0].severity}] {issue}: {len(occurrences)}\n")
    else:
        sys.stderr.write("No heading issues found.\n")

    sys.stderr.write("\n")


def generate_output_path(start_url: str) -> Path:
    """Generate output path: reports/{hostname}_{datetime}.json"""
    parsed = urlparse(start_url)
    hostname = parsed.hostname or "unknown"
    # Sanitize hostname for filename (replace dots with underscores)
    hostname_safe = hostname.replace(".", "_")
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")

    reports_dir = Path("reports")
    reports_dir.mkdir(exist_ok=True)

    return reports_dir / f"{hostname_safe}_{timestamp}.json"


def build_parser() -> argparse.ArgumentParser:
    defaults = AnalysisConfig.from_env()
    parser = argparse.ArgumentParser(
        prog="seo-headings",
        description="Analyze the heading structure of a site and output a JSON report.",
    )
    parser.add_argument("start_url", nargs="?", help="Start URL (e.g. https://example.com)")
    parser.add_argument("--input", help="JSON input file with startUrl, maxPages, crawlUrls, ...")
    parser.add_argument("--crawl", action="store_true", default=None, help="Follow same-domain links")
    parser.add_argument("--max-pages", type=int, help=f"Maximum pages to analyze when crawling (default: {defaults.max_pages})")
    parser.add_argument("--timeout", type=int, help=f"Request timeout in milliseconds (default: {defaults.timeout_ms})")
    parser.add_argument("--max-redirects", type=int, help=f"Redirects followed per request (default: {defaults.max_redirects})")
    parser.add_argument("--user-agent", help="User-Agent header")
    parser.add_argument("--no-heading-text", action="store_true", help="Leave heading texts out of page results")
    parser.add_argument("--no-heading-structure", action="store_true", help="Leave the heading structure out of page results")
    parser.add_argument("--no-heading-score", action="store_true", help="Leave the heading score out of page results")
    parser.add_argument("--out", help="Output file path, or '-' for stdout (default: auto-generated in reports/)")
    parser.add_argument("--pretty", action="store_true", help="Pretty-print JSON")
    parser.add_argument("--verbose", action="store_true", help="Show progress and summary")
    return parser


def config_from_args(args: argparse.Namespace) -> AnalysisConfig:
    """Merge env defaults, an optional --input file and explicit flags."""
    config = AnalysisConfig.from_env()

    if args.input:
        try:
            data = json.loads(Path(args.input).read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigError(f"Cannot read input file {args.input}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(f"Input file {args.input} must contain a JSON object")
        config = AnalysisConfig.from_mapping(data, base=config)

    overrides = {
        "start_url": args.start_url,
        "crawl_urls": args.crawl,
        "max_pages": args.max_pages,
        "timeout_ms": args.timeout,
        "max_redirects": args.max_redirects,
        "user_agent": args.user_agent,
    }
    if args.no_heading_text:
        overrides["include_heading_text"] = False
    if args.no_heading_structure:
        overrides["include_heading_structure"] = False
    if args.no_heading_score:
        overrides["include_heading_score"] = False

    return AnalysisConfig.from_mapping(overrides, base=config)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the analyzer CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(level="INFO" if args.verbose else os.getenv("LOG_LEVEL", "WARNING"))

    try:
        config = config_from_args(args).validate()
        report: Report = run_analysis(config)
    except ConfigError as e:
        parser.error(str(e))
    except AnalysisError as e:
        sys.stderr.write(f"Error: {e}\n")
        return 1

    # Print summary if verbose
    if args.verbose:
        print_summary(report.domain)

    # Output JSON
    json_text = json.dumps(report.to_dict(), ensure_ascii=False, indent=2 if args.pretty else None)

    if args.out == "-":
        print(json_text)
    else:
        # Auto-generate path if not specified
        output_path = Path(args.out) if args.out else generate_output_path(config.start_url)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(json_text, encoding="utf-8")
        if args.verbose:
            sys.stderr.write(f"Report written to: {output_path}\n")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())

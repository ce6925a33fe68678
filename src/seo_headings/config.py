from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Mapping, Optional

from dotenv import load_dotenv

load_dotenv()  # Loads variables from .env file

DEFAULT_USER_AGENT = "Mozilla/5.0 (compatible; SEO-Headings-Analyzer/1.0)"

# Actor / API input keys accepted in addition to the field names.
INPUT_ALIASES = {
    "startUrl": "start_url",
    "crawlUrls": "crawl_urls",
    "maxPages": "max_pages",
    "userAgent": "user_agent",
    "timeout": "timeout_ms",
    "timeoutMs": "timeout_ms",
    "maxRedirects": "max_redirects",
    "includeHeadingText": "include_heading_text",
    "includeHeadingStructure": "include_heading_structure",
    "includeHeadingScore": "include_heading_score",
}


class ConfigError(ValueError):
    """Raised when the analysis input cannot be used."""


@dataclass(frozen=True)
class AnalysisConfig:
    """Input of one analysis run.

    Attributes:
        start_url: Seed URL, required.
        crawl_urls: Follow same-domain links; when off exactly one page is analyzed.
        max_pages: Page budget when crawling.
        user_agent: User-Agent header sent with every request.
        timeout_ms: Per-request timeout in milliseconds.
        max_redirects: Redirects followed per request.
        include_heading_text: Fill ``PageResult.headings`` with texts per level.
        include_heading_structure: Fill ``PageResult.heading_structure``.
        include_heading_score: Fill ``PageResult.heading_score``.
    """
    start_url: Optional[str] = None
    crawl_urls: bool = False
    max_pages: int = 2
    user_agent: str = DEFAULT_USER_AGENT
    timeout_ms: int = 10000
    max_redirects: int = 5
    include_heading_text: bool = True
    include_heading_structure: bool = True
    include_heading_score: bool = True

    @property
    def page_budget(self) -> int:
        return self.max_pages if self.crawl_urls else 1

    def validate(self) -> AnalysisConfig:
        if not self.start_url:
            raise ConfigError("startUrl is required")
        if self.max_pages < 1:
            raise ConfigError(f"max_pages must be at least 1, got {self.max_pages}")
        if self.timeout_ms <= 0:
            raise ConfigError(f"timeout_ms must be positive, got {self.timeout_ms}")
        if self.max_redirects < 0:
            raise ConfigError(f"max_redirects cannot be negative, got {self.max_redirects}")
        return self

    @classmethod
    def from_env(cls, **overrides: Any) -> AnalysisConfig:
        """Load defaults from environment variables, then apply overrides.

        Recognized variables: SEO_HEADINGS_USER_AGENT, SEO_HEADINGS_TIMEOUT_MS,
        SEO_HEADINGS_MAX_REDIRECTS, SEO_HEADINGS_MAX_PAGES.
        """
        defaults = cls()
        config = cls(
            user_agent=os.getenv("SEO_HEADINGS_USER_AGENT", defaults.user_agent),
            timeout_ms=_env_int("SEO_HEADINGS_TIMEOUT_MS", defaults.timeout_ms),
            max_redirects=_env_int("SEO_HEADINGS_MAX_REDIRECTS", defaults.max_redirects),
            max_pages=_env_int("SEO_HEADINGS_MAX_PAGES", defaults.max_pages),
        )
        return replace(config, **overrides)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], base: Optional[AnalysisConfig] = None) -> AnalysisConfig:
        """Build a config from actor-style input (camelCase or field names).

        Keys that are missing or null keep the value from ``base``.
        """
        types = {f.name: f.type for f in fields(cls)}
        values: Dict[str, Any] = {}
        for key, value in data.items():
            name = INPUT_ALIASES.get(key, key)
            if name not in types or value is None:
                continue
            if types[name] == "int":
                try:
                    value = int(value)
                except (TypeError, ValueError) as exc:
                    raise ConfigError(f"{key} must be an integer, got {value!r}") from exc
            elif types[name] == "bool" and not isinstance(value, bool):
                raise ConfigError(f"{key} must be true or false, got {value!r}")
            values[name] = value
        return replace(base or cls(), **values)


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default  # Keep default if conversion fails

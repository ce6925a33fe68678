"""
URL normalization and same-origin helpers used by the crawl loop.
"""
from __future__ import annotations

import logging
import re
from typing import Tuple
from urllib.parse import urlsplit, urlunsplit

logger = logging.getLogger(__name__)

# Pre-defined file extensions to skip (frozen set for O(1) lookup)
SKIP_EXTENSIONS: frozenset[str] = frozenset((
    ".jpg", ".jpeg", ".png", ".gif", ".webp", ".svg",
    ".pdf", ".zip", ".rar", ".7z",
    ".mp4", ".mp3", ".wav", ".webm",
    ".css", ".js", ".map", ".ico",
    ".woff", ".woff2", ".ttf", ".eot",
))

DEFAULT_PORTS = {"http": 80, "https": 443}

_MULTIPLE_SLASHES = re.compile(r"/{2,}")


def normalize_url(url: str) -> str:
    """
    Canonicalize a URL so the same page is only crawled once.

    - Drops fragment and querystring
    - Lowercases scheme and host, removes default ports
    - Collapses repeated slashes in the path
    - Removes the trailing slash except for the root path

    Anything that does not parse as an absolute URL is returned unchanged.
    """
    try:
        parsed = urlsplit(url)
        port = parsed.port
    except ValueError:
        logger.warning("Failed to normalize URL: %s", url)
        return url

    if not parsed.scheme or not parsed.netloc:
        return url

    scheme = parsed.scheme.lower()
    hostname = (parsed.hostname or "").lower()
    if port is None or DEFAULT_PORTS.get(scheme) == port:
        netloc = hostname
    else:
        netloc = f"{hostname}:{port}"
    if parsed.username:
        userinfo = parsed.username
        if parsed.password:
            userinfo = f"{userinfo}:{parsed.password}"
        netloc = f"{userinfo}@{netloc}"

    path = _MULTIPLE_SLASHES.sub("/", parsed.path) or "/"
    if path != "/" and path.endswith("/"):
        path = path[:-1]

    return urlunsplit((scheme, netloc, path, "", ""))


def origin_of(url: str) -> Tuple[str, str]:
    """Return the (scheme, netloc) origin of a URL after normalization."""
    parsed = urlsplit(normalize_url(url))
    return parsed.scheme, parsed.netloc


def origin_string(url: str) -> str:
    scheme, netloc = origin_of(url)
    return f"{scheme}://{netloc}"


def is_local(url: str, start_origin: Tuple[str, str]) -> bool:
    """Check if URL has same scheme and netloc as the start URL."""
    return origin_of(url) == start_origin


def is_asset(url: str) -> bool:
    """Check if the URL path points at a static, non-page file."""
    path_lower = urlsplit(url).path.lower()
    return any(path_lower.endswith(ext) for ext in SKIP_EXTENSIONS)

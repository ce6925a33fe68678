"""
HTTP fetching for the crawl loop.
"""
from __future__ import annotations

import logging
import socket
from dataclasses import dataclass
from typing import Iterator, Optional, Protocol

import requests
from urllib3.exceptions import NameResolutionError

from seo_headings.config import DEFAULT_USER_AGENT

logger = logging.getLogger(__name__)

DEFAULT_HEADERS = {
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.9",
}

# Substrings of low-level socket errors, for causes that only survive as text.
_NOT_FOUND_MARKERS = (
    "name or service not known",
    "nodename nor servname",
    "temporary failure in name resolution",
    "getaddrinfo failed",
    "connection refused",
)
_RESET_MARKERS = ("connection reset", "connection aborted")


@dataclass(frozen=True, slots=True)
class FetchResponse:
    status_code: int
    html: str


class Fetcher(Protocol):
    def __call__(self, url: str) -> FetchResponse:
        ...


class HttpFetcher:
    """GET pages over one requests session.

    Statuses below 500 are returned; 5xx responses raise ``requests.HTTPError``
    and network failures raise the matching ``requests`` exception.
    """

    def __init__(
        self,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout_ms: int = 10000,
        max_redirects: int = 5,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.timeout_s = timeout_ms / 1000
        self.session = session or requests.Session()
        self.session.headers.update(DEFAULT_HEADERS)
        self.session.headers["User-Agent"] = user_agent
        self.session.max_redirects = max_redirects

    def __call__(self, url: str) -> FetchResponse:
        resp = self.session.get(url, timeout=self.timeout_s, allow_redirects=True)
        if resp.status_code >= 500:
            raise requests.HTTPError(
                f"{resp.status_code} Server Error for url: {url}", response=resp
            )
        return FetchResponse(status_code=resp.status_code, html=resp.text)

    def close(self) -> None:
        self.session.close()


def status_for_error(exc: BaseException) -> int:
    """
    Map a per-page failure to the status code recorded for that page.

    - HTTP error responses keep their own status
    - DNS failures and refused connections -> 404
    - Timeouts -> 408
    - Connection resets -> 503
    - Anything else -> 500
    """
    response = getattr(exc, "response", None)
    if isinstance(exc, requests.HTTPError) and response is not None:
        return response.status_code

    if isinstance(exc, requests.Timeout):
        return 408

    causes = list(_causes(exc))
    if any(isinstance(c, ConnectionResetError) for c in causes):
        return 503
    if any(isinstance(c, (socket.gaierror, NameResolutionError, ConnectionRefusedError)) for c in causes):
        return 404
    if any(isinstance(c, socket.timeout) for c in causes):
        return 408

    if isinstance(exc, requests.ConnectionError):
        message = str(exc).lower()
        if any(marker in message for marker in _RESET_MARKERS):
            return 503
        if any(marker in message for marker in _NOT_FOUND_MARKERS):
            return 404

    return 500


def _causes(exc: BaseException) -> Iterator[BaseException]:
    """Walk an exception, its chained causes and wrapped reasons."""
    seen = set()
    stack = [exc]
    while stack:
        current = stack.pop()
        if id(current) in seen:
            continue
        seen.add(id(current))
        yield current

        linked = [current.__cause__, current.__context__, getattr(current, "reason", None)]
        linked.extend(arg for arg in current.args if isinstance(arg, BaseException))
        stack.extend(e for e in linked if isinstance(e, BaseException))

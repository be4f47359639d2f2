"""
Upstream fetcher for the OpenLibrary catalog.

One GET per call, no retries. Non-2xx responses, unparseable bodies and
transport failures each raise a distinct UpstreamError subclass.
"""
import logging
from typing import Any, Optional

import requests

logger = logging.getLogger("upstream")

USER_AGENT = "catalog-proxy/0.1 (+https://openlibrary.org/developers/api)"


class UpstreamError(Exception):
    """Base error for any failed upstream call."""

    def __init__(self, message: str, url: str):
        super().__init__(message)
        self.url = url


class UpstreamStatusError(UpstreamError):
    """Upstream answered with a non-success HTTP status."""

    def __init__(self, status: int, url: str):
        super().__init__(f"OpenLibrary error {status}", url)
        self.status = status


class UpstreamParseError(UpstreamError):
    """Upstream body could not be parsed as JSON."""

    def __init__(self, url: str, reason: str = ""):
        message = "OpenLibrary returned invalid JSON"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message, url)


class UpstreamConnectionError(UpstreamError):
    """The request never produced a response (DNS, refused, reset, timeout)."""

    def __init__(self, url: str, reason: str):
        super().__init__(f"OpenLibrary unreachable: {reason}", url)


class UpstreamFetcher:
    """
    Issues GET requests to the upstream and returns parsed JSON.

    Usage:
        fetcher = UpstreamFetcher()
        data = fetcher.fetch_json("https://openlibrary.org/works/OL45883W.json")
    """

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
    ):
        """
        Args:
            session: Shared connection pool; one is created when omitted
            timeout: Seconds passed to requests; None keeps its default
        """
        if session is None:
            session = requests.Session()
            session.headers["User-Agent"] = USER_AGENT
        self._session = session
        self._timeout = timeout

    def fetch_json(self, url: str) -> Any:
        """
        GET url and parse the body as JSON.

        Raises:
            UpstreamStatusError: status outside 2xx
            UpstreamParseError: body is not JSON
            UpstreamConnectionError: no response was received
        """
        try:
            response = self._session.get(url, timeout=self._timeout)
        except requests.RequestException as e:
            logger.warning(f"Upstream request failed: {url} - {e}")
            raise UpstreamConnectionError(url, str(e)) from e

        if not 200 <= response.status_code < 300:
            logger.warning(f"Upstream status {response.status_code}: {url}")
            raise UpstreamStatusError(response.status_code, url)

        try:
            return response.json()
        except ValueError as e:
            # requests' JSONDecodeError subclasses ValueError
            logger.warning(f"Upstream returned invalid JSON: {url}")
            raise UpstreamParseError(url, str(e)) from e

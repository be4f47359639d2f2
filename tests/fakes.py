"""Test doubles shared across the suite."""
from catalog_proxy.upstream import UpstreamStatusError


class FakeClock:
    """Manually advanced clock, in seconds."""

    def __init__(self, start: float = 0.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance_ms(self, ms: float) -> None:
        self.now += ms / 1000.0


class StubFetcher:
    """Serves canned payloads by URL and records every call."""

    def __init__(self, responses=None):
        self.responses = dict(responses or {})
        self.calls = []

    def fetch_json(self, url):
        self.calls.append(url)
        payload = self.responses.get(url)
        if isinstance(payload, Exception):
            raise payload
        if payload is None:
            raise UpstreamStatusError(404, url)
        return payload

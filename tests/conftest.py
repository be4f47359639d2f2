"""Shared test fixtures."""
import pytest
from fastapi.testclient import TestClient

from catalog_proxy.main import create_app
from config.settings import Settings
from tests.fakes import FakeClock, StubFetcher


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def fetcher():
    return StubFetcher()


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        enable_cache=True,
        cache_ttl_ms=600_000,
        cache_max=500,
        ol_page_size=200,
        base_path="",
        cors_origin="*",
        log_level="info",
        openlibrary_base_url="https://openlibrary.org",
        covers_base_url="https://covers.openlibrary.org",
        editions_limit=50,
    )


@pytest.fixture
def client(settings, fetcher):
    app = create_app(settings, fetcher=fetcher)
    return TestClient(app)

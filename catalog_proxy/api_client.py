"""
OpenLibrary catalog client.
Builds upstream URLs for each proxied query and reads them through the cache.
"""
import logging
from typing import Any, Dict
from urllib.parse import quote

from catalog_proxy.cache import CacheManager

logger = logging.getLogger("api_client")

BASE_URL = "https://openlibrary.org"
COVERS_BASE_URL = "https://covers.openlibrary.org"

# Characters encodeURIComponent leaves alone, beyond quote()'s own "-_.~"
_URI_COMPONENT_SAFE = "!*'()"


def encode_component(value: Any) -> str:
    """Percent-encode one path segment or query value."""
    return quote(str(value), safe=_URI_COMPONENT_SAFE)


class CatalogClient:
    """
    Upstream queries used by the route handlers.

    Every call goes through CacheManager.cached_fetch, so the full upstream
    URL (query string included) is the cache key. Payloads come back in
    the upstream shape; mapping is left to view_models.
    """

    def __init__(
        self,
        cache_manager: CacheManager,
        base_url: str = BASE_URL,
        covers_base_url: str = COVERS_BASE_URL,
    ):
        self.cache_manager = cache_manager
        self.base_url = base_url
        self.covers_base_url = covers_base_url

    # ===== URLS =====

    def author_search_url(self, query: str) -> str:
        return f"{self.base_url}/search/authors.json?q={encode_component(query)}"

    def author_works_url(self, author_key: str, limit: int) -> str:
        return (
            f"{self.base_url}/authors/{encode_component(author_key)}/works.json"
            f"?limit={limit}"
        )

    def work_url(self, work_key: str) -> str:
        return f"{self.base_url}/works/{encode_component(work_key)}.json"

    def work_editions_url(self, work_key: str, limit: int) -> str:
        return (
            f"{self.base_url}/works/{encode_component(work_key)}/editions.json"
            f"?limit={limit}"
        )

    def cover_redirect_url(self, cover: str) -> str:
        """Cover image by edition OLID, e.g. "OL7353617M-L.jpg"."""
        return f"{self.covers_base_url}/b/olid/{encode_component(cover)}"

    # ===== QUERIES =====

    def search_authors(self, query: str) -> Dict[str, Any]:
        """Search authors by name."""
        return self.cache_manager.cached_fetch(self.author_search_url(query))

    def get_author_works(self, author_key: str, limit: int) -> Dict[str, Any]:
        """List works for an author key (OLxxxxxA)."""
        return self.cache_manager.cached_fetch(self.author_works_url(author_key, limit))

    def get_work(self, work_key: str) -> Dict[str, Any]:
        """Work record by work key (OLxxxxxW)."""
        return self.cache_manager.cached_fetch(self.work_url(work_key))

    def get_work_editions(self, work_key: str, limit: int) -> Dict[str, Any]:
        """First page of editions for a work key."""
        return self.cache_manager.cached_fetch(self.work_editions_url(work_key, limit))

    def get_cache_stats(self) -> Dict[str, Any]:
        """Get cache statistics."""
        return self.cache_manager.get_stats()

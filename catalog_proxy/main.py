"""
Catalog Proxy - Main FastAPI Application
Read-through caching proxy in front of the OpenLibrary catalog API
"""
import logging
import time
from typing import Any, Dict, Optional

from fastapi import APIRouter, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse, Response

from catalog_proxy.api_client import CatalogClient
from catalog_proxy.cache import build_cache_manager
from catalog_proxy.upstream import UpstreamError
from catalog_proxy.utils.helpers import parse_leading_int, safe_strip
from catalog_proxy.view_models import (
    authors_to_view_models,
    work_detail_to_view_model,
    works_to_view_models,
)
from config.settings import MAX_PAGE_SIZE, Settings, settings as default_settings

# Version tracking
APP_VERSION = "v0.1.0"
APP_NAME = "Catalog Proxy"

logger = logging.getLogger("catalog_proxy")


def _as_dict(data: Any) -> Dict[str, Any]:
    """Upstream bodies are expected to be JSON objects; anything else reads as empty."""
    return data if isinstance(data, dict) else {}


def resolve_limit(raw_limit: Optional[str], default: int) -> int:
    """Caller limit capped to [1, MAX_PAGE_SIZE]; "10abc" reads as 10, no leading digits uses default."""
    limit = parse_leading_int(raw_limit, default)
    return min(max(limit, 1), MAX_PAGE_SIZE)


def _client(request: Request) -> CatalogClient:
    return request.app.state.catalog


router = APIRouter()


@router.get("/health")
def health_check():
    """Health check endpoint."""
    return {"ok": True}


@router.get("/author")
def search_authors(request: Request, query: Optional[str] = None):
    """
    Search authors by name.

    GET /author?query=terry%20pratchett
    """
    q = safe_strip(query)
    if not q:
        return JSONResponse(status_code=400, content={"error": "Missing query"})

    data = _as_dict(_client(request).search_authors(q))
    return {"authors": authors_to_view_models(data.get("docs"))}


@router.get("/author/{author_key}/works")
def author_works(request: Request, author_key: str, limit: Optional[str] = None):
    """
    List works by author key (OLxxxxxA).

    GET /author/OL25712A/works?limit=200
    """
    client = _client(request)
    page_size = resolve_limit(limit, request.app.state.settings.ol_page_size)

    data = _as_dict(client.get_author_works(author_key, page_size))
    works = works_to_view_models(data.get("entries"), client.covers_base_url)
    total = data.get("size")
    return {
        "authorKey": author_key,
        "works": works,
        "total": total if total is not None else len(works),
    }


@router.get("/work/{work_key}")
def work_detail(request: Request, work_key: str):
    """
    Work detail by work key (OLxxxxxW), with ISBNs gathered from its editions.

    GET /work/OL45883W
    """
    client = _client(request)
    editions_limit = request.app.state.settings.editions_limit

    work = _as_dict(client.get_work(work_key))
    editions = _as_dict(client.get_work_editions(work_key, editions_limit))
    return work_detail_to_view_model(
        work, editions.get("entries"), client.covers_base_url
    )


@router.get("/cover/{cover}")
def cover_redirect(request: Request, cover: str):
    """
    Cover passthrough.

    GET /cover/OL7353617M-L.jpg
    """
    return RedirectResponse(_client(request).cover_redirect_url(cover), status_code=302)


@router.get("/cache/stats")
def cache_stats(request: Request):
    """Get cache statistics."""
    return _client(request).get_cache_stats()


def _upstream_exception_handler(request: Request, exc: UpstreamError) -> JSONResponse:
    """Upstream failures surface as 502 with the upstream message."""
    logger.warning(f"{request.method} {request.url.path} failed upstream: {exc} [{exc.url}]")
    return JSONResponse(status_code=502, content={"error": str(exc)})


def configure_logging(level_name: str) -> None:
    logging.basicConfig(level=getattr(logging, level_name.upper(), logging.INFO))


def create_app(settings: Optional[Settings] = None, fetcher: Any = None) -> FastAPI:
    """
    Build the application.

    Args:
        settings: Configuration; the process-wide settings when omitted
        fetcher: Upstream fetcher override (tests inject a fake here)
    """
    if settings is None:
        settings = default_settings
    configure_logging(settings.log_level)
    verbose_access_log = settings.log_level == "debug"

    app = FastAPI(
        title=APP_NAME,
        description="Caching proxy for the OpenLibrary catalog API",
        version=APP_VERSION,
    )

    cache_manager = build_cache_manager(settings, fetcher)
    app.state.settings = settings
    app.state.catalog = CatalogClient(
        cache_manager,
        base_url=settings.openlibrary_base_url,
        covers_base_url=settings.covers_base_url,
    )

    cors_headers = {
        "Access-Control-Allow-Origin": settings.cors_origin,
        "Access-Control-Allow-Methods": "GET, OPTIONS",
        "Access-Control-Allow-Headers": "Content-Type",
    }

    # Must be registered before CORSMiddleware: full preflights are answered
    # there, every other OPTIONS request gets 204 here.
    @app.middleware("http")
    async def options_no_content(request: Request, call_next):
        if request.method == "OPTIONS":
            return Response(status_code=204, headers=cors_headers)
        return await call_next(request)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.cors_origin],
        allow_methods=["GET", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    @app.middleware("http")
    async def access_log(request: Request, call_next):
        start_time = time.time()
        response = await call_next(request)
        duration_ms = (time.time() - start_time) * 1000

        line = f"{request.method} {request.url.path} {response.status_code} {duration_ms:.1f} ms"
        if verbose_access_log and request.client:
            line = f"{request.client.host} {line}"
        logger.info(line)
        return response

    app.add_exception_handler(UpstreamError, _upstream_exception_handler)
    app.include_router(router, prefix=settings.base_path)

    logger.info(
        f"{APP_NAME} {APP_VERSION} base='{settings.base_path or '/'}' "
        f"cache={'on' if cache_manager.enabled else 'off'}"
    )
    return app


app = create_app()

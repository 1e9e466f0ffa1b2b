"""Entry point for the FastAPI-powered Stremio addon."""

from __future__ import annotations

import logging
from contextlib import AsyncExitStack, asynccontextmanager
from typing import Any

import httpx
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import settings
from .services.catalog_service import MANIFEST_VERSION, CatalogService
from .services.tmdb import TMDBClient
from .utils import merge_extra, parse_extra_segment

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)

app: FastAPI


@asynccontextmanager
async def lifespan(fastapi_app: FastAPI):
    exit_stack = AsyncExitStack()
    tmdb_http_client = await exit_stack.enter_async_context(
        httpx.AsyncClient(
            base_url=str(settings.tmdb_api_url),
            timeout=httpx.Timeout(settings.tmdb_timeout_seconds, connect=5.0),
        )
    )
    try:
        tmdb = TMDBClient(settings, tmdb_http_client)
    except ValueError:
        logger.error("TMDB_API_KEY is not set; refusing to start")
        await exit_stack.aclose()
        raise

    catalog_service = CatalogService(settings, tmdb)
    fastapi_app.state.catalog_service = catalog_service

    addon_url = str(settings.addon_url or f"http://localhost:{settings.server_port}")
    logger.info(
        "%s v%s started with %s catalogs, manifest at %s/manifest.json",
        settings.app_name,
        MANIFEST_VERSION,
        len(catalog_service.definitions),
        addon_url.rstrip("/"),
    )

    try:
        yield
    finally:  # pragma: no cover - teardown path exercised at runtime
        await exit_stack.aclose()


def create_app() -> FastAPI:
    fastapi_app = FastAPI(
        title=settings.app_name,
        description="TMDB-powered catalogs for Stremio",
        version=MANIFEST_VERSION,
        lifespan=lifespan,
    )

    fastapi_app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    register_routes(fastapi_app)
    return fastapi_app


def get_catalog_service(app: FastAPI) -> CatalogService:
    service = getattr(app.state, "catalog_service", None)
    if not isinstance(service, CatalogService):
        raise RuntimeError("Catalog service not initialised")
    return service


def register_routes(fastapi_app: FastAPI) -> None:
    async def _catalog_endpoint(
        content_type: str,
        catalog_id: str,
        extra: dict[str, str],
    ) -> JSONResponse:
        service = get_catalog_service(fastapi_app)
        payload = await service.get_catalog_payload(content_type, catalog_id, extra)
        return JSONResponse(payload)

    @fastapi_app.get("/healthz")
    async def healthcheck() -> dict[str, str]:
        return {"status": "ok"}

    @fastapi_app.get("/manifest.json")
    async def manifest() -> dict[str, Any]:
        return get_catalog_service(fastapi_app).manifest()

    @fastapi_app.get("/catalog/{content_type}/{catalog_id}.json")
    async def catalog(request: Request, content_type: str, catalog_id: str) -> JSONResponse:
        extra = dict(request.query_params)
        return await _catalog_endpoint(content_type, catalog_id, extra)

    @fastapi_app.get("/catalog/{content_type}/{catalog_id}/{extra_segment}")
    async def catalog_with_extra(
        request: Request, content_type: str, catalog_id: str, extra_segment: str
    ) -> JSONResponse:
        extra = merge_extra(
            dict(request.query_params), parse_extra_segment(extra_segment)
        )
        return await _catalog_endpoint(content_type, catalog_id, extra)


app = create_app()


if __name__ == "__main__":  # pragma: no cover - manual execution
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.server_host,
        port=settings.server_port,
        reload=settings.environment == "development",
    )

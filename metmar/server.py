"""FastAPI apps serving normalized forecasts and the gale warning plot.

Usage:
    metmar serve --http :5000
    metmar gale data/forecasts --http :5001
"""

import logging
from pathlib import Path

from fastapi import APIRouter, FastAPI, Request
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import HTMLResponse, PlainTextResponse, Response
from fastapi.staticfiles import StaticFiles

from metmar.config.schema import MetmarConfig
from metmar.gale.extractor import extract_warnings
from metmar.gale.series import render_gale_page
from metmar.ingest.forecast_fetcher import ForecastFetcher
from metmar.ingest.meteo_client import MeteoClient
from metmar.models.errors import MetmarError
from metmar.reporting.area_index import format_area_index
from metmar.reporting.fingerprint import fingerprint

logger = logging.getLogger(__name__)

TEXT_PLAIN = "text/plain; charset=utf-8"
TEXT_HTML = "text/html; charset=utf-8"


def build_fetcher(config: MetmarConfig) -> ForecastFetcher:
    client = MeteoClient(
        user_agent=config.source.user_agent,
        timeout=config.source.timeout_seconds,
    )
    return ForecastFetcher(client, config.source)


def conditional_response(request: Request, body: str, media_type: str) -> Response:
    """Serve body with its fingerprint as ETag, or 304 if the client has it."""
    etag = fingerprint(body)
    headers = {"ETag": etag}
    if request.headers.get("if-none-match") == etag:
        return Response(status_code=304, headers=headers)
    return Response(content=body, media_type=media_type, headers=headers)


async def _error_response(request: Request, exc: MetmarError) -> Response:
    logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    return PlainTextResponse(f"error: {exc}\n", status_code=500)


def create_app(
    config: MetmarConfig, fetcher: ForecastFetcher | None = None
) -> FastAPI:
    """Forecast service: area index and one plain-text report per area."""
    if fetcher is None:
        fetcher = build_fetcher(config)

    app = FastAPI(title="Marine weather forecasts", version="0.1.0")
    app.add_middleware(GZipMiddleware)
    app.add_exception_handler(MetmarError, _error_response)
    router = APIRouter()

    @router.get("/")
    def serve_areas(request: Request):
        """HTML list of links, one per available report."""
        page = format_area_index(fetcher.fetch_all())
        return conditional_response(request, page, TEXT_HTML)

    @router.get("/areas/{forecast_id}")
    def serve_forecast(forecast_id: str, request: Request):
        """Normalized plain-text report of one area."""
        forecast = fetcher.fetch_one(forecast_id)
        return conditional_response(request, forecast.content, TEXT_PLAIN)

    app.include_router(router, prefix=config.server.prefix)
    return app


def create_gale_app(config: MetmarConfig) -> FastAPI:
    """Gale plot service: warning numbers vs day of the year."""
    template = Path(config.gale.template_path).read_text(encoding="utf-8")
    forecast_dir = config.gale.forecast_dir
    prefix = config.server.prefix

    app = FastAPI(title="Gale warnings", version="0.1.0")
    app.add_exception_handler(MetmarError, _error_response)
    router = APIRouter()

    @router.get("/")
    def serve_gale_warnings():
        warnings = extract_warnings(forecast_dir)
        return HTMLResponse(render_gale_page(template, warnings))

    app.include_router(router, prefix=prefix)
    app.mount(
        f"{prefix}/scripts",
        StaticFiles(directory=config.gale.static_dir),
        name="scripts",
    )
    return app

"""
FastAPI JSON service exposing the lookup pipeline.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict, List, Optional

import structlog
from fastapi import Depends, FastAPI, Query, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from favgrab import __version__
from favgrab.config import Config, load_config
from favgrab.extractor.models import ErrorKind
from favgrab.i18n import Localizer
from favgrab.observability import export_prometheus
from favgrab.pipeline import LookupPipeline
from favgrab.relay import PageFetcher, RelayClient
from favgrab.sites import EXAMPLE_SITES

logger = structlog.get_logger(__name__)

_ERROR_STATUS = {
    ErrorKind.INPUT_REQUIRED: status.HTTP_400_BAD_REQUEST,
    ErrorKind.INVALID_URL: status.HTTP_400_BAD_REQUEST,
    ErrorKind.FETCH_FAILED: status.HTTP_502_BAD_GATEWAY,
}


def create_app(config: Optional[Config] = None, fetcher: Optional[PageFetcher] = None) -> FastAPI:
    """Build the web application.

    Args:
        config: Settings to use; loaded from the working directory when omitted.
        fetcher: Page fetcher to use instead of a relay client owned by the app.
    """
    config = config or load_config()
    localizer = Localizer(config.locale.default, config.locale.fallback)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        relay: Optional[RelayClient] = None
        page_fetcher = fetcher
        if page_fetcher is None:
            relay = RelayClient(config.relay)
            await relay.initialize()
            page_fetcher = relay
        app.state.pipeline = LookupPipeline(page_fetcher, localizer)
        logger.info("favgrab web service started", relay=config.relay.endpoint)

        yield

        if relay is not None:
            await relay.close()
        logger.info("favgrab web service stopped")

    app = FastAPI(title="favgrab", version=__version__, lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET"],
        allow_headers=["Content-Type"],
    )

    def get_pipeline(request: Request) -> LookupPipeline:
        return request.app.state.pipeline

    @app.get("/api/lookup")
    async def lookup(
        url: str = Query(default="", description="Website address as typed by the user"),
        locale: Optional[str] = Query(default=None),
        pipeline: LookupPipeline = Depends(get_pipeline),
    ) -> JSONResponse:
        outcome = await pipeline.run(url, locale=locale)
        status_code = _ERROR_STATUS[outcome.error] if outcome.error else status.HTTP_200_OK
        return JSONResponse(outcome.to_dict(), status_code=status_code)

    @app.get("/api/examples")
    async def examples() -> List[Dict[str, str]]:
        return [site._asdict() for site in EXAMPLE_SITES]

    @app.get("/api/locales")
    async def locales() -> Dict[str, Any]:
        return {"default": localizer.locale, "available": Localizer.available()}

    @app.get("/health")
    async def health() -> Dict[str, str]:
        return {"status": "healthy", "version": __version__}

    @app.get("/metrics")
    async def metrics() -> PlainTextResponse:
        """Endpoint for Prometheus to scrape."""
        return PlainTextResponse(export_prometheus())

    return app

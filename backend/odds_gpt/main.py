"""
backend/odds_gpt/main.py

Purpose:
    FastAPI application factory: settings wiring, middleware, routers and
    exception handlers that keep every error body inside the envelope.

Dependencies:
    - odds_gpt.config
    - odds_gpt.providers.odds_api
    - odds_gpt.routers
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from odds_gpt.config import SERVICE_NAME, Settings, settings as default_settings
from odds_gpt.middleware.cors import PreflightCORSMiddleware
from odds_gpt.middleware.logging import StructuredLoggingMiddleware, setup_logging
from odds_gpt.models.envelope import failure
from odds_gpt.providers.odds_api import TheOddsAPIForwarder
from odds_gpt.routers.meta import router as meta_router
from odds_gpt.routers.odds import router as odds_router

logger = logging.getLogger("odds_gpt")


@asynccontextmanager
async def lifespan(app: FastAPI):
    cfg: Settings = app.state.settings
    setup_logging(cfg.LOG_LEVEL)
    if not cfg.auth_enabled:
        logger.warning("BACKEND_API_KEY not set: /api routes are open to any caller")
    if not cfg.ODDS_API_KEY:
        logger.warning("ODDS_API_KEY not set: proxy routes will fail until it is configured")
    logger.info("%s ready on port %d", SERVICE_NAME, cfg.PORT)
    yield


def create_app(
    settings: Settings | None = None,
    forwarder: TheOddsAPIForwarder | None = None,
) -> FastAPI:
    cfg = settings or default_settings

    app = FastAPI(
        title=SERVICE_NAME,
        description="Proxy for TheOddsAPI with server-side credentials",
        version="1.0.0",
        lifespan=lifespan,
        # /openapi.json is served by routers.meta instead.
        openapi_url=None,
        docs_url=None,
        redoc_url=None,
    )
    app.state.settings = cfg
    app.state.forwarder = forwarder or TheOddsAPIForwarder(cfg)

    # CORS
    app.add_middleware(
        PreflightCORSMiddleware,
        allow_origins=cfg.cors_origins,
        allow_methods=["GET", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "X-API-Key"],
        expose_headers=["X-Request-ID", "X-Requests-Remaining", "X-Requests-Used", "X-Requests-Last"],
    )

    # Structured logging
    app.add_middleware(StructuredLoggingMiddleware)

    app.include_router(meta_router)
    app.include_router(odds_router)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content=failure(str(exc.detail)),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        logger.warning("Validation error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=422, content=failure("Invalid request."))

    return app


app = create_app()

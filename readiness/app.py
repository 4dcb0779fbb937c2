import logging
import time
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from readiness.application import AnalysisService
from readiness.core.settings import Settings
from readiness.domain.errors import ReadinessError, ValidationError
from readiness.infrastructure import GeminiClient, TextGenerator
from readiness.routes import analyze, health, incident
from readiness.routes.envelope import failure

logger = logging.getLogger(__name__)

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "no-referrer",
    "Content-Security-Policy": "default-src 'self'; connect-src 'self' https://generativelanguage.googleapis.com",
}
HSTS_HEADER = "max-age=31536000; includeSubDomains; preload"


def create_app(
    settings: Settings | None = None,
    *,
    http_client: httpx.Client | None = None,
    generator: TextGenerator | None = None,
) -> FastAPI:
    settings = settings or Settings.from_env()

    if generator is None:
        generator = GeminiClient(
            settings.gemini_api_key,
            model=settings.gemini_model,
            api_base=settings.gemini_api_base,
            timeout=settings.request_timeout,
            max_retries=settings.max_retries,
            retry_base_delay=settings.retry_base_delay,
            http_client=http_client,
        )

    @asynccontextmanager
    async def lifespan(_: FastAPI):
        logger.info("Proxy starting (%s), API key configured: %s", settings.environment, settings.has_api_key)
        yield
        close = getattr(generator, "close", None)
        if callable(close):
            close()

    app = FastAPI(title="Production Readiness Analyzer API", version="0.1.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.analysis_service = AnalysisService(generator, parse_failure_mode=settings.parse_failure_mode)

    if settings.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=list(settings.cors_origins),
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    @app.exception_handler(ReadinessError)
    async def handle_readiness_error(request: Request, exc: ReadinessError) -> JSONResponse:
        logger.error("%s on %s %s: %s", exc.error_type, request.method, request.url.path, exc)
        body = failure(request, exc.public_message, message=str(exc), error_type=exc.error_type)
        return JSONResponse(body, status_code=exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def handle_malformed_body(request: Request, exc: RequestValidationError) -> JSONResponse:
        body = failure(
            request,
            ValidationError.public_message,
            message="Request body must be a JSON object",
            error_type=ValidationError.error_type,
        )
        return JSONResponse(body, status_code=ValidationError.status_code)

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        request.state.started_at = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as exc:
            logger.exception("Unhandled error on %s %s", request.method, request.url.path)
            body = failure(request, ReadinessError.public_message, message=str(exc), error_type=ReadinessError.error_type)
            response = JSONResponse(body, status_code=500)

        for header, value in SECURITY_HEADERS.items():
            response.headers.setdefault(header, value)
        if settings.is_production:
            response.headers.setdefault("Strict-Transport-Security", HSTS_HEADER)

        elapsed_ms = (time.perf_counter() - request.state.started_at) * 1000
        logger.info("%s %s %d %.0fms", request.method, request.url.path, response.status_code, elapsed_ms)
        return response

    app.include_router(health.router)
    app.include_router(analyze.router, prefix="/api")
    app.include_router(incident.router, prefix="/api")

    @app.get("/", include_in_schema=False)
    async def root() -> JSONResponse:
        """Provide a lightweight landing page for container checks."""
        return JSONResponse(
            {
                "message": "Production Readiness Analyzer API",
                "docs": "/docs",
                "health": "/health",
            }
        )

    return app


app = create_app()

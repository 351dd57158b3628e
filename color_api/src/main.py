"""
FastAPI application entry point for the Color Lookup Service.

This module provides the main FastAPI application with:
- Color lookup routes (HTML and JSON)
- Health and readiness endpoints
- Request logging with correlation IDs
- Prometheus metrics
- OpenTelemetry distributed tracing
- Security headers and optional CORS
- Graceful startup and shutdown
"""

import uvicorn
import structlog
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Dict, Any, Optional

from fastapi import FastAPI, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
from prometheus_client import CONTENT_TYPE_LATEST, CollectorRegistry

from color_api.src.config import get_settings, Settings
from color_api.src.middleware import RequestLoggingMiddleware, SecurityHeadersMiddleware
from color_api.src.routers import colors_router, css_router
from color_api.src.services.color_resolver import (
    ColorNameResolver,
    PillowColorNameResolver,
    ResolverUnavailableError,
    UnknownColorNameError,
)
from color_api.src.services.color_service import ColorLookupService
from shared.logging import configure_logging
from shared.metrics import ColorServiceMetrics, get_metrics_handler
from shared.tracing import configure_tracing

logger = structlog.get_logger(__name__)


# ============================================================================
# Lifespan Management
# ============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan manager for startup and shutdown events.

    Handles:
    - OpenTelemetry tracing setup
    - Color resolver and lookup service initialization
    - Graceful shutdown and resource cleanup
    """
    settings: Settings = app.state.settings
    tracer_provider = None

    logger.info(
        "application_starting",
        app_name=settings.app_name,
        version=settings.app_version,
        environment=settings.environment
    )

    try:
        if settings.tracing_enabled:
            logger.info("initializing_tracing", endpoint=settings.tracing_otlp_endpoint)
            tracer_provider = configure_tracing(
                service_name=settings.app_name,
                otlp_endpoint=settings.tracing_otlp_endpoint,
                sampling_rate=settings.tracing_sample_rate,
                service_version=settings.app_version,
            )

        resolver = app.state.color_resolver
        if resolver is None:
            logger.info("initializing_color_resolver")
            try:
                resolver = PillowColorNameResolver()
            except ResolverUnavailableError as e:
                # Keep serving; lookups answer 503 and /ready reports not_ready.
                logger.error("color_resolver_init_failed", reason=e.reason)

        if resolver is not None:
            app.state.color_service = ColorLookupService(resolver, app.state.metrics)

        logger.info(
            "application_started",
            app_name=settings.app_name,
            version=settings.app_version,
            environment=settings.environment
        )
        logger.info("serving_at", url=settings.serving_url)

        yield

    except Exception as e:
        logger.error("application_startup_failed", error=str(e), exc_info=True)
        raise

    finally:
        logger.info("application_shutting_down")
        app.state.color_service = None

        if tracer_provider is not None:
            logger.info("shutting_down_tracing")
            tracer_provider.shutdown()

        logger.info("application_shutdown_complete")


# ============================================================================
# Exception Handlers
# ============================================================================

async def unknown_color_handler(request: Request, exc: UnknownColorNameError):
    """Handle lookups for names the resolver does not know."""
    logger.warning(
        "unknown_color_name",
        path=request.url.path,
        name=exc.name
    )
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"detail": str(exc), "error_code": "COLOR_NOT_FOUND"}
    )


async def resolver_unavailable_handler(request: Request, exc: ResolverUnavailableError):
    """Handle resolver failures without taking the process down."""
    logger.error(
        "resolver_unavailable",
        path=request.url.path,
        reason=exc.reason
    )
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": "Color resolver unavailable", "error_code": "RESOLVER_UNAVAILABLE"}
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle request validation errors."""
    logger.warning(
        "validation_error",
        path=request.url.path,
        errors=exc.errors()
    )
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": exc.errors()}
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Handle HTTP exceptions."""
    logger.warning(
        "http_exception",
        path=request.url.path,
        status_code=exc.status_code,
        detail=exc.detail
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail}
    )


async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions raised outside the request middleware."""
    logger.error(
        "unexpected_exception",
        path=request.url.path,
        error=str(exc),
        exc_info=True
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"}
    )


# ============================================================================
# Application Factory
# ============================================================================

def create_app(
    settings: Optional[Settings] = None,
    resolver: Optional[ColorNameResolver] = None,
    registry: Optional[CollectorRegistry] = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Settings to use (defaults to the cached environment settings)
        resolver: Resolver to use instead of the Pillow-backed default
        registry: Prometheus registry (a fresh one per app by default)

    Returns:
        Configured FastAPI application
    """
    settings = settings or get_settings()

    configure_logging(
        log_level=settings.log_level,
        json_logs=settings.log_format == "json",
        service_name=settings.app_name,
        environment=settings.environment,
    )

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description=(
            "Resolves CSS color names to hex triplets and renders them "
            "as inline-styled HTML headings."
        ),
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
        debug=settings.debug,
    )

    metrics = ColorServiceMetrics(registry or CollectorRegistry())

    app.state.settings = settings
    app.state.metrics = metrics
    app.state.color_resolver = resolver
    app.state.color_service = None

    # ------------------------------------------------------------------------
    # Middleware
    # ------------------------------------------------------------------------

    if settings.cors_enabled:
        logger.info("configuring_cors", origins=settings.cors_origins)
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_origins,
            allow_methods=settings.cors_allow_methods,
        )

    app.add_middleware(
        RequestLoggingMiddleware,
        metrics=metrics if settings.metrics_enabled else None,
    )

    if settings.security_headers_enabled:
        app.add_middleware(SecurityHeadersMiddleware)

    if settings.tracing_enabled:
        from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
        FastAPIInstrumentor.instrument_app(app)

    # ------------------------------------------------------------------------
    # Exception handlers
    # ------------------------------------------------------------------------

    app.add_exception_handler(UnknownColorNameError, unknown_color_handler)
    app.add_exception_handler(ResolverUnavailableError, resolver_unavailable_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    # ------------------------------------------------------------------------
    # Health and readiness endpoints
    # ------------------------------------------------------------------------

    @app.get("/health", tags=["Health"], response_class=JSONResponse)
    async def health_check() -> Dict[str, Any]:
        """
        Health check endpoint.

        Returns basic health status without checking dependencies.
        Use for container health checks.
        """
        return {
            "status": "healthy",
            "service": settings.app_name,
            "version": settings.app_version,
            "environment": settings.environment
        }

    @app.get("/ready", tags=["Health"], response_class=JSONResponse)
    async def readiness_check(request: Request) -> JSONResponse:
        """
        Readiness check endpoint.

        Verifies the color resolver is initialized and answers a probe lookup.
        """
        service: Optional[ColorLookupService] = request.app.state.color_service
        resolver_healthy = service is not None and service.is_ready()
        checks = {"color_resolver": "healthy" if resolver_healthy else "unhealthy"}

        return JSONResponse(
            status_code=status.HTTP_200_OK if resolver_healthy else status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "ready" if resolver_healthy else "not_ready",
                "service": settings.app_name,
                "version": settings.app_version,
                "checks": checks
            }
        )

    # ------------------------------------------------------------------------
    # Metrics endpoint
    # ------------------------------------------------------------------------

    if settings.metrics_enabled:
        metrics_handler = get_metrics_handler(metrics.registry)

        @app.get(settings.metrics_endpoint, tags=["Monitoring"], response_class=PlainTextResponse)
        async def prometheus_metrics() -> Response:
            """Prometheus metrics endpoint."""
            return Response(
                content=metrics_handler(),
                media_type=CONTENT_TYPE_LATEST
            )

    # ------------------------------------------------------------------------
    # Routers
    # ------------------------------------------------------------------------

    app.include_router(css_router)
    app.include_router(colors_router, prefix=settings.api_prefix)

    return app


app = create_app()


# ============================================================================
# Application Entry Point
# ============================================================================

def main() -> None:
    """Run the application with Uvicorn."""
    settings = get_settings()

    logger.info(
        "starting_uvicorn_server",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )

    uvicorn.run(
        "color_api.src.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
        access_log=False,
    )


if __name__ == "__main__":
    main()

"""
SecureChain API application.

Every response carries an ``X-Request-ID`` header, and every error uses the
same envelope as successful responses:

    {"success": false, "error": "<message>", "request_id": "<id>"}
"""

import time
import uuid
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from securechain import __version__
from securechain.config import get_settings
from securechain.routers import analysis, graph, propagation, system
from securechain.storage import GraphSourceError, get_graph_source
from securechain.utils.logging import configure_logging, get_logger

configure_logging()
logger = get_logger(__name__)

API_PREFIX = "/api/v1"


def error_response(request: Request, status_code: int, message: str) -> JSONResponse:
    """Build the error envelope for a request."""
    request_id = getattr(request.state, "request_id", None)
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": message, "request_id": request_id},
        headers={"X-Request-ID": request_id} if request_id else None,
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Load the configured graph once at startup and log its size. An
    unavailable graph is logged but does not stop the service.
    """
    settings = get_settings()
    graph_source = "json" if settings.graph_data_path else "static"

    try:
        graph = get_graph_source().load()
        logger.info(
            "application_startup",
            version=app.version,
            graph_source=graph_source,
            nodes=len(graph.nodes),
            edges=len(graph.edges),
        )
    except GraphSourceError as e:
        logger.warning(
            "application_startup_graph_unavailable",
            version=app.version,
            graph_source=graph_source,
            error=str(e),
        )

    yield

    logger.info("application_shutdown")


def create_app() -> FastAPI:
    """Build the FastAPI application with CORS, request tracing and routers."""
    settings = get_settings()

    app = FastAPI(
        title="SecureChain API",
        description="Supply-chain risk graph exploration and risk propagation",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )

    @app.middleware("http")
    async def request_tracing_middleware(request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = request_id

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=request_id)
        started = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                "request_failed",
                method=request.method,
                path=request.url.path,
                error=str(e),
                exc_info=True,
            )
            return error_response(request, 500, "Internal server error")

        response.headers["X-Request-ID"] = request_id
        logger.info(
            "request_completed",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            duration_ms=round((time.perf_counter() - started) * 1000, 2),
        )
        return response

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return error_response(request, exc.status_code, str(exc.detail))

    @app.get("/health", tags=["System"])
    async def health_check():
        """Liveness check."""
        return {"status": "healthy", "version": app.version}

    app.include_router(graph.router, prefix=f"{API_PREFIX}/graph", tags=["Graph"])
    app.include_router(propagation.router, prefix=f"{API_PREFIX}/propagation", tags=["Propagation"])
    app.include_router(analysis.router, prefix=f"{API_PREFIX}/analysis", tags=["Analysis"])
    app.include_router(system.router, prefix=f"{API_PREFIX}/system", tags=["System"])

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "securechain.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
        log_level=settings.log_level.lower(),
    )

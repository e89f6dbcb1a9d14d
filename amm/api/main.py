"""FastAPI application for the pool engine.

Note: Authentication is not implemented at the application level. Callers
are identified by the ``caller`` field, and deployments plug real
authorization in through the engine's ``authorize`` hook.
"""

import os

import structlog
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from amm import __version__
from amm.api.endpoints import router
from amm.errors import AmmError
from amm.logging_config import configure_logging

logger = structlog.get_logger()

# Configuration from environment variables with sensible defaults
HOST = os.environ.get("AMM_HOST", "0.0.0.0")
PORT = int(os.environ.get("AMM_PORT", "8000"))
DEBUG = os.environ.get("AMM_DEBUG", "false").lower() in ("true", "1", "yes")
LOG_LEVEL = os.environ.get("AMM_LOG_LEVEL", "INFO")

# Maximum request body size (1 MB)
MAX_REQUEST_SIZE = 1024 * 1024

app = FastAPI(
    title="AMM Engine",
    description="Constant-product liquidity pool engine",
    version=__version__,
)


@app.middleware("http")
async def limit_request_size(request: Request, call_next):  # type: ignore[no-untyped-def]
    """Reject requests with body larger than MAX_REQUEST_SIZE."""
    content_length = request.headers.get("content-length")
    if content_length and int(content_length) > MAX_REQUEST_SIZE:
        return JSONResponse(status_code=413, content={"detail": "Request too large"})
    return await call_next(request)


@app.exception_handler(AmmError)
async def handle_amm_error(request: Request, err: AmmError) -> JSONResponse:
    """Map engine errors to their HTTP status and a stable error code."""
    return JSONResponse(
        status_code=err.status_code,
        content={"error": err.code, "detail": str(err)},
    )


@app.exception_handler(Exception)
async def handle_unexpected_error(request: Request, err: Exception) -> JSONResponse:
    """Log unexpected failures with traceback and return a generic 500."""
    logger.exception("unhandled_error", path=request.url.path, method=request.method)
    return JSONResponse(
        status_code=500,
        content={"error": "internal_error", "detail": "Internal server error"},
    )


app.include_router(router)


@app.get("/health")
async def health() -> dict[str, object]:
    """Health check endpoint."""
    return {"status": "ok", "version": __version__}


def run() -> None:
    """Run the engine API server.

    Configuration via environment variables:
    - AMM_HOST: Host to bind to (default: 0.0.0.0)
    - AMM_PORT: Port to bind to (default: 8000)
    - AMM_DEBUG: Enable debug/reload mode (default: false)
    - AMM_LOG_LEVEL: Minimum log level (default: INFO)
    """
    configure_logging(LOG_LEVEL)
    uvicorn.run(
        "amm.api.main:app",
        host=HOST,
        port=PORT,
        reload=DEBUG,
    )


if __name__ == "__main__":
    run()

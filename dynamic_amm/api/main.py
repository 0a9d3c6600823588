"""FastAPI application for the dynamic AMM quote service.

Note: Rate limiting is intentionally not implemented at the application level.
It should be handled at the infrastructure layer (reverse proxy / load balancer).
"""

import os

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from dynamic_amm import __version__
from dynamic_amm.api.endpoints import router

# Configuration from environment variables with sensible defaults
HOST = os.environ.get("DYNAMIC_AMM_HOST", "0.0.0.0")
PORT = int(os.environ.get("DYNAMIC_AMM_PORT", "8000"))
DEBUG = os.environ.get("DYNAMIC_AMM_DEBUG", "false").lower() in ("true", "1", "yes")

# Maximum request body size (1 MB); a quote request is a few KB
MAX_REQUEST_SIZE = 1024 * 1024

app = FastAPI(
    title="Dynamic AMM Quote Service",
    description="Off-chain swap, deposit, withdraw and lock-escrow quotes for dynamic AMM pools",
    version=__version__,
)


@app.middleware("http")
async def limit_request_size(request: Request, call_next):  # type: ignore[no-untyped-def]
    """Reject requests with body larger than MAX_REQUEST_SIZE."""
    content_length = request.headers.get("content-length")
    if content_length and int(content_length) > MAX_REQUEST_SIZE:
        return JSONResponse(status_code=413, content={"detail": "Request too large"})
    return await call_next(request)


app.include_router(router)


@app.get("/health")
async def health() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "ok", "version": __version__}


def run() -> None:
    """Run the quote API server.

    Configuration via environment variables:
    - DYNAMIC_AMM_HOST: Host to bind to (default: 0.0.0.0)
    - DYNAMIC_AMM_PORT: Port to bind to (default: 8000)
    - DYNAMIC_AMM_DEBUG: Enable debug/reload mode (default: false)
    """
    uvicorn.run(
        "dynamic_amm.api.main:app",
        host=HOST,
        port=PORT,
        reload=DEBUG,
    )


if __name__ == "__main__":
    run()

"""FastAPI application for the swap aggregator.

Server settings come from AGGREGATOR_HOST, AGGREGATOR_PORT and
AGGREGATOR_DEBUG; see run().
"""

import os

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from aggregator import __version__
from aggregator.api.endpoints import router

# Route requests carry at most MAX_POOLS snapshots; 1 MB is ample
MAX_REQUEST_SIZE = 1024 * 1024


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() in ("1", "true", "yes")


app = FastAPI(
    title="Swap Aggregator",
    description="Splits a swap into chunks and routes them across constant product pools",
    version=__version__,
)
app.include_router(router)


@app.middleware("http")
async def limit_request_size(request: Request, call_next):  # type: ignore[no-untyped-def]
    """Refuse bodies over MAX_REQUEST_SIZE before they are read."""
    declared = request.headers.get("content-length")
    if declared is not None:
        if not declared.isdigit():
            return JSONResponse(status_code=400, content={"detail": "Invalid Content-Length"})
        if int(declared) > MAX_REQUEST_SIZE:
            return JSONResponse(status_code=413, content={"detail": "Request too large"})
    return await call_next(request)


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok", "version": __version__}


def run() -> None:
    """Serve the API with uvicorn.

    - AGGREGATOR_HOST: bind address (default: 127.0.0.1)
    - AGGREGATOR_PORT: port (default: 8000)
    - AGGREGATOR_DEBUG: auto-reload on code changes (default: off)
    """
    uvicorn.run(
        "aggregator.api.main:app",
        host=os.environ.get("AGGREGATOR_HOST", "127.0.0.1"),
        port=int(os.environ.get("AGGREGATOR_PORT", "8000")),
        reload=_env_flag("AGGREGATOR_DEBUG"),
    )


if __name__ == "__main__":
    run()

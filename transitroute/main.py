from __future__ import annotations

import logging
import os

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from transitroute import __version__
from transitroute.adapters.api.controllers.routes import router as routes_router
from transitroute.domain.exceptions import NetworkDataError

logger = logging.getLogger("uvicorn.error")

app = FastAPI(title="transitroute", version=__version__)
app.include_router(routes_router)


def _reveal_errors() -> bool:
    raw = os.getenv("TRANSITROUTE_REVEAL_ERRORS") or ""
    return raw.strip().lower() in {"1", "true", "yes", "on"}


@app.exception_handler(NetworkDataError)
async def network_data_error_handler(request: Request, exc: NetworkDataError) -> JSONResponse:
    # The timetable could not be loaded; every query would fail the same way.
    logger.error("Network unavailable for %s: %s", request.url.path, exc)
    return JSONResponse(status_code=503, content={"detail": str(exc)})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Report anything else as a JSON 500."""

    logger.exception("Unhandled exception", extra={"path": str(request.url.path)})

    if _reveal_errors() or isinstance(exc, (FileNotFoundError, RuntimeError)):
        detail = str(exc) or exc.__class__.__name__
    else:
        detail = "Internal Server Error"
    return JSONResponse(status_code=500, content={"detail": detail})


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok", "version": __version__}

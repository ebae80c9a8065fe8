"""Error handlers mapping fit engine exceptions to JSON responses."""

import logging

from fastapi import Request
from fastapi.responses import JSONResponse

from services.errors import EmbeddingUnavailable, FitEngineError, InvalidInput

logger = logging.getLogger(__name__)


async def fit_engine_exception_handler(
    request: Request,
    exc: FitEngineError,
) -> JSONResponse:
    """Handle service layer exceptions."""
    status_code = 500
    if isinstance(exc, InvalidInput):
        status_code = 400
        logger.warning("Invalid input in %s: %s", request.url.path, exc)
    elif isinstance(exc, EmbeddingUnavailable):
        status_code = 503
        logger.error("Embedding unavailable in %s: %s", request.url.path, exc)
    else:
        logger.error("Service error in %s: %s", request.url.path, exc, exc_info=True)

    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "error": str(exc),
            "type": exc.__class__.__name__,
        },
    )

import logging
from typing import Optional
from fastapi import HTTPException

logger = logging.getLogger(__name__)


def as_http_500(e: Exception, request_id: Optional[str] = None) -> HTTPException:
    """Log exception and return a generic 500 HTTPException (no internal details leaked).
    Why available: Centralized error handling so API never leaks stack traces or internal state to clients."""
    logger.error(
        "unhandled_error",
        exc_info=e,
        extra={"error_type": type(e).__name__, "request_id": request_id or "unknown"},
    )
    return HTTPException(status_code=500, detail="Internal server error")


def transcript_too_large(size_bytes: int, max_kb: int) -> HTTPException:
    """400 for transcripts over the configured size limit."""
    return HTTPException(
        status_code=400,
        detail=f"Transcript is {size_bytes // 1024} KB; limit is {max_kb} KB.",
    )

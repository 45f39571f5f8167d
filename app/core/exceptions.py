# app/core/exceptions.py
"""
API error types shared across services.

Analytics failures are raised as HTTPException subclasses so that routers
need no translation layer, while still carrying a machine-readable
`error_code` for the console to tell "empty" apart from "error".
"""
import logging

from fastapi import HTTPException, Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class APIError(HTTPException):
    """Base API error with a stable error code."""

    def __init__(
        self,
        status_code: int,
        detail: str,
        error_code: str,
    ):
        super().__init__(status_code=status_code, detail=detail)
        self.error_code = error_code


class InvalidRangeError(APIError):
    """End date before start date, or a half-specified range."""

    def __init__(self, detail: str = "end_date must not be before start_date"):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
            error_code="INVALID_RANGE",
        )


class RepositoryUnavailableError(APIError):
    """
    A collaborator fetch failed.

    The underlying exception is chained as __cause__; callers never get a
    zero-filled result in place of a failed fetch.
    """

    def __init__(self, detail: str = "Order or product data is unavailable"):
        super().__init__(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=detail,
            error_code="REPOSITORY_UNAVAILABLE",
        )


async def handle_api_error(request: Request, exc: APIError) -> JSONResponse:
    """Render APIError subclasses with their error code and request path."""
    logger.warning(
        "%s at %s: %s", exc.error_code, request.url.path, exc.detail
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "detail": exc.detail,
            "error_code": exc.error_code,
            "path": str(request.url.path),
        },
    )

"""Error handling middleware."""

import structlog
from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.exceptions import AppException

logger = structlog.get_logger(__name__)


def _error_response(
    request: Request, status_code: int, error: str, message: str, **extra: object
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "error": error,
            "message": message,
            **extra,
            "path": str(request.url),
        },
    )


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """
    Handle custom application exceptions.

    Args:
        request: Request object
        exc: Application exception

    Returns:
        JSON error response
    """
    if exc.status_code >= 500:
        logger.error("app_exception", error=exc.__class__.__name__, message=exc.message)
    return _error_response(request, exc.status_code, exc.__class__.__name__, exc.message)


async def http_exception_handler(
    request: Request,
    exc: StarletteHTTPException,
) -> JSONResponse:
    """Handle HTTP exceptions."""
    return _error_response(request, exc.status_code, "HTTPException", str(exc.detail))


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """
    Handle request validation errors.

    Returns:
        JSON error response with validation details
    """
    return _error_response(
        request,
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        "ValidationError",
        "Request validation failed",
        details=jsonable_errors(exc),
    )


def jsonable_errors(exc: RequestValidationError) -> list[dict]:
    """Validation errors without the non-serializable exception context."""
    return [{key: value for key, value in err.items() if key != "ctx"} for err in exc.errors()]


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.exception("unhandled_exception", error=str(exc), path=request.url.path)
    return _error_response(
        request,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "InternalServerError",
        "An unexpected error occurred",
    )

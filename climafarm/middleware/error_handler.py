"""
Global error handling middleware.
"""
import logging
from fastapi import Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from typing import Callable

from climafarm.infrastructure.postgrest_client import PostgRESTError


logger = logging.getLogger(__name__)

# PostgreSQL SQLSTATE -> (HTTP status, client message)
SQLSTATE_ERRORS = {
    "23505": (status.HTTP_400_BAD_REQUEST, "Duplicate field value entered"),
    "23503": (status.HTTP_404_NOT_FOUND, "Resource not found"),
    "22P02": (status.HTTP_400_BAD_REQUEST, "Invalid input syntax"),
}


def postgrest_error_response(error: PostgRESTError) -> tuple[int, str]:
    """HTTP status and message for a PostgREST failure."""
    if error.code in SQLSTATE_ERRORS:
        return SQLSTATE_ERRORS[error.code]
    status_code = error.status_code if 400 <= error.status_code < 600 else 500
    return status_code, error.message or "Server Error"


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """
    Global error handling middleware.

    Catches unhandled exceptions and returns them in the
    `{"success": false, "error": ...}` envelope.
    """

    async def dispatch(self, request: Request, call_next: Callable):
        """
        Process the request and handle any exceptions.

        Args:
            request: The incoming request
            call_next: The next middleware or route handler

        Returns:
            Response object
        """
        try:
            response = await call_next(request)
            return response

        except PostgRESTError as e:
            status_code, message = postgrest_error_response(e)
            logger.error(
                f"PostgREST error: {e.message}",
                extra={
                    "path": request.url.path,
                    "method": request.method,
                    "status_code": e.status_code,
                    "sqlstate": e.code,
                }
            )
            return JSONResponse(
                status_code=status_code,
                content={"success": False, "error": message},
            )

        except ValueError as e:
            logger.warning(
                f"Validation error: {str(e)}",
                extra={
                    "path": request.url.path,
                    "method": request.method,
                }
            )
            return JSONResponse(
                status_code=status.HTTP_400_BAD_REQUEST,
                content={"success": False, "error": str(e)},
            )

        except Exception as e:
            logger.exception(
                f"Unhandled exception: {str(e)}",
                extra={
                    "path": request.url.path,
                    "method": request.method,
                }
            )
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={"success": False, "error": "Server Error"},
            )

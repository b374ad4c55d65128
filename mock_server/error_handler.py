"""
Error handling middleware for the mock proof server.

Maps prover exceptions raised by the mock service to HTTP responses with
the same codes a real proof service would use.
"""

import logging

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from remote_prover.exceptions import QueryError, RemoteProverError, SubmissionError

logger = logging.getLogger(__name__)


def status_code_for(error: RemoteProverError) -> int:
    if isinstance(error, SubmissionError):
        return 400
    if isinstance(error, QueryError) and not error.transient:
        return 404
    return 500


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """
    Middleware that catches unhandled exceptions and returns consistent error responses.
    """

    async def dispatch(self, request: Request, call_next):
        try:
            return await call_next(request)

        except RemoteProverError as e:
            status_code = status_code_for(e)
            logger.warning(
                f"{type(e).__name__}: {e.message}",
                extra={"status_code": status_code, "details": e.details},
            )
            return JSONResponse(
                status_code=status_code,
                content={"error": e.message, "details": e.details},
            )

        except Exception as e:
            logger.exception(f"Unhandled exception: {str(e)}")
            return JSONResponse(
                status_code=500,
                content={"error": "Internal server error"},
            )

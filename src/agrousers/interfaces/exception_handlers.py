"""Map identity errors to HTTP responses.

Error response format::

    {"detail": "Human-readable message", "code": "ERROR_KIND"}
"""
import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from agrousers.domain.identity.exceptions import ErrorKind, IdentityError

logger = logging.getLogger(__name__)

ERROR_KIND_TO_STATUS: dict[ErrorKind, int] = {
    ErrorKind.INVALID_FORMAT: status.HTTP_400_BAD_REQUEST,
    ErrorKind.POLICY_VIOLATION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.INVALID_CREDENTIAL: status.HTTP_400_BAD_REQUEST,
    ErrorKind.PASSWORD_UNCHANGED: status.HTTP_400_BAD_REQUEST,
    ErrorKind.UNAUTHORIZED: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.UNAUTHENTICATED: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.INVALID_TOKEN: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.DUPLICATE_KEY: status.HTTP_409_CONFLICT,
    ErrorKind.STORAGE_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def _error_response(status_code: int, message: str, code: str) -> JSONResponse:
    headers = {"WWW-Authenticate": "Bearer"} if status_code == status.HTTP_401_UNAUTHORIZED else None
    return JSONResponse(
        status_code=status_code,
        content={"detail": message, "code": code},
        headers=headers,
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Register the identity error handler on the application."""

    @app.exception_handler(IdentityError)
    async def identity_error_handler(request: Request, exc: IdentityError) -> JSONResponse:
        status_code = ERROR_KIND_TO_STATUS.get(exc.kind, status.HTTP_400_BAD_REQUEST)

        if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.error(
                "Storage failure on %s %s: %s",
                request.method,
                request.url.path,
                exc.message,
                exc_info=exc,
            )
            return _error_response(status_code, "Internal Server Error", exc.kind.value)

        logger.warning(
            "Identity error on %s %s: %s (code=%s)",
            request.method,
            request.url.path,
            exc.message,
            exc.kind.value,
        )
        return _error_response(status_code, exc.message, exc.kind.value)

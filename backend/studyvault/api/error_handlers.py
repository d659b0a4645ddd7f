"""Error Handlers — global exception handlers for the StudyVault API.

Invariants:
    - StudyVaultError → {"error": <public message>} with the error's status
    - RequestValidationError (malformed JSON, non-object body) → 400
    - Exception (catch-all) → 500, never leaks internal details

Design Decisions:
    - Three-layer handler: domain (StudyVaultError), validation (Pydantic), catch-all (Exception)
    - Log level follows severity: expected 4xx at warning/info, 5xx at error
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from studyvault.core.errors import (
    INTERNAL_ERROR_MESSAGE, ErrorSeverity, StudyVaultError,
)
from studyvault.core.validation import INVALID_BODY_MESSAGE

logger = logging.getLogger(__name__)

_LOG_LEVELS = {
    ErrorSeverity.INFO: logging.INFO,
    ErrorSeverity.WARNING: logging.WARNING,
    ErrorSeverity.ERROR: logging.ERROR,
    ErrorSeverity.CRITICAL: logging.ERROR,
}


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_domain_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_domain_error_handler(app: FastAPI) -> None:
    """Register StudyVault domain/infrastructure error handler."""

    @app.exception_handler(StudyVaultError)
    async def studyvault_error_handler(request: Request, exc: StudyVaultError):
        """Handle all StudyVault domain/infrastructure errors."""
        logger.log(
            _LOG_LEVELS[exc.severity],
            f"StudyVaultError: {exc.message}",
            extra={
                "error_code": exc.code,
                "path": request.url.path,
                "owner_id": exc.context.owner_id,
                "resource_id": exc.context.resource_id,
            },
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register Pydantic validation error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle request parsing errors (bad JSON, non-object body)."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": INVALID_BODY_MESSAGE},
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": INTERNAL_ERROR_MESSAGE},
        )

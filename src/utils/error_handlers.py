"""
Error Handler Utilities

Convert caller resolution exceptions into the JSON error contract used by
the API: {"message": "..."} with the exception's status code.

Usage:
    from src.utils.error_handlers import register_exception_handlers

    # In main.py
    register_exception_handlers(app)
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from src.middleware.request_id_middleware import get_request_id
from src.schemas.errors import ErrorMessage
from src.utils.exceptions import (
    AuthenticationError,
    CallerResolutionError,
    MissingCredentialError,
    StoreError,
)

logger = logging.getLogger(__name__)

UNAUTHORIZED_MESSAGE = "Unauthorized"


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorMessage(message=message).model_dump())


async def authentication_error_handler(request: Request, exc: AuthenticationError) -> JSONResponse:
    # The reason stays in the logs; clients only learn that identity was not established
    logger.info(
        "Authentication failed for %s %s: %s", request.method, request.url.path, exc.reason
    )
    return _error_response(exc.status_code, UNAUTHORIZED_MESSAGE)


async def missing_credential_handler(request: Request, exc: MissingCredentialError) -> JSONResponse:
    logger.info("Missing %s credential for %s", exc.slot.value, request.url.path)
    return _error_response(exc.status_code, exc.message)


async def store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
    request_id = get_request_id(request)
    logger.error(
        "Store error on %s %s (request_id=%s, status=%s): %s",
        request.method,
        request.url.path,
        request_id,
        exc.status_code,
        exc.message,
        exc_info=exc,
    )

    try:
        import sentry_sdk

        sentry_sdk.capture_exception(exc)
    except ImportError:
        pass

    return _error_response(exc.status_code, exc.message)


async def caller_resolution_error_handler(
    request: Request, exc: CallerResolutionError
) -> JSONResponse:
    return _error_response(exc.status_code, exc.message)


def register_exception_handlers(app: FastAPI) -> None:
    """Install the handlers for every caller resolution exception."""
    app.add_exception_handler(AuthenticationError, authentication_error_handler)
    app.add_exception_handler(MissingCredentialError, missing_credential_handler)
    app.add_exception_handler(StoreError, store_error_handler)
    app.add_exception_handler(CallerResolutionError, caller_resolution_error_handler)

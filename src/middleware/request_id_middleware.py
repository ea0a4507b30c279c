"""
Request ID Middleware

Generates or accepts a request ID for every API request so log lines of one
request can be correlated.

Usage:
    from src.middleware.request_id_middleware import RequestIDMiddleware

    # In main.py
    app.add_middleware(RequestIDMiddleware)

- Accepts an existing X-Request-ID (or X-Correlation-ID) header if it is safe
- Otherwise generates req_<12 hex chars>
- Attaches the ID to request.state and to the logging context
- Echoes it back in the X-Request-ID response header
"""

import logging
import re
import uuid
from contextvars import ContextVar

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)

# Maximum length for client-supplied request IDs
_MAX_REQUEST_ID_LENGTH = 128

# Control characters enable log injection
_CONTROL_CHARS_RE = re.compile(r"[\x00-\x1f\x7f-\x9f]")

_VALID_REQUEST_ID_RE = re.compile(r"^[a-zA-Z0-9._-]{1,128}$")

request_id_var: ContextVar[str | None] = ContextVar("request_id", default=None)


def normalize_request_id(raw_request_id: str | None) -> str:
    """
    Sanitize a client-supplied request ID or generate a fresh one.

    A supplied ID that still contains anything outside [a-zA-Z0-9._-] after
    stripping control characters is discarded.
    """
    request_id = None
    if raw_request_id:
        sanitized = _CONTROL_CHARS_RE.sub("", raw_request_id)[:_MAX_REQUEST_ID_LENGTH]
        if _VALID_REQUEST_ID_RE.match(sanitized):
            request_id = sanitized
        else:
            logger.debug("Client-supplied request ID failed validation and was replaced")

    if request_id is None:
        return f"req_{uuid.uuid4().hex[:12]}"
    if not request_id.startswith("req_"):
        request_id = f"req_{request_id}"
    return request_id


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Attach a request ID to every request and response."""

    async def dispatch(self, request: Request, call_next):
        request_id = normalize_request_id(
            request.headers.get("X-Request-ID") or request.headers.get("X-Correlation-ID")
        )
        request.state.request_id = request_id
        token = request_id_var.set(request_id)

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                f"Request ID: {request_id} | Error during request processing: {e}",
                exc_info=True,
            )
            raise
        finally:
            request_id_var.reset(token)

        response.headers["X-Request-ID"] = request_id
        return response


def get_request_id(request: Request) -> str | None:
    """Request ID of the current request, if the middleware ran"""
    return getattr(request.state, "request_id", None)

import logging

import httpx
from postgrest.exceptions import APIError

from src.utils.exceptions import StoreError

logger = logging.getLogger(__name__)


def store_error_from(exc: Exception, action: str) -> StoreError:
    """
    Wrap a Supabase/PostgREST failure into a StoreError.

    The status code is taken from the failure when it reports a numeric one.
    PostgREST error codes are usually SQLSTATE or PGRST strings and are ignored.
    """
    status_code = None
    message = None

    if isinstance(exc, APIError):
        message = exc.message
        code = exc.code
        if isinstance(code, int) or (isinstance(code, str) and code.isdigit()):
            status_code = int(code)
    elif isinstance(exc, httpx.HTTPStatusError):
        status_code = exc.response.status_code
    else:
        status_code = getattr(exc, "status", None) or getattr(exc, "status_code", None)
        if not isinstance(status_code, int):
            status_code = None

    logger.error(f"Store failure while {action}: {type(exc).__name__}: {exc}")
    return StoreError(message=message, status_code=status_code)

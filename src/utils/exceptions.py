"""
Caller Resolution Exceptions

Failures raised while establishing who is calling and with what credentials.
Each carries the HTTP status it is surfaced with; the mapping to JSON responses
lives in src.utils.error_handlers.

Usage:
    from src.utils.exceptions import AuthenticationError

    if user_id is None:
        raise AuthenticationError("no session")
"""

from src.schemas.common import ProviderKeySlot

DEFAULT_STORE_ERROR_MESSAGE = "An unexpected error occurred"


class CallerResolutionError(Exception):
    """Base class for identity and credential resolution failures."""

    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class AuthenticationError(CallerResolutionError):
    """Neither a valid service token nor a valid session was presented."""

    status_code = 401

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class Unauthorized(CallerResolutionError):
    """Service-token-only endpoint called without a matching token."""

    status_code = 401

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)


class MissingCredentialError(CallerResolutionError):
    """
    The resolved profile has no usable key for a provider.

    Client-correctable: the caller has to configure the key.
    """

    status_code = 400

    def __init__(self, slot: ProviderKeySlot):
        super().__init__(f"{slot.label} API Key not found")
        self.slot = slot


class StoreError(CallerResolutionError):
    """
    The persistence collaborator failed or returned malformed data.

    status_code is the code reported by the store when it reports a usable one,
    otherwise 500.
    """

    def __init__(self, message: str | None = None, status_code: int | None = None):
        super().__init__(message or DEFAULT_STORE_ERROR_MESSAGE)
        self.status_code = status_code if _is_error_status(status_code) else 500


def _is_error_status(status_code: int | None) -> bool:
    return status_code is not None and 400 <= status_code <= 599

"""
Service token extraction and matching

Callers authenticate programmatically with a single shared secret sent either as
"Authorization: Bearer <token>" or "X-Api-Token: <token>".
"""

import secrets
from collections.abc import Mapping

TOKEN_HEADERS = ("authorization", "x-api-token")
BEARER_PREFIX = "Bearer "


def _get_header(headers: Mapping[str, str], name: str) -> str | None:
    # Starlette Headers are already case-insensitive; plain dicts are not
    value = headers.get(name)
    if value is not None:
        return value
    for key, candidate in headers.items():
        if key.lower() == name:
            return candidate
    return None


def extract_token(headers: Mapping[str, str]) -> str | None:
    """
    Pull the bearer credential out of the request headers.

    The first present header wins, even when its value is empty. A literal
    "Bearer " prefix is stripped; any other value is returned unchanged.

    Args:
        headers: Request headers (Starlette Headers or a plain mapping)

    Returns:
        The token, or None when neither header is present
    """
    for name in TOKEN_HEADERS:
        value = _get_header(headers, name)
        if value is not None:
            if value.startswith(BEARER_PREFIX):
                return value[len(BEARER_PREFIX):]
            return value
    return None


def is_service_token(token: str | None, secret: str | None) -> bool:
    """
    Check a token against the shared service secret.

    Fails closed: an unset or empty secret never matches, not even an empty token.
    Uses constant-time comparison to prevent timing attacks.
    """
    if not secret or token is None:
        return False
    return secrets.compare_digest(token.encode("utf-8"), secret.encode("utf-8"))


def mask_token(token: str | None) -> str:
    """Short prefix of a token that is safe to log"""
    if not token:
        return "<empty>"
    return f"{token[:4]}..." if len(token) > 8 else "***"

"""
Supabase session lookup

Resolves the authenticated user behind a browser session from the Supabase SSR
auth cookie. The cookie is named "sb-<project-ref>-auth-token" and holds the
session as JSON, optionally prefixed with "base64-" and base64url-encoded, and
optionally split across chunk cookies "<name>.0", "<name>.1", ...

Session lifecycle (refresh, expiry) is owned by Supabase; an invalid or expired
access token simply yields no user.
"""

import base64
import binascii
import json
import logging
from collections.abc import Callable, Mapping
from typing import Any
from urllib.parse import unquote, urlparse

from supabase import AuthApiError, Client

from src.config.config import Config
from src.config.supabase_config import get_supabase_client
from src.db.errors import store_error_from

logger = logging.getLogger(__name__)

BASE64_PREFIX = "base64-"
MAX_COOKIE_CHUNKS = 10


def default_auth_cookie_name(supabase_url: str | None) -> str | None:
    """Derive the Supabase SSR cookie name from the project URL."""
    if not supabase_url:
        return None
    host = urlparse(supabase_url).hostname
    if not host:
        return None
    return f"sb-{host.split('.')[0]}-auth-token"


def read_session_cookie(cookies: Mapping[str, str], cookie_name: str) -> str | None:
    """
    Read the raw session cookie value, joining chunk cookies when present.

    Returns:
        The combined cookie value, or None when no cookie is set
    """
    value = cookies.get(cookie_name)
    if value:
        return unquote(value)

    chunks = []
    for index in range(MAX_COOKIE_CHUNKS):
        chunk = cookies.get(f"{cookie_name}.{index}")
        if chunk is None:
            break
        chunks.append(chunk)

    if not chunks:
        return None
    return unquote("".join(chunks))


def parse_access_token(raw_value: str) -> str | None:
    """
    Extract the access token from a serialized Supabase session.

    Handles the base64- prefixed encoding, the JSON object form and the legacy
    JSON array form ([access_token, refresh_token, ...]).
    """
    payload = raw_value
    if payload.startswith(BASE64_PREFIX):
        encoded = payload[len(BASE64_PREFIX):]
        try:
            payload = base64.urlsafe_b64decode(encoded + "=" * (-len(encoded) % 4)).decode("utf-8")
        except (binascii.Error, UnicodeDecodeError, ValueError):
            logger.debug("Session cookie is not valid base64")
            return None

    try:
        session: Any = json.loads(payload)
    except json.JSONDecodeError:
        logger.debug("Session cookie is not valid JSON")
        return None

    token = None
    if isinstance(session, dict):
        token = session.get("access_token")
    elif isinstance(session, list) and session:
        token = session[0]

    return token if isinstance(token, str) and token else None


class SupabaseSessionService:
    """Session collaborator backed by Supabase Auth."""

    def __init__(
        self,
        client_factory: Callable[[], Client] | None = None,
        cookie_name: str | None = None,
    ):
        self._client_factory = client_factory
        self.cookie_name = (
            cookie_name
            or Config.SUPABASE_AUTH_COOKIE_NAME
            or default_auth_cookie_name(Config.SUPABASE_URL)
        )

    def get_authenticated_user(self, cookies: Mapping[str, str]) -> str | None:
        """
        Resolve the user id of the session carried by the request cookies.

        Args:
            cookies: Request cookie jar

        Returns:
            The Supabase auth user id, or None when there is no valid session

        Raises:
            StoreError: If Supabase Auth could not be reached
        """
        if not self.cookie_name:
            logger.warning("Session auth cookie name is not configured; session auth unavailable")
            return None

        raw_value = read_session_cookie(cookies, self.cookie_name)
        if raw_value is None:
            return None

        access_token = parse_access_token(raw_value)
        if access_token is None:
            return None

        try:
            client = (self._client_factory or get_supabase_client)()
            response = client.auth.get_user(access_token)
        except AuthApiError as e:
            logger.info(f"Session token rejected by Supabase Auth: {e.message}")
            return None
        except Exception as e:
            raise store_error_from(e, "validating session token") from e

        user = getattr(response, "user", None) if response is not None else None
        if user is None:
            return None
        return str(user.id)

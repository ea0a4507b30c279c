"""
Caller profile resolution

Single entry point for "who is calling and with what credentials". A request
either carries the shared service token, in which case a synthetic service
caller is used, or a Supabase session, in which case the caller's stored
profile is used. The two paths never combine, and a request with neither
fails; there is no anonymous fallback. Whatever the path, the result goes
through the credential merger exactly once.
"""

import logging
from collections.abc import Callable, Mapping
from datetime import datetime, timezone
from typing import Any, Protocol

from pydantic import ValidationError

from src.config.overrides import ProviderOverrides
from src.constants import (
    SERVICE_CALLER_DISPLAY_NAME,
    SERVICE_CALLER_ID,
    SERVICE_CALLER_USERNAME,
)
from src.db.profiles import get_profile_by_user_id
from src.schemas.profiles import CallerProfile
from src.security.token import extract_token, is_service_token
from src.services.credential_merger import merge_credentials
from src.utils.exceptions import AuthenticationError, StoreError

logger = logging.getLogger(__name__)

ProfileLookup = Callable[[str], dict[str, Any] | None]


class SessionService(Protocol):
    def get_authenticated_user(self, cookies: Mapping[str, str]) -> str | None: ...


def build_service_profile(overrides: ProviderOverrides, now: datetime | None = None) -> CallerProfile:
    """
    Synthesize the service caller skeleton.

    All credential slots are left empty; the merger is the only source of
    secrets for a service caller since it has no stored record.
    """
    return CallerProfile(
        id=SERVICE_CALLER_ID,
        user_id=SERVICE_CALLER_ID,
        username=SERVICE_CALLER_USERNAME,
        display_name=SERVICE_CALLER_DISPLAY_NAME,
        uses_managed_provider=overrides.uses_managed_provider,
        created_at=now or datetime.now(timezone.utc),
        updated_at=None,
        onboarded=True,
        is_service_caller=True,
    )


def resolve_session_profile(
    cookies: Mapping[str, str],
    session_service: SessionService,
    get_profile: ProfileLookup = get_profile_by_user_id,
) -> CallerProfile:
    """
    Resolve the stored profile of the session user.

    Returns:
        The unmerged profile

    Raises:
        AuthenticationError: "no session" or "no profile"
        StoreError: If the session service or the store failed, or the stored
            record is malformed
    """
    user_id = session_service.get_authenticated_user(cookies)
    if not user_id:
        raise AuthenticationError("no session")

    record = get_profile(user_id)
    if record is None:
        raise AuthenticationError("no profile")

    try:
        return CallerProfile.from_record(record)
    except (KeyError, TypeError, ValidationError) as e:
        logger.error(f"Malformed profile record for user {user_id}: {e}")
        raise StoreError(message="Malformed profile record") from e


def resolve_caller_profile(
    headers: Mapping[str, str],
    cookies: Mapping[str, str],
    *,
    overrides: ProviderOverrides,
    session_service: SessionService,
    get_profile: ProfileLookup = get_profile_by_user_id,
) -> CallerProfile:
    """
    Resolve the caller of a request.

    A valid service token takes precedence over any session cookies on the
    same request.

    Args:
        headers: Request headers
        cookies: Request cookies
        overrides: Process-wide override secrets and service token
        session_service: Session collaborator
        get_profile: Store lookup of a profile record by user id

    Returns:
        Merged CallerProfile

    Raises:
        AuthenticationError: If neither a service token nor a session is valid
        StoreError: If a collaborator failed
    """
    token = extract_token(headers)

    if is_service_token(token, overrides.service_token):
        logger.debug("Caller authenticated with service token")
        base = build_service_profile(overrides)
    else:
        base = resolve_session_profile(cookies, session_service, get_profile)
        logger.debug(f"Caller authenticated with session for user {base.user_id}")

    return merge_credentials(base, overrides)

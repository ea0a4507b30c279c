"""
FastAPI Security Dependencies
Dependency injection functions for caller resolution
"""

import logging
from functools import lru_cache

from fastapi import Depends, Request
from starlette.concurrency import run_in_threadpool

from src.config.overrides import ProviderOverrides, get_provider_overrides
from src.db.profiles import get_profile_by_user_id
from src.schemas.profiles import CallerProfile
from src.services.caller_profile import SessionService, resolve_caller_profile
from src.services.session_service import SupabaseSessionService

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_session_service() -> SessionService:
    """Process-wide session collaborator"""
    return SupabaseSessionService()


async def get_caller_profile(
    request: Request,
    overrides: ProviderOverrides = Depends(get_provider_overrides),
    session_service: SessionService = Depends(get_session_service),
) -> CallerProfile:
    """
    Resolve the caller of the current request.

    The Supabase client is synchronous, so resolution runs in the threadpool.

    Raises:
        AuthenticationError: Surfaced as 401 by the registered exception handler
        StoreError: Surfaced with the store's status code
    """
    return await run_in_threadpool(
        resolve_caller_profile,
        request.headers,
        request.cookies,
        overrides=overrides,
        session_service=session_service,
        get_profile=get_profile_by_user_id,
    )

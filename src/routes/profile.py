"""
Caller profile endpoints

Expose the resolved caller to clients without ever serializing a secret:
credentials are reported as configured or not.
"""

import logging

from fastapi import APIRouter, Depends

from src.schemas.common import ProviderKeySlot
from src.schemas.errors import ErrorMessage
from src.schemas.profiles import CallerProfile, CallerProfileView, CredentialCheckResponse
from src.security.deps import get_caller_profile
from src.services.credential_guard import require_credential

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/profile", tags=["profile"])


@router.get(
    "",
    response_model=CallerProfileView,
    responses={401: {"model": ErrorMessage}},
)
async def get_profile(profile: CallerProfile = Depends(get_caller_profile)) -> CallerProfileView:
    """Return the calling user's profile with credential presence flags"""
    return CallerProfileView.from_profile(profile)


@router.get(
    "/credentials/{slot}",
    response_model=CredentialCheckResponse,
    responses={400: {"model": ErrorMessage}, 401: {"model": ErrorMessage}},
)
async def check_credential(
    slot: ProviderKeySlot,
    profile: CallerProfile = Depends(get_caller_profile),
) -> CredentialCheckResponse:
    """
    Check that the caller has a usable key for a provider

    Returns 400 with "<Provider> API Key not found" when it does not.
    """
    require_credential(profile, slot)
    return CredentialCheckResponse(slot=slot, configured=True)

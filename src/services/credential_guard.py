from src.schemas.common import ProviderKeySlot
from src.schemas.profiles import CallerProfile
from src.utils.exceptions import MissingCredentialError


def require_credential(profile: CallerProfile, slot: ProviderKeySlot) -> str:
    """
    Return the caller's key for a provider, failing fast when there is none.

    Call this before dispatching work to a provider.

    Raises:
        MissingCredentialError: If the slot is unset or empty
    """
    value = profile.credential(slot)
    if value is None or value == "":
        raise MissingCredentialError(slot)
    return value

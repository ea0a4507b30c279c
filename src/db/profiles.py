import logging
from typing import Any

from src.config.config import Config
from src.config.supabase_config import get_supabase_client
from src.db.errors import store_error_from
from src.utils.exceptions import StoreError

logger = logging.getLogger(__name__)


def get_profile_by_user_id(user_id: str) -> dict[str, Any] | None:
    """
    Get the profile record of an authenticated user

    Args:
        user_id: Supabase auth user id

    Returns:
        Profile row if found, None otherwise

    Raises:
        StoreError: If the store could not be queried or returned a malformed row
    """
    try:
        client = get_supabase_client()
        result = (
            client.table(Config.SUPABASE_PROFILES_TABLE)
            .select("*")
            .eq("user_id", user_id)
            .limit(1)
            .execute()
        )
    except Exception as e:
        raise store_error_from(e, f"fetching profile for user {user_id}") from e

    rows = result.data or []
    if not rows:
        logger.debug(f"No profile found for user {user_id}")
        return None

    profile = rows[0]
    if (
        not isinstance(profile, dict)
        or profile.get("id") is None
        or profile.get("user_id") is None
    ):
        raise StoreError(message="Malformed profile record")

    return profile

"""
Database layer for the tenant's custom models
"""

import logging
from typing import Any

from src.config.config import Config
from src.config.supabase_config import get_supabase_client
from src.db.errors import store_error_from

logger = logging.getLogger(__name__)

CUSTOM_MODEL_COLUMNS = "id, name, model_id, context_length"


def list_custom_models() -> list[dict[str, Any]]:
    """
    Get all custom models in store order

    Returns:
        List of rows with id, name, model_id and context_length

    Raises:
        StoreError: If the store could not be queried
    """
    try:
        client = get_supabase_client()
        response = client.table(Config.SUPABASE_MODELS_TABLE).select(CUSTOM_MODEL_COLUMNS).execute()
    except Exception as e:
        raise store_error_from(e, "listing custom models") from e

    rows = response.data or []
    logger.debug(f"Fetched {len(rows)} custom models")
    return rows

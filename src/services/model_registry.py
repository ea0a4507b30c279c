"""
Model registry composition

Merges the tenant's custom models with the builtin catalog into the list served
by GET /api/models. Custom models come first, then builtin models, each in
source order. Ids are not de-duplicated across the two lists; when a custom
model shares an id with a builtin one, list order decides display precedence.
"""

import logging
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from pydantic import ValidationError

from src.config.llm_catalog import LLM_LIST, LLMEntry
from src.db.custom_models import list_custom_models
from src.schemas.common import CUSTOM_PROVIDER
from src.schemas.models_catalog import ModelDescriptor
from src.security.token import extract_token, is_service_token, mask_token
from src.utils.exceptions import StoreError, Unauthorized

logger = logging.getLogger(__name__)

CustomModelSource = Callable[[], list[dict[str, Any]]]


def builtin_to_descriptor(entry: LLMEntry) -> ModelDescriptor:
    return ModelDescriptor(
        id=entry.model_id,
        name=entry.model_name,
        provider=entry.provider,
        model_id=entry.model_id,
        context_length=entry.max_context,
    )


def custom_to_descriptor(record: dict[str, Any]) -> ModelDescriptor:
    """Map a custom model row; a row missing required columns is a store error."""
    try:
        return ModelDescriptor(
            id=str(record["id"]),
            name=record["name"],
            provider=CUSTOM_PROVIDER,
            model_id=record["model_id"],
            context_length=record.get("context_length"),
        )
    except (KeyError, TypeError, ValidationError) as e:
        raise StoreError(message="Malformed custom model record") from e


def compose_model_list(
    custom_models: Iterable[dict[str, Any]],
    builtin_models: Iterable[LLMEntry] = LLM_LIST,
) -> list[ModelDescriptor]:
    """
    Concatenate custom then builtin models as descriptors.

    Args:
        custom_models: Custom model rows in store order
        builtin_models: Builtin catalog in catalog order

    Returns:
        Ordered list of ModelDescriptor
    """
    custom = [custom_to_descriptor(record) for record in custom_models]
    builtin = [builtin_to_descriptor(entry) for entry in builtin_models]
    return custom + builtin


def list_models(
    headers: Mapping[str, str],
    service_token: str | None,
    *,
    fetch_custom_models: CustomModelSource = list_custom_models,
    builtin_models: Iterable[LLMEntry] = LLM_LIST,
) -> list[ModelDescriptor]:
    """
    List every model available to a service caller.

    This operation only accepts the service token; session auth is not
    considered. The store is not queried unless the token matches.

    Raises:
        Unauthorized: If the token is missing or does not match
        StoreError: If the custom catalog could not be fetched
    """
    token = extract_token(headers)
    if not is_service_token(token, service_token):
        logger.info(f"Rejected model listing request (token: {mask_token(token)})")
        raise Unauthorized()

    models = compose_model_list(fetch_custom_models(), builtin_models)
    logger.debug(f"Listing {len(models)} models")
    return models

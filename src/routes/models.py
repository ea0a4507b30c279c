"""
Model listing endpoint

GET /api/models returns the tenant's custom models followed by the builtin
catalog. Service-token access only.
"""

import logging

from fastapi import APIRouter, Depends, Request
from starlette.concurrency import run_in_threadpool

from src.config.overrides import ProviderOverrides, get_provider_overrides
from src.db.custom_models import list_custom_models
from src.schemas.errors import ErrorMessage
from src.schemas.models_catalog import ModelDescriptor
from src.services.model_registry import list_models

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get(
    "/api/models",
    tags=["models"],
    response_model=list[ModelDescriptor],
    responses={401: {"model": ErrorMessage}, 500: {"model": ErrorMessage}},
)
async def get_models(
    request: Request,
    overrides: ProviderOverrides = Depends(get_provider_overrides),
) -> list[ModelDescriptor]:
    """
    List custom and builtin models

    Requires "Authorization: Bearer <token>" or "X-Api-Token: <token>" matching
    the configured service token.
    """
    return await run_in_threadpool(
        list_models,
        request.headers,
        overrides.service_token,
        fetch_custom_models=list_custom_models,
    )

"""
Credential merging

Overlays the process-wide override secrets onto a caller profile. An override
that is set always replaces the profile's value; an unset override leaves the
profile's value untouched. The merge is pure and idempotent.
"""

from src.config.overrides import ProviderOverrides
from src.schemas.common import AzureDeploymentSlot, ProviderKeySlot
from src.schemas.profiles import AzureDeployment, CallerProfile


def _prefer_override(override: str | None, base: str | None) -> str | None:
    return override if override else base


def merge_credentials(profile: CallerProfile, overrides: ProviderOverrides) -> CallerProfile:
    """
    Apply override secrets to a profile.

    Covers every ProviderKeySlot, the OpenAI organization id, the Azure endpoint
    and every Azure deployment slot.

    Args:
        profile: Store-backed or synthesized profile
        overrides: Process-wide override secrets

    Returns:
        A new CallerProfile; the input is left unchanged
    """
    credentials = {
        slot: _prefer_override(overrides.api_key(slot), profile.credential(slot))
        for slot in ProviderKeySlot
    }

    azure = profile.azure_deployment
    azure_deployment = AzureDeployment(
        endpoint=_prefer_override(overrides.azure_endpoint, azure.endpoint),
        deployments={
            slot: _prefer_override(overrides.azure_deployment(slot), azure.deployments.get(slot))
            for slot in AzureDeploymentSlot
        },
    )

    return profile.model_copy(
        update={
            "credentials": credentials,
            "organization_id": _prefer_override(overrides.organization_id, profile.organization_id),
            "azure_deployment": azure_deployment,
        }
    )

"""
Process-wide credential overrides

Secrets configured through the environment that take precedence over the
values stored on a caller's profile, plus the shared secret used for
service-token access. Loaded once at startup into an immutable structure.
"""

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from functools import lru_cache
from types import MappingProxyType

from src.schemas.common import AzureDeploymentSlot, ProviderKeySlot, ensure_exhaustive

logger = logging.getLogger(__name__)

SERVICE_TOKEN_ENV_VAR = "CHAT_API_TOKEN"
ORGANIZATION_ID_ENV_VAR = "OPENAI_ORGANIZATION_ID"
AZURE_ENDPOINT_ENV_VAR = "AZURE_OPENAI_ENDPOINT"

PROVIDER_KEY_ENV_VARS: dict[ProviderKeySlot, str] = {
    ProviderKeySlot.OPENAI: "OPENAI_API_KEY",
    ProviderKeySlot.ANTHROPIC: "ANTHROPIC_API_KEY",
    ProviderKeySlot.GOOGLE_GEMINI: "GOOGLE_GEMINI_API_KEY",
    ProviderKeySlot.MISTRAL: "MISTRAL_API_KEY",
    ProviderKeySlot.GROQ: "GROQ_API_KEY",
    ProviderKeySlot.PERPLEXITY: "PERPLEXITY_API_KEY",
    ProviderKeySlot.OPENROUTER: "OPENROUTER_API_KEY",
    ProviderKeySlot.AZURE_OPENAI: "AZURE_OPENAI_API_KEY",
}

AZURE_DEPLOYMENT_ENV_VARS: dict[AzureDeploymentSlot, str] = {
    AzureDeploymentSlot.CHAT_35: "AZURE_GPT_35_TURBO_NAME",
    AzureDeploymentSlot.CHAT_45_VISION: "AZURE_GPT_45_VISION_NAME",
    AzureDeploymentSlot.CHAT_45_TURBO: "AZURE_GPT_45_TURBO_NAME",
    AzureDeploymentSlot.EMBEDDINGS: "AZURE_EMBEDDINGS_NAME",
}

ensure_exhaustive(PROVIDER_KEY_ENV_VARS, ProviderKeySlot, "PROVIDER_KEY_ENV_VARS")
ensure_exhaustive(AZURE_DEPLOYMENT_ENV_VARS, AzureDeploymentSlot, "AZURE_DEPLOYMENT_ENV_VARS")


def _normalize(value: str | None) -> str | None:
    # Values are used verbatim; only an empty string counts as unset
    return value or None


@dataclass(frozen=True)
class ProviderOverrides:
    """Immutable snapshot of the override secrets. Empty values are stored as None."""

    service_token: str | None = None
    api_keys: Mapping[ProviderKeySlot, str | None] = field(
        default_factory=lambda: MappingProxyType({})
    )
    organization_id: str | None = None
    azure_endpoint: str | None = None
    azure_deployments: Mapping[AzureDeploymentSlot, str | None] = field(
        default_factory=lambda: MappingProxyType({})
    )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ProviderOverrides":
        """
        Read every override from an environment mapping.

        Args:
            environ: Mapping to read from (defaults to os.environ)

        Returns:
            ProviderOverrides with one entry per provider key slot and
            per Azure deployment slot
        """
        env = os.environ if environ is None else environ
        return cls(
            service_token=_normalize(env.get(SERVICE_TOKEN_ENV_VAR)),
            api_keys=MappingProxyType(
                {slot: _normalize(env.get(var)) for slot, var in PROVIDER_KEY_ENV_VARS.items()}
            ),
            organization_id=_normalize(env.get(ORGANIZATION_ID_ENV_VAR)),
            azure_endpoint=_normalize(env.get(AZURE_ENDPOINT_ENV_VAR)),
            azure_deployments=MappingProxyType(
                {
                    slot: _normalize(env.get(var))
                    for slot, var in AZURE_DEPLOYMENT_ENV_VARS.items()
                }
            ),
        )

    def api_key(self, slot: ProviderKeySlot) -> str | None:
        return self.api_keys.get(slot)

    def azure_deployment(self, slot: AzureDeploymentSlot) -> str | None:
        return self.azure_deployments.get(slot)

    @property
    def service_token_enabled(self) -> bool:
        return bool(self.service_token)

    @property
    def uses_managed_provider(self) -> bool:
        """A managed Azure deployment is in use when its API key is configured"""
        return bool(self.api_key(ProviderKeySlot.AZURE_OPENAI))

    def configured_slots(self) -> list[str]:
        return [slot.value for slot, value in self.api_keys.items() if value]


@lru_cache(maxsize=1)
def get_provider_overrides() -> ProviderOverrides:
    """Load the overrides from the process environment once and reuse them."""
    overrides = ProviderOverrides.from_env()
    logger.info(
        "Loaded credential overrides (service token %s, provider keys: %s)",
        "enabled" if overrides.service_token_enabled else "disabled",
        ", ".join(overrides.configured_slots()) or "none",
    )
    return overrides

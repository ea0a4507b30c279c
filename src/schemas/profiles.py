"""
Caller profile schemas

CallerProfile is the unified "who is calling and with what credentials" view
handed to downstream handlers. It is built either from a row of the profiles
table or synthesized for a service caller, and is never mutated afterwards.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.schemas.common import AzureDeploymentSlot, ProviderKeySlot, ensure_exhaustive

# Profile table column holding each provider key
PROFILE_KEY_COLUMNS: dict[ProviderKeySlot, str] = {
    ProviderKeySlot.OPENAI: "openai_api_key",
    ProviderKeySlot.ANTHROPIC: "anthropic_api_key",
    ProviderKeySlot.GOOGLE_GEMINI: "google_gemini_api_key",
    ProviderKeySlot.MISTRAL: "mistral_api_key",
    ProviderKeySlot.GROQ: "groq_api_key",
    ProviderKeySlot.PERPLEXITY: "perplexity_api_key",
    ProviderKeySlot.OPENROUTER: "openrouter_api_key",
    ProviderKeySlot.AZURE_OPENAI: "azure_openai_api_key",
}

# Profile table column holding each Azure deployment name
AZURE_DEPLOYMENT_COLUMNS: dict[AzureDeploymentSlot, str] = {
    AzureDeploymentSlot.CHAT_35: "azure_openai_35_turbo_id",
    AzureDeploymentSlot.CHAT_45_VISION: "azure_openai_45_vision_id",
    AzureDeploymentSlot.CHAT_45_TURBO: "azure_openai_45_turbo_id",
    AzureDeploymentSlot.EMBEDDINGS: "azure_openai_embeddings_id",
}

ORGANIZATION_ID_COLUMN = "openai_organization_id"
AZURE_ENDPOINT_COLUMN = "azure_openai_endpoint"

ensure_exhaustive(PROFILE_KEY_COLUMNS, ProviderKeySlot, "PROFILE_KEY_COLUMNS")
ensure_exhaustive(AZURE_DEPLOYMENT_COLUMNS, AzureDeploymentSlot, "AZURE_DEPLOYMENT_COLUMNS")


def _empty_credentials() -> dict[ProviderKeySlot, str | None]:
    return {slot: None for slot in ProviderKeySlot}


def _empty_deployments() -> dict[AzureDeploymentSlot, str | None]:
    return {slot: None for slot in AzureDeploymentSlot}


class AzureDeployment(BaseModel):
    """Azure OpenAI endpoint plus the named deployments behind it"""

    model_config = ConfigDict(frozen=True)

    endpoint: str | None = None
    deployments: dict[AzureDeploymentSlot, str | None] = Field(default_factory=_empty_deployments)

    @field_validator("deployments")
    @classmethod
    def fill_missing_deployments(cls, v):
        return {slot: v.get(slot) for slot in AzureDeploymentSlot}


class CallerProfile(BaseModel):
    """Resolved identity and effective provider configuration of a caller"""

    model_config = ConfigDict(frozen=True)

    id: str
    user_id: str
    username: str = ""
    display_name: str = ""
    bio: str = ""
    profile_context: str = ""
    image_path: str = ""
    image_url: str = ""
    uses_managed_provider: bool = False
    credentials: dict[ProviderKeySlot, str | None] = Field(default_factory=_empty_credentials)
    organization_id: str | None = None
    azure_deployment: AzureDeployment = Field(default_factory=AzureDeployment)
    created_at: datetime | None = None
    updated_at: datetime | None = None
    onboarded: bool = False
    is_service_caller: bool = False

    @field_validator("credentials")
    @classmethod
    def fill_missing_slots(cls, v):
        return {slot: v.get(slot) for slot in ProviderKeySlot}

    def credential(self, slot: ProviderKeySlot) -> str | None:
        return self.credentials.get(slot)

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> "CallerProfile":
        """
        Build a profile from a row of the profiles table.

        Columns that are not part of the profile are ignored and nullable
        text columns are normalized to empty strings.

        Args:
            record: Row as returned by the store

        Returns:
            Unmerged CallerProfile

        Raises:
            KeyError: If id or user_id is missing or null
            ValidationError: If a column holds a value of the wrong type
        """
        for column in ("id", "user_id"):
            if record.get(column) is None:
                raise KeyError(column)

        return cls(
            id=str(record["id"]),
            user_id=str(record["user_id"]),
            username=record.get("username") or "",
            display_name=record.get("display_name") or "",
            bio=record.get("bio") or "",
            profile_context=record.get("profile_context") or "",
            image_path=record.get("image_path") or "",
            image_url=record.get("image_url") or "",
            uses_managed_provider=bool(record.get("use_azure_openai")),
            credentials={
                slot: record.get(column) for slot, column in PROFILE_KEY_COLUMNS.items()
            },
            organization_id=record.get(ORGANIZATION_ID_COLUMN),
            azure_deployment=AzureDeployment(
                endpoint=record.get(AZURE_ENDPOINT_COLUMN),
                deployments={
                    slot: record.get(column) for slot, column in AZURE_DEPLOYMENT_COLUMNS.items()
                },
            ),
            created_at=record.get("created_at"),
            updated_at=record.get("updated_at"),
            onboarded=bool(record.get("has_onboarded")),
        )


class CallerProfileView(BaseModel):
    """Public view of a caller profile. Secrets are reduced to presence flags."""

    id: str
    user_id: str
    username: str
    display_name: str
    bio: str
    profile_context: str
    image_path: str
    image_url: str
    uses_managed_provider: bool
    onboarded: bool
    is_service_caller: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None
    credentials: dict[ProviderKeySlot, bool]
    organization_id_configured: bool
    azure_endpoint_configured: bool
    azure_deployments: dict[AzureDeploymentSlot, bool]

    @classmethod
    def from_profile(cls, profile: CallerProfile) -> "CallerProfileView":
        return cls(
            id=profile.id,
            user_id=profile.user_id,
            username=profile.username,
            display_name=profile.display_name,
            bio=profile.bio,
            profile_context=profile.profile_context,
            image_path=profile.image_path,
            image_url=profile.image_url,
            uses_managed_provider=profile.uses_managed_provider,
            onboarded=profile.onboarded,
            is_service_caller=profile.is_service_caller,
            created_at=profile.created_at,
            updated_at=profile.updated_at,
            credentials={slot: bool(value) for slot, value in profile.credentials.items()},
            organization_id_configured=bool(profile.organization_id),
            azure_endpoint_configured=bool(profile.azure_deployment.endpoint),
            azure_deployments={
                slot: bool(value) for slot, value in profile.azure_deployment.deployments.items()
            },
        )


class CredentialCheckResponse(BaseModel):
    slot: ProviderKeySlot
    configured: bool

from enum import Enum


class ProviderKeySlot(str, Enum):
    """Credential slots for the AI providers a caller can hold a key for."""

    OPENAI = "openai"
    ANTHROPIC = "anthropic"
    GOOGLE_GEMINI = "google_gemini"
    MISTRAL = "mistral"
    GROQ = "groq"
    PERPLEXITY = "perplexity"
    OPENROUTER = "openrouter"
    AZURE_OPENAI = "azure_openai"

    @property
    def label(self) -> str:
        return PROVIDER_LABELS[self]


class AzureDeploymentSlot(str, Enum):
    """Named Azure OpenAI deployments a managed-provider setup can expose."""

    CHAT_35 = "chat_35"
    CHAT_45_VISION = "chat_45_vision"
    CHAT_45_TURBO = "chat_45_turbo"
    EMBEDDINGS = "embeddings"


PROVIDER_LABELS: dict[ProviderKeySlot, str] = {
    ProviderKeySlot.OPENAI: "OpenAI",
    ProviderKeySlot.ANTHROPIC: "Anthropic",
    ProviderKeySlot.GOOGLE_GEMINI: "Google Gemini",
    ProviderKeySlot.MISTRAL: "Mistral",
    ProviderKeySlot.GROQ: "Groq",
    ProviderKeySlot.PERPLEXITY: "Perplexity",
    ProviderKeySlot.OPENROUTER: "OpenRouter",
    ProviderKeySlot.AZURE_OPENAI: "Azure OpenAI",
}

# Provider tag for models that come from the tenant's own catalog
CUSTOM_PROVIDER = "custom"


def ensure_exhaustive(mapping: dict, enum_cls: type[Enum], name: str) -> None:
    """Fail at import time if a slot table is missing a member of its enum."""
    missing = [member.value for member in enum_cls if member not in mapping]
    if missing:
        raise RuntimeError(f"{name} is missing entries for: {', '.join(missing)}")


ensure_exhaustive(PROVIDER_LABELS, ProviderKeySlot, "PROVIDER_LABELS")

"""
Builtin Model Catalog

Models supported out of the box, served by GET /api/models after the tenant's
custom models. The catalog is an immutable tuple built once at import.
To add a builtin model, add an entry to the provider's list below.

max_context is optional; entries without a known context window leave it None
and are listed with a null context_length.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class LLMEntry:
    model_id: str
    model_name: str
    provider: str
    max_context: int | None = None


OPENAI_LLM_LIST = [
    LLMEntry("gpt-4o", "GPT-4o", "openai", max_context=128000),
    LLMEntry("gpt-4-turbo-preview", "GPT-4 Turbo", "openai", max_context=128000),
    LLMEntry("gpt-4-vision-preview", "GPT-4 Vision", "openai", max_context=128000),
    LLMEntry("gpt-4", "GPT-4", "openai", max_context=8192),
    LLMEntry("gpt-3.5-turbo", "GPT-3.5 Turbo", "openai", max_context=16385),
]

ANTHROPIC_LLM_LIST = [
    LLMEntry("claude-3-opus-20240229", "Claude 3 Opus", "anthropic", max_context=200000),
    LLMEntry("claude-3-sonnet-20240229", "Claude 3 Sonnet", "anthropic", max_context=200000),
    LLMEntry("claude-3-haiku-20240307", "Claude 3 Haiku", "anthropic", max_context=200000),
    LLMEntry("claude-2.1", "Claude 2", "anthropic"),
    LLMEntry("claude-instant-1.2", "Claude Instant", "anthropic"),
]

GOOGLE_LLM_LIST = [
    LLMEntry("gemini-1.5-pro-latest", "Gemini 1.5 Pro", "google", max_context=1048576),
    LLMEntry("gemini-pro", "Gemini Pro", "google", max_context=30720),
    LLMEntry("gemini-pro-vision", "Gemini Pro Vision", "google", max_context=12288),
]

MISTRAL_LLM_LIST = [
    LLMEntry("mistral-large-latest", "Mistral Large", "mistral", max_context=32000),
    LLMEntry("mistral-medium-latest", "Mistral Medium", "mistral", max_context=32000),
    LLMEntry("mistral-small-latest", "Mistral Small", "mistral", max_context=32000),
    LLMEntry("open-mistral-7b", "Mistral 7B", "mistral"),
]

GROQ_LLM_LIST = [
    LLMEntry("llama3-70b-8192", "LLaMA3-70b-chat", "groq", max_context=8192),
    LLMEntry("llama3-8b-8192", "LLaMA3-8b-chat", "groq", max_context=8192),
    LLMEntry("mixtral-8x7b-32768", "Mixtral-8x7b-Instruct-v0.1", "groq", max_context=32768),
    LLMEntry("gemma-7b-it", "Gemma-7b-IT", "groq", max_context=8192),
]

PERPLEXITY_LLM_LIST = [
    LLMEntry("sonar-medium-online", "Sonar Medium Online", "perplexity"),
    LLMEntry("sonar-small-online", "Sonar Small Online", "perplexity"),
    LLMEntry("mixtral-8x7b-instruct", "Mixtral 8x7B Instruct", "perplexity"),
]

LLM_LIST: tuple[LLMEntry, ...] = tuple(
    [
        *OPENAI_LLM_LIST,
        *ANTHROPIC_LLM_LIST,
        *GOOGLE_LLM_LIST,
        *MISTRAL_LLM_LIST,
        *GROQ_LLM_LIST,
        *PERPLEXITY_LLM_LIST,
    ]
)

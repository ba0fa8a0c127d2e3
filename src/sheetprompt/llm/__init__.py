"""Model provider clients."""

from .base import ModelClient, DEFAULT_SYSTEM_INSTRUCTIONS, MAX_TOKENS, TEMPERATURE
from .catalog import (
    GENERATION_MODELS,
    SEARCH_MODELS,
    DEFAULT_GENERATION_MODEL,
    DEFAULT_SEARCH_MODEL,
    is_search_model,
)
from .chat_client import ChatCompletionClient, GenerationClient, SearchClient
from .credentials import (
    CredentialSource,
    SettingsCredentials,
    StaticCredentials,
    OPENAI_API_KEY,
    PERPLEXITY_API_KEY,
)

__all__ = [
    "ModelClient",
    "DEFAULT_SYSTEM_INSTRUCTIONS",
    "MAX_TOKENS",
    "TEMPERATURE",
    "GENERATION_MODELS",
    "SEARCH_MODELS",
    "DEFAULT_GENERATION_MODEL",
    "DEFAULT_SEARCH_MODEL",
    "is_search_model",
    "ChatCompletionClient",
    "GenerationClient",
    "SearchClient",
    "CredentialSource",
    "SettingsCredentials",
    "StaticCredentials",
    "OPENAI_API_KEY",
    "PERPLEXITY_API_KEY",
]

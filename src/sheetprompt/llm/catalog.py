"""Known model identifiers."""

GENERATION_MODELS = [
    "gpt-4",
    "gpt-4-turbo",
    "gpt-4o",
    "gpt-4o-mini",
    "gpt-3.5-turbo",
]

SEARCH_MODELS = [
    "llama-3.1-sonar-small-128k-online",
    "llama-3.1-sonar-large-128k-online",
    "llama-3.1-sonar-huge-128k-online",
]

DEFAULT_GENERATION_MODEL = GENERATION_MODELS[0]
DEFAULT_SEARCH_MODEL = SEARCH_MODELS[0]

SEARCH_FAMILY_MARKER = "sonar"


def is_search_model(model: str) -> bool:
    """True for identifiers from the search-augmented (sonar) family."""
    return SEARCH_FAMILY_MARKER in (model or "").lower()

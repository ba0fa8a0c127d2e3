"""Saved prompt library."""

from .library import PromptLibrary, SAVED_PROMPTS_KEY
from .models import PromptSort, SavedPrompt

__all__ = ["PromptLibrary", "PromptSort", "SavedPrompt", "SAVED_PROMPTS_KEY"]

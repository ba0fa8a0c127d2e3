"""Batch prompt dispatch."""

from .dispatcher import BatchDispatcher, build_prompt, classify, SEARCH_CUE, ERROR_MARKER
from .models import ModelType, PromptJob

__all__ = [
    "BatchDispatcher",
    "build_prompt",
    "classify",
    "SEARCH_CUE",
    "ERROR_MARKER",
    "ModelType",
    "PromptJob",
]

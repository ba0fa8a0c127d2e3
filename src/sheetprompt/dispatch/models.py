"""Prompt job models."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict


class ModelType(str, Enum):
    """Kind of model a prompt is sent to."""

    GENERATION = "generation"
    SEARCH = "search"
    IMAGE = "image"


class PromptJob(BaseModel):
    """A classified prompt ready to fan out over input rows."""

    model_config = ConfigDict(protected_namespaces=())

    prompt: str
    system_instructions: Optional[str] = None
    model: str
    model_type: ModelType

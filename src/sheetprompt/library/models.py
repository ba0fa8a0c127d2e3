"""Saved prompt models."""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


def _utc_now() -> datetime:
    """Return current UTC time as timezone-aware datetime."""
    return datetime.now(timezone.utc)


class PromptSort(str, Enum):
    """Orderings offered by the prompt library."""

    NAME = "name"
    CATEGORY = "category"
    NEWEST = "newest"
    OLDEST = "oldest"
    LAST_USED = "lastUsed"


class SavedPrompt(BaseModel):
    """A prompt the user saved for reuse."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    content: str
    category: str = "custom"
    created_at: datetime = Field(default_factory=_utc_now, alias="createdAt")
    last_used: Optional[datetime] = Field(default=None, alias="lastUsed")

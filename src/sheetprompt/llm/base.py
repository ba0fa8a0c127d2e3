"""Base model client interface."""

from abc import ABC, abstractmethod
from typing import Optional

DEFAULT_SYSTEM_INSTRUCTIONS = "You are a helpful assistant."
TEMPERATURE = 0.7
MAX_TOKENS = 1000


class ModelClient(ABC):
    """Abstract base class for model clients."""

    @abstractmethod
    async def complete(
        self,
        prompt: str,
        system_instructions: Optional[str] = None,
        model: Optional[str] = None,
    ) -> str:
        """Send one prompt and return the model's text response."""
        pass

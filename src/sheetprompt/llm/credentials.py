"""Provider credential lookup."""

from abc import ABC, abstractmethod
from typing import Optional

from ..config import Settings, settings as default_settings
from ..errors import CredentialMissingError

OPENAI_API_KEY = "OPENAI_API_KEY"
PERPLEXITY_API_KEY = "PERPLEXITY_API_KEY"


class CredentialSource(ABC):
    """Named secrets, looked up when a call needs them."""

    @abstractmethod
    def get(self, name: str) -> Optional[str]:
        """Return the secret, or None when it is not configured."""

    def require(self, name: str) -> str:
        value = self.get(name)
        if not value:
            raise CredentialMissingError(f"{name} is not configured")
        return value


class SettingsCredentials(CredentialSource):
    """Credentials taken from application settings."""

    def __init__(self, app_settings: Optional[Settings] = None):
        self.settings = app_settings or default_settings

    def get(self, name: str) -> Optional[str]:
        if name == OPENAI_API_KEY:
            return self.settings.openai_api_key
        if name == PERPLEXITY_API_KEY:
            return self.settings.perplexity_api_key
        return None


class StaticCredentials(CredentialSource):
    """Credentials from a plain mapping."""

    def __init__(self, secrets: Optional[dict[str, str]] = None):
        self.secrets = dict(secrets or {})

    def get(self, name: str) -> Optional[str]:
        return self.secrets.get(name)

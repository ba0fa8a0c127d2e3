"""Chat-completion HTTP clients for the generation and search providers."""

import logging
from typing import Optional

import httpx

from ..config import settings
from ..errors import CredentialMissingError, InvalidModelError, ModelError
from .base import DEFAULT_SYSTEM_INSTRUCTIONS, MAX_TOKENS, TEMPERATURE, ModelClient
from .catalog import DEFAULT_GENERATION_MODEL, DEFAULT_SEARCH_MODEL, SEARCH_MODELS

logger = logging.getLogger(__name__)


class ChatCompletionClient(ModelClient):
    """Client for an OpenAI-compatible ``/chat/completions`` endpoint."""

    provider_name = "provider"
    default_model = DEFAULT_GENERATION_MODEL

    def __init__(
        self,
        api_key: Optional[str],
        base_url: str,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout if timeout is not None else settings.request_timeout
        # Tests pass an httpx.MockTransport here
        self._transport = transport

    def validate_model(self, model: str) -> str:
        return model

    def build_payload(
        self, prompt: str, system_instructions: Optional[str], model: str
    ) -> dict:
        return {
            "model": model,
            "messages": [
                {"role": "system", "content": system_instructions or DEFAULT_SYSTEM_INSTRUCTIONS},
                {"role": "user", "content": prompt},
            ],
            "temperature": TEMPERATURE,
            "max_tokens": MAX_TOKENS,
        }

    async def complete(
        self,
        prompt: str,
        system_instructions: Optional[str] = None,
        model: Optional[str] = None,
    ) -> str:
        """Create a completion and return the first choice's text."""
        if not self.api_key:
            raise CredentialMissingError(f"{self.provider_name} API key is not configured")

        model = self.validate_model(model or self.default_model)
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        payload = self.build_payload(prompt, system_instructions, model)

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(
                    f"{self.base_url}/chat/completions",
                    headers=headers,
                    json=payload,
                )
        except httpx.HTTPError as e:
            raise ModelError(f"{self.provider_name} request failed: {e}")

        return self._parse_response(response)

    def _parse_response(self, response: httpx.Response) -> str:
        try:
            data = response.json()
        except ValueError:
            raise ModelError(f"{self.provider_name} returned HTTP {response.status_code}")

        error = data.get("error") if isinstance(data, dict) else None
        if error:
            message = error.get("message") if isinstance(error, dict) else str(error)
            logger.warning(f"{self.provider_name} error: {message}")
            raise ModelError(message or f"{self.provider_name} returned an error")

        if response.status_code >= 400:
            raise ModelError(f"{self.provider_name} returned HTTP {response.status_code}")

        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError):
            raise ModelError(f"{self.provider_name} returned no completion")

        usage = data.get("usage")
        if usage:
            logger.debug(
                f"{self.provider_name} usage: {usage.get('prompt_tokens', 0)} in, "
                f"{usage.get('completion_tokens', 0)} out"
            )
        return content or ""


class GenerationClient(ChatCompletionClient):
    """General-purpose language model (OpenAI chat completions)."""

    provider_name = "OpenAI"
    default_model = DEFAULT_GENERATION_MODEL

    def __init__(self, api_key: Optional[str], base_url: Optional[str] = None, **kwargs):
        super().__init__(api_key, base_url or settings.openai_base_url, **kwargs)


class SearchClient(ChatCompletionClient):
    """Web-search-augmented model (Perplexity sonar online models)."""

    provider_name = "Perplexity"
    default_model = DEFAULT_SEARCH_MODEL

    def __init__(self, api_key: Optional[str], base_url: Optional[str] = None, **kwargs):
        super().__init__(api_key, base_url or settings.perplexity_base_url, **kwargs)

    def validate_model(self, model: str) -> str:
        if model not in SEARCH_MODELS:
            raise InvalidModelError(
                f"Invalid search model: {model}. Expected one of: {', '.join(SEARCH_MODELS)}"
            )
        return model

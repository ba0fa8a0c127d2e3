"""Tests for the chat-completion provider clients."""

import json

import httpx
import pytest

from sheetprompt.errors import CredentialMissingError, InvalidModelError, ModelError
from sheetprompt.llm import GenerationClient, SearchClient


def _transport(captured: list, status: int = 200, body=None, raw: bytes = None):
    def handler(request: httpx.Request) -> httpx.Response:
        captured.append(request)
        if raw is not None:
            return httpx.Response(status, content=raw)
        return httpx.Response(status, json=body)

    return httpx.MockTransport(handler)


def _completion(text: str) -> dict:
    return {
        "choices": [{"message": {"role": "assistant", "content": text}}],
        "usage": {"prompt_tokens": 10, "completion_tokens": 5},
    }


class TestGenerationClient:
    """Tests for GenerationClient."""

    @pytest.mark.asyncio
    async def test_request_shape(self):
        captured = []
        client = GenerationClient(
            "sk-test",
            base_url="https://llm.test/v1",
            transport=_transport(captured, body=_completion("Hi there")),
        )

        result = await client.complete("Write a short greeting", "Be brief.", "gpt-4o")

        assert result == "Hi there"
        request = captured[0]
        assert str(request.url) == "https://llm.test/v1/chat/completions"
        assert request.headers["Authorization"] == "Bearer sk-test"
        payload = json.loads(request.content)
        assert payload == {
            "model": "gpt-4o",
            "messages": [
                {"role": "system", "content": "Be brief."},
                {"role": "user", "content": "Write a short greeting"},
            ],
            "temperature": 0.7,
            "max_tokens": 1000,
        }

    @pytest.mark.asyncio
    async def test_defaults_for_system_and_model(self):
        captured = []
        client = GenerationClient(
            "sk-test", base_url="https://llm.test/v1", transport=_transport(captured, body=_completion("ok"))
        )

        await client.complete("Hello")

        payload = json.loads(captured[0].content)
        assert payload["model"] == "gpt-4"
        assert payload["messages"][0] == {"role": "system", "content": "You are a helpful assistant."}

    @pytest.mark.asyncio
    async def test_missing_key(self):
        client = GenerationClient("", base_url="https://llm.test/v1")
        with pytest.raises(CredentialMissingError):
            await client.complete("Hello")

    @pytest.mark.asyncio
    async def test_provider_error_payload(self):
        captured = []
        body = {"error": {"message": "Rate limit reached", "type": "requests"}}
        client = GenerationClient(
            "sk-test", base_url="https://llm.test/v1", transport=_transport(captured, 429, body)
        )

        with pytest.raises(ModelError, match="Rate limit reached"):
            await client.complete("Hello")

    @pytest.mark.asyncio
    async def test_http_error_without_payload(self):
        client = GenerationClient(
            "sk-test", base_url="https://llm.test/v1", transport=_transport([], 502, raw=b"bad gateway")
        )
        with pytest.raises(ModelError, match="HTTP 502"):
            await client.complete("Hello")

    @pytest.mark.asyncio
    async def test_response_without_choices(self):
        client = GenerationClient(
            "sk-test", base_url="https://llm.test/v1", transport=_transport([], body={"choices": []})
        )
        with pytest.raises(ModelError, match="no completion"):
            await client.complete("Hello")

    @pytest.mark.asyncio
    async def test_transport_failure_becomes_model_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        client = GenerationClient(
            "sk-test", base_url="https://llm.test/v1", transport=httpx.MockTransport(handler)
        )
        with pytest.raises(ModelError, match="request failed"):
            await client.complete("Hello")


class TestSearchClient:
    """Tests for SearchClient."""

    @pytest.mark.asyncio
    async def test_posts_to_search_endpoint(self):
        captured = []
        client = SearchClient(
            "pplx-test",
            base_url="https://search.test",
            transport=_transport(captured, body=_completion("Found it")),
        )

        result = await client.complete(
            "search the web for news", None, "llama-3.1-sonar-large-128k-online"
        )

        assert result == "Found it"
        assert str(captured[0].url) == "https://search.test/chat/completions"
        assert captured[0].headers["Authorization"] == "Bearer pplx-test"
        payload = json.loads(captured[0].content)
        assert payload["temperature"] == 0.7
        assert payload["max_tokens"] == 1000

    @pytest.mark.asyncio
    async def test_default_model(self):
        captured = []
        client = SearchClient(
            "pplx-test", base_url="https://search.test", transport=_transport(captured, body=_completion("x"))
        )
        await client.complete("query")
        assert json.loads(captured[0].content)["model"] == "llama-3.1-sonar-small-128k-online"

    @pytest.mark.asyncio
    async def test_rejects_unknown_model(self):
        captured = []
        client = SearchClient("pplx-test", base_url="https://search.test", transport=_transport(captured))

        with pytest.raises(InvalidModelError):
            await client.complete("query", None, "llama-3.1-sonar-mega-online")
        assert captured == []

    @pytest.mark.asyncio
    async def test_missing_key(self):
        client = SearchClient(None, base_url="https://search.test")
        with pytest.raises(CredentialMissingError):
            await client.complete("query")

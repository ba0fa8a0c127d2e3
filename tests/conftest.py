"""Pytest configuration and shared fixtures."""

import asyncio
from pathlib import Path
from typing import AsyncGenerator, Optional

import pytest
import pytest_asyncio

from sheetprompt.dispatch import BatchDispatcher, ModelType
from sheetprompt.llm import ModelClient, StaticCredentials
from sheetprompt.properties import InMemoryPropertyStore, SQLitePropertyStore, UserPreferences
from sheetprompt.service import PromptProcessor
from sheetprompt.sheets import InMemorySpreadsheet


class FakeModelClient(ModelClient):
    """Model client that echoes prompts and records every call."""

    def __init__(self, delays: Optional[dict[str, float]] = None, fail_on: Optional[dict] = None):
        self.calls: list[dict] = []
        self.delays = delays or {}
        self.fail_on = fail_on or {}

    async def complete(self, prompt, system_instructions=None, model=None) -> str:
        self.calls.append(
            {"prompt": prompt, "system_instructions": system_instructions, "model": model}
        )
        for needle, delay in self.delays.items():
            if needle in prompt:
                await asyncio.sleep(delay)
        for needle, error in self.fail_on.items():
            if needle in prompt:
                raise error
        return f"AI: {prompt}"


@pytest.fixture
def spreadsheet() -> InMemorySpreadsheet:
    """A sheet with a header row and three data rows in column A."""
    return InMemorySpreadsheet(
        {
            "Sheet1": [
                ["Text", "Result"],
                ["Hello"],
                ["World"],
                ["Again"],
            ],
            "Empty": [],
        }
    )


@pytest.fixture
def property_store() -> InMemoryPropertyStore:
    return InMemoryPropertyStore()


@pytest.fixture
def preferences(property_store) -> UserPreferences:
    return UserPreferences(property_store)


@pytest.fixture
def generation_client() -> FakeModelClient:
    return FakeModelClient()


@pytest.fixture
def search_client() -> FakeModelClient:
    return FakeModelClient()


@pytest.fixture
def dispatcher(generation_client, search_client) -> BatchDispatcher:
    return BatchDispatcher(
        StaticCredentials({"OPENAI_API_KEY": "sk-test", "PERPLEXITY_API_KEY": "pplx-test"}),
        clients={
            ModelType.GENERATION: generation_client,
            ModelType.SEARCH: search_client,
        },
    )


@pytest.fixture
def processor(spreadsheet, preferences, dispatcher) -> PromptProcessor:
    return PromptProcessor(spreadsheet, preferences, dispatcher)


@pytest_asyncio.fixture
async def sqlite_store(tmp_path: Path) -> AsyncGenerator[SQLitePropertyStore, None]:
    """A SQLite property store in a temporary directory."""
    store = SQLitePropertyStore(tmp_path / "properties.db")
    await store.initialize()
    yield store
    await store.close()


@pytest.fixture
def make_client():
    """Factory for fake model clients with per-prompt delays or failures."""
    return FakeModelClient

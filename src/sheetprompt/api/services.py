"""Shared service instances for the API."""

from dataclasses import dataclass
from typing import Optional

from ..config import settings
from ..dispatch import BatchDispatcher
from ..library import PromptLibrary
from ..llm import SettingsCredentials
from ..properties import PropertyStore, SQLitePropertyStore, UserPreferences
from ..service import PromptProcessor
from ..sheets import GoogleSheetsBackend, SpreadsheetBackend


@dataclass
class Services:
    """Everything a request handler needs."""

    backend: SpreadsheetBackend
    store: PropertyStore
    preferences: UserPreferences
    library: PromptLibrary
    processor: PromptProcessor


def build_services(
    backend: Optional[SpreadsheetBackend] = None,
    store: Optional[PropertyStore] = None,
    dispatcher: Optional[BatchDispatcher] = None,
) -> Services:
    """Wire services together, defaulting to Google Sheets and SQLite."""
    backend = backend or GoogleSheetsBackend()
    store = store or SQLitePropertyStore()
    dispatcher = dispatcher or BatchDispatcher(
        SettingsCredentials(settings),
        isolate_failures=settings.isolate_row_failures,
    )
    preferences = UserPreferences(store)
    return Services(
        backend=backend,
        store=store,
        preferences=preferences,
        library=PromptLibrary(store),
        processor=PromptProcessor(backend, preferences, dispatcher),
    )


# Global services instance
_services: Optional[Services] = None


def get_services() -> Services:
    """Get the global services instance."""
    global _services
    if _services is None:
        _services = build_services()
    return _services


def set_services(services: Optional[Services]):
    """Replace the global services instance (None resets it)."""
    global _services
    _services = services

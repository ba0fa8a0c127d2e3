"""Per-user preferences kept in a property store."""

import logging

from ..config import settings
from ..errors import InvalidRangeError
from .store import PropertyStore

logger = logging.getLogger(__name__)

DEFAULT_HEADER_ROW = 1
SELECTED_LLM_KEY = "selectedLLM"
SELECTED_SEARCH_KEY = "selectedSearch"


def header_row_key(sheet: str) -> str:
    return f"{sheet}_headerRow"


class UserPreferences:
    """Header rows per sheet and the user's selected models."""

    def __init__(self, store: PropertyStore):
        self.store = store

    async def get_header_row(self, sheet: str) -> int:
        """Header row for a sheet, 1 when never set."""
        raw = await self.store.get(header_row_key(sheet))
        if not raw:
            return DEFAULT_HEADER_ROW
        try:
            return int(raw)
        except ValueError:
            logger.warning(f"Ignoring invalid header row {raw!r} for sheet '{sheet}'")
            return DEFAULT_HEADER_ROW

    async def set_header_row(self, sheet: str, header_row: int):
        if header_row < 1:
            raise InvalidRangeError(f"Header row must be 1 or greater, got {header_row}")
        await self.store.set(header_row_key(sheet), str(header_row))

    async def get_selected_models(self) -> dict[str, str]:
        llm = await self.store.get(SELECTED_LLM_KEY)
        search = await self.store.get(SELECTED_SEARCH_KEY)
        return {
            "llm": llm or settings.default_llm_model,
            "search": search or settings.default_search_model,
        }

    async def set_selected_model(self, kind: str, model_id: str) -> bool:
        """Remember the model picked for ``llm`` or ``search``."""
        if kind == "llm":
            await self.store.set(SELECTED_LLM_KEY, model_id)
        elif kind == "search":
            await self.store.set(SELECTED_SEARCH_KEY, model_id)
        else:
            return False
        return True

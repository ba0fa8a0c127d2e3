"""Saved prompt library stored as a JSON list under one property key."""

import json
import logging
import uuid
from datetime import datetime, timezone
from typing import Optional

from ..properties import PropertyStore
from .models import PromptSort, SavedPrompt

logger = logging.getLogger(__name__)

SAVED_PROMPTS_KEY = "savedPrompts"

_EPOCH = datetime.fromtimestamp(0, tz=timezone.utc)


class PromptLibrary:
    """Create, find and order saved prompts."""

    def __init__(self, store: PropertyStore):
        self.store = store

    async def get_all(self) -> list[SavedPrompt]:
        raw = await self.store.get(SAVED_PROMPTS_KEY)
        if not raw:
            return []
        return [SavedPrompt.model_validate(item) for item in json.loads(raw)]

    async def _write(self, prompts: list[SavedPrompt]):
        payload = [p.model_dump(mode="json", by_alias=True) for p in prompts]
        await self.store.set(SAVED_PROMPTS_KEY, json.dumps(payload))

    async def save(self, name: str, content: str, category: str = "custom") -> SavedPrompt:
        prompts = await self.get_all()
        prompt = SavedPrompt(
            id=str(uuid.uuid4()),
            name=name,
            content=content,
            category=category,
        )
        prompts.append(prompt)
        await self._write(prompts)
        logger.info(f"Saved prompt '{name}' ({prompt.id})")
        return prompt

    async def delete(self, prompt_id: str) -> bool:
        prompts = await self.get_all()
        remaining = [p for p in prompts if p.id != prompt_id]
        if len(remaining) == len(prompts):
            return False
        await self._write(remaining)
        return True

    async def mark_used(self, prompt_id: str) -> Optional[SavedPrompt]:
        """Stamp ``last_used`` on a prompt. Unknown ids are ignored."""
        prompts = await self.get_all()
        for prompt in prompts:
            if prompt.id == prompt_id:
                prompt.last_used = datetime.now(timezone.utc)
                await self._write(prompts)
                return prompt
        return None

    async def get(self, prompt_id: str) -> Optional[SavedPrompt]:
        for prompt in await self.get_all():
            if prompt.id == prompt_id:
                return prompt
        return None

    async def search(self, query: str = "", category: Optional[str] = None) -> list[SavedPrompt]:
        """Case-insensitive match on name or content, optionally within a category."""
        needle = query.lower()

        def matches(prompt: SavedPrompt) -> bool:
            if needle and needle not in prompt.name.lower() and needle not in prompt.content.lower():
                return False
            if category and category != "all" and prompt.category != category:
                return False
            return True

        return [p for p in await self.get_all() if matches(p)]

    @staticmethod
    def sort(prompts: list[SavedPrompt], sort_by: str) -> list[SavedPrompt]:
        """Return a sorted copy. Unknown sort keys keep the stored order."""
        try:
            key = PromptSort(sort_by)
        except ValueError:
            return list(prompts)

        if key == PromptSort.NAME:
            return sorted(prompts, key=lambda p: p.name.lower())
        if key == PromptSort.CATEGORY:
            return sorted(prompts, key=lambda p: p.category.lower())
        if key == PromptSort.NEWEST:
            return sorted(prompts, key=lambda p: p.created_at, reverse=True)
        if key == PromptSort.OLDEST:
            return sorted(prompts, key=lambda p: p.created_at)
        return sorted(prompts, key=lambda p: p.last_used or _EPOCH, reverse=True)

    async def filtered(
        self, query: str = "", category: str = "all", sort_by: str = "newest"
    ) -> list[SavedPrompt]:
        prompts = await self.search(query, None if category == "all" else category)
        return self.sort(prompts, sort_by)

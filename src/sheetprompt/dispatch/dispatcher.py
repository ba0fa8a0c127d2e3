"""Fan a prompt out over input rows, one model call per row."""

import asyncio
import logging
import re
from typing import Optional, Union

from ..config import settings
from ..errors import InvalidModelTypeError, SheetPromptError, UnimplementedError
from ..llm import (
    OPENAI_API_KEY,
    PERPLEXITY_API_KEY,
    CredentialSource,
    GenerationClient,
    ModelClient,
    SearchClient,
    is_search_model,
)
from .models import ModelType, PromptJob

logger = logging.getLogger(__name__)

SEARCH_CUE = "search the web"
ERROR_MARKER = "#ERROR"

_PLACEHOLDER_RE = re.compile(r"\{\{\s*input\s*\}\}")


def classify(
    prompt: str, model: str, model_type: Union[ModelType, str]
) -> tuple[ModelType, str]:
    """Work out which kind of model a prompt goes to.

    A prompt asking to "search the web" always goes to a search model; a
    non-search model identifier is swapped for the default search model.
    """
    if SEARCH_CUE in (prompt or "").lower():
        if not is_search_model(model):
            default_model = settings.default_search_model
            logger.info(f"Prompt asks for web search, using {default_model} instead of {model!r}")
            model = default_model
        return ModelType.SEARCH, model

    try:
        return ModelType(model_type), model
    except ValueError:
        raise InvalidModelTypeError(f"Invalid model type: {model_type}")


def build_prompt(template: str, value: str) -> str:
    """Insert one cell's value into the prompt template.

    ``{{input}}`` placeholders are replaced; a template without one gets the
    value appended as the content to process.
    """
    if _PLACEHOLDER_RE.search(template):
        return _PLACEHOLDER_RE.sub(lambda _: value, template)
    return f"{template}\n\nContent to process:\n{value}"


class BatchDispatcher:
    """Sends one request per input value and gathers results in input order."""

    def __init__(
        self,
        credentials: CredentialSource,
        clients: Optional[dict[ModelType, ModelClient]] = None,
        isolate_failures: bool = False,
    ):
        self.credentials = credentials
        self._clients: dict[ModelType, ModelClient] = dict(clients or {})
        self.isolate_failures = isolate_failures

    def client_for(self, model_type: ModelType) -> ModelClient:
        """Get the client for a model type, building it from credentials."""
        if model_type == ModelType.IMAGE:
            raise UnimplementedError("Image models are not implemented yet")

        client = self._clients.get(model_type)
        if client is not None:
            return client

        if model_type == ModelType.GENERATION:
            client = GenerationClient(self.credentials.require(OPENAI_API_KEY))
        elif model_type == ModelType.SEARCH:
            client = SearchClient(self.credentials.require(PERPLEXITY_API_KEY))
        else:
            raise InvalidModelTypeError(f"Invalid model type: {model_type}")

        self._clients[model_type] = client
        return client

    async def _run_row(self, client: ModelClient, job: PromptJob, index: int, value: str) -> str:
        prompt = build_prompt(job.prompt, value)
        try:
            return await client.complete(prompt, job.system_instructions, job.model)
        except SheetPromptError as e:
            if not self.isolate_failures:
                raise
            logger.warning(f"Row {index} failed: {e}")
            return f"{ERROR_MARKER}: {e}"

    async def dispatch(self, job: PromptJob, values: list[str]) -> list[str]:
        """Run every row concurrently. Result ``i`` belongs to ``values[i]``.

        Unless ``isolate_failures`` is set, the first failing row aborts the
        whole batch.
        """
        client = self.client_for(job.model_type)
        logger.info(f"Dispatching {len(values)} rows to {job.model_type.value} model {job.model}")
        return list(
            await asyncio.gather(
                *(self._run_row(client, job, i, value) for i, value in enumerate(values))
            )
        )

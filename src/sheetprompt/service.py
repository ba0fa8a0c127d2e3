"""Entry point: run a prompt over a column and write the answers back."""

import logging
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .config import settings
from .dispatch import BatchDispatcher, PromptJob, classify
from .errors import InvalidRangeError, SheetPromptError, SpreadsheetError, WriteError
from .properties import UserPreferences
from .sheets import AUTO_START_ROW, EffectiveRange, RangeSpec, RowMode, SpreadsheetBackend, resolve
from .sheets.ranges import StartRow, effective_start_row

logger = logging.getLogger(__name__)

NO_INPUT_MESSAGE = "No input data found in the specified range"


class PromptConfig(BaseModel):
    """Request sent by the UI shell. Accepts camelCase or snake_case keys."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, protected_namespaces=()
    )

    model_type: str = "generation"
    input_sheet: str
    input_column: str
    output_sheet: str
    output_column: str
    start_row: StartRow = AUTO_START_ROW
    row_mode: RowMode = RowMode.FIXED
    row_count: Optional[int] = None
    prompt: str
    system_instructions: Optional[str] = None
    model: str = Field(default_factory=lambda: settings.default_llm_model)

    def input_spec(self) -> RangeSpec:
        return RangeSpec(
            sheet=self.input_sheet,
            column=self.input_column,
            start_row=self.start_row,
            row_mode=self.row_mode,
            row_count=self.row_count,
        )


class BatchResult(BaseModel):
    """Outcome of one invocation."""

    success: bool
    message: Optional[str] = None
    results: Optional[list[str]] = None


class PromptProcessor:
    """Reads a column, runs the prompt on every row and writes the results."""

    def __init__(
        self,
        backend: SpreadsheetBackend,
        preferences: UserPreferences,
        dispatcher: BatchDispatcher,
    ):
        self.backend = backend
        self.preferences = preferences
        self.dispatcher = dispatcher

    async def process(self, config: Union[PromptConfig, dict[str, Any]]) -> BatchResult:
        """Process a prompt request. Never raises; failures become results."""
        try:
            if not isinstance(config, PromptConfig):
                config = PromptConfig.model_validate(config)
            return await self._process(config)
        except SheetPromptError as e:
            logger.error(f"Error processing custom prompt: {e}")
            return BatchResult(success=False, message=str(e))
        except Exception as e:
            logger.exception("Unexpected error processing custom prompt")
            return BatchResult(success=False, message=str(e) or "Unknown error occurred")

    async def resolve_input_range(self, config: PromptConfig) -> EffectiveRange:
        spec = config.input_spec()
        header_row = await self.preferences.get_header_row(spec.sheet)
        # Reject a bad start row before touching the spreadsheet
        effective_start_row(spec.start_row, header_row)
        last_row = self.backend.get_last_row(spec.sheet)
        return resolve(spec, last_row, header_row)

    async def _process(self, config: PromptConfig) -> BatchResult:
        model_type, model = classify(config.prompt, config.model, config.model_type)
        input_range = await self.resolve_input_range(config)

        values: list[str] = []
        if not input_range.is_empty:
            values = self.backend.read_column(
                input_range.sheet,
                input_range.column,
                input_range.start_row,
                input_range.row_count,
            )
        if not values:
            logger.info(f"No input data in {input_range.a1_notation}")
            return BatchResult(success=False, message=NO_INPUT_MESSAGE)

        job = PromptJob(
            prompt=config.prompt,
            system_instructions=config.system_instructions,
            model=model,
            model_type=model_type,
        )
        # Destination must be valid before any model call
        output_range = self._output_range(input_range, config)
        results = await self.dispatcher.dispatch(job, values)
        self._write(output_range, results)

        return BatchResult(
            success=True,
            message=f"Successfully processed {len(results)} rows ({output_range.a1_notation})",
            results=results,
        )

    def _output_range(self, input_range: EffectiveRange, config: PromptConfig) -> EffectiveRange:
        try:
            output_range = input_range.retarget(config.output_sheet, config.output_column)
        except InvalidRangeError as e:
            raise WriteError(f"Invalid output range: {e}")
        if not self.backend.has_sheet(output_range.sheet):
            raise WriteError(f"Sheet {output_range.sheet} not found")
        return output_range

    def _write(self, output_range: EffectiveRange, results: list[str]):
        """Write results into the same rows they were read from."""
        if not self.backend.has_sheet(output_range.sheet):
            raise WriteError(f"Sheet {output_range.sheet} not found")
        try:
            self.backend.write_column(
                output_range.sheet,
                output_range.column,
                output_range.start_row,
                results[: output_range.row_count],
            )
        except SpreadsheetError as e:
            raise WriteError(f"Failed to write results: {e}")

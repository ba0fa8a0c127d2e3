"""API routes for SheetPrompt."""

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from ..errors import SheetNotFoundError, SheetPromptError
from ..llm import GENERATION_MODELS, SEARCH_MODELS
from ..service import BatchResult, PromptConfig
from .services import get_services

logger = logging.getLogger(__name__)

router = APIRouter()


class HeaderRowRequest(BaseModel):
    """Request to set a sheet's header row."""

    header_row: int = Field(ge=1)


class SelectedModelRequest(BaseModel):
    """Request to remember a model selection."""

    kind: str  # "llm" or "search"
    model_id: str


class SavePromptRequest(BaseModel):
    """Request to save a prompt."""

    name: str
    content: str
    category: str = "custom"


# Prompt processing


@router.post("/prompt/process", response_model=BatchResult)
async def process_prompt(config: PromptConfig):
    """Run a prompt over an input column and write results to the output column."""
    return await get_services().processor.process(config)


# Sheets


@router.get("/sheets")
async def list_sheets():
    """List sheet names in the configured spreadsheet."""
    try:
        return {"sheets": get_services().backend.get_sheet_names()}
    except SheetPromptError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/sheets/{sheet}/columns")
async def list_columns(sheet: str):
    """Column letters from A to the sheet's last populated column."""
    try:
        return {"sheet": sheet, "columns": get_services().backend.get_column_letters(sheet)}
    except SheetPromptError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/sheets/{sheet}/headers")
async def get_headers(sheet: str, header_row: Optional[int] = None):
    """Header text per column, read from the sheet's header row."""
    services = get_services()
    try:
        row = header_row or await services.preferences.get_header_row(sheet)
        return {
            "sheet": sheet,
            "header_row": row,
            "headers": services.backend.get_column_headers(sheet, row),
        }
    except SheetPromptError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/sheets/{sheet}/header-row")
async def get_header_row(sheet: str):
    """Get the header row used to resolve automatic start rows."""
    header_row = await get_services().preferences.get_header_row(sheet)
    return {"sheet": sheet, "header_row": header_row}


@router.put("/sheets/{sheet}/header-row")
async def set_header_row(sheet: str, request: HeaderRowRequest):
    """Set the header row for a sheet."""
    services = get_services()
    try:
        if not services.backend.has_sheet(sheet):
            raise SheetNotFoundError(sheet)
        await services.preferences.set_header_row(sheet, request.header_row)
    except SheetNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except SheetPromptError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"sheet": sheet, "header_row": request.header_row}


# Models


@router.get("/models")
async def list_models():
    """Known model identifiers per model type."""
    return {"llm": GENERATION_MODELS, "search": SEARCH_MODELS}


@router.get("/models/selected")
async def get_selected_models():
    """Get the user's selected models."""
    return await get_services().preferences.get_selected_models()


@router.put("/models/selected")
async def set_selected_model(request: SelectedModelRequest):
    """Save a model selection."""
    saved = await get_services().preferences.set_selected_model(request.kind, request.model_id)
    if not saved:
        raise HTTPException(status_code=400, detail=f"Unknown model kind: {request.kind}")
    return {"status": "ok", "kind": request.kind, "model_id": request.model_id}


# Saved prompts


@router.get("/prompts")
async def list_prompts(query: str = "", category: str = "all", sort_by: str = "newest"):
    """List saved prompts, filtered and sorted."""
    prompts = await get_services().library.filtered(query, category, sort_by)
    return {
        "prompts": [p.model_dump(mode="json", by_alias=True) for p in prompts],
        "count": len(prompts),
    }


@router.post("/prompts")
async def save_prompt(request: SavePromptRequest):
    """Save a new prompt."""
    prompt = await get_services().library.save(request.name, request.content, request.category)
    return prompt.model_dump(mode="json", by_alias=True)


@router.get("/prompts/{prompt_id}")
async def get_prompt(prompt_id: str):
    """Get a saved prompt by ID."""
    prompt = await get_services().library.get(prompt_id)
    if not prompt:
        raise HTTPException(status_code=404, detail="Prompt not found")
    return prompt.model_dump(mode="json", by_alias=True)


@router.delete("/prompts/{prompt_id}")
async def delete_prompt(prompt_id: str):
    """Delete a saved prompt."""
    if not await get_services().library.delete(prompt_id):
        raise HTTPException(status_code=404, detail="Prompt not found")
    return {"status": "ok", "message": f"Prompt {prompt_id} deleted"}


@router.post("/prompts/{prompt_id}/use")
async def use_prompt(prompt_id: str):
    """Record that a saved prompt was used."""
    prompt = await get_services().library.mark_used(prompt_id)
    if not prompt:
        raise HTTPException(status_code=404, detail="Prompt not found")
    return prompt.model_dump(mode="json", by_alias=True)


# Health check


@router.get("/health")
async def health_check():
    """Health check endpoint with non-secret configuration."""
    from ..config import settings

    return {
        "status": "ok",
        "service": "sheetprompt",
        "config": {
            "openai_key_present": bool(settings.openai_api_key),
            "perplexity_key_present": bool(settings.perplexity_api_key),
            "default_llm_model": settings.default_llm_model,
            "default_search_model": settings.default_search_model,
            "spreadsheet_configured": bool(settings.spreadsheet_id),
            "isolate_row_failures": settings.isolate_row_failures,
        },
    }

"""Configuration management for SheetPrompt."""

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel

load_dotenv()


def _parse_cors_origins() -> list[str]:
    """Parse CORS origins from environment variable."""
    cors_env = os.getenv("CORS_ALLOW_ORIGINS")
    if cors_env:
        return cors_env.split(",")
    return ["*"]


class Settings(BaseModel):
    """Application settings."""

    # Provider credentials
    openai_api_key: Optional[str] = os.getenv("OPENAI_API_KEY")
    perplexity_api_key: Optional[str] = os.getenv("PERPLEXITY_API_KEY")

    # Provider endpoints
    openai_base_url: str = os.getenv("OPENAI_BASE_URL", "https://api.openai.com/v1")
    perplexity_base_url: str = os.getenv("PERPLEXITY_BASE_URL", "https://api.perplexity.ai")

    # Model defaults
    default_llm_model: str = os.getenv("DEFAULT_LLM_MODEL", "gpt-4")
    default_search_model: str = os.getenv(
        "DEFAULT_SEARCH_MODEL", "llama-3.1-sonar-small-128k-online"
    )
    request_timeout: float = float(os.getenv("REQUEST_TIMEOUT", "60"))

    # Write "#ERROR: ..." into failed rows instead of aborting the whole batch
    isolate_row_failures: bool = os.getenv("ISOLATE_ROW_FAILURES", "false").lower() == "true"

    # Google Sheets API credentials
    google_credentials_path: Path = Path(os.getenv("GOOGLE_CREDENTIALS_PATH", "credentials.json"))
    google_token_path: Path = Path(os.getenv("GOOGLE_TOKEN_PATH", "token.json"))
    spreadsheet_id: Optional[str] = os.getenv("SPREADSHEET_ID")

    # User properties (header rows, selected models, saved prompts)
    properties_db_path: Path = Path(os.getenv("PROPERTIES_DB_PATH", "data/properties.db"))

    # Server settings
    host: str = os.getenv("HOST", "127.0.0.1")
    port: int = int(os.getenv("PORT", "8000"))
    debug: bool = os.getenv("DEBUG", "false").lower() == "true"
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # CORS settings (comma-separated list of allowed origins, or * for all)
    cors_allow_origins: list[str] = _parse_cors_origins()


settings = Settings()

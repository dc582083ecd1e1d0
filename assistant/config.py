"""Application configuration via environment variables."""

from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings

PROJECT_ROOT = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    database_url: str = f"sqlite:///{PROJECT_ROOT / 'assistant.db'}"
    log_level: str = "INFO"
    cors_origins: list[str] = ["*"]

    # Completion backend (OpenAI-compatible chat completions)
    openai_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("TA_OPENAI_API_KEY", "OPENAI_API_KEY"),
    )
    completion_base_url: str = "https://api.openai.com/v1"
    completion_model: str = "gpt-4o-mini"
    completion_timeout: float = 30.0  # seconds, single attempt
    chat_max_tokens: int = 1000
    summary_max_tokens: int = 800
    temperature: float = 0.7

    # Prompt size control
    recent_sessions_limit: int = 5
    recent_trades_limit: int = 10

    assistant_name: str = "Sydney"

    model_config = {"env_prefix": "TA_", "env_file": ".env", "extra": "ignore"}


settings = Settings()

"""Application configuration using Pydantic settings."""

import logging

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Built once at process start (CLI or API startup) and passed into the
    pipeline and its collaborators.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # OpenAI
    openai_api_key: str

    # Application
    app_name: str = "Inbox Triage"
    app_version: str = "0.1.0"
    debug: bool = False

    # LLM Settings (low temperature keeps classification stable)
    openai_model: str = "gpt-4o-mini"
    temperature: float = 0.2
    llm_timeout_seconds: float = 60.0

    # Google credentials (authorized-user token JSON)
    gmail_token_path: str = "token.json"

    # Calendar
    calendar_id: str = "primary"
    timezone: str = "America/New_York"
    work_start_hour: int = Field(default=9, ge=0, le=23)
    work_end_hour: int = Field(default=17, ge=1, le=24)
    default_meeting_minutes: int = Field(default=30, gt=0)
    meeting_search_days: int = Field(default=7, gt=0)

    # Triage behaviour
    max_emails: int = Field(default=10, ge=0)
    min_classification_confidence: float = Field(default=0.5, ge=0.0, le=1.0)
    mark_read_when_unscheduled: bool = True
    run_timeout_seconds: float | None = None

    # Retry policy shared by all collaborator clients
    retry_max_attempts: int = Field(default=3, ge=1)
    retry_base_delay: float = 1.0
    retry_max_delay: float = 30.0

    # User preferences file (signature, always-review senders)
    user_config_path: str | None = None


LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(debug: bool = False) -> None:
    """Configure root logging once for the CLI or API process."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format=LOG_FORMAT,
    )

"""Pydantic schemas for API request/response models."""

from pydantic import BaseModel, Field

from inbox_triage.models import RunSummary

MAX_EMAILS_PER_RUN = 100


class HealthResponse(BaseModel):
    """Response for health check endpoint."""

    status: str
    version: str


class RunRequest(BaseModel):
    """Request body for starting a triage run."""

    max_emails: int | None = Field(
        default=None,
        ge=0,
        le=MAX_EMAILS_PER_RUN,
        description="Maximum unread emails to process; defaults to the configured value",
    )
    timeout_seconds: float | None = Field(
        default=None,
        gt=0,
        description="Run budget in seconds; defaults to the configured value",
    )


class ActionResultResponse(BaseModel):
    """Outcome for a single email."""

    email_id: str
    action: str
    success: bool
    error: str | None = None
    event_id: str | None = None


class RunResponse(BaseModel):
    """Summary of a completed triage run."""

    total_processed: int
    action_counts: dict[str, int]
    failed: int
    timed_out: bool
    summary: str
    results: list[ActionResultResponse]

    @classmethod
    def from_summary(cls, summary: RunSummary) -> "RunResponse":
        return cls.model_validate(summary.to_dict())

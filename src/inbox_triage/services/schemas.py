"""Pydantic schemas constraining structured LLM output."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field


class IntentDecision(BaseModel):
    """Classifier output: one of four intents plus reasoning."""

    intent: Literal["reply", "meeting", "archive", "human_review"] = Field(
        ..., description="Which action the email needs"
    )
    reasoning: str = Field(..., description="One or two sentences explaining the choice")
    confidence: float | None = Field(
        default=None, ge=0.0, le=1.0, description="Confidence in the intent, 0 to 1"
    )
    urgency: Literal["low", "medium", "high"] | None = Field(
        default=None, description="How soon the email needs attention"
    )


class ReplyDraft(BaseModel):
    """Generated reply to an email."""

    subject: str = Field(..., description="Reply subject line")
    body: str = Field(..., description="Reply body, plain text, without signature")
    tone: Literal["professional", "friendly", "formal", "casual"] = "professional"


class MeetingDetails(BaseModel):
    """Meeting parameters extracted from a meeting request."""

    title: str = Field(..., description="Short descriptive meeting title")
    description: str | None = Field(default=None, description="Agenda or purpose")
    attendees: list[str] = Field(
        default_factory=list, description="Attendee email addresses besides the sender"
    )
    duration_minutes: int | None = Field(
        default=None, gt=0, le=480, description="Requested length in minutes"
    )
    window_start: datetime | None = Field(
        default=None, description="Earliest acceptable start (ISO 8601), if stated"
    )
    window_end: datetime | None = Field(
        default=None, description="Latest acceptable end (ISO 8601), if stated"
    )
    is_virtual: bool = Field(default=True, description="Virtual unless a place is named")
    location: str | None = Field(default=None, description="Physical location, if any")


class ReviewSummary(BaseModel):
    """Briefing for the operator reviewing an escalated email."""

    summary: str = Field(..., description="What the situation is")
    urgency: Literal["low", "medium", "high"] = "medium"
    suggested_action: str = Field(..., description="Recommended next step")

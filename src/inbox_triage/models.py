"""
Core data model for a triage run.

Every entity here lives for a single pipeline run and is never persisted.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


class Intent(str, Enum):
    """What the classifier decided should happen to an email."""

    REPLY = "reply"
    MEETING = "meeting"
    ARCHIVE = "archive"
    HUMAN_REVIEW = "human_review"


class Urgency(str, Enum):
    """Urgency reported by the classifier or review summary."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass(frozen=True)
class EmailMessage:
    """An unread email as fetched from the mail provider."""

    message_id: str  # Gmail's internal API ID
    sender: str  # Raw From header
    body: str
    subject: str | None = None
    sender_email: str = ""
    sender_name: str = ""
    thread_id: str | None = None
    received_at: datetime | None = None
    rfc_message_id: str | None = None  # RFC 2822 Message-ID header (for threading)
    references: str | None = None

    @property
    def reply_address(self) -> str:
        """Address replies should go to."""
        return self.sender_email or self.sender


@dataclass(frozen=True)
class IntentClassification:
    """Classifier output attached to one email for the rest of the run."""

    intent: Intent
    reasoning: str
    confidence: float | None = None
    urgency: Urgency | None = None

    @classmethod
    def fallback(cls, cause: str) -> "IntentClassification":
        """Classification used when the classifier itself failed."""
        return cls(
            intent=Intent.HUMAN_REVIEW,
            reasoning=f"classification failed: {cause}",
        )


@dataclass(frozen=True)
class ClassifiedEmail:
    """An email paired with its classification."""

    email: EmailMessage
    classification: IntentClassification

    @property
    def intent(self) -> Intent:
        return self.classification.intent


@dataclass(frozen=True)
class ActionResult:
    """Outcome of handling exactly one email."""

    email_id: str
    action: str  # e.g. "reply_sent", "archived", "meeting_failed"
    success: bool
    error: str | None = None
    event_id: str | None = None

    @classmethod
    def ok(cls, email_id: str, action: str, **extra: Any) -> "ActionResult":
        """Create a successful result."""
        return cls(email_id=email_id, action=action, success=True, **extra)

    @classmethod
    def fail(cls, email_id: str, action: str, error: str, **extra: Any) -> "ActionResult":
        """Create a failed result."""
        return cls(email_id=email_id, action=action, success=False, error=error, **extra)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "email_id": self.email_id,
            "action": self.action,
            "success": self.success,
            "error": self.error,
            "event_id": self.event_id,
        }


@dataclass(frozen=True)
class RunSummary:
    """Aggregate report for one pipeline run."""

    total_processed: int
    action_counts: dict[str, int]
    summary: str
    failed: int = 0
    timed_out: bool = False
    results: tuple[ActionResult, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "total_processed": self.total_processed,
            "action_counts": dict(self.action_counts),
            "failed": self.failed,
            "timed_out": self.timed_out,
            "summary": self.summary,
            "results": [result.to_dict() for result in self.results],
        }

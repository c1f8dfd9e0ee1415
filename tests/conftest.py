"""Shared test fixtures and configuration."""

from datetime import datetime
from unittest.mock import MagicMock
from zoneinfo import ZoneInfo

import pytest

from inbox_triage.calendar.client import CalendarClient, EventResult
from inbox_triage.config import Settings
from inbox_triage.gmail.client import GmailClient, SendResult
from inbox_triage.models import (
    ClassifiedEmail,
    EmailMessage,
    Intent,
    IntentClassification,
)
from inbox_triage.services.llm import StructuredLLM

TZ = ZoneInfo("America/New_York")

# Monday 2025-01-13, 08:00 local
FIXED_NOW = datetime(2025, 1, 13, 8, 0, tzinfo=TZ)


def make_email(message_id: str = "msg1", **overrides) -> EmailMessage:
    """Build an EmailMessage with sensible defaults."""
    fields = {
        "message_id": message_id,
        "sender": "Jane Sender <jane@example.com>",
        "sender_email": "jane@example.com",
        "sender_name": "Jane Sender",
        "subject": f"Subject {message_id}",
        "body": f"Body of {message_id}",
        "thread_id": f"thread-{message_id}",
        "rfc_message_id": f"<{message_id}@mail.example.com>",
    }
    fields.update(overrides)
    return EmailMessage(**fields)


def classified(email: EmailMessage, intent: Intent, reasoning: str = "test") -> ClassifiedEmail:
    """Pair an email with a fixed classification."""
    return ClassifiedEmail(
        email=email,
        classification=IntentClassification(intent=intent, reasoning=reasoning),
    )


@pytest.fixture
def settings() -> Settings:
    """Settings that ignore the local environment file."""
    return Settings(
        _env_file=None,
        openai_api_key="test-api-key",
        timezone="America/New_York",
        retry_max_attempts=1,
    )


@pytest.fixture
def mock_mail() -> MagicMock:
    """Gmail client whose calls all succeed."""
    mail = MagicMock(spec=GmailClient)
    mail.list_unread.return_value = []
    mail.send.return_value = SendResult(message_id="sent-1")
    mail.mark_read.return_value = True
    mail.remove_from_inbox.return_value = True
    return mail


@pytest.fixture
def mock_calendar() -> MagicMock:
    """Calendar client with an empty calendar."""
    calendar = MagicMock(spec=CalendarClient)
    calendar.free_busy.return_value = []
    calendar.create_event.return_value = EventResult(
        event_id="evt-1",
        event_url="https://calendar.google.com/event?eid=evt-1",
    )
    return calendar


@pytest.fixture
def mock_llm() -> MagicMock:
    """Structured LLM; set side_effect/return_value per test."""
    return MagicMock(spec=StructuredLLM)

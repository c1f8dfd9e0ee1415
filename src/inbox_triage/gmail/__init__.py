"""Gmail integration module."""

from inbox_triage.gmail.auth import (
    build_calendar_service,
    build_gmail_service,
    load_credentials,
)
from inbox_triage.gmail.client import GmailClient, SendResult

__all__ = [
    "build_calendar_service",
    "build_gmail_service",
    "load_credentials",
    "GmailClient",
    "SendResult",
]

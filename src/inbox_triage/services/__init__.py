"""LLM-backed services and their output schemas."""

from inbox_triage.services.llm import StructuredLLM
from inbox_triage.services.schemas import (
    IntentDecision,
    MeetingDetails,
    ReplyDraft,
    ReviewSummary,
)

__all__ = [
    "StructuredLLM",
    "IntentDecision",
    "MeetingDetails",
    "ReplyDraft",
    "ReviewSummary",
]

"""Calendar integration: free/busy, event creation and slot scoring."""

from inbox_triage.calendar.client import CalendarClient, EventResult
from inbox_triage.calendar.slots import (
    ScoredSlot,
    TimeSlot,
    compute_available_slots,
    pick_best_slot,
    score_slot,
    suggest_slots,
)

__all__ = [
    "CalendarClient",
    "EventResult",
    "ScoredSlot",
    "TimeSlot",
    "compute_available_slots",
    "pick_best_slot",
    "score_slot",
    "suggest_slots",
]

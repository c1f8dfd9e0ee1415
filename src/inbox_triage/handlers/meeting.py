"""
Meeting handler.

Extracts meeting parameters, finds the best free slot, books it and
confirms by email. When no slot is free an acknowledgment is sent instead
and the email stays in the inbox.
"""

import logging
from collections.abc import Callable
from datetime import datetime, timedelta
from zoneinfo import ZoneInfo

from inbox_triage.calendar.client import CalendarClient
from inbox_triage.calendar.slots import ScoredSlot, compute_available_slots, pick_best_slot
from inbox_triage.config import Settings
from inbox_triage.errors import CollaboratorError, MailError
from inbox_triage.gmail.client import GmailClient
from inbox_triage.handlers.base import BaseHandler
from inbox_triage.models import ActionResult, ClassifiedEmail, EmailMessage, Intent
from inbox_triage.prompts.templates import (
    MEETING_CONFIRMATION_BODY,
    MEETING_EXTRACTION_PROMPT,
    MEETING_NO_SLOT_BODY,
)
from inbox_triage.security.sanitization import sanitize_email_content, sanitize_sender
from inbox_triage.services.llm import StructuredLLM
from inbox_triage.services.schemas import MeetingDetails

logger = logging.getLogger(__name__)

MEETING_SCHEDULED = "meeting_scheduled"
MEETING_FAILED = "meeting_failed"
NO_SLOT_ERROR = "no available slot in the requested window"
VIRTUAL_LOCATION = "Virtual meeting"


class MeetingHandler(BaseHandler):
    """Schedules meetings for emails classified as MEETING."""

    intent = Intent.MEETING
    failure_action = MEETING_FAILED

    def __init__(
        self,
        mail: GmailClient,
        llm: StructuredLLM,
        calendar: CalendarClient,
        settings: Settings,
        now: Callable[[], datetime] | None = None,
    ) -> None:
        """
        Initialize the handler.

        Args:
            mail: Gmail client for confirmations and mark-read.
            llm: Structured LLM for meeting extraction.
            calendar: Calendar client for free/busy and event creation.
            settings: Working hours, timezone and window defaults.
            now: Clock returning the current time; defaults to datetime.now(tz).
        """
        super().__init__(mail)
        self._llm = llm
        self._calendar = calendar
        self._settings = settings
        self._tz = ZoneInfo(settings.timezone)
        self._now = now or (lambda: datetime.now(self._tz))

    def handle(self, item: ClassifiedEmail) -> ActionResult:
        """
        Schedule the requested meeting.

        Args:
            item: Email classified as MEETING.

        Returns:
            `meeting_scheduled` with the event ID, or `meeting_failed`.
        """
        email = item.email
        now = self._now().astimezone(self._tz)

        try:
            details = self._extract(email, now)
            best = self._find_slot(details, now)

            if best is None:
                return self._no_slot(email, details)

            event = self._calendar.create_event(
                title=details.title,
                start=best.slot.start,
                end=best.slot.end,
                attendees=self._attendees(email, details),
                description=details.description,
                location=VIRTUAL_LOCATION if details.is_virtual else details.location,
                notify=True,
            )
        except CollaboratorError as e:
            logger.warning(f"Scheduling for {email.message_id} failed: {e}")
            return ActionResult.fail(email.message_id, MEETING_FAILED, str(e))

        logger.info(
            f"Scheduled '{details.title}' at {best.slot.start.isoformat()} "
            f"(score {best.score:.2f}) for {email.message_id}"
        )

        self._send_quietly(
            email,
            MEETING_CONFIRMATION_BODY.format(
                title=details.title,
                slot=best.slot,
                location_note="" if details.is_virtual or not details.location
                else f" (location: {details.location})",
            ),
        )
        self.mark_read(email.message_id)

        return ActionResult.ok(email.message_id, MEETING_SCHEDULED, event_id=event.event_id)

    def _extract(self, email: EmailMessage, now: datetime) -> MeetingDetails:
        subject, body = sanitize_email_content(email.subject, email.body)
        prompt = MEETING_EXTRACTION_PROMPT.format(
            today=now.strftime("%A %Y-%m-%d"),
            timezone=self._settings.timezone,
            sender=sanitize_sender(email.sender),
            subject=subject or "(no subject)",
            body=body,
        )
        return self._llm.generate(prompt, MeetingDetails)

    def _search_window(self, details: MeetingDetails, now: datetime) -> tuple[datetime, datetime]:
        """Requested window clamped to the future, or the default look-ahead."""
        default_end = now + timedelta(days=self._settings.meeting_search_days)

        start = now
        if details.window_start is not None:
            start = max(self._localize(details.window_start), now)

        end = self._localize(details.window_end) if details.window_end else None
        if end is None or end <= start:
            end = max(default_end, start + timedelta(days=self._settings.meeting_search_days))

        return start, end

    def _find_slot(self, details: MeetingDetails, now: datetime) -> ScoredSlot | None:
        start, end = self._search_window(details, now)
        duration = details.duration_minutes or self._settings.default_meeting_minutes

        busy = self._calendar.free_busy(start, end)
        slots = compute_available_slots(
            start,
            end,
            busy,
            duration,
            tz=self._tz,
            work_start_hour=self._settings.work_start_hour,
            work_end_hour=self._settings.work_end_hour,
        )
        logger.debug(f"{len(slots)} candidate slot(s) between {start} and {end}")

        return pick_best_slot(slots, today=now.date())

    def _no_slot(self, email: EmailMessage, details: MeetingDetails) -> ActionResult:
        logger.info(f"No free slot for {email.message_id}, sending acknowledgment")

        self._send_quietly(email, MEETING_NO_SLOT_BODY.format(title=details.title))
        if self._settings.mark_read_when_unscheduled:
            self.mark_read(email.message_id)

        return ActionResult.fail(email.message_id, MEETING_FAILED, NO_SLOT_ERROR)

    def _send_quietly(self, email: EmailMessage, body: str) -> None:
        """Send a reply; failures are logged since the outcome is already decided."""
        try:
            self.mail.send(
                to=email.reply_address,
                subject=email.subject or "Meeting request",
                body=body,
                thread_id=email.thread_id,
                in_reply_to=email.rfc_message_id,
                references=email.references,
            )
        except MailError as e:
            logger.error(f"Could not send meeting reply for {email.message_id}: {e}")

    def _attendees(self, email: EmailMessage, details: MeetingDetails) -> list[str]:
        attendees = []
        for address in [email.reply_address, *details.attendees]:
            address = address.strip()
            if "@" in address and address.lower() not in {a.lower() for a in attendees}:
                attendees.append(address)
        return attendees

    def _localize(self, dt: datetime) -> datetime:
        if dt.tzinfo is None:
            return dt.replace(tzinfo=self._tz)
        return dt.astimezone(self._tz)

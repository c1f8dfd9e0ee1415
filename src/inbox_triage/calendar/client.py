"""Google Calendar client for free/busy lookups and event creation."""

import logging
from dataclasses import dataclass
from datetime import datetime

from googleapiclient.discovery import Resource
from googleapiclient.errors import HttpError

from inbox_triage.calendar.slots import TimeSlot
from inbox_triage.errors import CalendarError
from inbox_triage.retry import NO_RETRY, RetryPolicy

logger = logging.getLogger(__name__)


@dataclass
class EventResult:
    """Result of creating a calendar event."""

    event_id: str
    event_url: str
    success: bool = True


class CalendarClient:
    """Calendar collaborator: free/busy queries and event creation."""

    def __init__(
        self,
        calendar_service: Resource,
        calendar_id: str = "primary",
        timezone: str = "America/New_York",
        retry_policy: RetryPolicy = NO_RETRY,
    ):
        """
        Initialize the calendar client.

        Args:
            calendar_service: Authenticated Calendar API service.
            calendar_id: Calendar to query and write to.
            timezone: IANA timezone used for created events.
            retry_policy: Retry policy applied to every API call.
        """
        self.service = calendar_service
        self._calendar_id = calendar_id
        self._timezone = timezone
        self._retry = retry_policy

    def free_busy(self, start: datetime, end: datetime) -> list[TimeSlot]:
        """
        Get busy intervals between start and end.

        Args:
            start: Window start (timezone-aware).
            end: Window end (timezone-aware).

        Returns:
            Busy intervals as TimeSlots.
        """
        body = {
            "timeMin": start.isoformat(),
            "timeMax": end.isoformat(),
            "timeZone": self._timezone,
            "items": [{"id": self._calendar_id}],
        }

        logger.info(f"Checking calendar availability from {start} to {end}")
        try:
            result = self._retry.call(self.service.freebusy().query(body=body).execute)
        except HttpError as e:
            logger.error(f"Calendar API error: {e}")
            raise CalendarError(f"Free/busy query failed: {e}") from e

        calendar = result.get("calendars", {}).get(self._calendar_id, {})
        if calendar.get("errors"):
            raise CalendarError(f"Free/busy query failed: {calendar['errors']}")

        return [
            TimeSlot(
                start=_parse_api_datetime(period["start"]),
                end=_parse_api_datetime(period["end"]),
            )
            for period in calendar.get("busy", [])
        ]

    def create_event(
        self,
        title: str,
        start: datetime,
        end: datetime,
        attendees: list[str],
        description: str | None = None,
        location: str | None = None,
        notify: bool = True,
    ) -> EventResult:
        """
        Create a calendar event.

        Args:
            title: Event summary.
            start: Event start.
            end: Event end.
            attendees: Attendee email addresses.
            description: Optional event description.
            location: Optional location.
            notify: Whether to email invitations to attendees.

        Returns:
            EventResult with the event ID and link.
        """
        event = {
            "summary": title,
            "start": {"dateTime": start.isoformat(), "timeZone": self._timezone},
            "end": {"dateTime": end.isoformat(), "timeZone": self._timezone},
            "attendees": [{"email": email} for email in attendees],
            "reminders": {"useDefault": True},
        }
        if description:
            event["description"] = description
        if location:
            event["location"] = location

        try:
            created = self._retry.call(
                self.service.events()
                .insert(
                    calendarId=self._calendar_id,
                    body=event,
                    sendUpdates="all" if notify else "none",
                )
                .execute
            )
        except HttpError as e:
            logger.error(f"Calendar API error: {e}")
            raise CalendarError(f"Event creation failed: {e}") from e

        logger.info(f"Created event {created.get('id')} at {start}")
        return EventResult(
            event_id=created.get("id", ""),
            event_url=created.get("htmlLink", ""),
        )


def _parse_api_datetime(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))

"""Availability and slot scoring for meeting scheduling."""

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, tzinfo

# Scoring weights
BASE_SCORE = 0.5
DAY_OFFSET_PENALTY = 0.05
WEEKDAY_NAMES = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]


@dataclass(frozen=True)
class TimeSlot:
    """A time slot with start and end times."""

    start: datetime
    end: datetime

    def __str__(self) -> str:
        """Format time slot for display."""
        if self.start.date() == self.end.date():
            return f"{self.start.strftime('%a %b %d')}: {self.start.strftime('%I:%M %p')} - {self.end.strftime('%I:%M %p')}"
        return f"{self.start.strftime('%a %b %d %I:%M %p')} - {self.end.strftime('%a %b %d %I:%M %p')}"

    def duration_minutes(self) -> int:
        """Get duration in minutes."""
        return int((self.end - self.start).total_seconds() / 60)

    def to_dict(self) -> dict[str, str | int]:
        """Convert to dictionary."""
        return {
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
            "display": str(self),
            "duration_minutes": self.duration_minutes(),
        }


@dataclass(frozen=True)
class ScoredSlot:
    """A candidate slot with its preference score in [0, 1]."""

    slot: TimeSlot
    score: float

    @property
    def day_of_week(self) -> str:
        return WEEKDAY_NAMES[self.slot.start.weekday()]


def _localize(dt: datetime, tz: tzinfo) -> datetime:
    """Express dt in tz; naive datetimes are taken to already be local."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=tz)
    return dt.astimezone(tz)


def _ceil_to_quarter_hour(dt: datetime) -> datetime:
    """Round up to the next :00/:15/:30/:45 boundary."""
    floored = dt.replace(minute=dt.minute - dt.minute % 15, second=0, microsecond=0)
    if floored < dt:
        floored += timedelta(minutes=15)
    return floored


def _working_windows(
    start: datetime,
    end: datetime,
    work_start_hour: int,
    work_end_hour: int,
) -> list[TimeSlot]:
    """Working-hour windows on weekdays, clipped to [start, end]."""
    windows = []
    day = start.date()

    while day <= end.date():
        if day.weekday() < 5:  # Skip weekends
            midnight = datetime.combine(day, time(), tzinfo=start.tzinfo)
            day_start = max(midnight + timedelta(hours=work_start_hour), start)
            day_end = min(midnight + timedelta(hours=work_end_hour), end)
            if day_start < day_end:
                windows.append(TimeSlot(start=day_start, end=day_end))
        day += timedelta(days=1)

    return windows


def _subtract_busy(window: TimeSlot, busy: list[TimeSlot]) -> list[TimeSlot]:
    """Free gaps left in window once the (sorted) busy intervals are removed."""
    gaps = []
    current = window.start

    for interval in busy:
        if interval.end <= current or interval.start >= window.end:
            continue
        if interval.start > current:
            gaps.append(TimeSlot(start=current, end=interval.start))
        current = max(current, interval.end)

    if current < window.end:
        gaps.append(TimeSlot(start=current, end=window.end))

    return gaps


def compute_available_slots(
    start: datetime,
    end: datetime,
    busy_slots: list[TimeSlot],
    duration_minutes: int,
    tz: tzinfo,
    work_start_hour: int = 9,
    work_end_hour: int = 17,
) -> list[TimeSlot]:
    """
    Derive bookable slots from busy intervals.

    Busy intervals are subtracted from the weekday working-hour windows
    inside [start, end]; every remaining gap is cut into consecutive slots
    of exactly `duration_minutes`, starting at the gap start.

    Args:
        start: Window start.
        end: Window end.
        busy_slots: Busy intervals reported by the calendar.
        duration_minutes: Meeting length; also the slot increment.
        tz: Timezone the working hours are expressed in.
        work_start_hour: Start of the working day (local hour).
        work_end_hour: End of the working day (local hour).

    Returns:
        Free slots in chronological order.
    """
    if duration_minutes <= 0:
        raise ValueError("duration_minutes must be positive")

    start = _ceil_to_quarter_hour(_localize(start, tz))
    end = _localize(end, tz)
    if start >= end:
        return []

    busy = sorted(
        (TimeSlot(_localize(b.start, tz), _localize(b.end, tz)) for b in busy_slots),
        key=lambda slot: slot.start,
    )
    duration = timedelta(minutes=duration_minutes)

    slots = []
    for window in _working_windows(start, end, work_start_hour, work_end_hour):
        for gap in _subtract_busy(window, busy):
            cursor = gap.start
            while cursor + duration <= gap.end:
                slots.append(TimeSlot(start=cursor, end=cursor + duration))
                cursor += duration

    return slots


def score_slot(slot: TimeSlot, today: date) -> float:
    """
    Preference score for a slot, clamped to [0, 1].

    Later days score lower; mid-morning and mid-afternoon starts and
    Tuesday to Thursday score higher.

    Args:
        slot: Candidate slot.
        today: Date the run is scheduling from.

    Returns:
        Score in [0, 1].
    """
    days_out = max((slot.start.date() - today).days, 0)
    score = BASE_SCORE - DAY_OFFSET_PENALTY * days_out

    hour = slot.start.hour
    if 10 <= hour <= 11:
        score += 0.3
    elif 14 <= hour <= 15:
        score += 0.2
    elif 9 <= hour <= 16:
        score += 0.1

    weekday = slot.start.weekday()
    if 1 <= weekday <= 3:  # Tuesday-Thursday
        score += 0.2
    elif weekday in (0, 4):  # Monday, Friday
        score += 0.1

    return min(max(score, 0.0), 1.0)


def suggest_slots(slots: list[TimeSlot], today: date, limit: int = 5) -> list[ScoredSlot]:
    """Best `limit` slots, highest score first, ties broken by earliest start."""
    scored = [ScoredSlot(slot=slot, score=score_slot(slot, today)) for slot in slots]
    scored.sort(key=lambda s: (-s.score, s.slot.start))
    return scored[:limit]


def pick_best_slot(slots: list[TimeSlot], today: date) -> ScoredSlot | None:
    """Highest-scoring slot, or None when there are no slots."""
    best = suggest_slots(slots, today, limit=1)
    return best[0] if best else None

"""Bookable time slots for the scheduling flow.

Slots are 30-minute "HH:MM" strings generated from the weekday's opening hours
in the availability configuration, minus the lunch window and any slot already
taken by an appointment on that date. Disabled weekdays, blocked dates and
dates inside the minimum-notice period have no slots. The booking window is
shown in settings but is not enforced here.
"""

from datetime import date, datetime, time, timedelta
from typing import Iterable, Optional

from backend.app.core.time import utc_now

SLOT_MINUTES = 30
WEEKDAYS = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]

DEFAULT_AVAILABILITY = {
    "bookingWindow": "30",
    "minNotice": "24",
    "quoteDuration": "60",
    "bufferTime": "15",
    "days": [
        {"name": "Monday", "enabled": True, "start": "8", "end": "17", "lunch": "12-13"},
        {"name": "Tuesday", "enabled": True, "start": "8", "end": "17", "lunch": "12-13"},
        {"name": "Wednesday", "enabled": True, "start": "8", "end": "17", "lunch": "12-13"},
        {"name": "Thursday", "enabled": True, "start": "8", "end": "17", "lunch": "12-13"},
        {"name": "Friday", "enabled": True, "start": "8", "end": "17", "lunch": "12-13"},
        {"name": "Saturday", "enabled": True, "start": "8", "end": "14", "lunch": "12-13"},
        {"name": "Sunday", "enabled": False, "start": "8", "end": "14", "lunch": "12-13"},
    ],
    "blockedDates": [],
}


def _to_int(value, default: int) -> int:
    try:
        return int(float(value))
    except (TypeError, ValueError):
        return default


def _to_minutes(hour_value) -> Optional[int]:
    """Hours are stored as strings like "8" or "12.5"; returns minutes after midnight."""
    try:
        return int(round(float(hour_value) * 60))
    except (TypeError, ValueError):
        return None


def _format_minutes(minutes: int) -> str:
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def normalize_slot(value) -> Optional[str]:
    """Reduce "9:00", "09:00:00" or a ``time`` to the "HH:MM" slot form."""
    if value is None:
        return None
    if isinstance(value, time):
        return value.strftime("%H:%M")
    text = str(value).strip()
    parts = text.split(":")
    if len(parts) < 2:
        return None
    try:
        return f"{int(parts[0]):02d}:{int(parts[1][:2]):02d}"
    except ValueError:
        return None


def lunch_window(lunch: str | None) -> Optional[tuple[int, int]]:
    if not lunch or "-" not in lunch:
        return None
    start, end = lunch.split("-", 1)
    start_min, end_min = _to_minutes(start), _to_minutes(end)
    if start_min is None or end_min is None or end_min <= start_min:
        return None
    return start_min, end_min


def day_schedule(config: dict, day: date) -> Optional[dict]:
    name = WEEKDAYS[day.weekday()]
    for entry in config.get("days") or []:
        if entry.get("name") == name:
            return entry
    return None


def generate_slots(schedule: dict) -> list[str]:
    """All slots of a working day, lunch excluded."""
    start = _to_minutes(schedule.get("start"))
    end = _to_minutes(schedule.get("end"))
    if start is None or end is None:
        return []
    lunch = lunch_window(schedule.get("lunch"))
    slots = []
    minute = start
    while minute < end:
        if not (lunch and lunch[0] <= minute < lunch[1]):
            slots.append(_format_minutes(minute))
        minute += SLOT_MINUTES
    return slots


def blocked_dates(config: dict) -> set[str]:
    return {str(entry.get("date")) for entry in config.get("blockedDates") or [] if entry.get("date")}


def earliest_bookable_date(config: dict, now: Optional[datetime] = None) -> date:
    now = now or utc_now()
    notice_hours = _to_int(config.get("minNotice"), 0)
    return (now + timedelta(hours=max(notice_hours, 0))).date()


def available_slots(
    day: date,
    config: dict,
    taken: Iterable = (),
    now: Optional[datetime] = None,
) -> list[str]:
    schedule = day_schedule(config, day)
    if not schedule or not schedule.get("enabled"):
        return []
    if day.isoformat() in blocked_dates(config):
        return []
    if day < earliest_bookable_date(config, now):
        return []

    taken_slots = {slot for slot in (normalize_slot(t) for t in taken) if slot}
    return sorted(slot for slot in generate_slots(schedule) if slot not in taken_slots)

"""Filtering and grouping of leads for the dashboard lists, inbox and calendar."""

import calendar
from datetime import date, datetime, timedelta, timezone
from typing import Iterable, Optional

from backend.app.core.time import utc_now, utc_today
from backend.app.services.availability import normalize_slot
from backend.app.services.service_catalog import chip_for, label_service

STATUS_FILTERS = {
    "new": "new",
    "contacted": "contacted",
    "scheduled": "scheduled",
    "quote-sent": "quote sent",
}
RANGES = ("all", "today", "week", "month")


def _aware(value: datetime) -> datetime:
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


def _range_start(range_name: str, now: datetime) -> Optional[datetime]:
    if range_name == "today":
        return now.replace(hour=0, minute=0, second=0, microsecond=0)
    if range_name == "week":
        return now - timedelta(days=7)
    if range_name == "month":
        return now - timedelta(days=30)
    return None


def filter_leads(
    leads: Iterable[dict],
    *,
    search: str | None = None,
    status: str = "all",
    service: str = "all",
    created_range: str = "all",
    scheduled_range: str = "all",
    now: Optional[datetime] = None,
) -> list[dict]:
    now = _aware(now or utc_now())
    query = (search or "").strip().lower()
    created_start = _range_start(created_range, now)
    scheduled_start = _range_start(scheduled_range, now)

    def matches(lead: dict) -> bool:
        if created_start is not None:
            created_at = lead.get("created_at")
            if created_at is None or _aware(created_at) < created_start:
                return False
        if scheduled_range != "all":
            appointment_date = lead.get("appointment_date")
            if appointment_date is None or scheduled_start is None:
                return False
            if appointment_date < scheduled_start.date():
                return False
        if status != "all":
            wanted = STATUS_FILTERS.get(status)
            if wanted is not None and (lead.get("status") or "").lower() != wanted:
                return False
        if service != "all" and (lead.get("service_type") or "").lower() != service:
            return False
        if query:
            haystack = " ".join(
                str(lead.get(field))
                for field in ("fullname", "email", "phone", "address", "service_type")
                if lead.get(field)
            ).lower()
            if query not in haystack:
                return False
        return True

    return [lead for lead in leads if matches(lead)]


def categorize_inbox(leads: Iterable[dict], estimator: str = "all") -> dict[str, list[dict]]:
    """Pending leads are everything not yet Scheduled or Quote Sent; the estimator filter skips them."""
    leads = list(leads)

    def by_estimator(items: list[dict]) -> list[dict]:
        if estimator == "all":
            return items
        return [lead for lead in items if lead.get("assigned_to") == estimator]

    return {
        "pending": [lead for lead in leads if lead.get("status") not in ("Scheduled", "Quote Sent")],
        "scheduled": by_estimator([lead for lead in leads if lead.get("status") == "Scheduled"]),
        "quote_sent": by_estimator([lead for lead in leads if lead.get("status") == "Quote Sent"]),
    }


def calendar_days(view: str, anchor: date) -> list[date]:
    if view == "week":
        # Weeks start on Sunday
        start = anchor - timedelta(days=(anchor.weekday() + 1) % 7)
        return [start + timedelta(days=i) for i in range(7)]
    days_in_month = calendar.monthrange(anchor.year, anchor.month)[1]
    return [date(anchor.year, anchor.month, day) for day in range(1, days_in_month + 1)]


def build_calendar(leads: Iterable[dict], view: str, anchor: date, today: Optional[date] = None, colors: Optional[dict] = None) -> list[dict]:
    today = today or utc_today()
    colors = colors or {}
    by_date: dict[date, list[dict]] = {}
    for lead in leads:
        appointment_date = lead.get("appointment_date")
        if appointment_date is None:
            continue
        service_type = lead.get("service_type") or ""
        by_date.setdefault(appointment_date, []).append(
            {
                "id": lead.get("id"),
                "fullname": lead.get("fullname"),
                "service_type": service_type,
                "service_label": label_service(service_type),
                "chip": chip_for(colors, service_type),
                "time": normalize_slot(lead.get("appointment_time")),
                "phone": lead.get("phone"),
                "address": lead.get("address"),
                "notes": lead.get("notes"),
            }
        )

    days = []
    for day in calendar_days(view, anchor):
        appointments = sorted(by_date.get(day, []), key=lambda appt: appt["time"] or "")
        days.append({"date": day, "is_today": day == today, "appointments": appointments})
    return days

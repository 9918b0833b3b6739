"""Dashboard analytics computed from stored quotes."""

from collections import defaultdict
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Iterable, Optional

from backend.app.services.service_catalog import label_service, slug_service


def _positive_amount(value) -> Optional[Decimal]:
    try:
        amount = Decimal(str(value))
    except (InvalidOperation, TypeError, ValueError):
        return None
    if not amount.is_finite() or amount <= 0:
        return None
    return amount


def _whole(amount: Decimal) -> int:
    return int(amount.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def _month_key(created_at: datetime) -> str:
    return f"{created_at.year}-{created_at.month:02d}"


def _status(quote: dict) -> str:
    return (quote.get("status") or "").lower()


def get_kpis(quotes: list[dict]) -> dict:
    total = len(quotes)
    scheduled = sum(1 for q in quotes if _status(q) == "scheduled")
    quote_sent = sum(1 for q in quotes if _status(q) == "quote sent")
    conversion_rate = round(quote_sent / total * 100) if total else 0

    amounts = [a for a in (_positive_amount(q.get("estimate")) for q in quotes) if a is not None]
    average_estimate = _whole(sum(amounts) / len(amounts)) if amounts else 0
    pipeline = sum(
        (a for a in (_positive_amount(q.get("estimate")) for q in quotes if _status(q) == "quote sent") if a is not None),
        Decimal("0"),
    )
    return {
        "total": total,
        "scheduled": scheduled,
        "quote_sent": quote_sent,
        "conversion_rate": conversion_rate,
        "average_estimate": average_estimate,
        "pipeline": _whole(pipeline),
    }


def leads_by_month(quotes: Iterable[dict]) -> list[dict]:
    counts: dict[str, int] = defaultdict(int)
    for quote in quotes:
        if quote.get("created_at"):
            counts[_month_key(quote["created_at"])] += 1
    return [{"month": month, "leads": counts[month]} for month in sorted(counts)]


def revenue_by_month(quotes: Iterable[dict]) -> list[dict]:
    totals: dict[str, Decimal] = defaultdict(Decimal)
    for quote in quotes:
        amount = _positive_amount(quote.get("estimate"))
        if amount is None or not quote.get("created_at"):
            continue
        totals[_month_key(quote["created_at"])] += amount
    return [{"month": month, "revenue": _whole(totals[month])} for month in sorted(totals)]


def service_mix(quotes: Iterable[dict]) -> list[dict]:
    counts: dict[str, int] = {}
    for quote in quotes:
        key = slug_service(quote.get("service_type"))
        if not key:
            continue
        counts[key] = counts.get(key, 0) + 1
    return [{"key": key, "name": label_service(key), "value": count} for key, count in counts.items()]


def get_analytics(quotes: list[dict]) -> dict:
    return {
        "kpis": get_kpis(quotes),
        "leads_by_month": leads_by_month(quotes),
        "revenue_by_month": revenue_by_month(quotes),
        "service_mix": service_mix(quotes),
    }

"""Service naming helpers shared by the widget, leads views and analytics."""

import re

PALETTE = [
    "bg-emerald-100 text-emerald-800",
    "bg-sky-100 text-sky-800",
    "bg-rose-100 text-rose-800",
    "bg-amber-100 text-amber-800",
    "bg-lime-100 text-lime-800",
    "bg-cyan-100 text-cyan-800",
    "bg-violet-100 text-violet-800",
]
DEFAULT_CHIP = "bg-gray-200 text-gray-800"


def slug_service(name: str | None) -> str:
    """Normalise a service name or key: "Lawn Mowing" -> "lawn-mowing"."""
    slug = re.sub(r"[^a-z0-9]+", "-", (name or "").lower())
    return slug.strip("-")


def label_service(key: str | None) -> str:
    return re.sub(r"\b\w", lambda m: m.group(0).upper(), (key or "").replace("-", " "))


def service_colors(pricing: dict) -> dict[str, str]:
    colors: dict[str, str] = {}
    for idx, service in enumerate(pricing.get("services") or []):
        name = service.get("name") if isinstance(service, dict) else None
        if not name:
            continue
        colors[slug_service(name)] = PALETTE[idx % len(PALETTE)]
    return colors


def chip_for(colors: dict[str, str], service_type: str | None) -> str:
    return colors.get(slug_service(service_type), DEFAULT_CHIP)

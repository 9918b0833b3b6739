"""Local overlay for lead fields whose remote write failed.

Each overridable field has its own map in the local store, keyed by lead id.
When leads are read back, an overlay entry for a field replaces the stored
value for that lead, even when the overlaid value is ``None``.
"""

from typing import Any, Optional

from backend.app.services.local_store import LocalStore

OVERLAY_KEYS = {
    "status": "leadStatusOverrides",
    "notes": "leadNotesOverrides",
    "assigned_to": "inboxAssignments",
}


class OverlayCache:
    def __init__(self, store: LocalStore):
        self.store = store

    def _key(self, field: str) -> str:
        try:
            return OVERLAY_KEYS[field]
        except KeyError:
            raise ValueError(f"Field {field!r} has no overlay") from None

    def get_map(self, field: str) -> dict[int, Any]:
        raw = self.store.get(self._key(field)) or {}
        overlay: dict[int, Any] = {}
        for lead_id, value in raw.items():
            try:
                overlay[int(lead_id)] = value
            except (TypeError, ValueError):
                continue
        return overlay

    def get(self, field: str, lead_id: int, default: Optional[Any] = None) -> Any:
        return self.get_map(field).get(lead_id, default)

    def has(self, field: str, lead_id: int) -> bool:
        return lead_id in self.get_map(field)

    def write(self, field: str, lead_id: int, value: Any) -> None:
        key = self._key(field)
        raw = dict(self.store.get(key) or {})
        raw[str(lead_id)] = value
        self.store.set(key, raw)

    def clear(self, field: str, lead_id: int) -> None:
        key = self._key(field)
        raw = dict(self.store.get(key) or {})
        if str(lead_id) in raw:
            del raw[str(lead_id)]
            self.store.set(key, raw)

    def apply(self, leads: list[dict]) -> list[dict]:
        maps = {field: self.get_map(field) for field in OVERLAY_KEYS}
        merged = []
        for lead in leads:
            lead = dict(lead)
            for field, overlay in maps.items():
                if lead.get("id") in overlay:
                    lead[field] = overlay[lead["id"]]
            merged.append(lead)
        return merged

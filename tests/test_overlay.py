import pytest

from backend.app.services.local_store import LocalStore
from backend.app.services.overlay import OverlayCache


def test_local_store_round_trips_through_file(tmp_path):
    path = tmp_path / "local.json"
    store = LocalStore(str(path))
    store.set("availabilitySettings", {"minNotice": "12"})
    assert LocalStore(str(path)).get("availabilitySettings") == {"minNotice": "12"}
    store.remove("availabilitySettings")
    assert LocalStore(str(path)).get("availabilitySettings") is None


def test_corrupt_file_reads_as_empty(tmp_path):
    path = tmp_path / "local.json"
    path.write_text("{not json", encoding="utf-8")
    store = LocalStore(str(path))
    assert store.get("leadStatusOverrides", {}) == {}
    store.set("leadStatusOverrides", {"1": "Contacted"})
    assert store.get("leadStatusOverrides") == {"1": "Contacted"}


def test_overlay_write_and_clear():
    overlay = OverlayCache(LocalStore())
    overlay.write("status", 7, "Scheduled")
    overlay.write("notes", 7, "call after 5")
    assert overlay.get_map("status") == {7: "Scheduled"}
    assert overlay.has("notes", 7)
    overlay.clear("status", 7)
    assert overlay.get_map("status") == {}
    assert overlay.get("notes", 7) == "call after 5"


def test_overlay_precedence_on_read():
    overlay = OverlayCache(LocalStore())
    overlay.write("status", 1, "Quote Sent")
    overlay.write("assigned_to", 2, None)
    leads = [
        {"id": 1, "status": "New", "assigned_to": None, "notes": "remote"},
        {"id": 2, "status": "New", "assigned_to": "est-1", "notes": None},
    ]
    merged = overlay.apply(leads)
    assert merged[0]["status"] == "Quote Sent"
    assert merged[0]["notes"] == "remote"
    assert merged[1]["assigned_to"] is None
    # Input rows are left untouched
    assert leads[0]["status"] == "New"


def test_overlay_rejects_unknown_field():
    overlay = OverlayCache(LocalStore())
    with pytest.raises(ValueError):
        overlay.write("estimate", 1, 10)

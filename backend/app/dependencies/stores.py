"""Dependencies wiring the device-local store, overlay and lifecycle service into routes."""

from fastapi import Depends
from sqlalchemy.orm import Session

from backend.app.db.session import get_db
from backend.app.services.lead_lifecycle import LeadLifecycle
from backend.app.services.local_store import LocalStore, get_local_store
from backend.app.services.overlay import OverlayCache


def get_overlay(store: LocalStore = Depends(get_local_store)) -> OverlayCache:
    return OverlayCache(store)


def get_lead_lifecycle(
    db: Session = Depends(get_db),
    overlay: OverlayCache = Depends(get_overlay),
) -> LeadLifecycle:
    return LeadLifecycle(db, overlay)

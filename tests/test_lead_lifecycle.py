from decimal import Decimal

import pytest
from sqlalchemy.exc import OperationalError

from backend.app.crud.crud_quote import CRUDQuote, quote_crud
from backend.app.db.base import Base
from backend.app.db.session import SessionLocal, engine
from backend.app.services.lead_lifecycle import InvalidStatusError, LeadLifecycle
from backend.app.services.local_store import LocalStore
from backend.app.services.overlay import OverlayCache


@pytest.fixture(autouse=True)
def setup_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


class BrokenCRUDQuote(CRUDQuote):
    def update_fields(self, db, *, quote_id, values):
        raise OperationalError("UPDATE quotes", {}, Exception("store unreachable"))


def make_quote(db, **overrides):
    values = {
        "fullname": "Dana Reyes",
        "email": "dana@example.com",
        "phone": "555-0100",
        "address": "1 Elm St",
        "service_type": "lawn-mowing",
        "square_footage": 2000,
        "estimate": Decimal("150"),
    }
    values.update(overrides)
    return quote_crud.create(db, values=values)


def test_new_quote_defaults(db):
    quote = make_quote(db)
    assert quote.status == "New"
    assert quote.assigned_to is None
    assert quote.photo_urls == []
    assert quote.created_at is not None


def test_set_status_persists_and_is_idempotent(db):
    quote = make_quote(db)
    lifecycle = LeadLifecycle(db, OverlayCache(LocalStore()))
    first = lifecycle.set_status(quote.id, "Scheduled")
    second = lifecycle.set_status(quote.id, "Scheduled")
    assert first["persisted"] and second["persisted"]
    leads = lifecycle.load_leads()
    assert len(leads) == 1
    assert leads[0]["status"] == "Scheduled"


def test_any_status_may_follow_any_other(db):
    quote = make_quote(db)
    lifecycle = LeadLifecycle(db, OverlayCache(LocalStore()))
    for status in ["Quote Sent", "New", "Contacted", "Scheduled", "New"]:
        lifecycle.set_status(quote.id, status)
        assert lifecycle.load_lead(quote.id)["status"] == status


def test_invalid_status_rejected(db):
    quote = make_quote(db)
    lifecycle = LeadLifecycle(db, OverlayCache(LocalStore()))
    with pytest.raises(InvalidStatusError):
        lifecycle.set_status(quote.id, "Closed")


def test_failed_status_write_falls_back_to_overlay(db):
    quote = make_quote(db)
    overlay = OverlayCache(LocalStore())
    broken = LeadLifecycle(db, overlay, crud=BrokenCRUDQuote())
    outcome = broken.set_status(quote.id, "Contacted")
    assert outcome["persisted"] is False
    assert overlay.get("status", quote.id) == "Contacted"

    # Reads prefer the overlay over the stale stored value
    reader = LeadLifecycle(db, overlay)
    assert reader.load_lead(quote.id)["status"] == "Contacted"
    db.expire_all()
    assert quote_crud.get(db, quote_id=quote.id).status == "New"


def test_successful_write_clears_overlay(db):
    quote = make_quote(db)
    overlay = OverlayCache(LocalStore())
    LeadLifecycle(db, overlay, crud=BrokenCRUDQuote()).set_notes(quote.id, "gate code 1234")
    assert overlay.has("notes", quote.id)

    LeadLifecycle(db, overlay).set_notes(quote.id, "gate code 4321")
    assert not overlay.has("notes", quote.id)
    assert LeadLifecycle(db, overlay).load_lead(quote.id)["notes"] == "gate code 4321"


def test_assignment_and_unassignment(db):
    quote = make_quote(db)
    lifecycle = LeadLifecycle(db, OverlayCache(LocalStore()))
    lifecycle.set_assignment(quote.id, "est-2")
    assert lifecycle.load_lead(quote.id)["assigned_to"] == "est-2"
    lifecycle.set_assignment(quote.id, "unassigned")
    db.expire_all()
    assert quote_crud.get(db, quote_id=quote.id).assigned_to is None


def test_failed_unassignment_overrides_remote_value(db):
    quote = make_quote(db, assigned_to="est-1")
    overlay = OverlayCache(LocalStore())
    LeadLifecycle(db, overlay, crud=BrokenCRUDQuote()).set_assignment(quote.id, None)
    assert LeadLifecycle(db, overlay).load_lead(quote.id)["assigned_to"] is None

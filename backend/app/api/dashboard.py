"""Internal dashboard endpoints: leads, inbox, calendar, estimators and analytics."""

import logging
from datetime import date
from typing import Literal, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from backend.app.core.errors import ApiError
from backend.app.core.time import utc_today
from backend.app.crud.crud_estimator import estimator_crud
from backend.app.db.session import get_db
from backend.app.dependencies.stores import get_lead_lifecycle
from backend.app.schemas.estimator import EstimatorRead
from backend.app.schemas.quote import AssignmentChange, NotesChange, StatusChange, UpdateOutcome
from backend.app.services.analytics import get_analytics
from backend.app.services.lead_lifecycle import InvalidStatusError, LeadLifecycle
from backend.app.services.lead_views import build_calendar, categorize_inbox, filter_leads
from backend.app.services.photo_storage import PhotoStorage, get_photo_storage
from backend.app.services.service_catalog import service_colors
from backend.app.services.settings_documents import PRICING_KEY, load_document

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/dashboard", tags=["dashboard"])

FALLBACK_ESTIMATORS = [
    {"id": "est-1", "fullname": "Alex Estimator"},
    {"id": "est-2", "fullname": "Jamie Johnson"},
    {"id": "est-3", "fullname": "Taylor Rivera"},
]

Range = Literal["all", "today", "week", "month"]


def _load(lifecycle: LeadLifecycle) -> list[dict]:
    try:
        return lifecycle.load_leads()
    except SQLAlchemyError:
        logger.exception("Failed to load leads")
        raise ApiError(500, "Failed to load leads")


def _with_photo_urls(lead: dict, storage: PhotoStorage) -> dict:
    lead["photo_public_urls"] = [storage.resolve_photo_url(p) for p in lead.get("photo_urls") or []]
    return lead


@router.get("/leads")
async def list_leads(
    search: Optional[str] = None,
    status: Literal["all", "new", "contacted", "scheduled", "quote-sent"] = "all",
    service: str = "all",
    created_range: Range = "all",
    scheduled_range: Range = "all",
    lifecycle: LeadLifecycle = Depends(get_lead_lifecycle),
    storage: PhotoStorage = Depends(get_photo_storage),
):
    leads = filter_leads(
        _load(lifecycle),
        search=search,
        status=status,
        service=service.lower(),
        created_range=created_range,
        scheduled_range=scheduled_range,
    )
    return [_with_photo_urls(lead, storage) for lead in leads]


@router.get("/leads/{lead_id}")
async def get_lead(
    lead_id: int,
    lifecycle: LeadLifecycle = Depends(get_lead_lifecycle),
    storage: PhotoStorage = Depends(get_photo_storage),
):
    lead = lifecycle.load_lead(lead_id)
    if lead is None:
        raise ApiError(404, "Lead not found")
    return _with_photo_urls(lead, storage)


@router.get("/inbox")
async def get_inbox(estimator: str = "all", lifecycle: LeadLifecycle = Depends(get_lead_lifecycle)):
    return categorize_inbox(_load(lifecycle), estimator=estimator)


@router.post("/leads/{lead_id}/status", response_model=UpdateOutcome)
async def change_status(lead_id: int, payload: StatusChange, lifecycle: LeadLifecycle = Depends(get_lead_lifecycle)):
    try:
        outcome = lifecycle.set_status(lead_id, payload.status)
    except InvalidStatusError as exc:
        raise ApiError(400, str(exc))
    return UpdateOutcome(lead_id=lead_id, field="status", persisted=outcome["persisted"])


@router.post("/leads/{lead_id}/assignment", response_model=UpdateOutcome)
async def change_assignment(lead_id: int, payload: AssignmentChange, lifecycle: LeadLifecycle = Depends(get_lead_lifecycle)):
    outcome = lifecycle.set_assignment(lead_id, payload.user_id)
    return UpdateOutcome(lead_id=lead_id, field="assigned_to", persisted=outcome["persisted"])


@router.post("/leads/{lead_id}/notes", response_model=UpdateOutcome)
async def change_notes(lead_id: int, payload: NotesChange, lifecycle: LeadLifecycle = Depends(get_lead_lifecycle)):
    outcome = lifecycle.set_notes(lead_id, payload.notes)
    return UpdateOutcome(lead_id=lead_id, field="notes", persisted=outcome["persisted"])


@router.get("/estimators", response_model=list[EstimatorRead])
async def list_estimators(db: Session = Depends(get_db)):
    try:
        estimators = estimator_crud.get_multi(db)
    except SQLAlchemyError:
        logger.exception("Failed to load estimators")
        estimators = []
    if not estimators:
        logger.warning("Using temporary estimator list.")
        return FALLBACK_ESTIMATORS
    return estimators


@router.get("/calendar")
async def get_calendar(
    view: Literal["month", "week"] = "month",
    anchor: Optional[date] = Query(default=None, alias="date"),
    db: Session = Depends(get_db),
    lifecycle: LeadLifecycle = Depends(get_lead_lifecycle),
):
    today = utc_today()
    pricing, _ = load_document(db, PRICING_KEY)
    days = build_calendar(_load(lifecycle), view, anchor or today, today=today, colors=service_colors(pricing))
    return {"view": view, "anchor": (anchor or today).isoformat(), "days": days}


@router.get("/analytics")
async def analytics(lifecycle: LeadLifecycle = Depends(get_lead_lifecycle)):
    return get_analytics(_load(lifecycle))

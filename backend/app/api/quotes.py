"""Public quote endpoints: scheduling, submission, photo upload and lead updates."""

import logging
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any

from fastapi import APIRouter, Body, Depends, File, UploadFile
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from backend.app.core.errors import ApiError
from backend.app.crud.crud_quote import quote_crud
from backend.app.db.session import get_db
from backend.app.schemas.quote import (
    LEAD_STATUSES,
    AppointmentRequest,
    NotesUpdateRequest,
    StatusUpdateRequest,
)
from backend.app.services.photo_storage import PhotoStorage, PhotoStorageError, get_photo_storage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["quotes"])

REQUIRED_APPOINTMENT_FIELDS = ("name", "phone", "address", "service_type", "estimate", "scheduled_date_time")


def _is_blank(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _parse_scheduled(value: str) -> datetime:
    try:
        return datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except ValueError:
        raise ApiError(400, "Invalid scheduledDateTime.")


def _parse_estimate(value) -> Decimal:
    try:
        estimate = Decimal(str(value).strip())
    except InvalidOperation:
        raise ApiError(400, "Invalid estimate.")
    if not estimate.is_finite() or estimate < 0:
        raise ApiError(400, "Invalid estimate.")
    return estimate


def _optional_footage(value) -> int | None:
    try:
        sqft = int(float(value))
    except (TypeError, ValueError, OverflowError):
        return None
    return sqft if sqft > 0 else None


@router.post("/schedule-appointment")
async def schedule_appointment(payload: AppointmentRequest, db: Session = Depends(get_db)):
    if any(_is_blank(getattr(payload, field)) for field in REQUIRED_APPOINTMENT_FIELDS):
        raise ApiError(400, "Missing required fields.")

    scheduled = _parse_scheduled(payload.scheduled_date_time)
    values = {
        "fullname": payload.name.strip(),
        "email": payload.email,
        "phone": payload.phone.strip(),
        "address": payload.address.strip(),
        "service_type": payload.service_type,
        "square_footage": _optional_footage(payload.square_footage),
        "additional_info": payload.additional_info,
        "photo_urls": list(payload.photos or []),
        "estimate": _parse_estimate(payload.estimate),
        # Keep the wall-clock date and time the customer picked
        "appointment_date": scheduled.date(),
        "appointment_time": scheduled.time().replace(second=0, microsecond=0, tzinfo=None),
        "status": "New",
    }
    try:
        quote = quote_crud.create(db, values=values)
    except SQLAlchemyError:
        logger.exception("Error scheduling appointment")
        raise ApiError(500, "Failed to schedule appointment")
    logger.info("Appointment request stored as quote %s for %s", quote.id, scheduled.isoformat())
    return {"message": "Appointment scheduled", "id": quote.id}


@router.post("/submit-quote")
async def submit_quote(payload: Any = Body(default=None)):
    logger.info("Received form submission: %s", payload)
    return {"message": "Quote received!"}


@router.post("/update-lead-status")
@router.post("/status-update")
async def update_lead_status(payload: StatusUpdateRequest, db: Session = Depends(get_db)):
    lead_id = payload.target_id
    if lead_id is None or _is_blank(payload.status):
        raise ApiError(400, "Missing leadId or status")
    if payload.status not in LEAD_STATUSES:
        raise ApiError(400, "Invalid status")
    try:
        quote_crud.update_fields(db, quote_id=lead_id, values={"status": payload.status})
    except SQLAlchemyError:
        logger.exception("Status update failed for lead %s", lead_id)
        raise ApiError(500, "Error updating status")
    return {"success": True}


@router.post("/update-lead-notes")
async def update_lead_notes(payload: NotesUpdateRequest, db: Session = Depends(get_db)):
    if payload.id is None:
        raise ApiError(400, "Missing id")
    try:
        quote_crud.update_fields(db, quote_id=payload.id, values={"notes": payload.notes or ""})
    except SQLAlchemyError:
        logger.exception("Notes update failed for lead %s", payload.id)
        raise ApiError(500, "Error updating notes")
    return {"success": True}


@router.post("/upload-quote-photo")
async def upload_quote_photo(
    file: UploadFile | None = File(default=None),
    storage: PhotoStorage = Depends(get_photo_storage),
):
    if file is None:
        raise ApiError(400, "No file uploaded")
    contents = await file.read()
    try:
        path = storage.upload(file.filename, contents)
    except PhotoStorageError:
        logger.exception("Photo upload failed for %s", file.filename)
        raise ApiError(500, "Upload failed")
    return {"path": path, "publicUrl": storage.public_url(path)}

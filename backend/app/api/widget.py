"""Quote widget endpoints: instant estimate, offered services and open slots."""

import logging
from datetime import date

from fastapi import APIRouter, Depends, Query
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from backend.app.core.errors import ApiError
from backend.app.crud.crud_quote import quote_crud
from backend.app.db.session import get_db
from backend.app.schemas.quote import EstimateRequest, EstimateResponse
from backend.app.services.availability import available_slots
from backend.app.services.local_store import LocalStore, get_local_store
from backend.app.services.pricing import UnknownServiceError, calculate_estimate, coerce_square_footage, estimate_bounds
from backend.app.services.service_catalog import label_service, slug_service
from backend.app.services.settings_documents import PRICING_KEY, load_availability, load_document

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["widget"])


@router.post("/estimate", response_model=EstimateResponse)
async def get_estimate(payload: EstimateRequest, db: Session = Depends(get_db)):
    if not payload.service_type:
        raise ApiError(400, "Missing serviceType")
    pricing, _ = load_document(db, PRICING_KEY)
    try:
        estimate = calculate_estimate(payload.service_type, payload.square_footage, pricing)
        low, high = estimate_bounds(payload.service_type, payload.square_footage, pricing)
    except UnknownServiceError as exc:
        raise ApiError(400, str(exc))
    return EstimateResponse(
        service_type=slug_service(payload.service_type),
        square_footage=coerce_square_footage(payload.square_footage),
        estimate=estimate,
        low=low,
        high=high,
    )


@router.get("/widget/services")
async def list_widget_services(db: Session = Depends(get_db)):
    pricing, _ = load_document(db, PRICING_KEY)
    services = []
    for service in pricing.get("services") or []:
        slug = slug_service(service.get("name"))
        if not slug:
            continue
        services.append(
            {
                "value": slug,
                "label": label_service(slug),
                "basePrice": service.get("basePrice", 0),
            }
        )
    return services


@router.get("/availability")
async def get_available_slots(
    day: date = Query(..., alias="date"),
    db: Session = Depends(get_db),
    local_store: LocalStore = Depends(get_local_store),
):
    config = load_availability(local_store)
    try:
        taken = quote_crud.appointment_times_on(db, day=day)
    except SQLAlchemyError:
        logger.exception("Failed to read appointments for %s", day)
        raise ApiError(500, "Failed to load availability")
    return {"date": day.isoformat(), "slots": available_slots(day, config, taken)}

"""Dashboard settings: pricing, business, widget and device-local availability."""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from backend.app.core.errors import ApiError
from backend.app.db.session import get_db
from backend.app.schemas.settings import (
    AvailabilitySettings,
    BusinessSettings,
    PricingSettings,
    SettingDocument,
    WidgetSettings,
)
from backend.app.services.local_store import LocalStore, get_local_store
from backend.app.services.service_catalog import DEFAULT_CHIP, service_colors
from backend.app.services.settings_documents import (
    BUSINESS_KEY,
    PRICING_KEY,
    WIDGET_KEY,
    embed_code,
    load_availability,
    load_document,
    save_availability,
    save_document,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/settings", tags=["settings"])


def _read(db: Session, key: str, local_store: LocalStore) -> SettingDocument:
    data, updated_at = load_document(db, key, local_store)
    return SettingDocument(key=key, data=data, updated_at=updated_at)


def _write(db: Session, key: str, data: dict) -> SettingDocument:
    try:
        saved, updated_at = save_document(db, key, data)
    except SQLAlchemyError:
        logger.exception("Failed to save %s settings", key)
        raise ApiError(500, f"Failed to save {key} settings")
    return SettingDocument(key=key, data=saved, updated_at=updated_at)


@router.get("/pricing", response_model=SettingDocument)
async def get_pricing(db: Session = Depends(get_db), local_store: LocalStore = Depends(get_local_store)):
    return _read(db, PRICING_KEY, local_store)


@router.put("/pricing", response_model=SettingDocument)
async def update_pricing(payload: PricingSettings, db: Session = Depends(get_db)):
    return _write(db, PRICING_KEY, payload.model_dump(by_alias=True))


@router.get("/business", response_model=SettingDocument)
async def get_business(db: Session = Depends(get_db), local_store: LocalStore = Depends(get_local_store)):
    return _read(db, BUSINESS_KEY, local_store)


@router.put("/business", response_model=SettingDocument)
async def update_business(payload: BusinessSettings, db: Session = Depends(get_db)):
    return _write(db, BUSINESS_KEY, payload.model_dump(by_alias=True))


@router.get("/widget", response_model=SettingDocument)
async def get_widget(db: Session = Depends(get_db), local_store: LocalStore = Depends(get_local_store)):
    return _read(db, WIDGET_KEY, local_store)


@router.put("/widget", response_model=SettingDocument)
async def update_widget(payload: WidgetSettings, db: Session = Depends(get_db)):
    return _write(db, WIDGET_KEY, payload.model_dump(by_alias=True))


@router.get("/widget/embed-code")
async def get_embed_code(db: Session = Depends(get_db)):
    widget, _ = load_document(db, WIDGET_KEY)
    return {"embed_code": embed_code(widget)}


@router.get("/availability", response_model=SettingDocument)
async def get_availability(local_store: LocalStore = Depends(get_local_store)):
    return SettingDocument(key="availability", data=load_availability(local_store))


@router.put("/availability", response_model=SettingDocument)
async def update_availability(payload: AvailabilitySettings, local_store: LocalStore = Depends(get_local_store)):
    saved = save_availability(local_store, payload.model_dump(by_alias=True))
    return SettingDocument(key="availability", data=saved)


@router.get("/service-colors")
async def get_service_colors(db: Session = Depends(get_db)):
    pricing, _ = load_document(db, PRICING_KEY)
    return {"colors": service_colors(pricing), "default": DEFAULT_CHIP}

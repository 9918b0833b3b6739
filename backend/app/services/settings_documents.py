"""Load and save the singleton configuration documents.

Pricing, business and widget documents live in the settings table and are
read merged over their defaults; saves replace the whole document (last write
wins). Availability is device-local and lives in the local store instead.
"""

import logging
from datetime import datetime
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from backend.app.crud.crud_setting import setting_crud
from backend.app.services.availability import DEFAULT_AVAILABILITY
from backend.app.services.local_store import LocalStore

logger = logging.getLogger(__name__)

PRICING_KEY = "pricing"
BUSINESS_KEY = "business"
WIDGET_KEY = "widget"
AVAILABILITY_LOCAL_KEY = "availabilitySettings"

DEFAULT_PRICING = {
    "laborRate": 45,
    "travelFee": 2.5,
    "minCharge": 75,
    "emergencyRate": "1.5",
    "services": [
        {"id": 1, "name": "Lawn Mowing", "basePrice": 50, "pricePerSqft": 0.05, "markup": 20},
        {"id": 2, "name": "Landscaping Design", "basePrice": 200, "pricePerSqft": 0.15, "markup": 30},
        {"id": 3, "name": "Tree Removal", "basePrice": 150, "pricePerSqft": 0.08, "markup": 25},
        {"id": 4, "name": "Hardscaping", "basePrice": 300, "pricePerSqft": 0.25, "markup": 35},
    ],
}

DEFAULT_BUSINESS = {
    "businessName": "GreenScapes Landscaping",
    "ownerName": "John Doe",
    "phone": "(555) 123-4567",
    "email": "john@greenscapes.com",
    "address": "123 Business Park Drive\nSpringfield, IL 62701",
    "description": (
        "Professional landscaping services including lawn care, design, and maintenance "
        "for residential and commercial properties."
    ),
    "primaryCity": "Springfield",
    "serviceRadius": "25",
    "additionalAreas": "Chatham, Rochester, Sherman, New Berlin",
    "hours": [
        {"day": "Monday", "enabled": True, "start": "8", "end": "17"},
        {"day": "Tuesday", "enabled": True, "start": "8", "end": "17"},
        {"day": "Wednesday", "enabled": True, "start": "8", "end": "17"},
        {"day": "Thursday", "enabled": True, "start": "8", "end": "17"},
        {"day": "Friday", "enabled": True, "start": "8", "end": "17"},
        {"day": "Saturday", "enabled": True, "start": "8", "end": "14"},
        {"day": "Sunday", "enabled": False, "start": "8", "end": "14"},
    ],
}

DEFAULT_WIDGET = {
    "widgetTitle": "Get Your Instant Estimate",
    "widgetSubtitle": "Powered by GrndWrk AI",
    "primaryColor": "#16a34a",
    "buttonText": "Get Quote",
    "welcomeMessage": (
        "Get an instant AI-powered estimate for your landscaping project. "
        "Upload photos and receive pricing in seconds!"
    ),
    "requirePhotos": True,
    "showInstantEstimates": True,
    "enableScheduling": True,
    "minSquareFootage": 100,
    "maxSquareFootage": 10000,
    "enabledServices": ["Lawn Mowing", "Landscaping Design", "Tree Removal", "Hardscaping"],
    "businessId": "your-business-id",
}

DEFAULTS = {
    PRICING_KEY: DEFAULT_PRICING,
    BUSINESS_KEY: DEFAULT_BUSINESS,
    WIDGET_KEY: DEFAULT_WIDGET,
}

# Documents saved on a device before the settings table existed
LEGACY_LOCAL_KEYS = {
    PRICING_KEY: "pricingSettings",
    BUSINESS_KEY: "businessSettings",
}

EMBED_SCRIPT_URL = "https://widget.grndwrk.com/embed.js"


def load_document(db: Session, key: str, local_store: Optional[LocalStore] = None) -> tuple[dict, Optional[datetime]]:
    """Return ``(document, updated_at)``; unreadable or missing rows yield the defaults."""
    defaults = DEFAULTS[key]
    try:
        row = setting_crud.get(db, key=key)
    except SQLAlchemyError:
        logger.exception("Failed to read %s settings; using defaults", key)
        return dict(defaults), None
    if row is not None and row.data:
        return {**defaults, **row.data}, row.updated_at
    if local_store is not None:
        imported = import_local_document(db, key, local_store)
        if imported is not None:
            return imported
    return dict(defaults), None


def import_local_document(db: Session, key: str, local_store: LocalStore) -> Optional[tuple[dict, datetime]]:
    legacy_key = LEGACY_LOCAL_KEYS.get(key)
    raw = local_store.get(legacy_key) if legacy_key else None
    if not isinstance(raw, dict):
        return None
    merged = {**DEFAULTS[key], **raw}
    try:
        row = setting_crud.upsert(db, key=key, data=merged)
    except SQLAlchemyError:
        logger.exception("Failed to import local %s settings", key)
        return merged, None
    local_store.remove(legacy_key)
    logger.info("Imported local %s settings", key)
    return merged, row.updated_at


def save_document(db: Session, key: str, data: dict) -> tuple[dict, datetime]:
    row = setting_crud.upsert(db, key=key, data=data)
    logger.info("Saved %s settings", key)
    return row.data, row.updated_at


def load_availability(local_store: LocalStore) -> dict:
    stored = local_store.get(AVAILABILITY_LOCAL_KEY)
    if isinstance(stored, dict):
        return {**DEFAULT_AVAILABILITY, **stored}
    return dict(DEFAULT_AVAILABILITY)


def save_availability(local_store: LocalStore, data: dict) -> dict:
    local_store.set(AVAILABILITY_LOCAL_KEY, data)
    return data


def embed_code(widget: dict) -> str:
    business_id = widget.get("businessId") or DEFAULT_WIDGET["businessId"]
    return (
        f'<script src="{EMBED_SCRIPT_URL}"></script>\n'
        f'<div id="grndwrk-widget" data-business-id="{business_id}"></div>'
    )

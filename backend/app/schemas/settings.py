"""Schemas for the singleton configuration documents (pricing, business, widget, availability)."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    # Stored documents keep the camelCase keys the dashboard writes
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ServicePrice(CamelModel):
    id: int
    name: str
    base_price: float = 0
    price_per_sqft: float = 0
    markup: float = 20


class PricingSettings(CamelModel):
    labor_rate: float = 45
    travel_fee: float = 2.5
    min_charge: float = 75
    emergency_rate: str = "1.5"
    services: List[ServicePrice] = []


class BusinessHours(CamelModel):
    day: str
    enabled: bool = True
    start: str = "8"
    end: str = "17"


class BusinessSettings(CamelModel):
    business_name: str = ""
    owner_name: str = ""
    phone: str = ""
    email: str = ""
    address: str = ""
    description: str = ""
    primary_city: str = ""
    service_radius: str = ""
    additional_areas: str = ""
    hours: List[BusinessHours] = []


class WidgetSettings(CamelModel):
    widget_title: str = "Get Your Instant Estimate"
    widget_subtitle: str = "Powered by GrndWrk AI"
    primary_color: str = "#16a34a"
    button_text: str = "Get Quote"
    welcome_message: str = ""
    require_photos: bool = True
    show_instant_estimates: bool = True
    enable_scheduling: bool = True
    min_square_footage: int = 100
    max_square_footage: int = 10000
    enabled_services: List[str] = []
    business_id: str = "your-business-id"


class DayAvailability(CamelModel):
    name: str
    enabled: bool = True
    start: str = "8"
    end: str = "17"
    lunch: str = "12-13"


class BlockedDate(CamelModel):
    label: str = "Blocked Date"
    date: str


class AvailabilitySettings(CamelModel):
    booking_window: str = "30"
    min_notice: str = "24"
    quote_duration: str = "60"
    buffer_time: str = "15"
    days: List[DayAvailability] = []
    blocked_dates: List[BlockedDate] = []


class SettingDocument(BaseModel):
    """Envelope returned by the settings endpoints."""

    key: str
    data: dict
    updated_at: Optional[datetime] = None

"""Quote (lead) schemas for public submissions and dashboard reads."""

from datetime import date, datetime, time
from decimal import Decimal
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


LeadStatus = Literal["New", "Contacted", "Scheduled", "Quote Sent"]
LEAD_STATUSES = ("New", "Contacted", "Scheduled", "Quote Sent")


class QuoteRead(BaseModel):
    id: int
    fullname: str
    email: Optional[str] = None
    phone: str
    address: str
    service_type: str
    square_footage: Optional[int] = None
    additional_info: Optional[str] = None
    photo_urls: List[str] = []
    estimate: Decimal
    appointment_date: Optional[date] = None
    appointment_time: Optional[time] = None
    status: str = "New"
    assigned_to: Optional[str] = None
    notes: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class AppointmentRequest(BaseModel):
    """Body of the scheduling flow. Every field is optional so missing values surface as a 400."""

    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    service_type: Optional[str] = Field(default=None, alias="serviceType")
    square_footage: Union[int, float, str, None] = Field(default=None, alias="squareFootage")
    additional_info: Optional[str] = Field(default=None, alias="additionalInfo")
    photos: Optional[List[str]] = None
    estimate: Union[Decimal, str, None] = None
    scheduled_date_time: Optional[str] = Field(default=None, alias="scheduledDateTime")

    model_config = ConfigDict(populate_by_name=True)


class StatusUpdateRequest(BaseModel):
    lead_id: Optional[int] = Field(default=None, alias="leadId")
    id: Optional[int] = None
    status: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True)

    @property
    def target_id(self) -> Optional[int]:
        return self.lead_id if self.lead_id is not None else self.id


class NotesUpdateRequest(BaseModel):
    id: Optional[int] = None
    notes: Optional[str] = None


class EstimateRequest(BaseModel):
    service_type: Optional[str] = Field(default=None, alias="serviceType")
    square_footage: Union[int, float, str, None] = Field(default=None, alias="squareFootage")

    model_config = ConfigDict(populate_by_name=True)


class EstimateResponse(BaseModel):
    service_type: str
    square_footage: int
    estimate: int
    low: int
    high: int


class StatusChange(BaseModel):
    status: str


class AssignmentChange(BaseModel):
    """``userId`` of the estimator; "unassigned" or null clears the assignment."""

    user_id: Optional[str] = Field(default=None, alias="userId")

    model_config = ConfigDict(populate_by_name=True)


class NotesChange(BaseModel):
    notes: Optional[str] = None


class UpdateOutcome(BaseModel):
    success: bool = True
    lead_id: int
    field: str
    persisted: bool

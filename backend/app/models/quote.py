"""Quote (lead) model: a customer inquiry captured by the widget or scheduler."""

from sqlalchemy import JSON, Column, Date, DateTime, Integer, Numeric, String, Text, Time

from backend.app.db.base_class import Base
from backend.app.core.time import utc_now


class Quote(Base):
    __tablename__ = "quotes"

    id = Column(Integer, primary_key=True, index=True)
    fullname = Column(String, nullable=False)
    email = Column(String, nullable=True)
    phone = Column(String, nullable=False)
    address = Column(String, nullable=False)
    service_type = Column(String, nullable=False, index=True)
    square_footage = Column(Integer, nullable=True)
    additional_info = Column(Text, nullable=True)
    photo_urls = Column(JSON, nullable=False, default=list)
    estimate = Column(Numeric(10, 2), nullable=False)
    appointment_date = Column(Date, nullable=True, index=True)
    appointment_time = Column(Time, nullable=True)
    status = Column(String, nullable=False, default="New")
    assigned_to = Column(String, nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)

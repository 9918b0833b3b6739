from sqlalchemy import JSON, Column, DateTime, String

from backend.app.db.base_class import Base
from backend.app.core.time import utc_now


class Setting(Base):
    """Singleton configuration rows keyed by name ("pricing", "business", "widget")."""

    __tablename__ = "settings"

    key = Column(String, primary_key=True)
    data = Column(JSON, nullable=False, default=dict)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utc_now, onupdate=utc_now)

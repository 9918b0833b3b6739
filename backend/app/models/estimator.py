from sqlalchemy import Column, DateTime, String, func

from backend.app.db.base_class import Base


class Estimator(Base):
    __tablename__ = "estimators"

    id = Column(String, primary_key=True)
    fullname = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

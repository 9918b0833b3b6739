"""CRUD operations for quotes (leads)."""

import logging
from datetime import date, time
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from backend.app.models.quote import Quote

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = {"status", "assigned_to", "notes", "appointment_date", "appointment_time"}


class CRUDQuote:
    def create(self, db: Session, *, values: dict) -> Quote:
        obj = Quote(**values)
        db.add(obj)
        try:
            db.commit()
        except SQLAlchemyError:
            db.rollback()
            raise
        db.refresh(obj)
        return obj

    def get(self, db: Session, *, quote_id: int) -> Optional[Quote]:
        return db.query(Quote).filter(Quote.id == quote_id).first()

    def get_multi(self, db: Session, *, newest_first: bool = True) -> List[Quote]:
        order = [Quote.created_at.desc(), Quote.id.desc()] if newest_first else [Quote.created_at.asc(), Quote.id.asc()]
        return db.query(Quote).order_by(*order).all()

    def get_scheduled(self, db: Session, *, start: Optional[date] = None, end: Optional[date] = None) -> List[Quote]:
        query = db.query(Quote).filter(Quote.appointment_date.isnot(None))
        if start is not None:
            query = query.filter(Quote.appointment_date >= start)
        if end is not None:
            query = query.filter(Quote.appointment_date <= end)
        return query.order_by(Quote.appointment_date.asc(), Quote.appointment_time.asc()).all()

    def appointment_times_on(self, db: Session, *, day: date) -> List[time]:
        rows = (
            db.query(Quote.appointment_time)
            .filter(Quote.appointment_date == day, Quote.appointment_time.isnot(None))
            .all()
        )
        return [row[0] for row in rows]

    def update_fields(self, db: Session, *, quote_id: int, values: dict) -> int:
        """Update whitelisted columns in place. Returns the number of matched rows."""
        unknown = set(values) - UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Fields not updatable: {', '.join(sorted(unknown))}")
        try:
            matched = db.query(Quote).filter(Quote.id == quote_id).update(values, synchronize_session=False)
            db.commit()
        except SQLAlchemyError:
            db.rollback()
            raise
        if not matched:
            logger.info("Update for quote %s matched no rows", quote_id)
        return matched


quote_crud = CRUDQuote()

"""Status, assignment and notes changes made from the dashboard.

Every change is first written to the quotes table. If that write fails the
value is kept in the local overlay and the change is still reported as done,
so the dashboard stays usable while the store is unreachable. A later
successful write for the same lead and field drops the overlay entry. Reads
go through ``load_leads`` which lays overlay values over the stored ones.

Statuses are labels, not a state machine: any status may follow any other.
"""

import logging
from typing import Any, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from backend.app.crud.crud_quote import CRUDQuote, quote_crud
from backend.app.schemas.quote import LEAD_STATUSES, QuoteRead
from backend.app.services.overlay import OverlayCache

logger = logging.getLogger(__name__)

UNASSIGNED = "unassigned"


class InvalidStatusError(ValueError):
    def __init__(self, status):
        super().__init__(f"Invalid status: {status!r}")
        self.status = status


def normalize_assignee(estimator_id: Optional[str]) -> Optional[str]:
    if estimator_id is None:
        return None
    estimator_id = str(estimator_id).strip()
    if not estimator_id or estimator_id == UNASSIGNED:
        return None
    return estimator_id


class LeadLifecycle:
    def __init__(self, db: Session, overlay: OverlayCache, crud: CRUDQuote = quote_crud):
        self.db = db
        self.overlay = overlay
        self.crud = crud

    def _write(self, lead_id: int, field: str, value: Any) -> dict:
        try:
            self.crud.update_fields(self.db, quote_id=lead_id, values={field: value})
        except SQLAlchemyError:
            logger.warning("Saving %s for lead %s failed; kept on this device", field, lead_id, exc_info=True)
            self.overlay.write(field, lead_id, value)
            return {"lead_id": lead_id, "field": field, "value": value, "persisted": False}
        self.overlay.clear(field, lead_id)
        return {"lead_id": lead_id, "field": field, "value": value, "persisted": True}

    def set_status(self, lead_id: int, status: str) -> dict:
        if status not in LEAD_STATUSES:
            raise InvalidStatusError(status)
        return self._write(lead_id, "status", status)

    def set_assignment(self, lead_id: int, estimator_id: Optional[str]) -> dict:
        return self._write(lead_id, "assigned_to", normalize_assignee(estimator_id))

    def set_notes(self, lead_id: int, notes: Optional[str]) -> dict:
        return self._write(lead_id, "notes", notes or "")

    def load_leads(self) -> list[dict]:
        rows = self.crud.get_multi(self.db, newest_first=True)
        leads = [QuoteRead.model_validate(row).model_dump() for row in rows]
        return self.overlay.apply(leads)

    def load_lead(self, lead_id: int) -> Optional[dict]:
        row = self.crud.get(self.db, quote_id=lead_id)
        if row is None:
            return None
        return self.overlay.apply([QuoteRead.model_validate(row).model_dump()])[0]

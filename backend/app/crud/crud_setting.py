"""CRUD operations for singleton settings documents."""

from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from backend.app.core.time import utc_now
from backend.app.models.setting import Setting


class CRUDSetting:
    def get(self, db: Session, *, key: str) -> Optional[Setting]:
        return db.query(Setting).filter(Setting.key == key).first()

    def upsert(self, db: Session, *, key: str, data: dict) -> Setting:
        obj = self.get(db, key=key)
        if obj is None:
            obj = Setting(key=key, data=data, updated_at=utc_now())
            db.add(obj)
        else:
            obj.data = data
            obj.updated_at = utc_now()
        try:
            db.commit()
        except SQLAlchemyError:
            db.rollback()
            raise
        db.refresh(obj)
        return obj


setting_crud = CRUDSetting()

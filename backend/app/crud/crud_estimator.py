"""Read access to estimator identities."""

from typing import List

from sqlalchemy.orm import Session

from backend.app.models.estimator import Estimator


class CRUDEstimator:
    def create(self, db: Session, *, estimator_id: str, fullname: str) -> Estimator:
        obj = Estimator(id=estimator_id, fullname=fullname)
        db.add(obj)
        db.commit()
        db.refresh(obj)
        return obj

    def get_multi(self, db: Session) -> List[Estimator]:
        return db.query(Estimator).order_by(Estimator.fullname.asc()).all()


estimator_crud = CRUDEstimator()

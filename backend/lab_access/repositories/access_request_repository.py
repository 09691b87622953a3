from sqlalchemy.orm import Session
from lab_access.models.access_request import AccessRequest
from typing import List, Optional

_NEWEST_FIRST = (AccessRequest.created_at.desc(), AccessRequest.id.desc())

class AccessRequestRepository:
    def get_all(self, db: Session, skip: int = 0, limit: Optional[int] = None) -> List[AccessRequest]:
        return db.query(AccessRequest).order_by(*_NEWEST_FIRST).offset(skip).limit(limit).all()

    def get_by_user_id(self, db: Session, user_id: str) -> List[AccessRequest]:
        return (
            db.query(AccessRequest)
            .filter(AccessRequest.user_id == user_id)
            .order_by(*_NEWEST_FIRST)
            .all()
        )

    def create(self, db: Session, request: AccessRequest) -> AccessRequest:
        db.add(request)
        db.commit()
        db.refresh(request)
        return request

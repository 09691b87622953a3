from sqlalchemy import func
from sqlalchemy.orm import Session
from lab_access.models.identity import Identity
from lab_access.models.session import UserSession
from typing import Optional

class IdentityRepository:
    def get_by_id(self, db: Session, identity_id: str) -> Optional[Identity]:
        return db.query(Identity).filter(Identity.id == identity_id).first()

    def get_by_email(self, db: Session, email: str) -> Optional[Identity]:
        return db.query(Identity).filter(func.lower(Identity.email) == email.lower()).first()

    def create(self, db: Session, identity: Identity) -> Identity:
        db.add(identity)
        db.commit()
        db.refresh(identity)
        return identity

    def delete(self, db: Session, identity_id: str) -> bool:
        identity = self.get_by_id(db, identity_id)
        if not identity:
            return False
        # SQLite does not enforce ON DELETE CASCADE unless asked to
        db.query(UserSession).filter(UserSession.user_id == identity_id).delete()
        db.delete(identity)
        db.commit()
        return True

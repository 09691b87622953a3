from sqlalchemy.orm import Session
from lab_access.models.session import UserSession
from typing import Optional

class SessionRepository:
    def get_active_by_token_hash(self, db: Session, token_hash: str) -> Optional[UserSession]:
        return db.query(UserSession).filter(
            UserSession.token_hash == token_hash,
            UserSession.is_active.is_(True),
        ).first()

    def create(self, db: Session, session: UserSession) -> UserSession:
        db.add(session)
        db.commit()
        db.refresh(session)
        return session

    def deactivate(self, db: Session, token_hash: str) -> bool:
        session = self.get_active_by_token_hash(db, token_hash)
        if not session:
            return False
        session.is_active = False
        db.commit()
        return True

from sqlalchemy import func
from sqlalchemy.orm import Session
from lab_access.models.profile import Profile
from typing import Optional

class ProfileRepository:
    def get_by_login_id(self, db: Session, login_id: str) -> Optional[Profile]:
        # login ids are stored upper-cased
        return db.query(Profile).filter(func.upper(Profile.login_id) == login_id.upper()).first()

    def get_by_user_id(self, db: Session, user_id: str) -> Optional[Profile]:
        return db.query(Profile).filter(Profile.user_id == user_id).first()

    def create(self, db: Session, profile: Profile) -> Profile:
        db.add(profile)
        db.commit()
        db.refresh(profile)
        return profile

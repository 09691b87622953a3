from sqlalchemy import Column, String, DateTime, JSON
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from lab_access.core.database import Base
import uuid

class Identity(Base):
    """Authentication account. Profiles are layered on top of it."""
    __tablename__ = "identities"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    email = Column(String, unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    user_metadata = Column(JSON, nullable=True)  # sign-up attributes (name, requested role)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    profile = relationship("Profile", back_populates="identity", uselist=False)

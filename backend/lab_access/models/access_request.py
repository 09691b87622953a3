from sqlalchemy import Column, Integer, String, DateTime, Date, Time, Text, Boolean, Enum, ForeignKey, JSON
from sqlalchemy.sql import func
from lab_access.core.database import Base
import enum

class RequestStatus(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"

class AccessRequest(Base):
    __tablename__ = "access_requests"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, ForeignKey("identities.id", ondelete="CASCADE"), nullable=False, index=True)
    purpose = Column(Text, nullable=False)
    request_date = Column(Date, nullable=False)
    in_time = Column(Time, nullable=False)
    out_time = Column(Time, nullable=False)
    status = Column(
        Enum(RequestStatus, name="request_status", values_callable=lambda e: [m.value for m in e]),
        default=RequestStatus.PENDING,
        nullable=False,
    )
    is_for_students = Column(Boolean, default=False, nullable=False)
    # Only set when is_for_students is true
    num_systems = Column(Integer, nullable=True)
    num_students = Column(Integer, nullable=True)
    # Written by the admin allocation workflow only
    systems_allocated = Column(JSON, nullable=True)
    admin_notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

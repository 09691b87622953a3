from pydantic import BaseModel, field_validator
from typing import Optional
from datetime import datetime

from lab_access.models.profile import UserRole


class ProfileResponse(BaseModel):
    id: int
    user_id: str
    role: UserRole
    login_id: str
    name: str
    phone_number: str
    email: Optional[str] = None
    department: Optional[str] = None
    designation: Optional[str] = None
    register_number: Optional[str] = None
    year: Optional[int] = None
    branch: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ProfileCompletionRequest(BaseModel):
    """Profile fields for an account whose profile was never written."""
    role: str = ""
    name: str = ""
    phone_number: str = ""
    department: str = ""
    designation: str = ""
    register_number: str = ""
    year: str = ""
    branch: str = ""

    @field_validator('year', 'phone_number', 'register_number', mode='before')
    @classmethod
    def as_text(cls, v):
        if v is None:
            return ""
        return str(v)

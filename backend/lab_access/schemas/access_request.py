from pydantic import BaseModel, field_validator
from typing import List, Literal, Optional
from datetime import date, datetime, time

from lab_access.models.access_request import RequestStatus


class AccessRequestForm(BaseModel):
    purpose: str = ""
    date: str = ""
    in_time: str = ""
    out_time: str = ""
    num_systems: str = ""
    num_students: str = ""
    # Only meaningful for faculty: "students" books the lab for a class
    request_type: Literal["personal", "students"] = "personal"

    @field_validator('date', 'in_time', 'out_time', 'num_systems', 'num_students', mode='before')
    @classmethod
    def as_text(cls, v):
        if v is None:
            return ""
        return str(v)


class AccessRequestResponse(BaseModel):
    id: int
    user_id: str
    purpose: str
    request_date: date
    in_time: time
    out_time: time
    status: RequestStatus
    is_for_students: bool = False
    num_systems: Optional[int] = None
    num_students: Optional[int] = None
    systems_allocated: Optional[List[int]] = None
    admin_notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class RequestSubmissionResponse(BaseModel):
    message: str
    form: AccessRequestForm
    requests: List[AccessRequestResponse]

from pydantic import BaseModel, Field, field_validator, model_validator
from typing import Any, Optional

from lab_access.schemas.profile import ProfileResponse


class LoginRequest(BaseModel):
    login_id: str = Field("", description="Role-tagged login ID, e.g. S1234, F5678, A0001")
    password: str = ""

    @model_validator(mode='before')
    @classmethod
    def map_form_field(cls, data: Any) -> Any:
        """Accept 'loginId' (the web form's field name) as an alias for 'login_id'."""
        if isinstance(data, dict) and 'login_id' not in data and data.get('loginId'):
            data = dict(data)
            data['login_id'] = data.pop('loginId')
        return data


class LoginResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    profile: ProfileResponse
    redirect_to: str


class FacultyRegistrationRequest(BaseModel):
    name: str = ""
    department: str = ""
    designation: str = ""
    phone_number: str = ""
    email: str = ""
    password: str = ""

    @field_validator('phone_number', mode='before')
    @classmethod
    def as_text(cls, v):
        # Numbers from JSON clients are accepted for text form fields
        if v is None:
            return ""
        return str(v)


class StudentRegistrationRequest(BaseModel):
    name: str = ""
    register_number: str = ""
    year: str = ""
    branch: str = ""
    phone_number: str = ""
    email: str = ""
    password: str = ""

    @field_validator('year', 'phone_number', 'register_number', mode='before')
    @classmethod
    def as_text(cls, v):
        if v is None:
            return ""
        return str(v)


class RegistrationResponse(BaseModel):
    login_id: str
    message: str


class LoginIdPreviewResponse(BaseModel):
    login_id: Optional[str] = None

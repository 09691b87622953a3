from lab_access.schemas.auth import (
    LoginRequest,
    LoginResponse,
    FacultyRegistrationRequest,
    StudentRegistrationRequest,
    RegistrationResponse,
    LoginIdPreviewResponse,
)
from lab_access.schemas.profile import ProfileResponse, ProfileCompletionRequest
from lab_access.schemas.access_request import AccessRequestForm, AccessRequestResponse, RequestSubmissionResponse

__all__ = [
    "LoginRequest",
    "LoginResponse",
    "FacultyRegistrationRequest",
    "StudentRegistrationRequest",
    "RegistrationResponse",
    "LoginIdPreviewResponse",
    "ProfileResponse",
    "ProfileCompletionRequest",
    "AccessRequestForm",
    "AccessRequestResponse",
    "RequestSubmissionResponse",
]

"""
Error taxonomy for the lab access service.

All errors subclass FastAPI's HTTPException so services can raise them directly
and the framework renders them with the right status code.
"""
from typing import Optional

from fastapi import HTTPException, status


class LabAccessError(HTTPException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Request could not be processed"

    def __init__(self, detail: Optional[str] = None):
        super().__init__(status_code=self.status_code, detail=detail or self.default_detail)

    @property
    def message(self) -> str:
        return self.detail


class ValidationError(LabAccessError):
    """Form-level failure detected before any call to the data gateway."""
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    default_detail = "Please fill in all fields"

    def __init__(self, field: str, detail: Optional[str] = None):
        super().__init__(detail)
        self.field = field


class DuplicateResourceError(LabAccessError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Resource already exists"


class AuthenticationError(LabAccessError):
    # One generic message so callers cannot tell which part of the credentials failed
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Invalid login ID or password"


class AuthorizationError(LabAccessError):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Insufficient permissions"


class TransportError(LabAccessError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_detail = "An unexpected error occurred"


class RegistrationIncompleteError(LabAccessError):
    """Identity exists but its profile could not be written or rolled back."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Account created but profile setup failed. Please contact support."

from lab_access.models.identity import Identity
from lab_access.models.profile import Profile, UserRole, Department, Designation
from lab_access.models.access_request import AccessRequest, RequestStatus
from lab_access.models.session import UserSession

__all__ = [
    "Identity", "Profile", "UserRole", "Department", "Designation",
    "AccessRequest", "RequestStatus", "UserSession",
]

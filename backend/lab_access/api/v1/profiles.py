from fastapi import APIRouter, Depends, status

from lab_access.core.permissions import require_identity, require_roles
from lab_access.core.session_context import SessionContext
from lab_access.schemas.profile import ProfileCompletionRequest, ProfileResponse
from lab_access.services.auth_service import AuthService

router = APIRouter()

@router.get("/me", response_model=ProfileResponse)
async def get_my_profile(context: SessionContext = Depends(require_roles())):
    return context.state.profile

@router.post("/complete", response_model=ProfileResponse, status_code=status.HTTP_201_CREATED)
async def complete_profile(
    form: ProfileCompletionRequest,
    context: SessionContext = Depends(require_identity)
):
    """Create the profile for a signed-in account that does not have one yet"""
    service = AuthService(context.gateway)
    return await service.complete_profile(context, form)

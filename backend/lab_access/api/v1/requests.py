from typing import List, Optional

from fastapi import APIRouter, Depends, status

from lab_access.core.permissions import require_roles
from lab_access.core.session_context import SessionContext
from lab_access.models.profile import UserRole
from lab_access.schemas.access_request import (
    AccessRequestForm,
    AccessRequestResponse,
    RequestSubmissionResponse,
)
from lab_access.services.request_service import RequestService

router = APIRouter()

@router.post("", response_model=RequestSubmissionResponse, status_code=status.HTTP_201_CREATED)
async def submit_request(
    form: AccessRequestForm,
    context: SessionContext = Depends(require_roles([UserRole.STUDENT, UserRole.FACULTY]))
):
    service = RequestService(context.gateway)
    result = await service.submit(context.state.profile, form)
    return RequestSubmissionResponse(
        message=result.message,
        form=result.form,
        requests=[AccessRequestResponse.model_validate(r) for r in result.requests],
    )

@router.get("", response_model=List[AccessRequestResponse])
async def list_requests(
    owner: Optional[str] = None,
    context: SessionContext = Depends(require_roles())
):
    """Newest first; students and faculty only see their own requests"""
    service = RequestService(context.gateway)
    return await service.list_requests(owner)

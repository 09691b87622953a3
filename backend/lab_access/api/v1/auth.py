from fastapi import APIRouter, Depends, status

from lab_access.core.gateway import DataGateway
from lab_access.core.identifiers import preview_login_id
from lab_access.core.permissions import get_gateway, get_session_context
from lab_access.core.session_context import SessionContext
from lab_access.models.profile import UserRole
from lab_access.schemas.auth import (
    FacultyRegistrationRequest,
    LoginIdPreviewResponse,
    LoginRequest,
    LoginResponse,
    RegistrationResponse,
    StudentRegistrationRequest,
)
from lab_access.services.auth_service import AuthService

router = APIRouter()

@router.post("/register/faculty", response_model=RegistrationResponse, status_code=status.HTTP_201_CREATED)
async def register_faculty(
    form: FacultyRegistrationRequest,
    gateway: DataGateway = Depends(get_gateway)
):
    service = AuthService(gateway)
    return await service.register_faculty(form)

@router.post("/register/student", response_model=RegistrationResponse, status_code=status.HTTP_201_CREATED)
async def register_student(
    form: StudentRegistrationRequest,
    gateway: DataGateway = Depends(get_gateway)
):
    service = AuthService(gateway)
    return await service.register_student(form)

@router.get("/login-id-preview", response_model=LoginIdPreviewResponse)
async def login_id_preview(phone_number: str = "", role: UserRole = UserRole.FACULTY):
    """Login ID the registration form will produce for this phone number"""
    return LoginIdPreviewResponse(login_id=preview_login_id(phone_number, role))

@router.post("/login", response_model=LoginResponse)
async def login(
    form: LoginRequest,
    context: SessionContext = Depends(get_session_context)
):
    service = AuthService(context.gateway)
    return await service.login(context, form)

@router.post("/logout")
async def logout(context: SessionContext = Depends(get_session_context)):
    service = AuthService(context.gateway)
    await service.logout(context)
    return {"message": "Logged out successfully"}

"""
Navigation surface of the web client. Each screen runs the route guard and
either redirects or returns the data the screen renders.
"""
from typing import Iterable, Optional

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse, RedirectResponse

from lab_access.core.permissions import get_session_context
from lab_access.core.route_guard import (
    AUTH_ROUTE,
    GuardOutcome,
    dashboard_for,
    evaluate_route,
)
from lab_access.core.session_context import SessionContext
from lab_access.models.profile import UserRole
from lab_access.schemas.access_request import AccessRequestResponse
from lab_access.schemas.profile import ProfileResponse
from lab_access.services.request_service import RequestService

router = APIRouter()

LAB_NAME = "AI Robotics Lab"


def _guard(context: SessionContext, allowed_roles: Optional[Iterable[UserRole]] = None):
    decision = evaluate_route(context.state, allowed_roles)
    if decision.outcome == GuardOutcome.RENDER:
        return None
    if decision.outcome == GuardOutcome.INTERSTITIAL:
        return JSONResponse(status_code=status.HTTP_202_ACCEPTED, content={"status": "loading"})
    return RedirectResponse(decision.redirect_to, status_code=status.HTTP_307_TEMPORARY_REDIRECT)


async def _dashboard(context: SessionContext, role: UserRole):
    redirect = _guard(context, [role])
    if redirect is not None:
        return redirect
    requests = await RequestService(context.gateway).list_requests()
    return {
        "screen": f"{role.value}-dashboard",
        "profile": ProfileResponse.model_validate(context.state.profile).model_dump(mode="json"),
        "requests": [AccessRequestResponse.model_validate(r).model_dump(mode="json") for r in requests],
    }


@router.get("/")
async def landing(context: SessionContext = Depends(get_session_context)):
    state = context.state
    if not state.loading and state.identity is not None and state.profile is not None:
        return RedirectResponse(dashboard_for(state.profile.role), status_code=status.HTTP_307_TEMPORARY_REDIRECT)
    return {
        "screen": "landing",
        "title": LAB_NAME,
        "subtitle": "Access Management System",
        "next": AUTH_ROUTE,
    }


@router.get("/auth")
async def auth_screen():
    return {
        "screen": "auth",
        "title": f"{LAB_NAME} Access",
        "login": "/api/v1/auth/login",
        "register": {
            "student": "/api/v1/auth/register/student",
            "faculty": "/api/v1/auth/register/faculty",
        },
        "login_id_hint": "S = Student, F = Faculty, A = Admin",
    }


@router.get("/student-dashboard")
async def student_dashboard(context: SessionContext = Depends(get_session_context)):
    return await _dashboard(context, UserRole.STUDENT)


@router.get("/faculty-dashboard")
async def faculty_dashboard(context: SessionContext = Depends(get_session_context)):
    return await _dashboard(context, UserRole.FACULTY)


@router.get("/admin-dashboard")
async def admin_dashboard(context: SessionContext = Depends(get_session_context)):
    return await _dashboard(context, UserRole.ADMIN)


@router.get("/complete-profile")
async def complete_profile_screen(context: SessionContext = Depends(get_session_context)):
    state = context.state
    if state.identity is None:
        return RedirectResponse(AUTH_ROUTE, status_code=status.HTTP_307_TEMPORARY_REDIRECT)
    if state.profile is not None:
        return RedirectResponse(dashboard_for(state.profile.role), status_code=status.HTTP_307_TEMPORARY_REDIRECT)
    return {
        "screen": "complete-profile",
        "email": state.identity.email,
        "submit_to": "/api/v1/profiles/complete",
    }


@router.get("/unauthorized")
async def unauthorized_screen():
    return {
        "screen": "unauthorized",
        "message": "You do not have permission to access this page.",
    }

"""
Route guard for the role-gated screens.

Checks run in a fixed order: loading, identity, profile, role. An anonymous
visitor is always sent to /auth and never learns that a route is role-gated.
"""
from dataclasses import dataclass
from typing import Iterable, Optional
import enum

from lab_access.core.session_context import SessionState
from lab_access.models.profile import UserRole

AUTH_ROUTE = "/auth"
COMPLETE_PROFILE_ROUTE = "/complete-profile"
UNAUTHORIZED_ROUTE = "/unauthorized"

DASHBOARD_ROUTES = {
    UserRole.STUDENT: "/student-dashboard",
    UserRole.FACULTY: "/faculty-dashboard",
    UserRole.ADMIN: "/admin-dashboard",
}


class GuardOutcome(str, enum.Enum):
    INTERSTITIAL = "interstitial"
    REDIRECT_AUTH = "redirect_auth"
    REDIRECT_COMPLETE_PROFILE = "redirect_complete_profile"
    REDIRECT_UNAUTHORIZED = "redirect_unauthorized"
    RENDER = "render"


@dataclass(frozen=True)
class GuardDecision:
    outcome: GuardOutcome
    redirect_to: Optional[str] = None

    @property
    def allowed(self) -> bool:
        return self.outcome == GuardOutcome.RENDER


def dashboard_for(role: UserRole) -> str:
    return DASHBOARD_ROUTES[UserRole(role)]


def evaluate_route(state: SessionState, allowed_roles: Optional[Iterable[UserRole]] = None) -> GuardDecision:
    if state.loading:
        return GuardDecision(GuardOutcome.INTERSTITIAL)
    if state.identity is None:
        return GuardDecision(GuardOutcome.REDIRECT_AUTH, AUTH_ROUTE)
    if state.profile is None:
        return GuardDecision(GuardOutcome.REDIRECT_COMPLETE_PROFILE, COMPLETE_PROFILE_ROUTE)
    if allowed_roles is not None and UserRole(state.profile.role) not in {UserRole(r) for r in allowed_roles}:
        return GuardDecision(GuardOutcome.REDIRECT_UNAUTHORIZED, UNAUTHORIZED_ROUTE)
    return GuardDecision(GuardOutcome.RENDER)

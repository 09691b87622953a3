import pytest

from lab_access.core.route_guard import (
    AUTH_ROUTE,
    COMPLETE_PROFILE_ROUTE,
    UNAUTHORIZED_ROUTE,
    GuardOutcome,
    dashboard_for,
    evaluate_route,
)
from lab_access.core.session_context import SessionState
from lab_access.models.identity import Identity
from lab_access.models.profile import Profile, UserRole

IDENTITY = Identity(id="user-1", email="user@example.com", hashed_password="x")


def profile(role):
    return Profile(user_id="user-1", role=role, login_id="F3210", name="Test", phone_number="9876543210")


@pytest.mark.parametrize("state,allowed,outcome,redirect", [
    # Loading wins over everything else
    (SessionState(identity=None, profile=None, loading=True), None, GuardOutcome.INTERSTITIAL, None),
    (SessionState(identity=IDENTITY, profile=profile(UserRole.ADMIN), loading=True), [UserRole.STUDENT],
     GuardOutcome.INTERSTITIAL, None),
    # Anonymous visitors never learn a route is role-gated
    (SessionState(loading=False), [UserRole.ADMIN], GuardOutcome.REDIRECT_AUTH, AUTH_ROUTE),
    (SessionState(loading=False), None, GuardOutcome.REDIRECT_AUTH, AUTH_ROUTE),
    (SessionState(identity=IDENTITY, loading=False), [UserRole.ADMIN],
     GuardOutcome.REDIRECT_COMPLETE_PROFILE, COMPLETE_PROFILE_ROUTE),
    (SessionState(identity=IDENTITY, profile=profile(UserRole.STUDENT), loading=False), [UserRole.ADMIN],
     GuardOutcome.REDIRECT_UNAUTHORIZED, UNAUTHORIZED_ROUTE),
    (SessionState(identity=IDENTITY, profile=profile(UserRole.FACULTY), loading=False),
     [UserRole.STUDENT, UserRole.FACULTY], GuardOutcome.RENDER, None),
    (SessionState(identity=IDENTITY, profile=profile(UserRole.STUDENT), loading=False), None,
     GuardOutcome.RENDER, None),
])
def test_guard_priority(state, allowed, outcome, redirect):
    decision = evaluate_route(state, allowed)
    assert decision.outcome == outcome
    assert decision.redirect_to == redirect
    assert decision.allowed is (outcome == GuardOutcome.RENDER)

def test_roles_as_plain_strings():
    state = SessionState(identity=IDENTITY, profile=profile("faculty"), loading=False)
    assert evaluate_route(state, ["faculty"]).allowed

@pytest.mark.parametrize("role,route", [
    (UserRole.STUDENT, "/student-dashboard"),
    (UserRole.FACULTY, "/faculty-dashboard"),
    (UserRole.ADMIN, "/admin-dashboard"),
])
def test_dashboard_for(role, route):
    assert dashboard_for(role) == route

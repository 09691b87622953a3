from typing import AsyncGenerator, List, Optional
import logging

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from lab_access.core.database import get_db
from lab_access.core.exceptions import AuthenticationError, AuthorizationError
from lab_access.core.gateway import DataGateway
from lab_access.core.route_guard import GuardOutcome, evaluate_route
from lab_access.core.session_context import SessionContext, SessionState
from lab_access.models.profile import UserRole

logger = logging.getLogger(__name__)

# Screens are reachable anonymously, so a missing header is not an error here
security = HTTPBearer(auto_error=False)


def get_gateway(db: Session = Depends(get_db)) -> DataGateway:
    return DataGateway(db)


def _log_state_change(state: SessionState) -> None:
    if state.profile is not None:
        logger.debug("[SESSION] Active profile %s (%s)", state.profile.login_id, state.profile.role.value)
    elif state.identity is not None:
        logger.debug("[SESSION] Identity %s has no profile", state.identity.id)


async def get_session_context(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    gateway: DataGateway = Depends(get_gateway),
) -> AsyncGenerator[SessionContext, None]:
    context = SessionContext(gateway)
    context.subscribe(_log_state_change)
    await context.initialize(credentials.credentials if credentials else None)
    try:
        yield context
    finally:
        context.teardown()


def require_roles(allowed_roles: Optional[List[UserRole]] = None):
    """
    API counterpart of the screen guard: the same decision, reported as an
    error instead of a redirect.
    """
    async def role_checker(context: SessionContext = Depends(get_session_context)) -> SessionContext:
        decision = evaluate_route(context.state, allowed_roles)
        if decision.outcome == GuardOutcome.REDIRECT_AUTH:
            raise AuthenticationError("Not authenticated")
        if decision.outcome == GuardOutcome.REDIRECT_COMPLETE_PROFILE:
            raise AuthorizationError("Profile setup required")
        if decision.outcome == GuardOutcome.REDIRECT_UNAUTHORIZED:
            logger.info("[PERMISSIONS] %s denied (role=%s)", context.state.profile.login_id, context.state.role.value)
            raise AuthorizationError()
        return context
    return role_checker


async def require_identity(context: SessionContext = Depends(get_session_context)) -> SessionContext:
    """Signed-in caller, profile optional (used to complete a missing profile)."""
    if context.state.identity is None:
        raise AuthenticationError("Not authenticated")
    return context

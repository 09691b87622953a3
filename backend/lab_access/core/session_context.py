"""
Session/role context: who the current client is and what profile they hold.

One context is built per client and injected where it is needed; nothing here
is module-global. Listeners registered with subscribe() are called with the
new state after every change.
"""
from dataclasses import dataclass, replace
from typing import Callable, List, Optional
import logging

from lab_access.core.gateway import AuthSession, DataGateway
from lab_access.models.identity import Identity
from lab_access.models.profile import Profile, UserRole

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionState:
    identity: Optional[Identity] = None
    profile: Optional[Profile] = None
    loading: bool = True

    @property
    def role(self) -> Optional[UserRole]:
        return self.profile.role if self.profile else None


Listener = Callable[[SessionState], None]


class SessionContext:
    def __init__(self, gateway: DataGateway):
        self._gateway = gateway
        self._state = SessionState()
        self._listeners: List[Listener] = []
        self._token: Optional[str] = None

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def gateway(self) -> DataGateway:
        return self._gateway

    @property
    def token(self) -> Optional[str]:
        return self._token

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _set_state(self, **changes) -> None:
        self._state = replace(self._state, **changes)
        self._gateway.bind_caller(self._state.identity, self._state.role)
        for listener in list(self._listeners):
            listener(self._state)

    async def initialize(self, token: Optional[str]) -> SessionState:
        """Populate identity and profile from the session behind `token`."""
        self._token = token
        identity = profile = None
        session = await self._gateway.get_session(token) if token else None
        if session:
            identity = session.identity
            profile = await self._gateway.get_profile_for_identity(identity.id)
        else:
            self._token = None
        self._set_state(identity=identity, profile=profile, loading=False)
        return self._state

    async def refresh(self) -> SessionState:
        return await self.initialize(self._token)

    async def sign_in(self, email: str, password: str) -> AuthSession:
        session = await self._gateway.sign_in(email, password)
        self._token = session.access_token
        profile = await self._gateway.get_profile_for_identity(session.identity.id)
        self._set_state(identity=session.identity, profile=profile, loading=False)
        logger.info("[SESSION] Signed in identity %s", session.identity.id)
        return session

    async def sign_out(self) -> None:
        if self._token:
            await self._gateway.sign_out(self._token)
        identity = self._state.identity
        self._token = None
        self._set_state(identity=None, profile=None, loading=False)
        if identity is not None:
            logger.info("[SESSION] Signed out identity %s", identity.id)

    def teardown(self) -> None:
        """Drop listeners and state. Listeners are not notified."""
        self._listeners.clear()
        self._token = None
        self._state = SessionState(loading=False)
        self._gateway.bind_caller(None, None)

"""
Data access gateway.

The only component that touches the database and the credential store. Every
service goes through a DataGateway bound to the current caller; the caller's
role decides which access_requests rows are visible (row-level restriction).
"""
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional
import logging

from pydantic import EmailStr, TypeAdapter
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from lab_access.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DuplicateResourceError,
    TransportError,
    ValidationError,
)
from lab_access.core.identifiers import resolve_role
from lab_access.core.security import (
    create_access_token,
    decode_access_token,
    get_password_hash,
    hash_token,
    verify_password,
)
from lab_access.models.access_request import AccessRequest
from lab_access.models.identity import Identity
from lab_access.models.profile import Profile, UserRole
from lab_access.models.session import UserSession
from lab_access.repositories.access_request_repository import AccessRequestRepository
from lab_access.repositories.identity_repository import IdentityRepository
from lab_access.repositories.profile_repository import ProfileRepository
from lab_access.repositories.session_repository import SessionRepository

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6
# bcrypt refuses longer inputs
MAX_PASSWORD_BYTES = 72

_email_adapter = TypeAdapter(EmailStr)


@dataclass
class AuthSession:
    access_token: str
    identity: Identity
    expires_at: datetime
    token_type: str = "bearer"


class DataGateway:
    def __init__(self, db: Session):
        self.db = db
        self.identity_repo = IdentityRepository()
        self.profile_repo = ProfileRepository()
        self.access_request_repo = AccessRequestRepository()
        self.session_repo = SessionRepository()
        self.caller: Optional[Identity] = None
        self.caller_role: Optional[UserRole] = None

    def bind_caller(self, identity: Optional[Identity], role: Optional[UserRole]) -> None:
        self.caller = identity
        self.caller_role = role

    def _call(self, operation: str, fn, *args):
        try:
            return fn(self.db, *args)
        except SQLAlchemyError as exc:
            self._transport_failure(operation, exc)

    def _transport_failure(self, operation: str, exc: Exception):
        self.db.rollback()
        logger.exception("[GATEWAY] %s failed: %s", operation, exc)
        raise TransportError() from exc

    # --- Profiles ---

    async def find_profile_by_login_id(self, login_id: str) -> Optional[Profile]:
        if not login_id:
            return None
        return self._call("find_profile_by_login_id", self.profile_repo.get_by_login_id, login_id.strip())

    async def get_profile_for_identity(self, identity_id: str) -> Optional[Profile]:
        return self._call("get_profile_for_identity", self.profile_repo.get_by_user_id, identity_id)

    async def create_profile(self, profile: Profile) -> Profile:
        profile.login_id = profile.login_id.strip().upper()
        if resolve_role(profile.login_id) != UserRole(profile.role):
            raise ValidationError("login_id", "Login ID prefix does not match the account role")
        try:
            created = self.profile_repo.create(self.db, profile)
        except IntegrityError as exc:
            # The unique constraint is authoritative; any earlier lookup was only a fast path
            self.db.rollback()
            logger.warning("[GATEWAY] Profile insert rejected for login_id=%s: %s", profile.login_id, exc.orig)
            if self._call("get_profile_for_identity", self.profile_repo.get_by_user_id, profile.user_id):
                raise DuplicateResourceError("A profile already exists for this account") from exc
            raise DuplicateResourceError("A user with this login ID already exists") from exc
        except SQLAlchemyError as exc:
            self._transport_failure("create_profile", exc)
        logger.info("[GATEWAY] Profile created: login_id=%s role=%s", created.login_id, created.role.value)
        return created

    # --- Identities / auth ---

    def _check_credentials_shape(self, email: str, password: str) -> str:
        try:
            email = _email_adapter.validate_python(email)
        except PydanticValidationError:
            raise ValidationError("email", "Unable to validate email address: invalid format")
        if not password or len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError("password", f"Password should be at least {MIN_PASSWORD_LENGTH} characters")
        if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValidationError("password", f"Password should be at most {MAX_PASSWORD_BYTES} bytes")
        return email

    async def create_identity(self, email: str, password: str, attributes: Optional[dict] = None) -> Identity:
        email = self._check_credentials_shape(email.strip(), password)
        if self._call("create_identity", self.identity_repo.get_by_email, email):
            raise DuplicateResourceError("User already registered")
        identity = Identity(
            email=email,
            hashed_password=get_password_hash(password),
            user_metadata=dict(attributes or {}),
        )
        try:
            created = self.identity_repo.create(self.db, identity)
        except IntegrityError as exc:
            self.db.rollback()
            raise DuplicateResourceError("User already registered") from exc
        except SQLAlchemyError as exc:
            self._transport_failure("create_identity", exc)
        logger.info("[GATEWAY] Identity created: id=%s", created.id)
        return created

    async def delete_identity(self, identity_id: str) -> bool:
        deleted = self._call("delete_identity", self.identity_repo.delete, identity_id)
        logger.info("[GATEWAY] Identity %s removed: %s", identity_id, deleted)
        return deleted

    async def resolve_email_for_login_id(self, login_id: str) -> Optional[str]:
        profile = await self.find_profile_by_login_id(login_id)
        if not profile:
            return None
        identity = self._call("resolve_email_for_login_id", self.identity_repo.get_by_id, profile.user_id)
        return identity.email if identity else None

    async def sign_in(self, email: str, password: str) -> AuthSession:
        identity = self._call("sign_in", self.identity_repo.get_by_email, email)
        if not identity or not verify_password(password, identity.hashed_password):
            raise AuthenticationError()

        token, expires_at = create_access_token({"sub": identity.id})
        record = UserSession(
            user_id=identity.id,
            token_hash=hash_token(token),
            is_active=True,
            expires_at=expires_at,
        )
        self._call("sign_in", self.session_repo.create, record)
        return AuthSession(access_token=token, identity=identity, expires_at=expires_at)

    async def sign_out(self, token: str) -> None:
        if token:
            self._call("sign_out", self.session_repo.deactivate, hash_token(token))

    async def get_session(self, token: str) -> Optional[AuthSession]:
        """Current session for a bearer token, or None if it is invalid, expired or signed out."""
        if not token:
            return None
        payload = decode_access_token(token)
        if not payload or not payload.get("sub"):
            return None
        record = self._call("get_session", self.session_repo.get_active_by_token_hash, hash_token(token))
        if not record or record.expires_at <= datetime.utcnow():
            return None
        identity = self._call("get_session", self.identity_repo.get_by_id, payload["sub"])
        if not identity or identity.id != record.user_id:
            return None
        return AuthSession(access_token=token, identity=identity, expires_at=record.expires_at)

    # --- Access requests ---

    async def create_access_request(self, request: AccessRequest) -> AccessRequest:
        if self.caller is None:
            raise AuthenticationError("Not authenticated")
        if self.caller_role != UserRole.ADMIN and request.user_id != self.caller.id:
            raise AuthorizationError("Cannot create requests for another user")
        created = self._call("create_access_request", self.access_request_repo.create, request)
        logger.info("[GATEWAY] Access request %s created for user %s", created.id, created.user_id)
        return created

    async def list_access_requests(self, owner_filter: Optional[str] = None) -> List[AccessRequest]:
        """Newest first. Non-admin callers only ever see their own rows."""
        if self.caller is None:
            raise AuthenticationError("Not authenticated")
        if self.caller_role == UserRole.ADMIN:
            if owner_filter:
                return self._call("list_access_requests", self.access_request_repo.get_by_user_id, owner_filter)
            return self._call("list_access_requests", self.access_request_repo.get_all)
        if owner_filter and owner_filter != self.caller.id:
            return []
        return self._call("list_access_requests", self.access_request_repo.get_by_user_id, self.caller.id)

from typing import Optional
import logging

from lab_access.core.exceptions import (
    AuthenticationError,
    DuplicateResourceError,
    RegistrationIncompleteError,
    TransportError,
    ValidationError,
)
from lab_access.core.gateway import DataGateway
from lab_access.core.identifiers import derive_login_id, resolve_role
from lab_access.core.route_guard import dashboard_for
from lab_access.core.session_context import SessionContext
from lab_access.models.identity import Identity
from lab_access.models.profile import Profile, UserRole
from lab_access.schemas.auth import (
    FacultyRegistrationRequest,
    LoginRequest,
    LoginResponse,
    RegistrationResponse,
    StudentRegistrationRequest,
)
from lab_access.schemas.profile import ProfileCompletionRequest, ProfileResponse
from lab_access.services import validation

logger = logging.getLogger(__name__)

PHONE_ALREADY_REGISTERED = "A user with this phone number already exists"


class AuthService:
    def __init__(self, gateway: DataGateway):
        self.gateway = gateway

    # --- Registration ---

    async def register_faculty(self, form: FacultyRegistrationRequest) -> RegistrationResponse:
        values = form.model_dump()
        validation.validate_faculty_registration(values)
        profile_fields = {
            "department": values["department"],
            "designation": values["designation"],
        }
        return await self._register(UserRole.FACULTY, values, profile_fields)

    async def register_student(self, form: StudentRegistrationRequest) -> RegistrationResponse:
        values = form.model_dump()
        year = validation.validate_student_registration(values)
        profile_fields = {
            "register_number": values["register_number"].strip(),
            "year": year,
            "branch": values["branch"].strip(),
        }
        return await self._register(UserRole.STUDENT, values, profile_fields)

    async def _register(self, role: UserRole, values: dict, profile_fields: dict) -> RegistrationResponse:
        login_id = derive_login_id(values["phone_number"], role)

        # Fast path only: the unique constraint on profiles.login_id has the final say
        if await self.gateway.find_profile_by_login_id(login_id):
            logger.info("[AUTH] Registration rejected, login_id %s already taken", login_id)
            raise DuplicateResourceError(PHONE_ALREADY_REGISTERED)

        name = values["name"].strip()
        identity = await self.gateway.create_identity(
            values["email"], values["password"], {"name": name, "role": role.value}
        )
        profile = Profile(
            user_id=identity.id,
            role=role,
            login_id=login_id,
            name=name,
            phone_number=values["phone_number"],
            email=identity.email,
            **profile_fields,
        )
        try:
            await self.gateway.create_profile(profile)
        except (DuplicateResourceError, TransportError, ValidationError) as exc:
            await self._discard_identity(identity, exc)
            if isinstance(exc, DuplicateResourceError):
                raise DuplicateResourceError(PHONE_ALREADY_REGISTERED) from exc
            raise

        logger.info("[AUTH] Registered %s %s", role.value, login_id)
        return RegistrationResponse(
            login_id=login_id,
            message=f"Your login ID is: {login_id}. Please remember it for login.",
        )

    async def _discard_identity(self, identity: Identity, cause: Exception) -> None:
        """Compensating delete so a failed profile write leaves no orphaned account."""
        logger.error("[AUTH] Profile creation failed for identity %s: %s", identity.id, cause.detail)
        try:
            await self.gateway.delete_identity(identity.id)
        except TransportError as exc:
            logger.error("[AUTH] Could not remove orphaned identity %s", identity.id)
            raise RegistrationIncompleteError() from exc

    async def complete_profile(self, context: SessionContext, form: ProfileCompletionRequest) -> Profile:
        identity = context.state.identity
        if identity is None:
            raise AuthenticationError("Not authenticated")
        if context.state.profile is not None:
            raise DuplicateResourceError("A profile already exists for this account")

        role, attributes = validation.validate_profile_completion(form.model_dump())
        login_id = derive_login_id(attributes["phone_number"], role)
        if await self.gateway.find_profile_by_login_id(login_id):
            raise DuplicateResourceError(PHONE_ALREADY_REGISTERED)

        attributes["name"] = attributes["name"].strip()
        profile = await self.gateway.create_profile(
            Profile(user_id=identity.id, role=role, login_id=login_id, email=identity.email, **attributes)
        )
        await context.refresh()
        logger.info("[AUTH] Completed profile %s for identity %s", login_id, identity.id)
        return profile

    async def create_admin(
        self,
        name: str,
        email: str,
        password: str,
        phone_number: str,
        login_id: Optional[str] = None,
    ) -> Profile:
        """Bootstrap an admin account; admins cannot self-register."""
        values = {"name": name, "email": email, "password": password, "phone_number": phone_number}
        validation.require_fields(values, ("name", "phone_number", "email", "password"))
        validation.validate_phone_number(phone_number)
        login_id = (login_id or derive_login_id(phone_number, UserRole.ADMIN)).strip().upper()
        if resolve_role(login_id) != UserRole.ADMIN:
            raise ValidationError("login_id", "Admin login IDs must start with A")
        if await self.gateway.find_profile_by_login_id(login_id):
            raise DuplicateResourceError("A user with this login ID already exists")

        identity = await self.gateway.create_identity(email, password, {"name": name, "role": "admin"})
        try:
            profile = await self.gateway.create_profile(
                Profile(
                    user_id=identity.id,
                    role=UserRole.ADMIN,
                    login_id=login_id,
                    name=name.strip(),
                    phone_number=phone_number,
                    email=identity.email,
                )
            )
        except (DuplicateResourceError, TransportError, ValidationError) as exc:
            await self._discard_identity(identity, exc)
            raise
        logger.info("[AUTH] Admin account %s created", login_id)
        return profile

    # --- Login / logout ---

    async def login(self, context: SessionContext, form: LoginRequest) -> LoginResponse:
        values = form.model_dump()
        validation.validate_login(values)
        login_id = values["login_id"].strip()

        email = await self.gateway.resolve_email_for_login_id(login_id)
        if not email:
            logger.info("[AUTH] Login failed - no account for login_id '%s'", login_id)
            raise AuthenticationError()

        try:
            session = await context.sign_in(email, values["password"])
        except AuthenticationError:
            logger.info("[AUTH] Login failed for login_id '%s' - invalid password", login_id)
            raise

        profile = context.state.profile
        if profile is None:
            # Login ids only exist on profiles, so this is a broken row
            logger.error("[AUTH] Identity %s signed in without a profile", session.identity.id)
            await context.sign_out()
            raise AuthenticationError()

        logger.info("[AUTH] Login successful: %s (%s)", profile.login_id, profile.role.value)
        return LoginResponse(
            access_token=session.access_token,
            token_type=session.token_type,
            profile=ProfileResponse.model_validate(profile),
            redirect_to=dashboard_for(profile.role),
        )

    async def logout(self, context: SessionContext) -> None:
        await context.sign_out()

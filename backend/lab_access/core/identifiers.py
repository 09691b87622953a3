"""
Login identifier scheme.

A login id is a role tag followed by a suffix, e.g. ``F3210``. The tag is the
first character, case-insensitive: S = student, F = faculty, A = admin.
Registration derives the suffix from the last four digits of the phone number.
"""
from typing import Optional

from lab_access.models.profile import UserRole

PHONE_NUMBER_LENGTH = 10

_ROLE_PREFIXES = {
    UserRole.STUDENT: "S",
    UserRole.FACULTY: "F",
    UserRole.ADMIN: "A",
}
_PREFIX_ROLES = {prefix: role for role, prefix in _ROLE_PREFIXES.items()}


def role_prefix(role: UserRole) -> str:
    return _ROLE_PREFIXES[UserRole(role)]


def is_valid_phone_number(value: Optional[str]) -> bool:
    """Exactly 10 ASCII digits, nothing else."""
    if not value or len(value) != PHONE_NUMBER_LENGTH:
        return False
    # str.isdigit() accepts other unicode digits
    return value.isascii() and value.isdigit()


def derive_login_id(phone_number: str, role: UserRole = UserRole.FACULTY) -> str:
    if not is_valid_phone_number(phone_number):
        raise ValueError("Phone number must be exactly 10 digits")
    return f"{role_prefix(role)}{phone_number[-4:]}"


def preview_login_id(phone_number: Optional[str], role: UserRole = UserRole.FACULTY) -> Optional[str]:
    """Hint shown while the phone number is still being typed."""
    if not phone_number or len(phone_number) < 4:
        return None
    return f"{role_prefix(role)}{phone_number[-4:]}"


def resolve_role(login_id: Optional[str]) -> Optional[UserRole]:
    if not login_id:
        return None
    return _PREFIX_ROLES.get(login_id[0].upper())

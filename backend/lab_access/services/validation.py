"""
Form validation for registration, login and access requests.

Every check here runs before the data gateway is touched. The first failing
rule raises ValidationError and nothing is submitted.
"""
from dataclasses import dataclass
from datetime import date, time
from typing import Iterable, Mapping, Optional, Tuple

from lab_access.core.config import settings
from lab_access.core.exceptions import ValidationError
from lab_access.core.identifiers import is_valid_phone_number, resolve_role
from lab_access.models.profile import Department, Designation, UserRole

FILL_ALL_FIELDS = "Please fill in all fields"
FILL_REQUIRED_FIELDS = "Please fill in all required fields"
PHONE_NUMBER_INVALID = "Phone number must be exactly 10 digits"
LOGIN_ID_INVALID = "Login ID must start with S (student), F (faculty), or A (admin)"
STUDENT_COUNTS_REQUIRED = "Please specify number of systems and students"

MAX_STUDENT_YEAR = 5

FACULTY_FIELDS = ("name", "department", "designation", "phone_number", "email", "password")
STUDENT_FIELDS = ("name", "register_number", "year", "branch", "phone_number", "email", "password")
REQUEST_FIELDS = ("purpose", "date", "in_time", "out_time")

_DEPARTMENTS = {d.value for d in Department}
_DESIGNATIONS = {d.value for d in Designation}


@dataclass(frozen=True)
class ValidatedRequest:
    purpose: str
    request_date: date
    in_time: time
    out_time: time
    is_for_students: bool
    num_systems: Optional[int] = None
    num_students: Optional[int] = None


def _is_blank(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def require_fields(values: Mapping, fields: Iterable[str], message: str = FILL_ALL_FIELDS) -> None:
    for field in fields:
        if _is_blank(values.get(field)):
            raise ValidationError(field, message)


def validate_phone_number(phone_number: str) -> None:
    if not is_valid_phone_number(phone_number):
        raise ValidationError("phone_number", PHONE_NUMBER_INVALID)


def _validate_faculty_attributes(values: Mapping) -> None:
    if values.get("department") not in _DEPARTMENTS:
        raise ValidationError("department", "Please select a valid department")
    if values.get("designation") not in _DESIGNATIONS:
        raise ValidationError("designation", "Please select a valid designation")


def _parse_year(raw: str) -> int:
    try:
        year = int(raw)
    except (TypeError, ValueError):
        raise ValidationError("year", f"Year must be between 1 and {MAX_STUDENT_YEAR}")
    if not 1 <= year <= MAX_STUDENT_YEAR:
        raise ValidationError("year", f"Year must be between 1 and {MAX_STUDENT_YEAR}")
    return year


def validate_faculty_registration(values: Mapping) -> None:
    require_fields(values, FACULTY_FIELDS)
    validate_phone_number(values["phone_number"])
    _validate_faculty_attributes(values)


def validate_student_registration(values: Mapping) -> int:
    """Returns the parsed year."""
    require_fields(values, STUDENT_FIELDS)
    validate_phone_number(values["phone_number"])
    return _parse_year(values["year"])


def validate_profile_completion(values: Mapping) -> Tuple[UserRole, dict]:
    """
    Profile fields for an identity without a profile. Email and password are
    already held by the identity, so only the profile attributes are checked.
    """
    role_value = (values.get("role") or "").strip().lower()
    if role_value not in (UserRole.STUDENT.value, UserRole.FACULTY.value):
        raise ValidationError("role", "Please choose student or faculty")
    role = UserRole(role_value)

    if role == UserRole.FACULTY:
        fields = [f for f in FACULTY_FIELDS if f not in ("email", "password")]
        require_fields(values, fields)
        validate_phone_number(values["phone_number"])
        _validate_faculty_attributes(values)
        attributes = {f: values[f] for f in fields}
    else:
        fields = [f for f in STUDENT_FIELDS if f not in ("email", "password")]
        require_fields(values, fields)
        validate_phone_number(values["phone_number"])
        attributes = {f: values[f] for f in fields}
        attributes["year"] = _parse_year(values["year"])
    return role, attributes


def validate_login(values: Mapping) -> UserRole:
    require_fields(values, ("login_id", "password"))
    role = resolve_role(values["login_id"].strip())
    if role is None:
        raise ValidationError("login_id", LOGIN_ID_INVALID)
    return role


def is_for_students(role: UserRole, request_type: str) -> bool:
    return role == UserRole.FACULTY and request_type == "students"


def _parse_count(field: str, raw: str, minimum: int, maximum: Optional[int] = None) -> int:
    try:
        value = int(raw)
    except (TypeError, ValueError):
        raise ValidationError(field, "Must be a whole number")
    if value < minimum or (maximum is not None and value > maximum):
        if maximum is None:
            raise ValidationError(field, f"Must be at least {minimum}")
        raise ValidationError(field, f"Must be between {minimum} and {maximum}")
    return value


def validate_access_request(values: Mapping, role: UserRole, request_type: str = "personal") -> ValidatedRequest:
    require_fields(values, REQUEST_FIELDS, FILL_REQUIRED_FIELDS)

    for_students = is_for_students(role, request_type)
    if for_students and (_is_blank(values.get("num_systems")) or _is_blank(values.get("num_students"))):
        field = "num_systems" if _is_blank(values.get("num_systems")) else "num_students"
        raise ValidationError(field, STUDENT_COUNTS_REQUIRED)

    try:
        request_date = date.fromisoformat(values["date"].strip())
    except ValueError:
        raise ValidationError("date", "Please enter a valid date (YYYY-MM-DD)")
    try:
        in_time = time.fromisoformat(values["in_time"].strip())
        out_time = time.fromisoformat(values["out_time"].strip())
    except ValueError:
        raise ValidationError("in_time", "Please enter valid times (HH:MM)")
    if in_time >= out_time:
        raise ValidationError("out_time", "Out time must be after in time")

    num_systems = num_students = None
    if for_students:
        num_systems = _parse_count("num_systems", values["num_systems"], 1, settings.MAX_SYSTEMS)
        num_students = _parse_count("num_students", values["num_students"], 1)

    return ValidatedRequest(
        purpose=values["purpose"].strip(),
        request_date=request_date,
        in_time=in_time,
        out_time=out_time,
        is_for_students=for_students,
        num_systems=num_systems,
        num_students=num_students,
    )

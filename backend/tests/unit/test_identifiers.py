import pytest

from lab_access.core.identifiers import (
    derive_login_id,
    is_valid_phone_number,
    preview_login_id,
    resolve_role,
    role_prefix,
)
from lab_access.models.profile import UserRole


def test_faculty_login_id_uses_last_four_digits():
    assert derive_login_id("9876543210") == "F3210"
    assert derive_login_id("9876543210", UserRole.FACULTY) == "F3210"

def test_student_and_admin_prefixes():
    assert derive_login_id("9000001111", UserRole.STUDENT) == "S1111"
    assert derive_login_id("9000000001", UserRole.ADMIN) == "A0001"

@pytest.mark.parametrize("phone", ["", "12345", "98765432100", "98765abcde", "９８７６５４３２１０"])
def test_derive_rejects_bad_phone_numbers(phone):
    assert not is_valid_phone_number(phone)
    with pytest.raises(ValueError):
        derive_login_id(phone)

def test_preview_needs_four_characters():
    assert preview_login_id("987") is None
    assert preview_login_id("") is None
    assert preview_login_id("9876") == "F9876"
    assert preview_login_id("98765", UserRole.STUDENT) == "S8765"

@pytest.mark.parametrize("login_id,expected", [
    ("S1234", UserRole.STUDENT),
    ("s1234", UserRole.STUDENT),
    ("F3210", UserRole.FACULTY),
    ("a0001", UserRole.ADMIN),
    ("X1234", None),
    ("1234", None),
    ("", None),
    (None, None),
])
def test_resolve_role(login_id, expected):
    assert resolve_role(login_id) == expected

def test_role_prefix_accepts_plain_values():
    assert role_prefix("student") == "S"
    assert role_prefix(UserRole.ADMIN) == "A"

import asyncio

from lab_access.core.database import get_db
from lab_access.core.gateway import DataGateway
from lab_access.core.security import get_password_hash
from lab_access.main import app
from lab_access.models import Identity

FACULTY_FORM = {
    "name": "Dr. Meera",
    "department": "ECE",
    "designation": "Assistant Professor",
    "phone_number": "9123454321",
    "email": "meera@example.com",
    "password": "meera123",
}


def _auth(token):
    return {"Authorization": f"Bearer {token}"}

def test_login_redirects_by_role(client):
    for login_id, password, route in [
        ("A0001", "admin123", "/admin-dashboard"),
        ("f3210", "faculty123", "/faculty-dashboard"),
        ("S1111", "student123", "/student-dashboard"),
    ]:
        response = client.post("/api/v1/auth/login", json={"login_id": login_id, "password": password})
        assert response.status_code == 200
        data = response.json()
        assert data["redirect_to"] == route
        assert data["token_type"] == "bearer"
        assert data["profile"]["login_id"] == login_id.upper()

def test_login_accepts_form_field_name(client):
    response = client.post("/api/v1/auth/login", json={"loginId": "S1111", "password": "student123"})
    assert response.status_code == 200

def test_login_failures_are_generic(client):
    unknown = client.post("/api/v1/auth/login", json={"login_id": "F0000", "password": "faculty123"})
    wrong = client.post("/api/v1/auth/login", json={"login_id": "F3210", "password": "wrong"})
    assert unknown.status_code == wrong.status_code == 401
    assert unknown.json()["detail"] == wrong.json()["detail"] == "Invalid login ID or password"

def test_login_validation(client):
    response = client.post("/api/v1/auth/login", json={"login_id": "X3210", "password": "faculty123"})
    assert response.status_code == 422
    assert response.json()["detail"].startswith("Login ID must start with S")

    response = client.post("/api/v1/auth/login", json={"login_id": "F3210"})
    assert response.status_code == 422
    assert response.json()["detail"] == "Please fill in all fields"

def test_register_faculty_then_login(client):
    response = client.post("/api/v1/auth/register/faculty", json=FACULTY_FORM)
    assert response.status_code == 201
    assert response.json()["login_id"] == "F4321"

    response = client.post("/api/v1/auth/login", json={"login_id": "F4321", "password": "meera123"})
    assert response.status_code == 200
    assert response.json()["profile"]["department"] == "ECE"

def test_register_duplicate_phone_suffix(client):
    form = dict(FACULTY_FORM, email="someone@example.com", phone_number="9000003210")
    response = client.post("/api/v1/auth/register/faculty", json=form)
    assert response.status_code == 409
    assert response.json()["detail"] == "A user with this phone number already exists"

def test_register_duplicate_email(client):
    form = dict(FACULTY_FORM, email="faculty@example.com", phone_number="9000007777")
    response = client.post("/api/v1/auth/register/faculty", json=form)
    assert response.status_code == 409
    assert response.json()["detail"] == "User already registered"

def test_register_student_validation(client):
    response = client.post("/api/v1/auth/register/student", json={"name": "Ravi", "phone_number": "9000002222"})
    assert response.status_code == 422
    assert response.json()["detail"] == "Please fill in all fields"

    form = {
        "name": "Ravi", "register_number": "21CS050", "year": 2, "branch": "CSE",
        "phone_number": "900000222", "email": "ravi@example.com", "password": "ravi123",
    }
    response = client.post("/api/v1/auth/register/student", json=form)
    assert response.status_code == 422
    assert response.json()["detail"] == "Phone number must be exactly 10 digits"

def test_login_id_preview(client):
    assert client.get("/api/v1/auth/login-id-preview?phone_number=987").json()["login_id"] is None
    response = client.get("/api/v1/auth/login-id-preview?phone_number=9876543210&role=student")
    assert response.json()["login_id"] == "S3210"

def test_me(client, student_token):
    response = client.get("/api/v1/profiles/me", headers=_auth(student_token))
    assert response.status_code == 200
    assert response.json()["role"] == "student"
    assert client.get("/api/v1/profiles/me").status_code == 401

def test_logout_invalidates_token(client):
    token = client.post(
        "/api/v1/auth/login", json={"login_id": "F3210", "password": "faculty123"}
    ).json()["access_token"]
    assert client.post("/api/v1/auth/logout", headers=_auth(token)).status_code == 200
    assert client.get("/api/v1/profiles/me", headers=_auth(token)).status_code == 401

def test_complete_missing_profile(client):
    db = next(app.dependency_overrides[get_db]())
    db.add(Identity(email="orphan@example.com", hashed_password=get_password_hash("orphan123")))
    db.commit()
    db.close()

    # No profile means no login ID, so sign in through the gateway directly
    db = next(app.dependency_overrides[get_db]())
    token = asyncio.run(DataGateway(db).sign_in("orphan@example.com", "orphan123")).access_token
    db.close()

    response = client.get("/api/v1/profiles/me", headers=_auth(token))
    assert response.status_code == 403
    assert response.json()["detail"] == "Profile setup required"

    form = {"role": "student", "name": "Orphan", "phone_number": "9000005555",
            "register_number": "21CS099", "year": "1", "branch": "IT"}
    response = client.post("/api/v1/profiles/complete", json=form, headers=_auth(token))
    assert response.status_code == 201
    assert response.json()["login_id"] == "S5555"

    response = client.post("/api/v1/profiles/complete", json=form, headers=_auth(token))
    assert response.status_code == 409
    assert client.get("/api/v1/profiles/me", headers=_auth(token)).status_code == 200

def test_register_rejects_overlong_password(client):
    form = dict(FACULTY_FORM, email="long@example.com", phone_number="9000006666", password="p" * 80)
    response = client.post("/api/v1/auth/register/faculty", json=form)
    assert response.status_code == 422
    assert response.json()["detail"] == "Password should be at most 72 bytes"

    response = client.post("/api/v1/auth/login", json={"login_id": "F3210", "password": "p" * 80})
    assert response.status_code == 401

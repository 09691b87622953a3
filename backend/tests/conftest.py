import os

# Settings are read at import time
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from lab_access.main import app
from lab_access.core.database import Base, get_db
from lab_access.core.security import get_password_hash
from lab_access.models import Identity, Profile, UserRole

# 1. Setup In-Memory SQLite Database
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# 2. Dependency Override
def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()

app.dependency_overrides[get_db] = override_get_db

SEED_ACCOUNTS = [
    {
        "email": "admin@example.com",
        "password": "admin123",
        "role": UserRole.ADMIN,
        "login_id": "A0001",
        "name": "Lab Admin",
        "phone_number": "9000000001",
    },
    {
        "email": "faculty@example.com",
        "password": "faculty123",
        "role": UserRole.FACULTY,
        "login_id": "F3210",
        "name": "Dr. Rao",
        "phone_number": "9876543210",
        "department": "CSE",
        "designation": "Professor",
    },
    {
        "email": "student@example.com",
        "password": "student123",
        "role": UserRole.STUDENT,
        "login_id": "S1111",
        "name": "Asha",
        "phone_number": "9000001111",
        "register_number": "21CS001",
        "year": 3,
        "branch": "CSE",
    },
]

def seed_accounts(db):
    for account in SEED_ACCOUNTS:
        fields = dict(account)
        identity = Identity(
            email=fields.pop("email"),
            hashed_password=get_password_hash(fields.pop("password")),
            user_metadata={"name": fields["name"]},
        )
        db.add(identity)
        db.flush()
        db.add(Profile(user_id=identity.id, email=identity.email, **fields))
    db.commit()

@pytest.fixture
def db_session():
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)

@pytest.fixture(scope="module")
def client():
    Base.metadata.create_all(bind=engine)

    db = TestingSessionLocal()
    seed_accounts(db)
    db.close()

    with TestClient(app) as c:
        yield c

    Base.metadata.drop_all(bind=engine)

def _login(client, login_id, password):
    response = client.post("/api/v1/auth/login", json={"login_id": login_id, "password": password})
    assert response.status_code == 200, response.text
    return response.json()["access_token"]

@pytest.fixture(scope="module")
def admin_token(client):
    return _login(client, "A0001", "admin123")

@pytest.fixture(scope="module")
def faculty_token(client):
    return _login(client, "F3210", "faculty123")

@pytest.fixture(scope="module")
def student_token(client):
    return _login(client, "S1111", "student123")

REQUEST = {
    "purpose": "Line follower testing",
    "date": "2026-11-02",
    "in_time": "09:30",
    "out_time": "11:00",
}


def _auth(token):
    return {"Authorization": f"Bearer {token}"}

def _user_id(client, token):
    return client.get("/api/v1/profiles/me", headers=_auth(token)).json()["user_id"]

def test_student_submits_request(client, student_token):
    response = client.post("/api/v1/requests", json=REQUEST, headers=_auth(student_token))
    assert response.status_code == 201
    data = response.json()
    assert data["message"] == "Your access request has been submitted successfully"
    assert data["form"]["purpose"] == ""
    assert data["form"]["request_type"] == "personal"

    [created] = data["requests"]
    assert created["status"] == "pending"
    assert created["is_for_students"] is False
    assert created["num_systems"] is None
    assert created["in_time"] == "09:30:00"

def test_faculty_books_for_students(client, faculty_token):
    body = dict(REQUEST, request_type="students", num_systems=12, num_students=30)
    response = client.post("/api/v1/requests", json=body, headers=_auth(faculty_token))
    assert response.status_code == 201
    created = response.json()["requests"][0]
    assert created["is_for_students"] is True
    assert created["num_systems"] == 12
    assert created["num_students"] == 30

def test_request_validation(client, faculty_token):
    body = dict(REQUEST, request_type="students", num_systems="30", num_students="40")
    response = client.post("/api/v1/requests", json=body, headers=_auth(faculty_token))
    assert response.status_code == 422
    assert response.json()["detail"] == "Must be between 1 and 28"

    body = dict(REQUEST, request_type="students")
    response = client.post("/api/v1/requests", json=body, headers=_auth(faculty_token))
    assert response.json()["detail"] == "Please specify number of systems and students"

    body = dict(REQUEST, purpose=" ")
    response = client.post("/api/v1/requests", json=body, headers=_auth(faculty_token))
    assert response.json()["detail"] == "Please fill in all required fields"

    body = dict(REQUEST, out_time="09:00")
    response = client.post("/api/v1/requests", json=body, headers=_auth(faculty_token))
    assert response.json()["detail"] == "Out time must be after in time"

def test_only_students_and_faculty_submit(client, admin_token):
    assert client.post("/api/v1/requests", json=REQUEST, headers=_auth(admin_token)).status_code == 403
    assert client.post("/api/v1/requests", json=REQUEST).status_code == 401

def test_listing_is_restricted(client, student_token, faculty_token, admin_token):
    student_id = _user_id(client, student_token)
    faculty_id = _user_id(client, faculty_token)

    own = client.get("/api/v1/requests", headers=_auth(student_token)).json()
    assert own and all(r["user_id"] == student_id for r in own)
    foreign = client.get(f"/api/v1/requests?owner={faculty_id}", headers=_auth(student_token)).json()
    assert foreign == []

    everything = client.get("/api/v1/requests", headers=_auth(admin_token)).json()
    assert {r["user_id"] for r in everything} == {student_id, faculty_id}
    filtered = client.get(f"/api/v1/requests?owner={faculty_id}", headers=_auth(admin_token)).json()
    assert filtered and all(r["user_id"] == faculty_id for r in filtered)

def test_listing_is_newest_first(client, student_token):
    client.post("/api/v1/requests", json=dict(REQUEST, purpose="later"), headers=_auth(student_token))
    rows = client.get("/api/v1/requests", headers=_auth(student_token)).json()
    assert rows[0]["purpose"] == "later"

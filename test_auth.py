"""Login, token handling and role gates."""
from conftest import PASSWORD, auth_headers


async def test_staff_login_returns_token(client, make_staff):
    teacher = await make_staff(role="Teacher", email="maths.teacher@school.edu")

    response = await client.post("/api/v1/auth/login", json={"email": "maths.teacher@school.edu", "password": PASSWORD})

    assert response.status_code == 200
    body = response.json()
    assert body["token"]
    assert body["user"] == {
        "id": str(teacher.id),
        "name": teacher.name,
        "email": "maths.teacher@school.edu",
        "role": "Teacher",
    }


async def test_login_requires_email_and_password(client):
    response = await client.post("/api/v1/auth/login", json={"email": "someone@school.edu"})
    assert response.status_code == 400
    assert response.json()["detail"] == "Email and password are required"


async def test_login_rejects_wrong_password(client, make_staff):
    await make_staff(email="wrong.pass@school.edu")
    response = await client.post("/api/v1/auth/login", json={"email": "wrong.pass@school.edu", "password": "nope"})
    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid credentials"


async def test_student_login_and_profile(client, make_student):
    await make_student(email="pupil@school.edu")

    login = await client.post("/api/v1/auth/student/login", json={"email": "pupil@school.edu", "password": PASSWORD})
    assert login.status_code == 200
    assert login.json()["user"]["role"] == "Student"

    token = login.json()["token"]
    me = await client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200
    assert me.json()["email"] == "pupil@school.edu"
    assert "password_hash" not in me.json()


async def test_staff_credentials_do_not_work_on_student_login(client, make_staff):
    await make_staff(email="staff.only@school.edu")
    response = await client.post("/api/v1/auth/student/login", json={"email": "staff.only@school.edu", "password": PASSWORD})
    assert response.status_code == 401


async def test_missing_or_invalid_token_is_rejected(client):
    assert (await client.get("/api/v1/auth/me")).status_code == 401
    bad = await client.get("/api/v1/auth/me", headers={"Authorization": "Bearer not-a-token"})
    assert bad.status_code == 401


async def test_role_gate_returns_403(client, make_student):
    student = await make_student()
    response = await client.get("/api/v1/staff/", headers=auth_headers(student))
    assert response.status_code == 403
    assert response.json()["detail"] == "Access denied"


async def test_change_password(client, make_staff):
    teacher = await make_staff(email="changer@school.edu")
    response = await client.post(
        "/api/v1/auth/change-password",
        json={"current_password": PASSWORD, "new_password": "fresh-secret"},
        headers=auth_headers(teacher),
    )
    assert response.status_code == 200

    login = await client.post("/api/v1/auth/login", json={"email": "changer@school.edu", "password": "fresh-secret"})
    assert login.status_code == 200


async def test_health_endpoints(client):
    assert (await client.get("/health/")).json()["status"] == "healthy"
    db_health = await client.get("/health/db-health")
    assert db_health.status_code == 200
    assert db_health.json()["status"] in ("healthy", "unhealthy")

"""Student, staff, class and department management."""
from conftest import ACADEMIC_YEAR, auth_headers


def student_payload(**overrides):
    payload = {
        "name": "Asha Rao",
        "email": "asha.rao@school.edu",
        "password": "secret123",
        "roll_number": "1",
        "class_name": "10",
        "section": "A",
        "academic_year": ACADEMIC_YEAR,
        "parent_name": "R. Rao",
    }
    payload.update(overrides)
    return payload


async def test_principal_creates_and_lists_students(client, principal):
    headers = auth_headers(principal)

    created = await client.post("/api/v1/students/", json=student_payload(), headers=headers)
    assert created.status_code == 201
    assert created.json()["student"]["class_name"] == "10"
    assert "password_hash" not in created.json()["student"]

    await client.post(
        "/api/v1/students/",
        json=student_payload(email="b@school.edu", roll_number="2", section="B"),
        headers=headers,
    )

    listing = await client.get("/api/v1/students/", params={"section": "A"}, headers=headers)
    assert listing.status_code == 200
    assert listing.json()["total"] == 1
    assert listing.json()["items"][0]["email"] == "asha.rao@school.edu"


async def test_duplicate_student_email_and_roll_number(client, principal):
    headers = auth_headers(principal)
    await client.post("/api/v1/students/", json=student_payload(), headers=headers)

    same_email = await client.post("/api/v1/students/", json=student_payload(roll_number="9"), headers=headers)
    assert same_email.status_code == 409

    same_roll = await client.post("/api/v1/students/", json=student_payload(email="other@school.edu"), headers=headers)
    assert same_roll.status_code == 409


async def test_teacher_reads_but_cannot_write_students(client, class_teacher, make_student):
    student = await make_student()
    headers = auth_headers(class_teacher)

    assert (await client.get(f"/api/v1/students/{student.id}", headers=headers)).status_code == 200
    response = await client.put(f"/api/v1/students/{student.id}", json={"name": "Changed"}, headers=headers)
    assert response.status_code == 403


async def test_soft_deleted_student_is_not_found(client, principal, make_student):
    student = await make_student()
    headers = auth_headers(principal)

    assert (await client.delete(f"/api/v1/students/{student.id}", headers=headers)).status_code == 200
    missing = await client.get(f"/api/v1/students/{student.id}", headers=headers)
    assert missing.status_code == 404
    assert missing.json()["detail"] == "Student not found"


async def test_staff_crud(client, principal):
    headers = auth_headers(principal)
    created = await client.post("/api/v1/staff/", json={
        "name": "Meera Iyer",
        "email": "meera@school.edu",
        "password": "secret123",
        "role": "Teacher",
        "assigned_subjects": [{"class_name": "9", "section": "B", "subject": "Physics"}],
    }, headers=headers)
    assert created.status_code == 201
    staff_id = created.json()["id"]
    assert created.json()["staff"]["assigned_subjects"][0]["subject"] == "Physics"

    duplicate = await client.post("/api/v1/staff/", json={
        "name": "Someone", "email": "meera@school.edu", "password": "secret123"
    }, headers=headers)
    assert duplicate.status_code == 409

    updated = await client.put(f"/api/v1/staff/{staff_id}", json={"qualification": "M.Sc."}, headers=headers)
    assert updated.json()["staff"]["qualification"] == "M.Sc."

    teachers = await client.get("/api/v1/staff/", params={"role": "Teacher"}, headers=headers)
    assert teachers.json()["total"] == 1


async def test_classes_and_departments(client, principal, make_staff):
    headers = auth_headers(principal)
    coordinator = await make_staff()

    created = await client.post("/api/v1/principal/classes/", json={
        "class_name": "8", "section": "C", "academic_year": ACADEMIC_YEAR, "coordinator_id": str(coordinator.id)
    }, headers=headers)
    assert created.status_code == 201

    duplicate = await client.post("/api/v1/principal/classes/", json={
        "class_name": "8", "section": "C", "academic_year": ACADEMIC_YEAR
    }, headers=headers)
    assert duplicate.status_code == 409

    not_a_head = await client.post("/api/v1/principal/departments/", json={
        "name": "Science", "code": "SCI", "head_of_department_id": str(coordinator.id)
    }, headers=headers)
    assert not_a_head.status_code == 400

    hod = await make_staff(role="HOD")
    department = await client.post("/api/v1/principal/departments/", json={
        "name": "Science", "code": "SCI", "head_of_department_id": str(hod.id)
    }, headers=headers)
    assert department.status_code == 201
    department_id = department.json()["id"]

    await client.put(f"/api/v1/staff/{coordinator.id}", json={"department_id": department_id}, headers=headers)

    details = await client.get(f"/api/v1/principal/departments/{department_id}", headers=headers)
    assert details.status_code == 200
    assert details.json()["head_of_department"]["id"] == str(hod.id)
    assert details.json()["teacher_count"] == 1

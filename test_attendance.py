"""Marking, viewing and reporting class attendance."""
from conftest import auth_headers


def attendance_payload(day, *entries):
    return {
        "date": day,
        "class_name": "10",
        "section": "A",
        "records": [{"student_id": str(student.id), "status": status} for student, status in entries],
    }


async def test_marking_twice_replaces_the_day(client, class_teacher, make_student):
    first = await make_student(roll_number="1")
    second = await make_student(roll_number="2")
    headers = auth_headers(class_teacher)

    response = await client.post(
        "/api/v1/teacher/attendance/",
        json=attendance_payload("2026-03-02", (first, "Present"), (second, "Absent")),
        headers=headers,
    )
    assert response.status_code == 201
    assert response.json()["count"] == 2

    again = await client.post(
        "/api/v1/teacher/attendance/",
        json=attendance_payload("2026-03-02", (second, "Present")),
        headers=headers,
    )
    assert again.status_code == 201

    day = await client.get("/api/v1/teacher/attendance/10/A/2026-03-02", headers=headers)
    statuses = {row["student_id"]: row["status"] for row in day.json()["students"]}
    assert statuses == {str(first.id): "Present", str(second.id): "Present"}


async def test_unmarked_students_show_not_marked(client, class_teacher, make_student):
    student = await make_student()
    response = await client.get("/api/v1/teacher/attendance/10/A/2026-03-09", headers=auth_headers(class_teacher))
    assert response.status_code == 200
    assert response.json()["students"] == [{
        "student_id": str(student.id),
        "name": student.name,
        "roll_number": student.roll_number,
        "status": "Not Marked",
        "remarks": None,
    }]


async def test_unassigned_teacher_is_denied(client, make_staff, make_student):
    outsider = await make_staff(assigned_subjects=[{"class_name": "9", "section": "B", "subject": "History"}])
    student = await make_student()

    response = await client.post(
        "/api/v1/teacher/attendance/",
        json=attendance_payload("2026-03-02", (student, "Present")),
        headers=auth_headers(outsider),
    )
    assert response.status_code == 403
    assert response.json()["detail"] == "You are not assigned to this class"


async def test_class_coordinator_may_mark(client, make_staff, make_student, make_class):
    coordinator = await make_staff()
    await make_class(coordinator=coordinator)
    student = await make_student()

    response = await client.post(
        "/api/v1/teacher/attendance/",
        json=attendance_payload("2026-03-02", (student, "Late")),
        headers=auth_headers(coordinator),
    )
    assert response.status_code == 201


async def test_student_from_another_class_is_rejected(client, class_teacher, make_student):
    stranger = await make_student(class_name="9", section="B")
    response = await client.post(
        "/api/v1/teacher/attendance/",
        json=attendance_payload("2026-03-02", (stranger, "Present")),
        headers=auth_headers(class_teacher),
    )
    assert response.status_code == 404


async def test_report_and_student_summary(client, class_teacher, make_student):
    student = await make_student()
    headers = auth_headers(class_teacher)
    for day, status in (("2026-03-02", "Present"), ("2026-03-03", "Present"), ("2026-03-04", "Absent"), ("2026-03-05", "Leave")):
        await client.post("/api/v1/teacher/attendance/", json=attendance_payload(day, (student, status)), headers=headers)

    report = await client.get("/api/v1/teacher/attendance/report/10/A/2026-03-02/2026-03-05", headers=headers)
    assert report.status_code == 200
    body = report.json()
    assert body["total_days"] == 4
    row = body["students"][0]
    assert (row["present_days"], row["absent_days"], row["leave_days"]) == (2, 1, 1)
    assert row["attendance_percentage"] == 50.0

    backwards = await client.get("/api/v1/teacher/attendance/report/10/A/2026-03-05/2026-03-02", headers=headers)
    assert backwards.status_code == 400

    own = await client.get("/api/v1/student/attendance", headers=auth_headers(student))
    assert own.status_code == 200
    assert own.json()["total_days"] == 4
    assert own.json()["present"] == 2

    monthly = await client.get("/api/v1/student/attendance/2026/3", headers=auth_headers(student))
    assert monthly.json()["attendance_percentage"] == 50.0
    assert monthly.json()["month"] == 3

    assert (await client.get("/api/v1/student/attendance/2026/13", headers=auth_headers(student))).status_code == 400

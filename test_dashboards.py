"""Principal and HOD dashboards."""
from conftest import ACADEMIC_YEAR, auth_headers


async def test_principal_dashboard_stats(client, principal, make_staff, make_student, make_class, make_department):
    accountant = await make_staff(role="Accountant")
    teacher = await make_staff()
    student = await make_student()
    await make_student()
    await make_class()
    await make_department()

    await client.post("/api/v1/fees/structures", json={
        "academic_year": ACADEMIC_YEAR, "class_name": "10", "components": [{"name": "Tuition", "amount": 1000}],
    }, headers=auth_headers(accountant))
    await client.post("/api/v1/fees/payments", json={
        "student_id": str(student.id), "academic_year": ACADEMIC_YEAR, "amount": 250,
    }, headers=auth_headers(accountant))
    await client.post("/api/v1/staff/approval-requests/", json={
        "request_type": "Leave", "title": "Two days off",
    }, headers=auth_headers(teacher))

    response = await client.get("/api/v1/principal/dashboard/", headers=auth_headers(principal))
    assert response.status_code == 200
    stats = response.json()["stats"]
    assert stats["total_students"] == 2
    assert stats["new_students_this_month"] == 2
    assert stats["total_staff"] == 3
    assert stats["total_classes"] == 1
    assert stats["total_departments"] == 1
    assert stats["pending_approvals"] == 1
    assert stats["fee_collected_this_month"] == 250
    assert stats["fee_collection_rate"] == 25.0
    assert response.json()["pending_approvals"][0]["title"] == "Two days off"


async def test_hod_dashboard(client, make_staff, make_department):
    hod = await make_staff(role="HOD")
    department = await make_department(head=hod)
    teacher = await make_staff(department_id=department.id)
    await client.post("/api/v1/staff/approval-requests/", json={
        "request_type": "Resource", "title": "Projector",
    }, headers=auth_headers(teacher))

    response = await client.get("/api/v1/hod/dashboard/", headers=auth_headers(hod))
    assert response.status_code == 200
    body = response.json()
    assert body["department"]["id"] == str(department.id)
    assert body["teacher_count"] == 1
    assert body["pending_count"] == 1


async def test_hod_without_department(client, make_staff):
    hod = await make_staff(role="HOD")
    response = await client.get("/api/v1/hod/dashboard/", headers=auth_headers(hod))
    assert response.status_code == 404

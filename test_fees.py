"""Fee structures, payments and the student fee view."""
from uuid import uuid4

from conftest import ACADEMIC_YEAR, auth_headers


async def test_structure_total_is_sum_of_components(client, make_staff):
    accountant = await make_staff(role="Accountant")
    headers = auth_headers(accountant)

    created = await client.post("/api/v1/fees/structures", json={
        "academic_year": ACADEMIC_YEAR,
        "class_name": "10",
        "components": [{"name": "Tuition", "amount": 1000}, {"name": "Lab", "amount": 250.5}],
        "total_amount": 5,
    }, headers=headers)
    assert created.status_code == 201
    structure = created.json()["structure"]
    assert structure["total_amount"] == 1250.5
    assert structure["created_by"] == str(accountant.id)

    updated = await client.put(f"/api/v1/fees/structures/{structure['id']}", json={
        "components": [{"name": "Tuition", "amount": 1100}],
    }, headers=headers)
    assert updated.json()["structure"]["total_amount"] == 1100


async def test_teacher_cannot_manage_fees(client, class_teacher):
    response = await client.get("/api/v1/fees/structures", headers=auth_headers(class_teacher))
    assert response.status_code == 403


async def test_payment_gets_receipt_and_paid_date(client, make_staff, make_student):
    accountant = await make_staff(role="Accountant")
    student = await make_student()

    response = await client.post("/api/v1/fees/payments", json={
        "student_id": str(student.id),
        "academic_year": ACADEMIC_YEAR,
        "amount": 500,
    }, headers=auth_headers(accountant))
    assert response.status_code == 201
    body = response.json()
    assert body["receipt_number"].startswith("RCP")
    assert body["payment"]["status"] == "Paid"
    assert body["payment"]["payment_date"] is not None


async def test_payment_date_offset_is_converted_to_utc(client, make_staff, make_student):
    accountant = await make_staff(role="Accountant")
    student = await make_student()

    response = await client.post("/api/v1/fees/payments", json={
        "student_id": str(student.id),
        "academic_year": ACADEMIC_YEAR,
        "amount": 500,
        "payment_date": "2026-03-01T10:00:00+05:30",
    }, headers=auth_headers(accountant))
    assert response.status_code == 201
    assert response.json()["payment"]["payment_date"] == "2026-03-01T04:30:00"


async def test_payment_validation(client, make_staff, make_student):
    accountant = await make_staff(role="Accountant")
    student = await make_student()
    headers = auth_headers(accountant)

    unknown_student = await client.post("/api/v1/fees/payments", json={
        "student_id": str(uuid4()), "academic_year": ACADEMIC_YEAR, "amount": 100,
    }, headers=headers)
    assert unknown_student.status_code == 404
    assert unknown_student.json()["detail"] == "Student not found"

    first = await client.post("/api/v1/fees/payments", json={
        "student_id": str(student.id), "academic_year": ACADEMIC_YEAR, "amount": 100, "receipt_number": "RCP-1",
    }, headers=headers)
    assert first.status_code == 201
    duplicate = await client.post("/api/v1/fees/payments", json={
        "student_id": str(student.id), "academic_year": ACADEMIC_YEAR, "amount": 100, "receipt_number": "RCP-1",
    }, headers=headers)
    assert duplicate.status_code == 409


async def test_student_fee_summary_and_settling(client, make_staff, make_student):
    accountant = await make_staff(role="Accountant")
    student = await make_student()
    headers = auth_headers(accountant)

    await client.post("/api/v1/fees/payments", json={
        "student_id": str(student.id), "academic_year": ACADEMIC_YEAR, "amount": 500,
    }, headers=headers)
    pending = await client.post("/api/v1/fees/payments", json={
        "student_id": str(student.id), "academic_year": ACADEMIC_YEAR, "amount": 300,
        "status": "Pending", "due_date": "2020-01-01",
    }, headers=headers)

    fees = (await client.get("/api/v1/student/fees", headers=auth_headers(student))).json()
    assert len(fees["payments"]) == 2
    assert fees["total_fees"] == 800
    assert fees["paid_amount"] == 500
    assert fees["pending_amount"] == 300
    assert fees["payment_status"] == "Overdue"

    settled = await client.put(
        f"/api/v1/fees/payments/{pending.json()['payment']['id']}/pay",
        json={"payment_method": "UPI"},
        headers=headers,
    )
    assert settled.json()["payment"]["status"] == "Paid"
    assert settled.json()["payment"]["payment_method"] == "UPI"

    fees = (await client.get("/api/v1/student/fees", headers=auth_headers(student))).json()
    assert fees["payment_status"] == "Paid"
    assert len(fees["payment_history"]) == 2

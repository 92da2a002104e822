"""Progress report aggregation, access and feedback; the student records feeding it."""
from datetime import date, datetime
from uuid import uuid4

from conftest import ACADEMIC_YEAR, auth_headers
from schoolhub.models import (
    Assignment, AssignmentSubmission, Attendance, DisciplinaryRecord, Exam, ExamResult, FeePayment, HealthRecord,
)
from schoolhub.services.progress_report_service import ProgressReportService

NOW = datetime(2026, 3, 15, 12)


async def seed_term(db, teacher, student):
    for day, status in ((2, "Present"), (3, "Present"), (4, "Absent")):
        db.add(Attendance(
            student_id=student.id, class_name="10", section="A",
            date=date(2026, 3, day), status=status, marked_by=teacher.id,
        ))

    graded = Assignment(
        title="Worksheet 4", subject="Mathematics", class_name="10", section="A",
        due_date=datetime(2026, 3, 10), max_score=100, created_by=teacher.id,
    )
    missed = Assignment(
        title="Worksheet 5", subject="Mathematics", class_name="10", section="A",
        due_date=datetime(2026, 3, 12), max_score=100, created_by=teacher.id,
    )
    db.add_all([graded, missed])
    await db.flush()
    db.add(AssignmentSubmission(
        assignment_id=graded.id, student_id=student.id, submitted_at=datetime(2026, 3, 9),
        status="Graded", score=80,
    ))

    for subject, marks in (("Mathematics", 45), ("Science", 30)):
        exam = Exam(
            name=f"{subject} Unit Test", exam_type="Unit Test", subject=subject, class_name="10", section="A",
            exam_date=date(2026, 3, 1), total_marks=50, academic_year=ACADEMIC_YEAR, created_by=teacher.id,
        )
        db.add(exam)
        await db.flush()
        db.add(ExamResult(
            exam_id=exam.id, student_id=student.id, subject=subject, academic_year=ACADEMIC_YEAR,
            marks=marks, total_marks=50,
        ))

    db.add(DisciplinaryRecord(
        student_id=student.id, incident_type="Conduct", description="Disrupted class",
        severity="Moderate", reported_by=teacher.id, created_at=datetime(2026, 3, 5),
    ))
    db.add_all([
        FeePayment(
            student_id=student.id, academic_year=ACADEMIC_YEAR, amount=500, status="Paid",
            payment_date=datetime(2026, 1, 10), receipt_number="RCP-A",
        ),
        FeePayment(
            student_id=student.id, academic_year=ACADEMIC_YEAR, amount=300, status="Pending",
            due_date=date(2026, 2, 1), receipt_number="RCP-B",
        ),
    ])
    db.add(HealthRecord(student_id=student.id, height=150, weight=45, blood_group="B+"))
    await db.commit()


async def test_generate_report_aggregates_every_section(db, session_factory, class_teacher, make_student):
    student = await make_student()
    await seed_term(db, class_teacher, student)

    async with session_factory() as session:
        report = await ProgressReportService(session).generate_report(
            class_teacher, student.id, ACADEMIC_YEAR, "Annual", now=NOW
        )

    assert report.attendance["percentage"] == 67
    assert report.attendance["total_days"] == 3
    assert report.attendance["monthly_breakdown"][0]["month"] == "March"

    assert report.assignment_performance["total_assignments"] == 2
    assert report.assignment_performance["pending_assignments"] == 1
    assert report.assignment_performance["average_score"] == 80

    assert report.exam_performance["average_score"] == 75
    assert report.exam_performance["highest_score"] == 90

    assert report.behavior["overall_rating"] == "Satisfactory"
    assert len(report.behavior["disciplinary_incidents"]) == 1

    assert report.fee_status["payment_status"] == "Overdue"
    assert report.fee_status["pending_amount"] == 300
    assert report.health_info["bmi"] == 20.0
    assert report.health_info["blood_group"] == "B+"

    assert report.trends == {
        "academic_progress": "Improving",
        "attendance_trend": "Declining",
        "behavior_trend": "Stable",
        "assignment_trend": "Improving",
    }
    assert report.recommendations["academic"] == ["Complete pending assignments to improve overall performance"]
    assert report.recommendations["behavioral"] == ["Improve attendance to maintain academic progress"]
    assert report.recommendations["general"] == []

    assert report.data_sources["attendance"]["source"] == "Attendance Module"
    assert report.generated_by == class_teacher.id
    assert report.feedback == {}


async def test_monthly_window_excludes_older_activity(db, session_factory, class_teacher, make_student):
    student = await make_student()
    db.add(Attendance(
        student_id=student.id, class_name="10", section="A",
        date=date(2026, 2, 20), status="Absent", marked_by=class_teacher.id,
    ))
    db.add(Attendance(
        student_id=student.id, class_name="10", section="A",
        date=date(2026, 3, 2), status="Present", marked_by=class_teacher.id,
    ))
    await db.commit()

    async with session_factory() as session:
        report = await ProgressReportService(session).generate_report(
            class_teacher, student.id, ACADEMIC_YEAR, "Monthly", now=NOW
        )

    assert report.attendance["total_days"] == 1
    assert report.attendance["percentage"] == 100
    assert report.behavior["overall_rating"] == "Excellent"
    assert report.fee_status["payment_status"] == "Paid"
    assert report.health_info["blood_group"] == "Unknown"


async def test_report_for_unknown_student(client, class_teacher):
    response = await client.post("/api/v1/progress-reports/", json={
        "student_id": str(uuid4()), "academic_year": ACADEMIC_YEAR,
    }, headers=auth_headers(class_teacher))
    assert response.status_code == 404
    assert response.json()["detail"] == "Student not found"


async def test_report_access_update_and_feedback(client, class_teacher, make_staff, make_student):
    student = await make_student()
    classmate = await make_student()

    created = await client.post("/api/v1/progress-reports/", json={
        "student_id": str(student.id), "academic_year": ACADEMIC_YEAR, "report_period": "Quarterly",
    }, headers=auth_headers(class_teacher))
    assert created.status_code == 201
    report = created.json()["report"]
    assert report["report_period"] == "Quarterly"
    report_id = report["id"]

    own = await client.get("/api/v1/student/progress-reports", headers=auth_headers(student))
    assert [item["id"] for item in own.json()["items"]] == [report_id]
    assert (await client.get(f"/api/v1/progress-reports/{report_id}", headers=auth_headers(student))).status_code == 200
    assert (await client.get(f"/api/v1/progress-reports/{report_id}", headers=auth_headers(classmate))).status_code == 403

    feedback = await client.post(
        f"/api/v1/progress-reports/{report_id}/feedback",
        json={"student_comments": "I will attend more regularly", "parent_comments": "Noted"},
        headers=auth_headers(student),
    )
    assert feedback.status_code == 200
    assert feedback.json()["feedback"]["student_comments"] == "I will attend more regularly"
    assert feedback.json()["feedback"]["acknowledgment_date"]

    reviewer = await make_staff(role="HOD")
    updated = await client.put(
        f"/api/v1/progress-reports/{report_id}", json={"teacher_remarks": "Steady term"}, headers=auth_headers(reviewer)
    )
    assert updated.status_code == 200
    assert updated.json()["report"]["teacher_remarks"] == "Steady term"
    assert updated.json()["report"]["generated_by"] == str(reviewer.id)

    student_edit = await client.put(
        f"/api/v1/progress-reports/{report_id}", json={"teacher_remarks": "Great"}, headers=auth_headers(student)
    )
    assert student_edit.status_code == 403


async def test_discipline_and_health_records(client, class_teacher, make_student):
    student = await make_student()
    headers = auth_headers(class_teacher)

    incident = await client.post("/api/v1/teacher/students/discipline", json={
        "student_id": str(student.id), "incident_type": "Uniform", "description": "No tie",
    }, headers=headers)
    assert incident.status_code == 201
    record = incident.json()["record"]
    assert record["severity"] == "Minor"
    assert record["status"] == "Open"

    resolved = await client.put(
        f"/api/v1/teacher/students/discipline/{record['id']}/resolve", json={"action_taken": "Warned"}, headers=headers
    )
    assert resolved.json()["record"]["status"] == "Resolved"
    again = await client.put(f"/api/v1/teacher/students/discipline/{record['id']}/resolve", json={}, headers=headers)
    assert again.status_code == 400

    unknown = await client.post("/api/v1/teacher/students/discipline", json={
        "student_id": str(uuid4()), "incident_type": "Uniform", "description": "No tie",
    }, headers=headers)
    assert unknown.status_code == 404

    assert (await client.get(f"/api/v1/teacher/students/{student.id}/health", headers=headers)).json()["record"] is None
    await client.put(f"/api/v1/teacher/students/{student.id}/health", json={"height": 160, "weight": 50}, headers=headers)
    await client.put(f"/api/v1/teacher/students/{student.id}/health", json={"weight": 64}, headers=headers)

    health = (await client.get(f"/api/v1/teacher/students/{student.id}/health", headers=headers)).json()
    assert health["record"]["height"] == 160
    assert health["bmi"] == 25.0

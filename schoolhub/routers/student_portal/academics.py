from typing import Optional
from uuid import UUID
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ...core.database import get_db
from ...core.security import STUDENT_ROLE, require_roles
from ...schemas.academic_schemas import SubmissionCreate
from ...services.assignment_service import AssignmentService
from ...services.attendance_service import AttendanceService
from ...services.exam_service import ExamService
from ...services.report_metrics import grade_from_percentage, percentage_of
from ...utils.serialization import serialize_list, serialize_model

router = APIRouter(prefix="/api/v1/student", tags=["Student Portal - Academics"])

student_only = require_roles(STUDENT_ROLE)

@router.get("/attendance", response_model=dict)
async def get_my_attendance(
    current_user=Depends(student_only),
    db: AsyncSession = Depends(get_db)
):
    """Own attendance records with totals"""
    service = AttendanceService(db)
    summary = await service.get_student_summary(current_user.id)
    summary["records"] = serialize_list(summary["records"])
    return summary

@router.get("/attendance/{year}/{month}", response_model=dict)
async def get_my_monthly_attendance(
    year: int,
    month: int,
    current_user=Depends(student_only),
    db: AsyncSession = Depends(get_db)
):
    service = AttendanceService(db)
    summary = await service.get_monthly_summary(current_user.id, year, month)
    summary["records"] = serialize_list(summary["records"])
    return summary

@router.get("/assignments", response_model=dict)
async def get_my_assignments(
    current_user=Depends(student_only),
    db: AsyncSession = Depends(get_db)
):
    service = AssignmentService(db)
    items = await service.list_for_student(current_user)
    return {
        "items": [
            {
                **serialize_model(item["assignment"]),
                "submission": serialize_model(item["submission"]),
                "submission_status": item["submission"].status if item["submission"] else "Not Submitted"
            }
            for item in items
        ],
        "total": len(items)
    }

@router.post("/assignments/{assignment_id}/submit", response_model=dict)
async def submit_assignment(
    assignment_id: UUID,
    submission_data: SubmissionCreate,
    current_user=Depends(student_only),
    db: AsyncSession = Depends(get_db)
):
    service = AssignmentService(db)
    submission = await service.submit(current_user, assignment_id, submission_data.model_dump())
    return {"message": "Assignment submitted successfully", "submission": serialize_model(submission)}

@router.get("/exam-results", response_model=dict)
async def get_my_exam_results(
    academic_year: Optional[str] = Query(None),
    current_user=Depends(student_only),
    db: AsyncSession = Depends(get_db)
):
    """Own results with exam details, percentage and grade"""
    service = ExamService(db)
    results = await service.results_for_student(current_user.id, academic_year)
    items = []
    for result in results:
        percentage = percentage_of(result.marks, result.total_marks)
        items.append({
            **serialize_model(result),
            "exam": {
                "name": result.exam.name,
                "exam_type": result.exam.exam_type,
                "exam_date": result.exam.exam_date.isoformat(),
                "status": result.exam.status
            },
            "percentage": percentage,
            "grade": grade_from_percentage(percentage)
        })
    return {"items": items, "total": len(items)}

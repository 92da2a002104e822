from typing import Optional
from uuid import UUID
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ...core.database import get_db
from ...core.security import TEACHING_ROLES, require_roles
from ...schemas.academic_schemas import ExamCreate, ExamResultsRequest, ExamStatusUpdate
from ...services.exam_service import ExamService
from ...utils.serialization import serialize_list, serialize_model

router = APIRouter(prefix="/api/v1/teacher/exams", tags=["Teacher - Exams"])

teaching_staff = require_roles(*TEACHING_ROLES)

@router.post("/", response_model=dict, status_code=201)
async def create_exam(
    exam_data: ExamCreate,
    current_user=Depends(teaching_staff),
    db: AsyncSession = Depends(get_db)
):
    service = ExamService(db)
    exam = await service.create_exam(current_user, exam_data.model_dump())
    return {"id": str(exam.id), "message": "Exam created successfully", "exam": serialize_model(exam)}

@router.get("/", response_model=dict)
async def get_my_exams(
    class_name: Optional[str] = Query(None),
    status: Optional[str] = Query(None),
    current_user=Depends(teaching_staff),
    db: AsyncSession = Depends(get_db)
):
    service = ExamService(db)
    exams = await service.get_multi(created_by=current_user.id, class_name=class_name, status=status)
    return {"items": serialize_list(exams), "total": len(exams)}

@router.put("/{exam_id}/status", response_model=dict)
async def update_exam_status(
    exam_id: UUID,
    status_data: ExamStatusUpdate,
    current_user=Depends(teaching_staff),
    db: AsyncSession = Depends(get_db)
):
    """Move an exam between Draft, Published and Archived"""
    service = ExamService(db)
    exam = await service.set_status(current_user, exam_id, status_data.status)
    return {"message": f"Exam status set to {exam.status}", "exam": serialize_model(exam)}

@router.post("/{exam_id}/results", response_model=dict)
async def enter_results(
    exam_id: UUID,
    results_data: ExamResultsRequest,
    current_user=Depends(teaching_staff),
    db: AsyncSession = Depends(get_db)
):
    service = ExamService(db)
    results = await service.enter_results(
        current_user, exam_id, [entry.model_dump() for entry in results_data.results]
    )
    return {"message": "Results saved successfully", "results": serialize_list(results)}

@router.get("/{exam_id}/results", response_model=dict)
async def get_results(
    exam_id: UUID,
    current_user=Depends(teaching_staff),
    db: AsyncSession = Depends(get_db)
):
    service = ExamService(db)
    exam = await service.get_owned(current_user, exam_id)
    results = await service.get_results(exam.id)
    return {"exam": serialize_model(exam), "results": serialize_list(results)}

@router.get("/{exam_id}/performance", response_model=dict)
async def get_performance_report(
    exam_id: UUID,
    current_user=Depends(teaching_staff),
    db: AsyncSession = Depends(get_db)
):
    """Class-level statistics for one exam"""
    service = ExamService(db)
    return await service.performance_report(current_user, exam_id)

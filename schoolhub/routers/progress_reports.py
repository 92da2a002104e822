from uuid import UUID
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_db
from ..core.security import STUDENT_ROLE, TEACHING_ROLES, CurrentUser, get_current_user, require_roles
from ..schemas.admin_schemas import GenerateReportRequest, ReportFeedback, ReportUpdate
from ..services.progress_report_service import ProgressReportService
from ..utils.serialization import serialize_model

router = APIRouter(prefix="/api/v1/progress-reports", tags=["Progress Reports"])

report_authors = require_roles(*TEACHING_ROLES)
report_readers = require_roles(*TEACHING_ROLES, "Admin", STUDENT_ROLE)

@router.post("/", response_model=dict, status_code=201)
async def generate_progress_report(
    report_request: GenerateReportRequest,
    current_user=Depends(report_authors),
    db: AsyncSession = Depends(get_db)
):
    """Aggregate attendance, assignments, exams, behavior, fees and health into one report"""
    service = ProgressReportService(db)
    report = await service.generate_report(
        current_user,
        report_request.student_id,
        report_request.academic_year,
        report_request.report_period
    )
    return {
        "message": "Progress report generated successfully",
        "report": serialize_model(report)
    }

@router.get("/{report_id}", response_model=dict)
async def get_progress_report(
    report_id: UUID,
    current_user: CurrentUser = Depends(report_readers),
    db: AsyncSession = Depends(get_db)
):
    service = ProgressReportService(db)
    return serialize_model(await service.get_for_user(report_id, current_user))

@router.put("/{report_id}", response_model=dict)
async def update_progress_report(
    report_id: UUID,
    report_data: ReportUpdate,
    current_user=Depends(report_authors),
    db: AsyncSession = Depends(get_db)
):
    """Edit remarks, status or recommendations; the editor becomes the report's author"""
    service = ProgressReportService(db)
    report = await service.update_report(current_user, report_id, report_data.model_dump(exclude_unset=True))
    return {"message": "Progress report updated", "report": serialize_model(report)}

@router.post("/{report_id}/feedback", response_model=dict)
async def add_feedback(
    report_id: UUID,
    feedback: ReportFeedback,
    current_user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    service = ProgressReportService(db)
    report = await service.add_feedback(current_user, report_id, feedback.model_dump(exclude_unset=True))
    return {"message": "Feedback recorded", "feedback": report.feedback}

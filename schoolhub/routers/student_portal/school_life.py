from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ...core.database import get_db
from ...core.security import STUDENT_ROLE, require_roles
from ...services.announcement_service import AnnouncementService
from ...services.fee_service import FeePaymentService
from ...services.progress_report_service import ProgressReportService
from ...utils.serialization import serialize_list

router = APIRouter(prefix="/api/v1/student", tags=["Student Portal - Fees, Notices & Reports"])

student_only = require_roles(STUDENT_ROLE)

@router.get("/fees", response_model=dict)
async def get_my_fees(
    academic_year: Optional[str] = Query(None),
    current_user=Depends(student_only),
    db: AsyncSession = Depends(get_db)
):
    """Own payments with paid and pending totals"""
    service = FeePaymentService(db)
    fees = await service.student_fee_summary(current_user, academic_year)
    return {
        "payments": serialize_list(fees["payments"]),
        **fees["summary"]
    }

@router.get("/announcements", response_model=dict)
async def get_my_announcements(
    current_user=Depends(student_only),
    db: AsyncSession = Depends(get_db)
):
    service = AnnouncementService(db)
    announcements = await service.list_for_student(current_user)
    return {"items": serialize_list(announcements), "total": len(announcements)}

@router.get("/progress-reports", response_model=dict)
async def get_my_progress_reports(
    academic_year: Optional[str] = Query(None),
    report_period: Optional[str] = Query(None),
    current_user=Depends(student_only),
    db: AsyncSession = Depends(get_db)
):
    """Own progress reports, newest first"""
    service = ProgressReportService(db)
    reports = await service.list_for_student(current_user.id, academic_year, report_period)
    return {"items": serialize_list(reports), "total": len(reports)}

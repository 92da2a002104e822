from datetime import date
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ...core.database import get_db
from ...core.security import TEACHING_ROLES, require_roles
from ...schemas.academic_schemas import MarkAttendanceRequest
from ...services.attendance_service import AttendanceService
from ...utils.serialization import serialize_list

router = APIRouter(prefix="/api/v1/teacher/attendance", tags=["Teacher - Attendance"])

teaching_staff = require_roles(*TEACHING_ROLES)

@router.post("/", response_model=dict, status_code=201)
async def mark_attendance(
    attendance_data: MarkAttendanceRequest,
    current_user=Depends(teaching_staff),
    db: AsyncSession = Depends(get_db)
):
    """Mark (or re-mark) a class's attendance for one day"""
    service = AttendanceService(db)
    records = await service.mark_attendance(
        current_user,
        attendance_data.date,
        attendance_data.class_name,
        attendance_data.section,
        [record.model_dump() for record in attendance_data.records]
    )
    return {
        "message": "Attendance marked successfully",
        "count": len(records),
        "records": serialize_list(records)
    }

@router.get("/report/{class_name}/{section}/{start_date}/{end_date}", response_model=dict)
async def get_attendance_report(
    class_name: str,
    section: str,
    start_date: date,
    end_date: date,
    current_user=Depends(teaching_staff),
    db: AsyncSession = Depends(get_db)
):
    """Per-student attendance counts over a date range"""
    service = AttendanceService(db)
    report = await service.generate_report(current_user, class_name, section, start_date, end_date)
    return {
        "class_name": class_name,
        "section": section,
        "start_date": start_date.isoformat(),
        "end_date": end_date.isoformat(),
        "total_days": (end_date - start_date).days + 1,
        "students": report
    }

@router.get("/{class_name}/{section}/{attendance_date}", response_model=dict)
async def get_class_attendance(
    class_name: str,
    section: str,
    attendance_date: date,
    current_user=Depends(teaching_staff),
    db: AsyncSession = Depends(get_db)
):
    service = AttendanceService(db)
    students = await service.get_class_attendance(current_user, class_name, section, attendance_date)
    return {
        "class_name": class_name,
        "section": section,
        "date": attendance_date.isoformat(),
        "students": students
    }

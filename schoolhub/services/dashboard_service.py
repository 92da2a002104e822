# schoolhub/services/dashboard_service.py
from typing import Dict, Any
from datetime import datetime
import logging
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func

from .announcement_service import AnnouncementService
from .approval_service import ApprovalService
from .fee_service import FeePaymentService, FeeStructureService
from .staff_service import ClassService, DepartmentService, StaffService
from .student_service import StudentService
from ..models.approval import Approver
from ..models.base import utcnow
from ..models.staff import Staff
from ..models.student import Student

logger = logging.getLogger(__name__)


def month_bounds(now: datetime):
    start = datetime(now.year, now.month, 1)
    if now.month == 12:
        end = datetime(now.year + 1, 1, 1)
    else:
        end = datetime(now.year, now.month + 1, 1)
    return start, end


class DashboardService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def principal_dashboard(self, now: datetime = None) -> Dict[str, Any]:
        """School-wide counts, this month's fee collection and the latest activity"""
        now = now or utcnow()
        month_start, month_end = month_bounds(now)

        students = StudentService(self.db)
        staff = StaffService(self.db)
        approvals = ApprovalService(self.db)

        total_students = await students.get_active_count()
        new_students = (await self.db.execute(
            select(func.count()).select_from(Student).where(
                Student.created_at >= month_start,
                Student.created_at < month_end,
                Student.is_deleted == False
            )
        )).scalar()

        collected = await FeePaymentService(self.db).collected_between(month_start, month_end)
        expected = await FeeStructureService(self.db).total_active_amount()
        fee_collection_rate = round(collected / expected * 100, 2) if expected else 0

        return {
            "stats": {
                "total_students": total_students,
                "total_staff": await staff.get_active_count(),
                "active_staff": await staff.get_active_count(status="Active"),
                "total_classes": await ClassService(self.db).get_active_count(),
                "total_departments": await DepartmentService(self.db).get_active_count(),
                "pending_approvals": await approvals.count_pending_for(Approver.PRINCIPAL.value),
                "new_students_this_month": new_students,
                "fee_collected_this_month": collected,
                "fee_collection_rate": fee_collection_rate,
            },
            "pending_approvals": await approvals.pending_for(Approver.PRINCIPAL.value, limit=10),
            "recent_announcements": await AnnouncementService(self.db).get_published(limit=5),
        }

    async def hod_dashboard(self, hod: Staff) -> Dict[str, Any]:
        approvals = ApprovalService(self.db)
        department = await approvals.department_of_hod(hod)
        teachers = await StaffService(self.db).get_department_teachers(department.id)
        pending = await approvals.hod_requests(hod, pending_only=True)

        return {
            "department": department,
            "teacher_count": len(teachers),
            "teachers": teachers,
            "pending_approvals": pending,
        }

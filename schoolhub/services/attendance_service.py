# schoolhub/services/attendance_service.py
from typing import List, Optional, Dict, Any
from uuid import UUID
from datetime import date, timedelta
import logging
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete

from .base_service import BaseService
from .staff_service import ClassService
from .student_service import StudentService
from ..core.exceptions import BadRequestError, NotFoundError, PermissionDeniedError
from ..models.attendance import Attendance, AttendanceStatus
from ..models.staff import Staff

logger = logging.getLogger(__name__)

NOT_MARKED = "Not Marked"


class AttendanceService(BaseService[Attendance]):
    resource_name = "Attendance record"

    def __init__(self, db: AsyncSession):
        super().__init__(Attendance, db)

    async def _ensure_class_teacher(self, staff: Staff, class_name: str, section: str):
        if not await ClassService(self.db).is_class_teacher(staff, class_name, section):
            raise PermissionDeniedError("You are not assigned to this class")

    async def mark_attendance(
        self,
        staff: Staff,
        attendance_date: date,
        class_name: str,
        section: str,
        records: List[dict]
    ) -> List[Attendance]:
        """Replace the day's attendance for the listed students"""
        await self._ensure_class_teacher(staff, class_name, section)

        student_ids = [record["student_id"] for record in records]
        if len(set(student_ids)) != len(student_ids):
            raise BadRequestError("A student appears more than once")

        roster = {student.id for student in await StudentService(self.db).get_by_class(class_name, section)}
        unknown = [str(student_id) for student_id in student_ids if student_id not in roster]
        if unknown:
            raise NotFoundError(f"Student(s) {', '.join(unknown)} in {class_name}-{section}")

        await self.db.execute(
            delete(self.model).where(
                self.model.date == attendance_date,
                self.model.student_id.in_(student_ids)
            )
        )

        created = [
            self.model(
                student_id=record["student_id"],
                class_name=class_name,
                section=section,
                date=attendance_date,
                status=AttendanceStatus(record["status"]).value,
                late_arrival=record.get("late_arrival", False),
                early_departure=record.get("early_departure", False),
                remarks=record.get("remarks"),
                marked_by=staff.id,
            )
            for record in records
        ]
        self.db.add_all(created)
        await self.db.commit()

        logger.info(f"Attendance marked for {len(created)} students in {class_name}-{section} on {attendance_date} by {staff.id}")
        return created

    async def get_class_attendance(self, staff: Staff, class_name: str, section: str, attendance_date: date) -> List[Dict[str, Any]]:
        """Roster merged with the status recorded for the day"""
        await self._ensure_class_teacher(staff, class_name, section)

        students = await StudentService(self.db).get_by_class(class_name, section)
        stmt = select(self.model).where(
            self.model.date == attendance_date,
            self.model.student_id.in_([student.id for student in students]),
            self.model.is_deleted == False
        )
        records = {record.student_id: record for record in (await self.db.execute(stmt)).scalars().all()}

        return [
            {
                "student_id": str(student.id),
                "name": student.name,
                "roll_number": student.roll_number,
                "status": records[student.id].status if student.id in records else NOT_MARKED,
                "remarks": records[student.id].remarks if student.id in records else None,
            }
            for student in students
        ]

    async def generate_report(
        self,
        staff: Staff,
        class_name: str,
        section: str,
        start_date: date,
        end_date: date
    ) -> List[Dict[str, Any]]:
        """Per-student counts over the calendar days of the range"""
        if end_date < start_date:
            raise BadRequestError("end_date must not be before start_date")
        await self._ensure_class_teacher(staff, class_name, section)

        students = await StudentService(self.db).get_by_class(class_name, section)
        records = await self.get_records(
            student_ids=[student.id for student in students],
            start_date=start_date,
            end_date=end_date
        )

        total_days = (end_date - start_date).days + 1
        report = []
        for student in students:
            own = [record for record in records if record.student_id == student.id]
            present = sum(1 for record in own if record.status == AttendanceStatus.PRESENT.value)
            report.append({
                "student_id": str(student.id),
                "name": student.name,
                "roll_number": student.roll_number,
                "present_days": present,
                "absent_days": sum(1 for record in own if record.status == AttendanceStatus.ABSENT.value),
                "late_days": sum(1 for record in own if record.status == AttendanceStatus.LATE.value),
                "leave_days": sum(1 for record in own if record.status == AttendanceStatus.LEAVE.value),
                "attendance_percentage": round(present / total_days * 100, 2),
            })
        return report

    async def get_records(
        self,
        student_ids: List[UUID],
        start_date: Optional[date] = None,
        end_date: Optional[date] = None
    ) -> List[Attendance]:
        stmt = select(self.model).where(
            self.model.student_id.in_(student_ids),
            self.model.is_deleted == False
        )
        if start_date:
            stmt = stmt.where(self.model.date >= start_date)
        if end_date:
            stmt = stmt.where(self.model.date <= end_date)
        result = await self.db.execute(stmt.order_by(self.model.date.desc()))
        return result.scalars().all()

    async def get_student_summary(
        self,
        student_id: UUID,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None
    ) -> Dict[str, Any]:
        """Attendance statistics for one student"""
        records = await self.get_records([student_id], start_date, end_date)
        total = len(records)
        present = sum(1 for record in records if record.status == AttendanceStatus.PRESENT.value)
        return {
            "total_days": total,
            "present": present,
            "absent": sum(1 for record in records if record.status == AttendanceStatus.ABSENT.value),
            "late": sum(1 for record in records if record.status == AttendanceStatus.LATE.value),
            "leave": sum(1 for record in records if record.status == AttendanceStatus.LEAVE.value),
            "attendance_percentage": round(present / total * 100, 2) if total else 0,
            "records": records,
        }

    async def get_monthly_summary(self, student_id: UUID, year: int, month: int) -> Dict[str, Any]:
        """Get monthly attendance summary for a student"""
        if not 1 <= month <= 12:
            raise BadRequestError("month must be between 1 and 12")
        start_date = date(year, month, 1)
        if month == 12:
            end_date = date(year + 1, 1, 1) - timedelta(days=1)
        else:
            end_date = date(year, month + 1, 1) - timedelta(days=1)

        summary = await self.get_student_summary(student_id, start_date, end_date)
        summary.update({"year": year, "month": month})
        return summary

# schoolhub/services/progress_report_service.py
"""Comprehensive progress report generation and feedback."""
from typing import List, Optional, Dict, Any
from uuid import UUID
from datetime import datetime
import logging
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from .base_service import BaseService
from .assignment_service import AssignmentService
from .attendance_service import AttendanceService
from .exam_service import ExamService
from .student_service import StudentService
from . import report_metrics
from ..core.exceptions import NotFoundError, PermissionDeniedError
from ..models.base import utcnow
from ..models.fee import FeePayment
from ..models.progress_report import ComprehensiveProgressReport
from ..models.staff import Staff
from ..models.student import Student
from ..models.student_record import DisciplinaryRecord, HealthRecord

logger = logging.getLogger(__name__)


class ProgressReportService(BaseService[ComprehensiveProgressReport]):
    resource_name = "Progress report"

    def __init__(self, db: AsyncSession):
        super().__init__(ComprehensiveProgressReport, db)

    async def generate_report(
        self,
        staff: Staff,
        student_id: UUID,
        academic_year: str,
        report_period: str,
        now: Optional[datetime] = None
    ) -> ComprehensiveProgressReport:
        """Aggregate every module into one snapshot for the student"""
        student = await StudentService(self.db).get(student_id)
        if not student:
            raise NotFoundError("Student")

        now = now or utcnow()
        window_start = report_metrics.period_start(report_period, now)
        logger.info(f"Generating {report_period} report for student {student.id} from {window_start:%Y-%m-%d}")

        attendance_records = await AttendanceService(self.db).get_records(
            [student.id], start_date=window_start.date(), end_date=now.date()
        )
        attendance = report_metrics.summarize_attendance(attendance_records)

        assignments = await AssignmentService(self.db).list_for_class(
            student.class_name, student.section, due_from=window_start, due_until=now
        )
        assignment_performance = report_metrics.summarize_assignments(assignments, student.id)

        exam_results = await ExamService(self.db).results_for_student(student.id, academic_year)
        exam_performance = report_metrics.summarize_exams(exam_results)

        behavior = report_metrics.summarize_behavior(await self._incidents(student.id, window_start, now))
        fee_status = report_metrics.summarize_fees(await self._payments(student.id, academic_year), now.date())
        health_info = report_metrics.summarize_health(await self._health_record(student.id))

        trends = report_metrics.calculate_trends(attendance, assignment_performance, exam_performance, behavior)
        recommendations = report_metrics.generate_recommendations(
            attendance, assignment_performance, exam_performance, behavior
        )

        timestamp = now.isoformat()
        report = await self.create({
            "student_id": student.id,
            "academic_year": academic_year,
            "class_name": student.class_name,
            "section": student.section,
            "report_period": report_period,
            "report_date": now,
            "generated_by": staff.id,
            "attendance": attendance,
            "assignment_performance": assignment_performance,
            "exam_performance": exam_performance,
            "behavior": behavior,
            "fee_status": fee_status,
            "health_info": health_info,
            "trends": trends,
            "recommendations": recommendations,
            "data_sources": {
                "attendance": {"last_updated": timestamp, "source": "Attendance Module"},
                "assignments": {"last_updated": timestamp, "source": "Assignment Module"},
                "exams": {"last_updated": timestamp, "source": "Exam Module"},
                "behavior": {"last_updated": timestamp, "source": "Disciplinary Module"},
                "fees": {"last_updated": timestamp, "source": "Fee Module"},
                "health": {"last_updated": timestamp, "source": "Health Module"},
            },
            "feedback": {},
        })
        logger.info(f"Progress report {report.id} generated by {staff.id}")
        return report

    async def _incidents(self, student_id: UUID, start: datetime, end: datetime) -> List[DisciplinaryRecord]:
        stmt = select(DisciplinaryRecord).where(
            DisciplinaryRecord.student_id == student_id,
            DisciplinaryRecord.created_at >= start,
            DisciplinaryRecord.created_at <= end,
            DisciplinaryRecord.is_deleted == False
        )
        return (await self.db.execute(stmt)).scalars().all()

    async def _payments(self, student_id: UUID, academic_year: str) -> List[FeePayment]:
        stmt = select(FeePayment).where(
            FeePayment.student_id == student_id,
            FeePayment.academic_year == academic_year,
            FeePayment.is_deleted == False
        )
        return (await self.db.execute(stmt)).scalars().all()

    async def _health_record(self, student_id: UUID) -> Optional[HealthRecord]:
        stmt = select(HealthRecord).where(
            HealthRecord.student_id == student_id,
            HealthRecord.is_deleted == False
        )
        return (await self.db.execute(stmt)).scalar_one_or_none()

    async def list_for_student(
        self,
        student_id: UUID,
        academic_year: Optional[str] = None,
        report_period: Optional[str] = None
    ) -> List[ComprehensiveProgressReport]:
        stmt = select(self.model).where(
            self.model.student_id == student_id,
            self.model.is_deleted == False
        )
        if academic_year:
            stmt = stmt.where(self.model.academic_year == academic_year)
        if report_period:
            stmt = stmt.where(self.model.report_period == report_period)
        result = await self.db.execute(stmt.order_by(self.model.report_date.desc()))
        return result.scalars().all()

    async def get_for_user(self, report_id: UUID, user) -> ComprehensiveProgressReport:
        report = await self.get_or_404(report_id)
        if isinstance(user, Student) and report.student_id != user.id:
            raise PermissionDeniedError("You can only view your own progress reports")
        return report

    async def update_report(self, staff: Staff, report_id: UUID, update_data: Dict[str, Any]) -> ComprehensiveProgressReport:
        report = await self.get_or_404(report_id)
        return await self.update(report.id, {**update_data, "generated_by": staff.id})

    async def add_feedback(self, user, report_id: UUID, feedback_data: Dict[str, Any]) -> ComprehensiveProgressReport:
        report = await self.get_for_user(report_id, user)

        feedback = dict(report.feedback or {})
        if feedback_data.get("student_comments") is not None:
            feedback["student_comments"] = feedback_data["student_comments"]
        if feedback_data.get("parent_comments") is not None:
            feedback["parent_comments"] = feedback_data["parent_comments"]
            feedback["acknowledgment_date"] = utcnow().isoformat()

        return await self.update(report.id, {"feedback": feedback})

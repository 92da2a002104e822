# schoolhub/services/exam_service.py
from typing import List, Optional, Dict, Any
from uuid import UUID
import logging
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from .base_service import BaseService
from .staff_service import ClassService
from .student_service import StudentService
from ..core.exceptions import BadRequestError, NotFoundError, PermissionDeniedError
from ..models.exam import Exam, ExamResult
from ..models.staff import Staff
from .report_metrics import grade_from_percentage, percentage_of

logger = logging.getLogger(__name__)

PASS_PERCENTAGE = 33


class ExamService(BaseService[Exam]):
    resource_name = "Exam"

    def __init__(self, db: AsyncSession):
        super().__init__(Exam, db)

    async def create_exam(self, staff: Staff, exam_data: dict) -> Exam:
        if not await ClassService(self.db).is_class_teacher(staff, exam_data["class_name"], exam_data["section"]):
            raise PermissionDeniedError("You are not assigned to this class")
        exam = await self.create({**exam_data, "created_by": staff.id})
        logger.info(f"Exam {exam.id} created: {exam.name} for {exam.class_name}-{exam.section}")
        return exam

    async def get_owned(self, staff: Staff, exam_id: UUID) -> Exam:
        exam = await self.get_or_404(exam_id)
        if exam.created_by != staff.id:
            raise PermissionDeniedError("You did not create this exam")
        return exam

    async def set_status(self, staff: Staff, exam_id: UUID, status: str) -> Exam:
        exam = await self.get_owned(staff, exam_id)
        return await self.update(exam.id, {"status": status})

    async def get_results(self, exam_id: UUID) -> List[ExamResult]:
        stmt = select(ExamResult).where(
            ExamResult.exam_id == exam_id,
            ExamResult.is_deleted == False
        ).order_by(ExamResult.marks.desc())
        result = await self.db.execute(stmt)
        return result.unique().scalars().all()

    async def enter_results(self, staff: Staff, exam_id: UUID, entries: List[dict]) -> List[ExamResult]:
        """Insert or replace marks, then recompute ranks for the whole exam"""
        exam = await self.get_owned(staff, exam_id)

        roster = {student.id for student in await StudentService(self.db).get_by_class(exam.class_name, exam.section)}
        for entry in entries:
            if entry["marks"] > exam.total_marks:
                raise BadRequestError(f"Marks cannot exceed {exam.total_marks}")
            if entry["student_id"] not in roster:
                raise NotFoundError(f"Student {entry['student_id']} in {exam.class_name}-{exam.section}")

        existing = {result.student_id: result for result in await self.get_results(exam.id)}
        for entry in entries:
            percentage = percentage_of(entry["marks"], exam.total_marks)
            result = existing.get(entry["student_id"])
            if result is None:
                result = ExamResult(
                    exam_id=exam.id,
                    student_id=entry["student_id"],
                    subject=exam.subject,
                    academic_year=exam.academic_year,
                    total_marks=exam.total_marks,
                )
                self.db.add(result)
                existing[entry["student_id"]] = result
            result.marks = entry["marks"]
            result.remarks = entry.get("remarks")
            result.grade = grade_from_percentage(percentage)
            result.entered_by = staff.id

        self._assign_ranks(list(existing.values()))
        await self.db.commit()
        logger.info(f"Results entered for exam {exam.id}: {len(entries)} students")
        return await self.get_results(exam.id)

    @staticmethod
    def _assign_ranks(results: List[ExamResult]):
        """Dense ranking by marks, highest first"""
        distinct_marks = sorted({result.marks for result in results}, reverse=True)
        position = {marks: index + 1 for index, marks in enumerate(distinct_marks)}
        for result in results:
            result.rank = position[result.marks]
            result.total_students = len(results)

    async def performance_report(self, staff: Staff, exam_id: UUID) -> Dict[str, Any]:
        exam = await self.get_owned(staff, exam_id)
        results = await self.get_results(exam.id)

        percentages = [percentage_of(result.marks, result.total_marks) for result in results]
        distribution: Dict[str, int] = {}
        for result in results:
            distribution[result.grade] = distribution.get(result.grade, 0) + 1

        return {
            "exam_id": str(exam.id),
            "name": exam.name,
            "subject": exam.subject,
            "total_marks": exam.total_marks,
            "students_appeared": len(results),
            "average_marks": round(sum(r.marks for r in results) / len(results), 2) if results else 0,
            "highest_marks": max((r.marks for r in results), default=0),
            "lowest_marks": min((r.marks for r in results), default=0),
            "pass_count": sum(1 for p in percentages if p >= PASS_PERCENTAGE),
            "grade_distribution": distribution,
        }

    async def results_for_student(self, student_id: UUID, academic_year: Optional[str] = None) -> List[ExamResult]:
        stmt = select(ExamResult).where(
            ExamResult.student_id == student_id,
            ExamResult.is_deleted == False
        )
        if academic_year:
            stmt = stmt.where(ExamResult.academic_year == academic_year)
        result = await self.db.execute(stmt.order_by(ExamResult.created_at.desc()))
        return result.unique().scalars().all()

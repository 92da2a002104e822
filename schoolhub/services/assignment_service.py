# schoolhub/services/assignment_service.py
from typing import List, Optional, Dict, Any
from uuid import UUID
from datetime import datetime
import logging
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from .base_service import BaseService
from .staff_service import ClassService
from ..core.exceptions import BadRequestError, NotFoundError, PermissionDeniedError
from ..models.assignment import Assignment, AssignmentSubmission, SubmissionStatus
from ..models.base import utcnow
from ..models.staff import Staff
from ..models.student import Student

logger = logging.getLogger(__name__)


class AssignmentService(BaseService[Assignment]):
    resource_name = "Assignment"

    def __init__(self, db: AsyncSession):
        super().__init__(Assignment, db)

    async def create_assignment(self, staff: Staff, assignment_data: dict) -> Assignment:
        if not await ClassService(self.db).is_class_teacher(staff, assignment_data["class_name"], assignment_data["section"]):
            raise PermissionDeniedError("You are not assigned to this class")

        assignment = await self.create({**assignment_data, "created_by": staff.id})
        logger.info(f"Assignment {assignment.id} created for {assignment.class_name}-{assignment.section}")
        return assignment

    async def get_owned(self, staff: Staff, assignment_id: UUID) -> Assignment:
        assignment = await self.get_or_404(assignment_id)
        if assignment.created_by != staff.id:
            raise PermissionDeniedError("You did not create this assignment")
        return assignment

    async def list_for_teacher(self, staff: Staff, class_name: Optional[str] = None, section: Optional[str] = None) -> List[Assignment]:
        return await self.get_multi(created_by=staff.id, class_name=class_name, section=section)

    async def list_for_class(
        self,
        class_name: str,
        section: str,
        due_from: Optional[datetime] = None,
        due_until: Optional[datetime] = None
    ) -> List[Assignment]:
        stmt = select(self.model).where(
            self.model.class_name == class_name,
            self.model.section == section,
            self.model.is_deleted == False
        )
        if due_from:
            stmt = stmt.where(self.model.due_date >= due_from)
        if due_until:
            stmt = stmt.where(self.model.due_date <= due_until)
        result = await self.db.execute(stmt.order_by(self.model.due_date.desc()))
        return result.scalars().all()

    async def update_assignment(self, staff: Staff, assignment_id: UUID, update_data: dict) -> Assignment:
        assignment = await self.get_owned(staff, assignment_id)
        return await self.update(assignment.id, update_data)

    async def delete_assignment(self, staff: Staff, assignment_id: UUID) -> bool:
        assignment = await self.get_owned(staff, assignment_id)
        return await self.soft_delete(assignment.id)

    async def get_submissions(self, staff: Staff, assignment_id: UUID) -> List[AssignmentSubmission]:
        assignment = await self.get_owned(staff, assignment_id)
        return [submission for submission in assignment.submissions if not submission.is_deleted]

    async def submit(self, student: Student, assignment_id: UUID, submission_data: dict) -> AssignmentSubmission:
        """Create or replace the student's submission"""
        assignment = await self.get_or_404(assignment_id)
        if (assignment.class_name, assignment.section) != (student.class_name, student.section):
            raise PermissionDeniedError("This assignment is not for your class")

        now = utcnow()
        status = SubmissionStatus.LATE.value if now > assignment.due_date else SubmissionStatus.SUBMITTED.value

        submission = await self._get_submission(assignment.id, student.id)
        if submission:
            if submission.status == SubmissionStatus.GRADED.value:
                raise BadRequestError("Graded submissions cannot be changed")
            submission.content = submission_data.get("content")
            submission.attachment_url = submission_data.get("attachment_url")
            submission.submitted_at = now
            submission.status = status
        else:
            submission = AssignmentSubmission(
                assignment_id=assignment.id,
                student_id=student.id,
                content=submission_data.get("content"),
                attachment_url=submission_data.get("attachment_url"),
                submitted_at=now,
                status=status,
            )
            self.db.add(submission)

        await self.db.commit()
        await self.db.refresh(submission)
        logger.info(f"Student {student.id} submitted assignment {assignment.id} ({status})")
        return submission

    async def grade_submission(self, staff: Staff, submission_id: UUID, score: float, feedback: Optional[str]) -> AssignmentSubmission:
        stmt = select(AssignmentSubmission).where(
            AssignmentSubmission.id == submission_id,
            AssignmentSubmission.is_deleted == False
        )
        submission = (await self.db.execute(stmt)).scalar_one_or_none()
        if not submission:
            raise NotFoundError("Submission")

        assignment = await self.get_owned(staff, submission.assignment_id)
        if score > assignment.max_score:
            raise BadRequestError(f"Score cannot exceed {assignment.max_score}")

        submission.score = score
        submission.feedback = feedback
        submission.status = SubmissionStatus.GRADED.value
        submission.graded_by = staff.id
        submission.graded_at = utcnow()
        await self.db.commit()
        await self.db.refresh(submission)
        return submission

    async def _get_submission(self, assignment_id: UUID, student_id: UUID) -> Optional[AssignmentSubmission]:
        stmt = select(AssignmentSubmission).where(
            AssignmentSubmission.assignment_id == assignment_id,
            AssignmentSubmission.student_id == student_id,
            AssignmentSubmission.is_deleted == False
        )
        return (await self.db.execute(stmt)).scalar_one_or_none()

    async def list_for_student(self, student: Student) -> List[Dict[str, Any]]:
        """Class assignments with the student's own submission state"""
        assignments = await self.list_for_class(student.class_name, student.section)
        items = []
        for assignment in assignments:
            own = next((s for s in assignment.submissions if s.student_id == student.id and not s.is_deleted), None)
            items.append({
                "assignment": assignment,
                "submission": own,
            })
        return items

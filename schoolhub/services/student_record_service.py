# schoolhub/services/student_record_service.py
"""Disciplinary incidents and health records."""
from typing import List, Optional
from uuid import UUID
import logging
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from .base_service import BaseService
from .student_service import StudentService
from ..core.exceptions import BadRequestError, NotFoundError
from ..models.staff import Staff
from ..models.student_record import DisciplinaryRecord, HealthRecord

logger = logging.getLogger(__name__)


class DisciplinaryService(BaseService[DisciplinaryRecord]):
    resource_name = "Disciplinary record"

    def __init__(self, db: AsyncSession):
        super().__init__(DisciplinaryRecord, db)

    async def report_incident(self, staff: Staff, record_data: dict) -> DisciplinaryRecord:
        if not await StudentService(self.db).get(record_data["student_id"]):
            raise NotFoundError("Student")
        record = await self.create({**record_data, "reported_by": staff.id})
        logger.info(f"{record.severity} incident {record.id} reported for student {record.student_id}")
        return record

    async def list_records(self, student_id: Optional[UUID] = None, status: Optional[str] = None, severity: Optional[str] = None) -> List[DisciplinaryRecord]:
        return await self.get_multi(student_id=student_id, status=status, severity=severity)

    async def resolve(self, record_id: UUID, action_taken: Optional[str] = None) -> DisciplinaryRecord:
        record = await self.get_or_404(record_id)
        if record.status == "Resolved":
            raise BadRequestError("Record is already resolved")
        update_data = {"status": "Resolved"}
        if action_taken:
            update_data["action_taken"] = action_taken
        return await self.update(record.id, update_data)


class HealthRecordService(BaseService[HealthRecord]):
    resource_name = "Health record"

    def __init__(self, db: AsyncSession):
        super().__init__(HealthRecord, db)

    async def get_for_student(self, student_id: UUID) -> Optional[HealthRecord]:
        stmt = select(self.model).where(
            self.model.student_id == student_id,
            self.model.is_deleted == False
        )
        return (await self.db.execute(stmt)).scalar_one_or_none()

    async def upsert(self, staff: Staff, student_id: UUID, health_data: dict) -> HealthRecord:
        """One record per student: update in place or create"""
        if not await StudentService(self.db).get(student_id):
            raise NotFoundError("Student")

        record = await self.get_for_student(student_id)
        if record:
            return await self.update(record.id, {**health_data, "updated_by": staff.id})

        record = await self.create({**health_data, "student_id": student_id, "updated_by": staff.id})
        logger.info(f"Health record created for student {student_id}")
        return record

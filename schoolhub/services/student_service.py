# schoolhub/services/student_service.py
from typing import List, Optional
from uuid import UUID
import logging
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from .base_service import BaseService
from ..core.exceptions import DuplicateError, NotFoundError
from ..core.security import hash_password
from ..models.student import Student

logger = logging.getLogger(__name__)


class StudentService(BaseService[Student]):
    resource_name = "Student"

    def __init__(self, db: AsyncSession):
        super().__init__(Student, db)

    async def get_by_email(self, email: str) -> Optional[Student]:
        """Get student by email"""
        stmt = select(self.model).where(
            self.model.email == email,
            self.model.is_deleted == False
        )
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_roll_number(self, roll_number: str, class_name: str, section: str, academic_year: str) -> Optional[Student]:
        stmt = select(self.model).where(
            self.model.roll_number == roll_number,
            self.model.class_name == class_name,
            self.model.section == section,
            self.model.academic_year == academic_year,
            self.model.is_deleted == False
        )
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_class(self, class_name: str, section: str) -> List[Student]:
        """Class roster ordered by roll number"""
        stmt = select(self.model).where(
            self.model.class_name == class_name,
            self.model.section == section,
            self.model.is_deleted == False
        ).order_by(self.model.roll_number)
        result = await self.db.execute(stmt)
        return result.scalars().all()

    async def create_student(self, student_data: dict) -> Student:
        """Create new student with uniqueness checks"""
        if await self.get_by_email(student_data["email"]):
            raise DuplicateError("A student with this email already exists")

        if await self.get_by_roll_number(
            student_data["roll_number"],
            student_data["class_name"],
            student_data["section"],
            student_data["academic_year"],
        ):
            raise DuplicateError("Roll number already taken in this class")

        data = dict(student_data)
        data["password_hash"] = hash_password(data.pop("password"))
        student = await self.create(data)
        logger.info(f"Student created: {student.id} ({student.class_name}-{student.section})")
        return student

    async def update_student(self, student_id: UUID, update_data: dict) -> Student:
        student = await self.get_or_404(student_id)

        new_email = update_data.get("email")
        if new_email and new_email != student.email and await self.get_by_email(new_email):
            raise DuplicateError("A student with this email already exists")

        updated = await self.update(student.id, update_data)
        if not updated:
            raise NotFoundError(self.resource_name)
        return updated

# schoolhub/services/staff_service.py
"""Staff, department and class management."""
from typing import List, Optional
from uuid import UUID
import logging
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from .base_service import BaseService
from ..core.exceptions import DuplicateError, NotFoundError, BadRequestError
from ..core.security import hash_password
from ..models.staff import Staff, Department, StaffRole
from ..models.class_model import ClassModel

logger = logging.getLogger(__name__)


class StaffService(BaseService[Staff]):
    resource_name = "Staff member"

    def __init__(self, db: AsyncSession):
        super().__init__(Staff, db)

    async def get_by_email(self, email: str) -> Optional[Staff]:
        stmt = select(self.model).where(
            self.model.email == email,
            self.model.is_deleted == False
        )
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def get_department_teachers(self, department_id: UUID) -> List[Staff]:
        stmt = select(self.model).where(
            self.model.department_id == department_id,
            self.model.role == StaffRole.TEACHER.value,
            self.model.is_deleted == False
        ).order_by(self.model.name)
        result = await self.db.execute(stmt)
        return result.scalars().all()

    async def create_staff(self, staff_data: dict) -> Staff:
        if await self.get_by_email(staff_data["email"]):
            raise DuplicateError("A staff member with this email already exists")

        data = dict(staff_data)
        data["password_hash"] = hash_password(data.pop("password"))
        staff = await self.create(data)
        logger.info(f"Staff created: {staff.id} as {staff.role}")
        return staff

    async def update_staff(self, staff_id: UUID, update_data: dict) -> Staff:
        staff = await self.get_or_404(staff_id)

        new_email = update_data.get("email")
        if new_email and new_email != staff.email and await self.get_by_email(new_email):
            raise DuplicateError("A staff member with this email already exists")

        updated = await self.update(staff.id, update_data)
        if not updated:
            raise NotFoundError(self.resource_name)
        return updated


class DepartmentService(BaseService[Department]):
    resource_name = "Department"

    def __init__(self, db: AsyncSession):
        super().__init__(Department, db)

    async def get_headed_by(self, staff_id: UUID) -> Optional[Department]:
        """Department whose head is the given staff member"""
        stmt = select(self.model).where(
            self.model.head_of_department_id == staff_id,
            self.model.is_deleted == False
        )
        result = await self.db.execute(stmt)
        return result.scalars().first()

    async def create_department(self, department_data: dict) -> Department:
        stmt = select(self.model).where(
            (self.model.name == department_data["name"]) | (self.model.code == department_data["code"]),
            self.model.is_deleted == False
        )
        if (await self.db.execute(stmt)).scalars().first():
            raise DuplicateError("A department with this name or code already exists")

        head_id = department_data.get("head_of_department_id")
        if head_id:
            await self._check_head(head_id)

        return await self.create(department_data)

    async def update_department(self, department_id: UUID, update_data: dict) -> Department:
        await self.get_or_404(department_id)
        head_id = update_data.get("head_of_department_id")
        if head_id:
            await self._check_head(head_id)
        return await self.update(department_id, update_data)

    async def _check_head(self, staff_id: UUID):
        head = await StaffService(self.db).get(staff_id)
        if not head:
            raise NotFoundError("Head of department")
        if head.role not in (StaffRole.HOD.value, StaffRole.PRINCIPAL.value, StaffRole.VP.value):
            raise BadRequestError("Head of department must have the HOD role")


class ClassService(BaseService[ClassModel]):
    resource_name = "Class"

    def __init__(self, db: AsyncSession):
        super().__init__(ClassModel, db)

    async def get_by_identity(self, class_name: str, section: str, academic_year: Optional[str] = None) -> Optional[ClassModel]:
        stmt = select(self.model).where(
            self.model.class_name == class_name,
            self.model.section == section,
            self.model.is_deleted == False
        )
        if academic_year:
            stmt = stmt.where(self.model.academic_year == academic_year)
        result = await self.db.execute(stmt.order_by(self.model.created_at.desc()))
        return result.scalars().first()

    async def create_class(self, class_data: dict) -> ClassModel:
        if await self.get_by_identity(class_data["class_name"], class_data["section"], class_data["academic_year"]):
            raise DuplicateError("Class already exists for this academic year")

        coordinator_id = class_data.get("coordinator_id")
        if coordinator_id and not await StaffService(self.db).get(coordinator_id):
            raise NotFoundError("Coordinator")

        return await self.create(class_data)

    async def is_class_teacher(self, staff: Staff, class_name: str, section: str) -> bool:
        """True when the staff member coordinates or teaches the class+section"""
        assigned = any(
            subject.get("class_name") == class_name and subject.get("section") == section
            for subject in (staff.assigned_subjects or [])
        )
        if assigned:
            return True

        stmt = select(self.model.id).where(
            self.model.class_name == class_name,
            self.model.section == section,
            self.model.coordinator_id == staff.id,
            self.model.is_deleted == False
        )
        result = await self.db.execute(stmt)
        return result.first() is not None

# schoolhub/services/announcement_service.py
from typing import List, Optional
import json
from uuid import UUID
import logging
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import String, cast, or_, select

from .base_service import BaseService
from ..core.exceptions import BadRequestError, PermissionDeniedError
from ..models.announcement import Announcement, Event
from ..models.base import utcnow
from ..models.exam import PublicationStatus
from ..models.staff import Staff, StaffRole
from ..models.student import Student

logger = logging.getLogger(__name__)

STUDENT_AUDIENCES = ("All", "Students")


class AnnouncementService(BaseService[Announcement]):
    resource_name = "Announcement"

    def __init__(self, db: AsyncSession):
        super().__init__(Announcement, db)

    async def create_announcement(self, staff: Staff, announcement_data: dict, publish: bool = False) -> Announcement:
        data = {**announcement_data, "created_by": staff.id}
        if publish:
            data.update(status=PublicationStatus.PUBLISHED.value, published_at=utcnow())
        announcement = await self.create(data)
        logger.info(f"Announcement {announcement.id} created by {staff.id} ({announcement.status})")
        return announcement

    async def get_editable(self, staff: Staff, announcement_id: UUID) -> Announcement:
        announcement = await self.get_or_404(announcement_id)
        if announcement.created_by != staff.id and staff.role != StaffRole.PRINCIPAL.value:
            raise PermissionDeniedError("You can only modify your own announcements")
        return announcement

    async def update_announcement(self, staff: Staff, announcement_id: UUID, update_data: dict) -> Announcement:
        announcement = await self.get_editable(staff, announcement_id)
        if announcement.status == PublicationStatus.ARCHIVED.value:
            raise BadRequestError("Archived announcements cannot be edited")
        return await self.update(announcement.id, update_data)

    async def publish(self, staff: Staff, announcement_id: UUID) -> Announcement:
        announcement = await self.get_editable(staff, announcement_id)
        return await self.update(announcement.id, {
            "status": PublicationStatus.PUBLISHED.value,
            "published_at": announcement.published_at or utcnow(),
        })

    async def archive(self, staff: Staff, announcement_id: UUID) -> Announcement:
        announcement = await self.get_editable(staff, announcement_id)
        return await self.update(announcement.id, {"status": PublicationStatus.ARCHIVED.value})

    async def delete_announcement(self, staff: Staff, announcement_id: UUID) -> bool:
        announcement = await self.get_editable(staff, announcement_id)
        return await self.soft_delete(announcement.id)

    async def get_published(self, limit: int = 5) -> List[Announcement]:
        stmt = select(self.model).where(
            self.model.status == PublicationStatus.PUBLISHED.value,
            self.model.is_deleted == False
        ).order_by(self.model.published_at.desc()).limit(limit)
        return (await self.db.execute(stmt)).scalars().all()

    async def list_for_student(self, student: Student) -> List[Announcement]:
        """Published announcements addressed to everyone, students or the student's class"""
        class_audience = f"{student.class_name}-{student.section}"
        audiences = set(STUDENT_AUDIENCES) | {student.class_name, class_audience}

        # audience is a JSON list; match each serialized "name" element in its text form
        audience_text = cast(self.model.audience, String)
        stmt = select(self.model).where(
            self.model.status == PublicationStatus.PUBLISHED.value,
            self.model.is_deleted == False,
            or_(
                self.model.audience.is_(None),
                audience_text == "null",
                *(audience_text.contains(json.dumps(audience), autoescape=True) for audience in sorted(audiences))
            )
        ).order_by(self.model.published_at.desc())
        return (await self.db.execute(stmt)).scalars().all()


class EventService(BaseService[Event]):
    resource_name = "Event"

    def __init__(self, db: AsyncSession):
        super().__init__(Event, db)

    async def upcoming(self, after=None, limit: int = 20) -> List[Event]:
        stmt = select(self.model).where(
            self.model.end_date >= (after or utcnow()),
            self.model.is_deleted == False
        ).order_by(self.model.start_date).limit(limit)
        return (await self.db.execute(stmt)).scalars().all()

from typing import Optional
from uuid import UUID
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_db
from ..core.security import require_roles
from ..schemas.admin_schemas import AnnouncementCreate, AnnouncementUpdate
from ..services.announcement_service import AnnouncementService, EventService
from ..utils.serialization import serialize_list, serialize_model, serialize_page

router = APIRouter(prefix="/api/v1/announcements", tags=["Announcements"])

publishers = require_roles("Teacher", "HOD", "VP", "Principal", "Admin")

@router.post("/", response_model=dict, status_code=201)
async def create_announcement(
    announcement_data: AnnouncementCreate,
    publish: bool = Query(False),
    current_user=Depends(publishers),
    db: AsyncSession = Depends(get_db)
):
    """Create an announcement, as a draft unless publish is set"""
    service = AnnouncementService(db)
    announcement = await service.create_announcement(current_user, announcement_data.model_dump(), publish=publish)
    return {"message": "Announcement created", "announcement": serialize_model(announcement)}

@router.get("/", response_model=dict)
async def get_announcements(
    page: int = Query(1, ge=1),
    size: int = Query(20, ge=1, le=100),
    status: Optional[str] = Query(None),
    mine: bool = Query(False),
    current_user=Depends(publishers),
    db: AsyncSession = Depends(get_db)
):
    service = AnnouncementService(db)
    result = await service.get_paginated(
        page=page,
        size=size,
        status=status,
        created_by=current_user.id if mine else None
    )
    return serialize_page(result)

@router.get("/events", response_model=dict)
async def get_upcoming_events(
    current_user=Depends(publishers),
    db: AsyncSession = Depends(get_db)
):
    """Calendar events created by approved requests"""
    events = await EventService(db).upcoming()
    return {"items": serialize_list(events), "total": len(events)}

@router.put("/{announcement_id}", response_model=dict)
async def update_announcement(
    announcement_id: UUID,
    announcement_data: AnnouncementUpdate,
    current_user=Depends(publishers),
    db: AsyncSession = Depends(get_db)
):
    service = AnnouncementService(db)
    announcement = await service.update_announcement(
        current_user, announcement_id, announcement_data.model_dump(exclude_unset=True)
    )
    return {"message": "Announcement updated", "announcement": serialize_model(announcement)}

@router.put("/{announcement_id}/publish", response_model=dict)
async def publish_announcement(
    announcement_id: UUID,
    current_user=Depends(publishers),
    db: AsyncSession = Depends(get_db)
):
    service = AnnouncementService(db)
    announcement = await service.publish(current_user, announcement_id)
    return {"message": "Announcement published", "announcement": serialize_model(announcement)}

@router.put("/{announcement_id}/archive", response_model=dict)
async def archive_announcement(
    announcement_id: UUID,
    current_user=Depends(publishers),
    db: AsyncSession = Depends(get_db)
):
    service = AnnouncementService(db)
    announcement = await service.archive(current_user, announcement_id)
    return {"message": "Announcement archived", "announcement": serialize_model(announcement)}

@router.delete("/{announcement_id}", response_model=dict)
async def delete_announcement(
    announcement_id: UUID,
    current_user=Depends(publishers),
    db: AsyncSession = Depends(get_db)
):
    service = AnnouncementService(db)
    await service.delete_announcement(current_user, announcement_id)
    return {"message": "Announcement deleted", "announcement_id": str(announcement_id)}

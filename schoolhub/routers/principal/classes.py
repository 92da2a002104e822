from typing import Optional
from uuid import UUID
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ...core.database import get_db
from ...core.security import MANAGEMENT_ROLES, require_roles
from ...schemas.people_schemas import ClassCreate, ClassUpdate
from ...services.staff_service import ClassService
from ...services.student_service import StudentService

router = APIRouter(prefix="/api/v1/principal/classes", tags=["Principal - Class Management"])

management = require_roles(*MANAGEMENT_ROLES)


def format_class(class_obj, student_count: Optional[int] = None) -> dict:
    data = {
        "id": str(class_obj.id),
        "class_name": class_obj.class_name,
        "section": class_obj.section,
        "academic_year": class_obj.academic_year,
        "capacity": class_obj.capacity,
        "classroom": class_obj.classroom,
        "coordinator_id": str(class_obj.coordinator_id) if class_obj.coordinator_id else None,
        "is_active": class_obj.is_active,
        "created_at": class_obj.created_at.isoformat(),
        "updated_at": class_obj.updated_at.isoformat()
    }
    if student_count is not None:
        data["student_count"] = student_count
        data["available_spots"] = max((class_obj.capacity or 0) - student_count, 0)
    return data

@router.get("/", response_model=dict)
async def get_classes(
    page: int = Query(1, ge=1),
    size: int = Query(20, ge=1, le=100),
    academic_year: Optional[str] = Query(None),
    section: Optional[str] = Query(None),
    is_active: Optional[bool] = Query(None),
    current_user=Depends(management),
    db: AsyncSession = Depends(get_db)
):
    """Get paginated classes with filtering options"""
    service = ClassService(db)
    result = await service.get_paginated(
        page=page,
        size=size,
        order_by="class_name",
        academic_year=academic_year,
        section=section,
        is_active=is_active
    )
    return {
        "items": [format_class(class_obj) for class_obj in result["items"]],
        "total": result["total"],
        "page": result["page"],
        "size": result["size"],
        "has_next": result["has_next"],
        "has_previous": result["has_previous"],
        "total_pages": result["total_pages"]
    }

@router.post("/", response_model=dict, status_code=201)
async def create_class(
    class_data: ClassCreate,
    current_user=Depends(management),
    db: AsyncSession = Depends(get_db)
):
    """Create new class"""
    service = ClassService(db)
    class_obj = await service.create_class(class_data.model_dump())
    return {
        "id": str(class_obj.id),
        "message": "Class created successfully",
        "class": format_class(class_obj)
    }

@router.get("/{class_id}", response_model=dict)
async def get_class(
    class_id: UUID,
    current_user=Depends(management),
    db: AsyncSession = Depends(get_db)
):
    """Get specific class with its roster size"""
    service = ClassService(db)
    class_obj = await service.get_or_404(class_id)
    students = await StudentService(db).get_by_class(class_obj.class_name, class_obj.section)
    return format_class(class_obj, student_count=len(students))

@router.put("/{class_id}", response_model=dict)
async def update_class(
    class_id: UUID,
    class_data: ClassUpdate,
    current_user=Depends(management),
    db: AsyncSession = Depends(get_db)
):
    """Update class information"""
    service = ClassService(db)
    await service.get_or_404(class_id)
    class_obj = await service.update(class_id, class_data.model_dump(exclude_unset=True))
    return {"message": "Class updated successfully", "class": format_class(class_obj)}

@router.delete("/{class_id}", response_model=dict)
async def delete_class(
    class_id: UUID,
    current_user=Depends(management),
    db: AsyncSession = Depends(get_db)
):
    """Soft delete class"""
    service = ClassService(db)
    await service.get_or_404(class_id)
    await service.soft_delete(class_id)
    return {"message": "Class deleted successfully", "class_id": str(class_id)}

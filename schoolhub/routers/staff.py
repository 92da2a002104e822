from typing import Optional
from uuid import UUID
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_db
from ..core.security import MANAGEMENT_ROLES, require_roles
from ..schemas.people_schemas import StaffCreate, StaffUpdate
from ..services.staff_service import StaffService
from ..utils.serialization import serialize_model, serialize_page

router = APIRouter(prefix="/api/v1/staff", tags=["Staff"])

management = require_roles(*MANAGEMENT_ROLES)

@router.get("/", response_model=dict)
async def get_staff(
    page: int = Query(1, ge=1),
    size: int = Query(20, ge=1, le=100),
    role: Optional[str] = Query(None),
    department_id: Optional[UUID] = Query(None),
    status: Optional[str] = Query(None),
    current_user=Depends(management),
    db: AsyncSession = Depends(get_db)
):
    """Get paginated staff with filtering options"""
    service = StaffService(db)
    result = await service.get_paginated(
        page=page,
        size=size,
        order_by="name",
        role=role,
        department_id=department_id,
        status=status
    )
    return serialize_page(result)

@router.post("/", response_model=dict, status_code=201)
async def create_staff(
    staff_data: StaffCreate,
    current_user=Depends(management),
    db: AsyncSession = Depends(get_db)
):
    service = StaffService(db)
    staff = await service.create_staff(staff_data.model_dump())
    return {
        "id": str(staff.id),
        "message": "Staff member created successfully",
        "staff": serialize_model(staff)
    }

@router.get("/{staff_id}", response_model=dict)
async def get_staff_member(
    staff_id: UUID,
    current_user=Depends(management),
    db: AsyncSession = Depends(get_db)
):
    service = StaffService(db)
    return serialize_model(await service.get_or_404(staff_id))

@router.put("/{staff_id}", response_model=dict)
async def update_staff(
    staff_id: UUID,
    staff_data: StaffUpdate,
    current_user=Depends(management),
    db: AsyncSession = Depends(get_db)
):
    service = StaffService(db)
    staff = await service.update_staff(staff_id, staff_data.model_dump(exclude_unset=True))
    return {
        "message": "Staff member updated successfully",
        "staff": serialize_model(staff)
    }

@router.delete("/{staff_id}", response_model=dict)
async def delete_staff(
    staff_id: UUID,
    current_user=Depends(management),
    db: AsyncSession = Depends(get_db)
):
    """Soft delete staff member"""
    service = StaffService(db)
    await service.get_or_404(staff_id)
    await service.soft_delete(staff_id)
    return {"message": "Staff member deleted successfully", "staff_id": str(staff_id)}

from typing import Optional
from uuid import UUID
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_db
from ..core.security import MANAGEMENT_ROLES, TEACHING_ROLES, require_roles
from ..schemas.people_schemas import StudentCreate, StudentUpdate
from ..services.student_service import StudentService
from ..utils.serialization import serialize_model, serialize_page

router = APIRouter(prefix="/api/v1/students", tags=["Students"])

read_access = require_roles(*TEACHING_ROLES, "Admin")
write_access = require_roles(*MANAGEMENT_ROLES)

@router.get("/", response_model=dict)
async def get_students(
    page: int = Query(1, ge=1),
    size: int = Query(20, ge=1, le=100),
    class_name: Optional[str] = Query(None),
    section: Optional[str] = Query(None),
    academic_year: Optional[str] = Query(None),
    status: Optional[str] = Query(None),
    current_user=Depends(read_access),
    db: AsyncSession = Depends(get_db)
):
    """Get paginated students with filtering options"""
    service = StudentService(db)
    result = await service.get_paginated(
        page=page,
        size=size,
        order_by="roll_number",
        class_name=class_name,
        section=section,
        academic_year=academic_year,
        status=status
    )
    return serialize_page(result)

@router.post("/", response_model=dict, status_code=201)
async def create_student(
    student_data: StudentCreate,
    current_user=Depends(write_access),
    db: AsyncSession = Depends(get_db)
):
    """Create new student"""
    service = StudentService(db)
    student = await service.create_student(student_data.model_dump())
    return {
        "id": str(student.id),
        "message": "Student created successfully",
        "student": serialize_model(student)
    }

@router.get("/{student_id}", response_model=dict)
async def get_student(
    student_id: UUID,
    current_user=Depends(read_access),
    db: AsyncSession = Depends(get_db)
):
    service = StudentService(db)
    return serialize_model(await service.get_or_404(student_id))

@router.put("/{student_id}", response_model=dict)
async def update_student(
    student_id: UUID,
    student_data: StudentUpdate,
    current_user=Depends(write_access),
    db: AsyncSession = Depends(get_db)
):
    """Update student information"""
    service = StudentService(db)
    student = await service.update_student(student_id, student_data.model_dump(exclude_unset=True))
    return {
        "message": "Student updated successfully",
        "student": serialize_model(student)
    }

@router.delete("/{student_id}", response_model=dict)
async def delete_student(
    student_id: UUID,
    current_user=Depends(write_access),
    db: AsyncSession = Depends(get_db)
):
    """Soft delete student"""
    service = StudentService(db)
    await service.get_or_404(student_id)
    await service.soft_delete(student_id)
    return {"message": "Student deleted successfully", "student_id": str(student_id)}

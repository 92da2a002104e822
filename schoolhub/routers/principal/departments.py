from uuid import UUID
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ...core.database import get_db
from ...core.security import MANAGEMENT_ROLES, require_roles
from ...schemas.people_schemas import DepartmentCreate, DepartmentUpdate
from ...services.staff_service import DepartmentService, StaffService
from ...utils.serialization import serialize_list, serialize_model

router = APIRouter(prefix="/api/v1/principal/departments", tags=["Principal - Department Management"])

management = require_roles(*MANAGEMENT_ROLES)

@router.get("/", response_model=dict)
async def get_departments(
    current_user=Depends(management),
    db: AsyncSession = Depends(get_db)
):
    service = DepartmentService(db)
    departments = await service.get_multi()
    return {"items": serialize_list(departments), "total": len(departments)}

@router.post("/", response_model=dict, status_code=201)
async def create_department(
    department_data: DepartmentCreate,
    current_user=Depends(management),
    db: AsyncSession = Depends(get_db)
):
    service = DepartmentService(db)
    department = await service.create_department(department_data.model_dump())
    return {
        "id": str(department.id),
        "message": "Department created successfully",
        "department": serialize_model(department)
    }

@router.get("/{department_id}", response_model=dict)
async def get_department_details(
    department_id: UUID,
    current_user=Depends(management),
    db: AsyncSession = Depends(get_db)
):
    """Department with its head and teachers"""
    service = DepartmentService(db)
    staff_service = StaffService(db)
    department = await service.get_or_404(department_id)

    head = None
    if department.head_of_department_id:
        head = await staff_service.get(department.head_of_department_id)
    teachers = await staff_service.get_department_teachers(department.id)

    return {
        **serialize_model(department),
        "head_of_department": serialize_model(head, exclude=["assigned_subjects"]) if head else None,
        "teachers": serialize_list(teachers),
        "teacher_count": len(teachers)
    }

@router.put("/{department_id}", response_model=dict)
async def update_department(
    department_id: UUID,
    department_data: DepartmentUpdate,
    current_user=Depends(management),
    db: AsyncSession = Depends(get_db)
):
    service = DepartmentService(db)
    department = await service.update_department(department_id, department_data.model_dump(exclude_unset=True))
    return {"message": "Department updated successfully", "department": serialize_model(department)}

@router.delete("/{department_id}", response_model=dict)
async def delete_department(
    department_id: UUID,
    current_user=Depends(management),
    db: AsyncSession = Depends(get_db)
):
    service = DepartmentService(db)
    await service.get_or_404(department_id)
    await service.soft_delete(department_id)
    return {"message": "Department deleted successfully", "department_id": str(department_id)}

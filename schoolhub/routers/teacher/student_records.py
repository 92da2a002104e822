from typing import Optional
from uuid import UUID
from fastapi import APIRouter, Body, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ...core.database import get_db
from ...core.security import TEACHING_ROLES, require_roles
from ...schemas.admin_schemas import DisciplinaryRecordCreate, HealthRecordUpsert
from ...services.report_metrics import body_mass_index
from ...services.student_record_service import DisciplinaryService, HealthRecordService
from ...utils.serialization import serialize_list, serialize_model

router = APIRouter(prefix="/api/v1/teacher/students", tags=["Teacher - Student Records"])

teaching_staff = require_roles(*TEACHING_ROLES)

@router.post("/discipline", response_model=dict, status_code=201)
async def report_incident(
    record_data: DisciplinaryRecordCreate,
    current_user=Depends(teaching_staff),
    db: AsyncSession = Depends(get_db)
):
    service = DisciplinaryService(db)
    record = await service.report_incident(current_user, record_data.model_dump())
    return {"message": "Incident recorded", "record": serialize_model(record)}

@router.get("/discipline", response_model=dict)
async def get_incidents(
    student_id: Optional[UUID] = Query(None),
    status: Optional[str] = Query(None),
    severity: Optional[str] = Query(None),
    current_user=Depends(teaching_staff),
    db: AsyncSession = Depends(get_db)
):
    service = DisciplinaryService(db)
    records = await service.list_records(student_id=student_id, status=status, severity=severity)
    return {"items": serialize_list(records), "total": len(records)}

@router.put("/discipline/{record_id}/resolve", response_model=dict)
async def resolve_incident(
    record_id: UUID,
    action_taken: Optional[str] = Body(None, embed=True),
    current_user=Depends(teaching_staff),
    db: AsyncSession = Depends(get_db)
):
    service = DisciplinaryService(db)
    record = await service.resolve(record_id, action_taken)
    return {"message": "Incident resolved", "record": serialize_model(record)}

@router.get("/{student_id}/health", response_model=dict)
async def get_health_record(
    student_id: UUID,
    current_user=Depends(teaching_staff),
    db: AsyncSession = Depends(get_db)
):
    service = HealthRecordService(db)
    record = await service.get_for_student(student_id)
    if not record:
        return {"student_id": str(student_id), "record": None}
    return {
        "student_id": str(student_id),
        "record": serialize_model(record),
        "bmi": body_mass_index(record.height, record.weight)
    }

@router.put("/{student_id}/health", response_model=dict)
async def upsert_health_record(
    student_id: UUID,
    health_data: HealthRecordUpsert,
    current_user=Depends(teaching_staff),
    db: AsyncSession = Depends(get_db)
):
    """Create or replace the student's health record"""
    service = HealthRecordService(db)
    record = await service.upsert(current_user, student_id, health_data.model_dump(exclude_unset=True))
    return {"message": "Health record saved", "record": serialize_model(record)}

from typing import Optional
from uuid import UUID
from fastapi import APIRouter, Body, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_db
from ..core.security import require_roles
from ..schemas.admin_schemas import FeePaymentCreate, FeeStructureCreate, FeeStructureUpdate
from ..services.fee_service import FeePaymentService, FeeStructureService
from ..utils.serialization import serialize_model, serialize_page

router = APIRouter(prefix="/api/v1/fees", tags=["Fee Management"])

fee_staff = require_roles("Accountant", "Principal", "Admin")

@router.get("/structures", response_model=dict)
async def get_fee_structures(
    page: int = Query(1, ge=1),
    size: int = Query(20, ge=1, le=100),
    academic_year: Optional[str] = Query(None),
    class_name: Optional[str] = Query(None),
    is_active: Optional[bool] = Query(None),
    current_user=Depends(fee_staff),
    db: AsyncSession = Depends(get_db)
):
    service = FeeStructureService(db)
    result = await service.get_paginated(
        page=page,
        size=size,
        academic_year=academic_year,
        class_name=class_name,
        is_active=is_active
    )
    return serialize_page(result)

@router.post("/structures", response_model=dict, status_code=201)
async def create_fee_structure(
    structure_data: FeeStructureCreate,
    current_user=Depends(fee_staff),
    db: AsyncSession = Depends(get_db)
):
    """Create a fee structure; the total is the sum of its components"""
    service = FeeStructureService(db)
    structure = await service.create_structure(current_user, structure_data.model_dump())
    return {"message": "Fee structure created", "structure": serialize_model(structure)}

@router.put("/structures/{structure_id}", response_model=dict)
async def update_fee_structure(
    structure_id: UUID,
    structure_data: FeeStructureUpdate,
    current_user=Depends(fee_staff),
    db: AsyncSession = Depends(get_db)
):
    service = FeeStructureService(db)
    structure = await service.update_structure(structure_id, structure_data.model_dump(exclude_unset=True))
    return {"message": "Fee structure updated", "structure": serialize_model(structure)}

@router.get("/payments", response_model=dict)
async def get_payments(
    page: int = Query(1, ge=1),
    size: int = Query(20, ge=1, le=100),
    student_id: Optional[UUID] = Query(None),
    academic_year: Optional[str] = Query(None),
    status: Optional[str] = Query(None),
    current_user=Depends(fee_staff),
    db: AsyncSession = Depends(get_db)
):
    service = FeePaymentService(db)
    result = await service.get_paginated(
        page=page,
        size=size,
        student_id=student_id,
        academic_year=academic_year,
        status=status
    )
    return serialize_page(result)

@router.post("/payments", response_model=dict, status_code=201)
async def record_payment(
    payment_data: FeePaymentCreate,
    current_user=Depends(fee_staff),
    db: AsyncSession = Depends(get_db)
):
    service = FeePaymentService(db)
    payment = await service.record_payment(current_user, payment_data.model_dump())
    return {
        "message": "Payment recorded",
        "receipt_number": payment.receipt_number,
        "payment": serialize_model(payment)
    }

@router.put("/payments/{payment_id}/pay", response_model=dict)
async def mark_payment_paid(
    payment_id: UUID,
    payment_method: Optional[str] = Body(None, embed=True),
    current_user=Depends(fee_staff),
    db: AsyncSession = Depends(get_db)
):
    """Settle a pending payment"""
    service = FeePaymentService(db)
    payment = await service.mark_paid(payment_id, payment_method)
    return {"message": "Payment marked as paid", "payment": serialize_model(payment)}

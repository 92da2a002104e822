# schoolhub/services/fee_service.py
from typing import List, Optional, Dict, Any
from uuid import UUID
from datetime import date
import logging
import time
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func

from .base_service import BaseService
from .student_service import StudentService
from .report_metrics import summarize_fees
from ..core.exceptions import DuplicateError, NotFoundError
from ..models.base import utcnow
from ..models.fee import FeeStructure, FeePayment, PaymentStatus
from ..models.staff import Staff
from ..models.student import Student

logger = logging.getLogger(__name__)


def generate_receipt_number() -> str:
    return f"RCP{time.time_ns() // 1000}"


class FeeStructureService(BaseService[FeeStructure]):
    resource_name = "Fee structure"

    def __init__(self, db: AsyncSession):
        super().__init__(FeeStructure, db)

    async def create_structure(self, staff: Optional[Staff], structure_data: Dict[str, Any]) -> FeeStructure:
        # total_amount is recomputed from components on flush
        structure = await self.create({
            **structure_data,
            "created_by": staff.id if staff else structure_data.get("created_by"),
        })
        logger.info(f"Fee structure {structure.id} created for {structure.class_name} ({structure.academic_year}): {structure.total_amount}")
        return structure

    async def update_structure(self, structure_id: UUID, update_data: Dict[str, Any]) -> FeeStructure:
        structure = await self.get_or_404(structure_id)
        return await self.update(structure.id, update_data)

    async def total_active_amount(self) -> float:
        stmt = select(func.coalesce(func.sum(self.model.total_amount), 0)).where(
            self.model.is_active == True,
            self.model.is_deleted == False
        )
        return float((await self.db.execute(stmt)).scalar())


class FeePaymentService(BaseService[FeePayment]):
    resource_name = "Fee payment"

    def __init__(self, db: AsyncSession):
        super().__init__(FeePayment, db)

    async def record_payment(self, staff: Staff, payment_data: Dict[str, Any]) -> FeePayment:
        if not await StudentService(self.db).get(payment_data["student_id"]):
            raise NotFoundError("Student")

        structure_id = payment_data.get("fee_structure_id")
        if structure_id and not await FeeStructureService(self.db).get(structure_id):
            raise NotFoundError("Fee structure")

        data = dict(payment_data)
        if not data.get("receipt_number"):
            data["receipt_number"] = generate_receipt_number()
        elif await self._get_by_receipt(data["receipt_number"]):
            raise DuplicateError("Receipt number already exists")

        if data.get("status") == PaymentStatus.PAID.value and not data.get("payment_date"):
            data["payment_date"] = utcnow()

        payment = await self.create({**data, "collected_by": staff.id})
        logger.info(f"Payment {payment.receipt_number} of {payment.amount} recorded for student {payment.student_id}")
        return payment

    async def _get_by_receipt(self, receipt_number: str) -> Optional[FeePayment]:
        stmt = select(self.model).where(self.model.receipt_number == receipt_number)
        return (await self.db.execute(stmt)).scalar_one_or_none()

    async def mark_paid(self, payment_id: UUID, payment_method: Optional[str] = None) -> FeePayment:
        payment = await self.get_or_404(payment_id)
        update_data = {"status": PaymentStatus.PAID.value, "payment_date": utcnow()}
        if payment_method:
            update_data["payment_method"] = payment_method
        return await self.update(payment.id, update_data)

    async def list_for_student(self, student_id: UUID, academic_year: Optional[str] = None) -> List[FeePayment]:
        stmt = select(self.model).where(
            self.model.student_id == student_id,
            self.model.is_deleted == False
        )
        if academic_year:
            stmt = stmt.where(self.model.academic_year == academic_year)
        result = await self.db.execute(stmt.order_by(self.model.created_at.desc()))
        return result.scalars().all()

    async def student_fee_summary(self, student: Student, academic_year: Optional[str] = None) -> Dict[str, Any]:
        """Payments for the student with paid/pending totals"""
        payments = await self.list_for_student(student.id, academic_year or student.academic_year)
        return {
            "payments": payments,
            "summary": summarize_fees(payments, date.today()),
        }

    async def collected_between(self, start, end) -> float:
        stmt = select(func.coalesce(func.sum(self.model.amount), 0)).where(
            self.model.status == PaymentStatus.PAID.value,
            self.model.payment_date >= start,
            self.model.payment_date < end,
            self.model.is_deleted == False
        )
        return float((await self.db.execute(stmt)).scalar())

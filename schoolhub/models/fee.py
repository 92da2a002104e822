# schoolhub/models/fee.py
import enum
from sqlalchemy import Column, String, Numeric, Boolean, Date, DateTime, JSON, ForeignKey, Uuid, event
from .base import Base


class PaymentStatus(str, enum.Enum):
    PAID = "Paid"
    PENDING = "Pending"


class PaymentMethod(str, enum.Enum):
    CASH = "Cash"
    BANK_TRANSFER = "Bank Transfer"
    CHEQUE = "Cheque"
    CARD = "Card"
    ONLINE = "Online"
    UPI = "UPI"


class FeeStructure(Base):
    __tablename__ = "fee_structures"

    academic_year = Column(String(10), nullable=False, index=True)
    class_name = Column(String(20), nullable=False, index=True)
    term = Column(String(30), nullable=False, default="Annual")

    # [{"name": "Tuition", "amount": 1200.0}]
    components = Column(JSON, default=list)
    total_amount = Column(Numeric(10, 2), nullable=False, default=0)

    due_date = Column(Date)
    late_payment_fee = Column(Numeric(8, 2), default=0)
    is_active = Column(Boolean, default=True, nullable=False)
    created_by = Column(Uuid(as_uuid=True), ForeignKey("staff.id"))


def compute_total_amount(components) -> float:
    return round(sum(float(component.get("amount") or 0) for component in components or []), 2)


@event.listens_for(FeeStructure, "before_insert")
@event.listens_for(FeeStructure, "before_update")
def _sync_total_amount(mapper, connection, target):
    if target.components:
        target.total_amount = compute_total_amount(target.components)
    elif target.total_amount is None:
        target.total_amount = 0


class FeePayment(Base):
    __tablename__ = "fee_payments"

    student_id = Column(Uuid(as_uuid=True), ForeignKey("students.id"), nullable=False, index=True)
    fee_structure_id = Column(Uuid(as_uuid=True), ForeignKey("fee_structures.id"), nullable=True, index=True)
    academic_year = Column(String(10), nullable=False, index=True)
    term = Column(String(30))
    amount = Column(Numeric(10, 2), nullable=False)
    status = Column(String(10), nullable=False, default=PaymentStatus.PENDING.value)
    payment_date = Column(DateTime)
    due_date = Column(Date)
    payment_method = Column(String(20))
    receipt_number = Column(String(40), unique=True)
    remarks = Column(String(500))
    collected_by = Column(Uuid(as_uuid=True), ForeignKey("staff.id"))

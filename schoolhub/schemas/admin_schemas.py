# schoolhub/schemas/admin_schemas.py
"""Fees, announcements, student records and approvals."""
from typing import Any, Dict, List, Optional
from datetime import date
from uuid import UUID
from pydantic import BaseModel, ConfigDict, Field

from .academic_schemas import UtcDateTime
from ..models.approval import RequestType
from ..models.fee import PaymentMethod, PaymentStatus
from ..models.progress_report import ReportPeriod
from ..models.student_record import Severity


class FeeComponent(BaseModel):
    name: str
    amount: float = Field(..., ge=0)


class FeeStructureCreate(BaseModel):
    academic_year: str
    class_name: str
    term: str = "Annual"
    components: List[FeeComponent] = Field(default_factory=list)
    total_amount: Optional[float] = Field(default=None, ge=0)
    due_date: Optional[date] = None
    late_payment_fee: float = Field(default=0, ge=0)


class FeeStructureUpdate(BaseModel):
    term: Optional[str] = None
    components: Optional[List[FeeComponent]] = None
    due_date: Optional[date] = None
    late_payment_fee: Optional[float] = Field(default=None, ge=0)
    is_active: Optional[bool] = None


class FeePaymentCreate(BaseModel):
    model_config = ConfigDict(use_enum_values=True, validate_default=True)

    student_id: UUID
    fee_structure_id: Optional[UUID] = None
    academic_year: str
    term: Optional[str] = None
    amount: float = Field(..., gt=0)
    status: PaymentStatus = PaymentStatus.PAID
    payment_date: Optional[UtcDateTime] = None
    due_date: Optional[date] = None
    payment_method: Optional[PaymentMethod] = PaymentMethod.CASH
    receipt_number: Optional[str] = None
    remarks: Optional[str] = None


class AnnouncementCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    content: str = Field(..., min_length=1)
    audience: List[str] = Field(default_factory=lambda: ["All"])
    priority: str = Field(default="normal", pattern="^(low|normal|medium|high)$")


class AnnouncementUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    content: Optional[str] = None
    audience: Optional[List[str]] = None
    priority: Optional[str] = Field(default=None, pattern="^(low|normal|medium|high)$")


class DisciplinaryRecordCreate(BaseModel):
    model_config = ConfigDict(use_enum_values=True, validate_default=True)

    student_id: UUID
    incident_type: str = Field(..., min_length=1, max_length=100)
    description: str = Field(..., min_length=1)
    severity: Severity = Severity.MINOR
    action_taken: Optional[str] = None


class HealthRecordUpsert(BaseModel):
    height: Optional[float] = Field(default=None, gt=0)
    weight: Optional[float] = Field(default=None, gt=0)
    blood_group: Optional[str] = Field(default=None, max_length=5)
    allergies: List[str] = Field(default_factory=list)
    medical_conditions: List[str] = Field(default_factory=list)
    last_checkup: Optional[date] = None
    health_incidents: List[Dict[str, Any]] = Field(default_factory=list)


class ApprovalRequestCreate(BaseModel):
    model_config = ConfigDict(use_enum_values=True, validate_default=True)

    request_type: RequestType
    title: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    request_data: Dict[str, Any] = Field(default_factory=dict)


class ApprovalDecision(BaseModel):
    comments: Optional[str] = None
    forward_to_vp: bool = False
    forward_to_principal: bool = False


class GenerateReportRequest(BaseModel):
    model_config = ConfigDict(use_enum_values=True, validate_default=True)

    student_id: UUID
    academic_year: str
    report_period: ReportPeriod = ReportPeriod.ANNUAL


class ReportUpdate(BaseModel):
    teacher_remarks: Optional[str] = Field(default=None, max_length=1000)
    status: Optional[str] = Field(default=None, pattern="^(Draft|Published|Archived)$")
    recommendations: Optional[Dict[str, List[str]]] = None


class ReportFeedback(BaseModel):
    parent_comments: Optional[str] = None
    student_comments: Optional[str] = None

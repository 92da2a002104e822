# schoolhub/schemas/academic_schemas.py
"""Attendance, assignment and exam payloads."""
from typing import Annotated, List, Optional
from datetime import date, datetime
from uuid import UUID
from pydantic import AfterValidator, BaseModel, ConfigDict, Field

from ..models.attendance import AttendanceStatus
from ..models.base import to_naive_utc
from ..models.exam import PublicationStatus

# Offsets are folded into naive UTC, the form DateTime columns store
UtcDateTime = Annotated[datetime, AfterValidator(to_naive_utc)]


class AttendanceEntry(BaseModel):
    model_config = ConfigDict(use_enum_values=True, validate_default=True)

    student_id: UUID
    status: AttendanceStatus
    late_arrival: bool = False
    early_departure: bool = False
    remarks: Optional[str] = Field(default=None, max_length=500)


class MarkAttendanceRequest(BaseModel):
    date: date
    class_name: str
    section: str
    records: List[AttendanceEntry] = Field(..., min_length=1)


class AssignmentCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    subject: str = Field(..., min_length=1, max_length=100)
    class_name: str
    section: str
    due_date: UtcDateTime
    max_score: int = Field(default=100, gt=0)


class AssignmentUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = None
    due_date: Optional[UtcDateTime] = None
    max_score: Optional[int] = Field(default=None, gt=0)


class SubmissionCreate(BaseModel):
    content: Optional[str] = None
    attachment_url: Optional[str] = Field(default=None, max_length=500)


class GradeSubmission(BaseModel):
    score: float = Field(..., ge=0)
    feedback: Optional[str] = None


class ExamCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    exam_type: str = Field(default="Unit Test", max_length=50)
    subject: str
    class_name: str
    section: str
    exam_date: date
    total_marks: int = Field(default=100, gt=0)
    academic_year: str
    instructions: Optional[str] = None


class ExamStatusUpdate(BaseModel):
    model_config = ConfigDict(use_enum_values=True, validate_default=True)

    status: PublicationStatus


class ResultEntry(BaseModel):
    student_id: UUID
    marks: float = Field(..., ge=0)
    remarks: Optional[str] = None


class ExamResultsRequest(BaseModel):
    results: List[ResultEntry] = Field(..., min_length=1)

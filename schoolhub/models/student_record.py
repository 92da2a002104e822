# schoolhub/models/student_record.py
"""Behavioral and health records attached to a student."""
import enum
from sqlalchemy import Column, String, Text, Float, Date, JSON, ForeignKey, Uuid
from .base import Base


class Severity(str, enum.Enum):
    MINOR = "Minor"
    MODERATE = "Moderate"
    MAJOR = "Major"


class DisciplinaryRecord(Base):
    __tablename__ = "disciplinary_records"

    student_id = Column(Uuid(as_uuid=True), ForeignKey("students.id"), nullable=False, index=True)
    incident_type = Column(String(100), nullable=False)
    description = Column(Text, nullable=False)
    severity = Column(String(10), nullable=False, default=Severity.MINOR.value)
    action_taken = Column(Text)
    status = Column(String(10), nullable=False, default="Open")
    reported_by = Column(Uuid(as_uuid=True), ForeignKey("staff.id"), nullable=False)


class HealthRecord(Base):
    __tablename__ = "health_records"

    student_id = Column(Uuid(as_uuid=True), ForeignKey("students.id"), nullable=False, unique=True, index=True)
    height = Column(Float)  # cm
    weight = Column(Float)  # kg
    blood_group = Column(String(5))
    allergies = Column(JSON, default=list)
    medical_conditions = Column(JSON, default=list)
    last_checkup = Column(Date)
    health_incidents = Column(JSON, default=list)
    updated_by = Column(Uuid(as_uuid=True), ForeignKey("staff.id"))

# schoolhub/models/assignment.py
import enum
from sqlalchemy import Column, String, Text, Integer, Float, DateTime, ForeignKey, Uuid, UniqueConstraint
from sqlalchemy.orm import relationship
from .base import Base


class SubmissionStatus(str, enum.Enum):
    SUBMITTED = "Submitted"
    LATE = "Late"
    GRADED = "Graded"


class Assignment(Base):
    __tablename__ = "assignments"

    title = Column(String(200), nullable=False)
    description = Column(Text)
    subject = Column(String(100), nullable=False)
    class_name = Column(String(20), nullable=False, index=True)
    section = Column(String(10), nullable=False, index=True)
    due_date = Column(DateTime, nullable=False, index=True)
    max_score = Column(Integer, default=100, nullable=False)
    created_by = Column(Uuid(as_uuid=True), ForeignKey("staff.id"), nullable=False, index=True)

    submissions = relationship("AssignmentSubmission", back_populates="assignment", lazy="selectin")


class AssignmentSubmission(Base):
    __tablename__ = "assignment_submissions"

    assignment_id = Column(Uuid(as_uuid=True), ForeignKey("assignments.id"), nullable=False, index=True)
    student_id = Column(Uuid(as_uuid=True), ForeignKey("students.id"), nullable=False, index=True)
    content = Column(Text)
    attachment_url = Column(String(500))
    submitted_at = Column(DateTime, nullable=False)
    status = Column(String(20), default=SubmissionStatus.SUBMITTED.value, nullable=False)
    score = Column(Float)
    feedback = Column(Text)
    graded_by = Column(Uuid(as_uuid=True), ForeignKey("staff.id"))
    graded_at = Column(DateTime)

    assignment = relationship("Assignment", back_populates="submissions")

    __table_args__ = (
        UniqueConstraint("assignment_id", "student_id", name="uq_submission_student"),
    )

# schoolhub/models/exam.py
import enum
from sqlalchemy import Column, String, Integer, Float, Date, ForeignKey, Uuid, Text, UniqueConstraint
from sqlalchemy.orm import relationship
from .base import Base


class PublicationStatus(str, enum.Enum):
    DRAFT = "Draft"
    PUBLISHED = "Published"
    ARCHIVED = "Archived"


class Exam(Base):
    __tablename__ = "exams"

    name = Column(String(200), nullable=False)
    exam_type = Column(String(50), nullable=False)  # Unit Test, Mid Term, Final Exam
    subject = Column(String(100), nullable=False)
    class_name = Column(String(20), nullable=False, index=True)
    section = Column(String(10), nullable=False, index=True)
    exam_date = Column(Date, nullable=False)
    total_marks = Column(Integer, nullable=False, default=100)
    academic_year = Column(String(10), nullable=False, index=True)
    status = Column(String(20), default=PublicationStatus.DRAFT.value, nullable=False)
    instructions = Column(Text)
    created_by = Column(Uuid(as_uuid=True), ForeignKey("staff.id"), nullable=False, index=True)


class ExamResult(Base):
    __tablename__ = "exam_results"

    exam_id = Column(Uuid(as_uuid=True), ForeignKey("exams.id"), nullable=False, index=True)
    student_id = Column(Uuid(as_uuid=True), ForeignKey("students.id"), nullable=False, index=True)
    subject = Column(String(100), nullable=False)
    academic_year = Column(String(10), nullable=False, index=True)
    marks = Column(Float, nullable=False)
    total_marks = Column(Integer, nullable=False)
    grade = Column(String(3))
    rank = Column(Integer)
    total_students = Column(Integer)
    remarks = Column(Text)
    entered_by = Column(Uuid(as_uuid=True), ForeignKey("staff.id"))

    exam = relationship("Exam", lazy="joined")

    __table_args__ = (
        UniqueConstraint("exam_id", "student_id", name="uq_exam_result_student"),
    )

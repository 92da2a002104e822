# schoolhub/models/progress_report.py
import enum
from sqlalchemy import Column, String, DateTime, JSON, ForeignKey, Uuid, Index
from .base import Base


class ReportPeriod(str, enum.Enum):
    MONTHLY = "Monthly"
    QUARTERLY = "Quarterly"
    HALF_YEARLY = "Half-Yearly"
    ANNUAL = "Annual"


class ComprehensiveProgressReport(Base):
    __tablename__ = "comprehensive_progress_reports"

    student_id = Column(Uuid(as_uuid=True), ForeignKey("students.id"), nullable=False, index=True)
    academic_year = Column(String(10), nullable=False)
    class_name = Column(String(20), nullable=False)
    section = Column(String(10), nullable=False)
    report_period = Column(String(20), nullable=False)
    report_date = Column(DateTime, nullable=False)
    generated_by = Column(Uuid(as_uuid=True), ForeignKey("staff.id"), nullable=False)
    status = Column(String(20), default="Published", nullable=False)

    # Denormalized snapshot sections
    attendance = Column(JSON, nullable=False)
    assignment_performance = Column(JSON, nullable=False)
    exam_performance = Column(JSON, nullable=False)
    behavior = Column(JSON, nullable=False)
    fee_status = Column(JSON, nullable=False)
    health_info = Column(JSON, nullable=False)
    trends = Column(JSON, nullable=False)
    recommendations = Column(JSON, nullable=False)
    data_sources = Column(JSON, default=dict)
    teacher_remarks = Column(String(1000))

    # {"parent_comments": str, "student_comments": str, "acknowledgment_date": iso}
    feedback = Column(JSON, default=dict)

    __table_args__ = (
        Index("idx_report_student_year", "student_id", "academic_year", "report_period"),
    )

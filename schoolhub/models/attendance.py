# schoolhub/models/attendance.py
import enum
from sqlalchemy import Column, String, Date, Boolean, ForeignKey, Uuid, Index
from .base import Base


class AttendanceStatus(str, enum.Enum):
    PRESENT = "Present"
    ABSENT = "Absent"
    LATE = "Late"
    LEAVE = "Leave"


class Attendance(Base):
    __tablename__ = "attendance"

    student_id = Column(Uuid(as_uuid=True), ForeignKey("students.id"), nullable=False, index=True)
    class_name = Column(String(20), nullable=False)
    section = Column(String(10), nullable=False)
    date = Column(Date, nullable=False, index=True)
    status = Column(String(10), nullable=False, default=AttendanceStatus.PRESENT.value)
    late_arrival = Column(Boolean, default=False, nullable=False)
    early_departure = Column(Boolean, default=False, nullable=False)
    remarks = Column(String(500))
    marked_by = Column(Uuid(as_uuid=True), ForeignKey("staff.id"), nullable=False)

    __table_args__ = (
        Index("idx_attendance_class_date", "class_name", "section", "date"),
        Index("idx_attendance_student_date", "student_id", "date"),
    )

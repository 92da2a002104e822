# schoolhub/models/__init__.py
"""Import all models here, needed for Alembic migration."""
from .base import Base

from .staff import Staff, Department, StaffRole
from .student import Student
from .class_model import ClassModel
from .attendance import Attendance, AttendanceStatus
from .assignment import Assignment, AssignmentSubmission, SubmissionStatus
from .exam import Exam, ExamResult, PublicationStatus
from .fee import FeeStructure, FeePayment, PaymentStatus, PaymentMethod
from .announcement import Announcement, Event
from .approval import ApprovalRequest, RequestType, ApprovalStatus, Approver
from .student_record import DisciplinaryRecord, HealthRecord, Severity
from .progress_report import ComprehensiveProgressReport, ReportPeriod

# This ensures all models are loaded when importing models

# schoolhub/models/staff.py
import enum
from sqlalchemy import Column, String, JSON, ForeignKey, Uuid, Date
from .base import Base


class StaffRole(str, enum.Enum):
    TEACHER = "Teacher"
    HOD = "HOD"
    VP = "VP"
    PRINCIPAL = "Principal"
    ADMIN = "Admin"
    ACCOUNTANT = "Accountant"


class Department(Base):
    __tablename__ = "departments"

    name = Column(String(100), nullable=False, unique=True)
    code = Column(String(20), nullable=False, unique=True)
    description = Column(String(500))
    # No FK: staff.department_id already references this table
    head_of_department_id = Column(Uuid(as_uuid=True), nullable=True, index=True)


class Staff(Base):
    __tablename__ = "staff"

    # Basic Information
    name = Column(String(100), nullable=False)
    email = Column(String(100), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    phone = Column(String(20))
    gender = Column(String(10))
    qualification = Column(String(500))
    joining_date = Column(Date)

    # Employment
    role = Column(String(20), default=StaffRole.TEACHER.value, nullable=False, index=True)
    department_id = Column(Uuid(as_uuid=True), ForeignKey("departments.id"), nullable=True, index=True)
    status = Column(String(20), default="Active", nullable=False)

    # [{"class_name": "10", "section": "A", "subject": "Mathematics"}]
    assigned_subjects = Column(JSON, default=list)

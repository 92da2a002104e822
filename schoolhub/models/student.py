# schoolhub/models/student.py
from sqlalchemy import Column, String, Date, UniqueConstraint
from .base import Base

class Student(Base):
    __tablename__ = "students"

    # Basic Information
    name = Column(String(100), nullable=False)
    email = Column(String(100), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    phone = Column(String(20))
    date_of_birth = Column(Date)
    gender = Column(String(10))
    address = Column(String(500))

    # Academic Information
    role = Column(String(20), default="Student", nullable=False)
    status = Column(String(20), default="Active", nullable=False)
    roll_number = Column(String(20), nullable=False, index=True)
    class_name = Column(String(20), nullable=False, index=True)
    section = Column(String(10), nullable=False, index=True)
    academic_year = Column(String(10), nullable=False)

    # Parent/guardian details
    parent_name = Column(String(100))
    parent_phone = Column(String(20))
    parent_email = Column(String(100))

    __table_args__ = (
        UniqueConstraint("class_name", "section", "roll_number", "academic_year", name="uq_student_roll"),
    )

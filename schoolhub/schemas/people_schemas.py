# schoolhub/schemas/people_schemas.py
"""Pydantic schemas for students, staff, classes and departments."""
from typing import List, Optional
from datetime import date
from uuid import UUID
from pydantic import BaseModel, EmailStr, Field


class StudentBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    roll_number: str = Field(..., min_length=1, max_length=20)
    class_name: str = Field(..., min_length=1, max_length=20)
    section: str = Field(..., min_length=1, max_length=10)
    academic_year: str = Field(..., min_length=1, max_length=10)
    phone: Optional[str] = Field(default=None, max_length=20)
    date_of_birth: Optional[date] = None
    gender: Optional[str] = Field(default=None, max_length=10)
    address: Optional[str] = Field(default=None, max_length=500)
    parent_name: Optional[str] = Field(default=None, max_length=100)
    parent_phone: Optional[str] = Field(default=None, max_length=20)
    parent_email: Optional[EmailStr] = None


class StudentCreate(StudentBase):
    password: str = Field(..., min_length=6)


class StudentUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    email: Optional[EmailStr] = None
    roll_number: Optional[str] = Field(default=None, min_length=1, max_length=20)
    class_name: Optional[str] = Field(default=None, min_length=1, max_length=20)
    section: Optional[str] = Field(default=None, min_length=1, max_length=10)
    academic_year: Optional[str] = Field(default=None, max_length=10)
    phone: Optional[str] = Field(default=None, max_length=20)
    date_of_birth: Optional[date] = None
    address: Optional[str] = Field(default=None, max_length=500)
    parent_name: Optional[str] = Field(default=None, max_length=100)
    parent_phone: Optional[str] = Field(default=None, max_length=20)
    parent_email: Optional[EmailStr] = None
    status: Optional[str] = Field(default=None, max_length=20)


class SubjectAssignment(BaseModel):
    class_name: str
    section: str
    subject: str


class StaffBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    role: str = Field(default="Teacher", pattern="^(Teacher|HOD|VP|Principal|Admin|Accountant)$")
    department_id: Optional[UUID] = None
    phone: Optional[str] = Field(default=None, max_length=20)
    qualification: Optional[str] = Field(default=None, max_length=500)
    joining_date: Optional[date] = None
    assigned_subjects: List[SubjectAssignment] = Field(default_factory=list)


class StaffCreate(StaffBase):
    password: str = Field(..., min_length=6)


class StaffUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    email: Optional[EmailStr] = None
    role: Optional[str] = Field(default=None, pattern="^(Teacher|HOD|VP|Principal|Admin|Accountant)$")
    department_id: Optional[UUID] = None
    phone: Optional[str] = Field(default=None, max_length=20)
    qualification: Optional[str] = Field(default=None, max_length=500)
    status: Optional[str] = Field(default=None, max_length=20)
    assigned_subjects: Optional[List[SubjectAssignment]] = None


class ClassCreate(BaseModel):
    class_name: str = Field(..., min_length=1, max_length=20)
    section: str = Field(..., min_length=1, max_length=10)
    academic_year: str = Field(..., min_length=1, max_length=10)
    capacity: Optional[int] = Field(default=40, gt=0)
    classroom: Optional[str] = Field(default=None, max_length=50)
    coordinator_id: Optional[UUID] = None


class ClassUpdate(BaseModel):
    capacity: Optional[int] = Field(default=None, gt=0)
    classroom: Optional[str] = Field(default=None, max_length=50)
    coordinator_id: Optional[UUID] = None
    is_active: Optional[bool] = None


class DepartmentCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    code: str = Field(..., min_length=1, max_length=20)
    description: Optional[str] = Field(default=None, max_length=500)
    head_of_department_id: Optional[UUID] = None


class DepartmentUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)
    head_of_department_id: Optional[UUID] = None

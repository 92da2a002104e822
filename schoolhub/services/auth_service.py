# schoolhub/services/auth_service.py
from typing import Optional, Union
import logging
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.exceptions import AuthenticationError, BadRequestError
from ..core.security import STUDENT_ROLE, create_access_token, hash_password, verify_password
from ..models.staff import Staff
from ..models.student import Student
from .staff_service import StaffService
from .student_service import StudentService

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def login_staff(self, email: Optional[str], password: Optional[str]) -> dict:
        self._require_credentials(email, password)
        staff = await StaffService(self.db).get_by_email(email)
        return self._issue_token(staff, password, role=staff.role if staff else None)

    async def login_student(self, email: Optional[str], password: Optional[str]) -> dict:
        self._require_credentials(email, password)
        student = await StudentService(self.db).get_by_email(email)
        return self._issue_token(student, password, role=STUDENT_ROLE)

    async def change_password(self, user: Union[Staff, Student], current_password: str, new_password: str):
        if not verify_password(current_password, user.password_hash):
            raise BadRequestError("Current password is incorrect")
        if len(new_password) < 6:
            raise BadRequestError("New password must be at least 6 characters")
        user.password_hash = hash_password(new_password)
        await self.db.commit()

    @staticmethod
    def _require_credentials(email: Optional[str], password: Optional[str]):
        if not email or not password:
            raise BadRequestError("Email and password are required")

    @staticmethod
    def _issue_token(user, password: str, role: Optional[str]) -> dict:
        if not user or not verify_password(password, user.password_hash):
            logger.info("Failed login attempt")
            raise AuthenticationError("Invalid credentials")
        if user.status != "Active":
            raise AuthenticationError("Account is not active")

        token = create_access_token(user.id, role, user.email)
        logger.info(f"{role} {user.id} logged in")
        return {
            "message": "Login successful",
            "token": token,
            "token_type": "bearer",
            "user": {
                "id": str(user.id),
                "name": user.name,
                "email": user.email,
                "role": role,
            }
        }

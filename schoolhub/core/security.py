# schoolhub/core/security.py
"""Password hashing, JWT tokens and role-gated dependencies."""
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, Optional, Union
from uuid import UUID
import logging

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.ext.asyncio import AsyncSession

from .config import settings
from .database import get_db
from .exceptions import AuthenticationError, PermissionDeniedError
from ..models.staff import Staff
from ..models.student import Student

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
bearer_scheme = HTTPBearer(auto_error=False)

STUDENT_ROLE = "Student"

CurrentUser = Union[Staff, Student]


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return pwd_context.verify(password, password_hash)
    except ValueError:
        return False


def create_access_token(user_id: UUID, role: str, email: str, expires_delta: Optional[timedelta] = None) -> str:
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=settings.access_token_expire_minutes))
    payload = {"sub": str(user_id), "role": role, "email": email, "exp": expire}
    return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> Dict[str, Any]:
    try:
        return jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError as e:
        logger.info(f"Rejected token: {e}")
        raise AuthenticationError("Invalid or expired token")


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db)
) -> CurrentUser:
    """Resolve the bearer token to a Staff or Student record"""
    if credentials is None:
        raise AuthenticationError("Not authenticated")

    payload = decode_access_token(credentials.credentials)
    try:
        user_id = UUID(payload.get("sub", ""))
    except ValueError:
        raise AuthenticationError("Invalid or expired token")

    model = Student if payload.get("role") == STUDENT_ROLE else Staff
    user = await db.get(model, user_id)
    if not user or user.is_deleted:
        raise AuthenticationError("User not found")
    return user


def require_roles(*roles: str) -> Callable:
    """Dependency factory allowing only the given roles through"""
    async def checker(current_user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
        if current_user.role not in roles:
            raise PermissionDeniedError("Access denied")
        return current_user
    return checker


STAFF_ROLES = ("Teacher", "HOD", "VP", "Principal", "Admin", "Accountant")
TEACHING_ROLES = ("Teacher", "HOD", "VP", "Principal")
MANAGEMENT_ROLES = ("Principal", "Admin")

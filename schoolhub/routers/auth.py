from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_db
from ..core.security import CurrentUser, get_current_user
from ..schemas.auth_schemas import ChangePasswordRequest, LoginRequest
from ..services.auth_service import AuthService
from ..utils.serialization import serialize_model

router = APIRouter(prefix="/api/v1/auth", tags=["Authentication"])

@router.post("/login", response_model=dict)
async def login(
    credentials: LoginRequest,
    db: AsyncSession = Depends(get_db)
):
    """Staff login"""
    service = AuthService(db)
    return await service.login_staff(credentials.email, credentials.password)

@router.post("/student/login", response_model=dict)
async def student_login(
    credentials: LoginRequest,
    db: AsyncSession = Depends(get_db)
):
    """Student login"""
    service = AuthService(db)
    return await service.login_student(credentials.email, credentials.password)

@router.get("/me", response_model=dict)
async def get_profile(current_user: CurrentUser = Depends(get_current_user)):
    """Profile of the authenticated user"""
    return serialize_model(current_user)

@router.post("/change-password", response_model=dict)
async def change_password(
    payload: ChangePasswordRequest,
    current_user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    service = AuthService(db)
    await service.change_password(current_user, payload.current_password, payload.new_password)
    return {"message": "Password updated successfully"}

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ...core.database import get_db
from ...core.security import require_roles
from ...services.dashboard_service import DashboardService
from ...utils.serialization import serialize_list, serialize_model

router = APIRouter(prefix="/api/v1/hod/dashboard", tags=["HOD - Dashboard"])

@router.get("/", response_model=dict)
async def get_hod_dashboard(
    current_user=Depends(require_roles("HOD")),
    db: AsyncSession = Depends(get_db)
):
    service = DashboardService(db)
    dashboard = await service.hod_dashboard(current_user)
    return {
        "department": serialize_model(dashboard["department"]),
        "teacher_count": dashboard["teacher_count"],
        "teachers": [
            {"id": str(teacher.id), "name": teacher.name, "email": teacher.email}
            for teacher in dashboard["teachers"]
        ],
        "pending_approvals": serialize_list(dashboard["pending_approvals"]),
        "pending_count": len(dashboard["pending_approvals"])
    }

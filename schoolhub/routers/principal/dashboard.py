from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ...core.database import get_db
from ...core.security import MANAGEMENT_ROLES, require_roles
from ...services.dashboard_service import DashboardService
from ...utils.serialization import serialize_list

router = APIRouter(prefix="/api/v1/principal/dashboard", tags=["Principal - Dashboard"])

@router.get("/", response_model=dict)
async def get_principal_dashboard(
    current_user=Depends(require_roles(*MANAGEMENT_ROLES)),
    db: AsyncSession = Depends(get_db)
):
    """School overview for the principal"""
    service = DashboardService(db)
    dashboard = await service.principal_dashboard()
    return {
        "stats": dashboard["stats"],
        "pending_approvals": [
            {
                "id": str(approval.id),
                "title": approval.title,
                "request_type": approval.request_type,
                "status": approval.status,
                "created_at": approval.created_at.isoformat()
            }
            for approval in dashboard["pending_approvals"]
        ],
        "recent_announcements": serialize_list(dashboard["recent_announcements"])
    }

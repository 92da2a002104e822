from typing import Optional
from uuid import UUID
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_db
from ..core.exceptions import PermissionDeniedError
from ..core.security import STAFF_ROLES, require_roles
from ..schemas.admin_schemas import ApprovalRequestCreate
from ..services.approval_service import ApprovalService
from ..utils.serialization import serialize_list, serialize_model

router = APIRouter(prefix="/api/v1/staff/approval-requests", tags=["Staff - Approval Requests"])

any_staff = require_roles(*STAFF_ROLES)

@router.post("/", response_model=dict, status_code=201)
async def submit_request(
    request_data: ApprovalRequestCreate,
    current_user=Depends(any_staff),
    db: AsyncSession = Depends(get_db)
):
    """Submit a request for approval"""
    service = ApprovalService(db)
    approval = await service.submit_request(current_user, request_data.model_dump())
    return {
        "message": f"Request submitted to {approval.current_approver}",
        "approval": serialize_model(approval)
    }

@router.get("/", response_model=dict)
async def get_my_requests(
    status: Optional[str] = Query(None),
    current_user=Depends(any_staff),
    db: AsyncSession = Depends(get_db)
):
    service = ApprovalService(db)
    requests = await service.list_own(current_user, status=status)
    return {"items": serialize_list(requests), "total": len(requests)}

@router.get("/{request_id}", response_model=dict)
async def get_my_request(
    request_id: UUID,
    current_user=Depends(any_staff),
    db: AsyncSession = Depends(get_db)
):
    service = ApprovalService(db)
    approval = await service.get_or_404(request_id)
    if approval.requester_id != current_user.id:
        raise PermissionDeniedError("You can only view your own requests")
    return serialize_model(approval)

from typing import Optional
from uuid import UUID
from datetime import datetime
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ...core.database import get_db
from ...core.security import require_roles
from ...models.approval import Approver
from ...schemas.admin_schemas import ApprovalDecision
from ...services.approval_service import ApprovalService
from ...utils.serialization import serialize_list, serialize_model

router = APIRouter(prefix="/api/v1/hod/approvals", tags=["HOD - Approvals"])

hod_only = require_roles("HOD")

@router.get("/pending", response_model=dict)
async def get_pending_approvals(
    current_user=Depends(hod_only),
    db: AsyncSession = Depends(get_db)
):
    """Requests from department teachers awaiting the HOD"""
    service = ApprovalService(db)
    approvals = await service.hod_requests(current_user, pending_only=True)
    return {"items": serialize_list(approvals), "total": len(approvals)}

@router.get("/", response_model=dict)
async def get_all_approvals(
    status: Optional[str] = Query(None),
    type: Optional[str] = Query(None),
    start_date: Optional[datetime] = Query(None),
    end_date: Optional[datetime] = Query(None),
    current_user=Depends(hod_only),
    db: AsyncSession = Depends(get_db)
):
    service = ApprovalService(db)
    approvals = await service.hod_requests(
        current_user,
        request_type=type,
        status=status,
        start_date=start_date,
        end_date=end_date
    )
    return {"items": serialize_list(approvals), "total": len(approvals)}

@router.get("/history", response_model=dict)
async def get_approval_history(
    current_user=Depends(hod_only),
    db: AsyncSession = Depends(get_db)
):
    """Requests this HOD has acted on"""
    service = ApprovalService(db)
    approvals = await service.hod_history(current_user)
    return {"items": serialize_list(approvals), "total": len(approvals)}

@router.put("/{approval_id}/approve", response_model=dict)
async def approve_request(
    approval_id: UUID,
    decision: ApprovalDecision,
    current_user=Depends(hod_only),
    db: AsyncSession = Depends(get_db)
):
    """Approve, or forward to the vice principal or principal"""
    service = ApprovalService(db)
    approval, created_item = await service.approve(
        current_user,
        Approver.HOD.value,
        approval_id,
        comments=decision.comments,
        forward_to_vp=decision.forward_to_vp,
        forward_to_principal=decision.forward_to_principal
    )
    if decision.forward_to_vp:
        message = "Request forwarded to Vice Principal"
    elif decision.forward_to_principal:
        message = "Request forwarded to Principal"
    else:
        message = "Request approved successfully"
    return {
        "message": message,
        "approval": serialize_model(approval),
        "created_item": serialize_model(created_item)
    }

@router.put("/{approval_id}/reject", response_model=dict)
async def reject_request(
    approval_id: UUID,
    decision: ApprovalDecision,
    current_user=Depends(hod_only),
    db: AsyncSession = Depends(get_db)
):
    service = ApprovalService(db)
    approval = await service.reject(current_user, Approver.HOD.value, approval_id, comments=decision.comments)
    return {"message": "Request rejected", "approval": serialize_model(approval)}

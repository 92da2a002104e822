from uuid import UUID
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ...core.database import get_db
from ...core.security import require_roles
from ...models.approval import Approver
from ...schemas.admin_schemas import ApprovalDecision
from ...services.approval_service import ApprovalService
from ...utils.serialization import serialize_list, serialize_model

router = APIRouter(prefix="/api/v1/vp/approvals", tags=["Vice Principal - Approvals"])

vp_only = require_roles("VP")

@router.get("/pending", response_model=dict)
async def get_pending_approvals(
    current_user=Depends(vp_only),
    db: AsyncSession = Depends(get_db)
):
    service = ApprovalService(db)
    approvals = await service.pending_for(Approver.VP.value)
    return {"items": serialize_list(approvals), "total": len(approvals)}

@router.put("/{approval_id}/approve", response_model=dict)
async def approve_request(
    approval_id: UUID,
    decision: ApprovalDecision,
    current_user=Depends(vp_only),
    db: AsyncSession = Depends(get_db)
):
    """Approve, or forward to the principal"""
    service = ApprovalService(db)
    approval, created_item = await service.approve(
        current_user,
        Approver.VP.value,
        approval_id,
        comments=decision.comments,
        forward_to_principal=decision.forward_to_principal
    )
    return {
        "message": "Request forwarded to Principal" if decision.forward_to_principal else "Request approved successfully",
        "approval": serialize_model(approval),
        "created_item": serialize_model(created_item)
    }

@router.put("/{approval_id}/reject", response_model=dict)
async def reject_request(
    approval_id: UUID,
    decision: ApprovalDecision,
    current_user=Depends(vp_only),
    db: AsyncSession = Depends(get_db)
):
    service = ApprovalService(db)
    approval = await service.reject(current_user, Approver.VP.value, approval_id, comments=decision.comments)
    return {"message": "Request rejected", "approval": serialize_model(approval)}

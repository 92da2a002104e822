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

router = APIRouter(prefix="/api/v1/principal/approvals", tags=["Principal - Approvals"])

principal_only = require_roles("Principal")

@router.get("/pending", response_model=dict)
async def get_pending_approvals(
    type: Optional[str] = Query(None, description="Request type"),
    status: Optional[str] = Query(None),
    current_user=Depends(principal_only),
    db: AsyncSession = Depends(get_db)
):
    """Requests waiting on the principal"""
    service = ApprovalService(db)
    approvals = await service.pending_for(Approver.PRINCIPAL.value, request_type=type, status=status)
    return {"items": serialize_list(approvals), "total": len(approvals)}

@router.get("/history", response_model=dict)
async def get_approval_history(
    type: Optional[str] = Query(None),
    status: Optional[str] = Query(None),
    start_date: Optional[datetime] = Query(None),
    end_date: Optional[datetime] = Query(None),
    current_user=Depends(principal_only),
    db: AsyncSession = Depends(get_db)
):
    service = ApprovalService(db)
    approvals = await service.history_for(
        current_user,
        Approver.PRINCIPAL.value,
        request_type=type,
        status=status,
        start_date=start_date,
        end_date=end_date
    )
    return {"items": serialize_list(approvals), "total": len(approvals)}

@router.get("/{approval_id}", response_model=dict)
async def get_approval_details(
    approval_id: UUID,
    current_user=Depends(principal_only),
    db: AsyncSession = Depends(get_db)
):
    service = ApprovalService(db)
    approval, requester = await service.get_details(approval_id)
    return {
        **serialize_model(approval),
        "requester": {
            "id": str(requester.id),
            "name": requester.name,
            "email": requester.email,
            "role": requester.role
        } if requester else None
    }

@router.put("/{approval_id}/approve", response_model=dict)
async def approve_request(
    approval_id: UUID,
    decision: ApprovalDecision,
    current_user=Depends(principal_only),
    db: AsyncSession = Depends(get_db)
):
    """Final approval; creates the requested event, announcement or fee structure"""
    service = ApprovalService(db)
    approval, created_item = await service.approve(
        current_user, Approver.PRINCIPAL.value, approval_id, comments=decision.comments
    )
    return {
        "message": "Request approved successfully",
        "approval": serialize_model(approval),
        "created_item": serialize_model(created_item)
    }

@router.put("/{approval_id}/reject", response_model=dict)
async def reject_request(
    approval_id: UUID,
    decision: ApprovalDecision,
    current_user=Depends(principal_only),
    db: AsyncSession = Depends(get_db)
):
    service = ApprovalService(db)
    approval = await service.reject(current_user, Approver.PRINCIPAL.value, approval_id, comments=decision.comments)
    return {
        "message": "Request rejected",
        "approval": serialize_model(approval)
    }

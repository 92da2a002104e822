# schoolhub/services/approval_service.py
"""
Multi-level approval workflow.

Teachers' requests start with their head of department; everything else
goes straight to the principal. A HOD may approve, reject, or forward to the
vice principal or principal. The final approval materializes the requested
item (calendar event, announcement, fee structure) in the same commit that
closes the request.
"""
from typing import List, Optional, Dict, Any, Tuple
from uuid import UUID
from datetime import datetime, timedelta
import logging
from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from .base_service import BaseService
from .staff_service import StaffService, DepartmentService
from ..core.exceptions import BadRequestError, NotFoundError, PermissionDeniedError
from ..models.announcement import Announcement, Event
from ..models.approval import ApprovalRequest, ApprovalStatus, Approver, RequestType
from ..models.base import to_naive_utc, utcnow
from ..models.exam import PublicationStatus
from ..models.fee import FeeStructure
from ..models.staff import Department, Staff, StaffRole
from ..schemas.admin_schemas import FeeStructureCreate

logger = logging.getLogger(__name__)

PROCESSED_STATUSES = (ApprovalStatus.APPROVED.value, ApprovalStatus.REJECTED.value)
AWAITING_STATUSES = (ApprovalStatus.PENDING.value, ApprovalStatus.FORWARDED.value)

CALENDAR_EVENT_TYPES = ("Academic", "Exam", "Holiday", "Event", "Meeting", "Sports", "Cultural", "Other")
EVENT_TYPE_ALIASES = {
    "sports": "Sports",
    "athletic": "Sports",
    "competition": "Sports",
    "academic": "Academic",
    "educational": "Academic",
    "learning": "Academic",
    "exam": "Exam",
    "examination": "Exam",
    "test": "Exam",
    "holiday": "Holiday",
    "vacation": "Holiday",
    "break": "Holiday",
    "meeting": "Meeting",
    "conference": "Meeting",
    "gathering": "Meeting",
    "cultural": "Cultural",
    "celebration": "Cultural",
    "festival": "Cultural",
    "ceremony": "Cultural",
}

_datetime_adapter = TypeAdapter(datetime)


def map_event_type(event_type: Optional[str]) -> str:
    """Normalize a free-form event type to a calendar category"""
    if not event_type:
        return "Event"
    mapped = EVENT_TYPE_ALIASES.get(event_type.lower())
    if mapped:
        return mapped
    return event_type if event_type in CALENDAR_EVENT_TYPES else "Event"


def unwrap_request_data(request_data: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Payloads sometimes arrive wrapped in a second request_data key"""
    data = request_data or {}
    nested = data.get("request_data")
    if isinstance(nested, dict):
        return nested
    return data


def parse_datetime(value: Any, default: datetime) -> datetime:
    if not value:
        return default
    try:
        parsed = _datetime_adapter.validate_python(value)
    except PydanticValidationError:
        raise BadRequestError(f"Invalid date: {value}")
    return to_naive_utc(parsed)


class ApprovalService(BaseService[ApprovalRequest]):
    resource_name = "Approval request"

    def __init__(self, db: AsyncSession):
        super().__init__(ApprovalRequest, db)

    # Submission

    async def submit_request(self, requester: Staff, request_data: Dict[str, Any]) -> ApprovalRequest:
        current_approver = Approver.PRINCIPAL.value
        if requester.role == StaffRole.TEACHER.value and requester.department_id:
            department = await DepartmentService(self.db).get(requester.department_id)
            if department and department.head_of_department_id:
                current_approver = Approver.HOD.value

        approval = await self.create({
            **request_data,
            "requester_id": requester.id,
            "status": ApprovalStatus.PENDING.value,
            "current_approver": current_approver,
            "approval_history": [],
        })
        logger.info(f"{approval.request_type} request {approval.id} submitted by {requester.id}, routed to {current_approver}")
        return approval

    async def list_own(self, requester: Staff, status: Optional[str] = None) -> List[ApprovalRequest]:
        return await self.get_multi(requester_id=requester.id, status=status)

    async def get_details(self, request_id: UUID) -> Tuple[ApprovalRequest, Optional[Staff]]:
        approval = await self.get_or_404(request_id)
        requester = await StaffService(self.db).get(approval.requester_id, include_deleted=True)
        return approval, requester

    # Queries

    def _filtered(
        self,
        request_type: Optional[str] = None,
        status: Optional[str] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None
    ):
        stmt = select(self.model).where(self.model.is_deleted == False)
        start_date, end_date = to_naive_utc(start_date), to_naive_utc(end_date)
        if request_type:
            stmt = stmt.where(self.model.request_type == request_type)
        if status:
            stmt = stmt.where(self.model.status == status)
        if start_date:
            stmt = stmt.where(self.model.created_at >= start_date)
        if end_date:
            stmt = stmt.where(self.model.created_at <= end_date)
        return stmt.order_by(self.model.created_at.desc())

    async def pending_for(self, approver: str, request_type: Optional[str] = None, status: Optional[str] = None, limit: Optional[int] = None) -> List[ApprovalRequest]:
        """Requests waiting on the given approver level"""
        stmt = self._filtered(request_type=request_type, status=status).where(
            self.model.current_approver == approver
        )
        if not status:
            stmt = stmt.where(self.model.status.in_(AWAITING_STATUSES))
        if limit:
            stmt = stmt.limit(limit)
        return (await self.db.execute(stmt)).scalars().all()

    async def count_pending_for(self, approver: str) -> int:
        return len(await self.pending_for(approver))

    async def department_of_hod(self, hod: Staff) -> Department:
        department = await DepartmentService(self.db).get_headed_by(hod.id)
        if not department:
            raise NotFoundError("Department")
        return department

    async def hod_requests(
        self,
        hod: Staff,
        pending_only: bool = False,
        request_type: Optional[str] = None,
        status: Optional[str] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None
    ) -> List[ApprovalRequest]:
        """Requests raised by teachers of the HOD's department"""
        department = await self.department_of_hod(hod)
        stmt = self._filtered(request_type, status, start_date, end_date).join(
            Staff, Staff.id == self.model.requester_id
        ).where(Staff.department_id == department.id)
        if pending_only:
            stmt = stmt.where(
                self.model.current_approver == Approver.HOD.value,
                self.model.status == ApprovalStatus.PENDING.value
            )
        return (await self.db.execute(stmt)).scalars().all()

    async def hod_history(self, hod: Staff, **filters) -> List[ApprovalRequest]:
        requests = await self.hod_requests(hod, **filters)
        return [
            request for request in requests
            if any(entry.get("approver") == str(hod.id) for entry in request.approval_history or [])
        ]

    async def history_for(
        self,
        approver: Staff,
        role: str,
        request_type: Optional[str] = None,
        status: Optional[str] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None
    ) -> List[ApprovalRequest]:
        """Requests this approver acted on, plus those currently assigned to their role"""
        stmt = self._filtered(request_type, status, start_date, end_date)
        requests = (await self.db.execute(stmt)).scalars().all()
        # approval_history is JSON, matched here to stay portable across backends
        return [
            request for request in requests
            if request.current_approver == role
            or any(entry.get("approver") == str(approver.id) for entry in request.approval_history or [])
        ]

    # Decisions

    async def _get_actionable(self, request_id: UUID) -> ApprovalRequest:
        approval = await self.get_or_404(request_id)
        if approval.status in PROCESSED_STATUSES:
            raise BadRequestError("Request has already been processed")
        return approval

    async def _check_hod_scope(self, hod: Staff, approval: ApprovalRequest):
        department = await self.department_of_hod(hod)
        requester = await StaffService(self.db).get(approval.requester_id, include_deleted=True)
        if not requester or requester.department_id != department.id:
            raise PermissionDeniedError("Teacher does not belong to your department")

    async def _check_turn(self, approver: Staff, role: str, approval: ApprovalRequest):
        """HOD and VP act only at their own level; the principal may decide at any point"""
        if role == Approver.HOD.value:
            await self._check_hod_scope(approver, approval)
        if role in (Approver.HOD.value, Approver.VP.value) and approval.current_approver != role:
            raise BadRequestError(f"Request is not awaiting {role} approval")

    @staticmethod
    def _append_history(approval: ApprovalRequest, approver: Staff, role: str, status: str, comments: str):
        # Reassign so the JSON column is flagged dirty
        approval.approval_history = list(approval.approval_history or []) + [{
            "approver": str(approver.id),
            "approver_name": approver.name,
            "role": role,
            "status": status,
            "comments": comments,
            "timestamp": utcnow().isoformat(),
        }]

    async def approve(
        self,
        approver: Staff,
        role: str,
        request_id: UUID,
        comments: Optional[str] = None,
        forward_to_vp: bool = False,
        forward_to_principal: bool = False
    ) -> Tuple[ApprovalRequest, Optional[Any]]:
        """Approve at the given level, forwarding when asked; returns the created item on final approval"""
        approval = await self._get_actionable(request_id)

        await self._check_turn(approver, role, approval)
        if role == Approver.VP.value:
            forward_to_vp = False
        elif role != Approver.HOD.value:
            forward_to_vp = forward_to_principal = False

        created_item = None
        if forward_to_vp or forward_to_principal:
            target = Approver.VP.value if forward_to_vp else Approver.PRINCIPAL.value
            label = "Vice Principal" if forward_to_vp else "Principal"
            self._append_history(approval, approver, role, f"Forwarded to {target}", comments or f"Forwarded to {label} by {role}")
            approval.status = ApprovalStatus.FORWARDED.value
            approval.current_approver = target
        else:
            self._append_history(approval, approver, role, ApprovalStatus.APPROVED.value, comments or f"Approved by {role}")
            created_item = await self._create_requested_item(approval, approver)
            approval.status = ApprovalStatus.APPROVED.value
            approval.current_approver = Approver.COMPLETED.value

        await self.db.commit()
        await self.db.refresh(approval)
        if created_item is not None:
            await self.db.refresh(created_item)
        logger.info(f"{role} {approver.id} {approval.status.lower()} request {approval.id} ({approval.request_type})")
        return approval, created_item

    async def reject(self, approver: Staff, role: str, request_id: UUID, comments: Optional[str] = None) -> ApprovalRequest:
        approval = await self._get_actionable(request_id)
        await self._check_turn(approver, role, approval)

        self._append_history(approval, approver, role, ApprovalStatus.REJECTED.value, comments or f"Rejected by {role}")
        approval.status = ApprovalStatus.REJECTED.value
        approval.current_approver = Approver.COMPLETED.value

        await self.db.commit()
        await self.db.refresh(approval)
        logger.info(f"{role} {approver.id} rejected request {approval.id}")
        return approval

    # Side effects of a final approval

    async def _create_requested_item(self, approval: ApprovalRequest, approver: Staff):
        data = unwrap_request_data(approval.request_data)

        if approval.request_type == RequestType.EVENT.value:
            item = self._build_event(approval, data, approver)
        elif approval.request_type == RequestType.COMMUNICATION.value:
            item = self._build_announcement(approval, data, approver)
        elif approval.request_type == RequestType.FEE.value:
            item = self._build_fee_structure(data, approver)
        else:
            return None

        self.db.add(item)
        await self.db.flush()
        approval.created_item_id = item.id
        approval.created_item_type = type(item).__name__
        logger.info(f"Approval {approval.id} created {approval.created_item_type} {item.id}")
        return item

    @staticmethod
    def _build_event(approval: ApprovalRequest, data: Dict[str, Any], approver: Staff) -> Event:
        title = data.get("title") or approval.title
        if not title:
            raise BadRequestError("Missing required event field: title")

        start_date = parse_datetime(data.get("start_date"), utcnow())
        location = (data.get("venue") or data.get("location") or "").strip() or "TBD"
        audience = data.get("audience") or data.get("target_audience") or ["All"]
        return Event(
            title=title,
            description=data.get("description") or approval.description,
            start_date=start_date,
            end_date=parse_datetime(data.get("end_date"), start_date + timedelta(hours=1)),
            location=location,
            organizer=data.get("organizer") or "School Administration",
            event_type=map_event_type(data.get("event_type")),
            target_audience=audience if isinstance(audience, list) else [audience],
            status="Active",
            created_by=approver.id,
        )

    @staticmethod
    def _build_announcement(approval: ApprovalRequest, data: Dict[str, Any], approver: Staff) -> Announcement:
        content = data.get("content") or approval.description
        if not content:
            raise BadRequestError("Missing required communication field: content")

        audience = data.get("audience") or data.get("recipients") or ["All"]
        return Announcement(
            title=data.get("subject") or data.get("title") or approval.title,
            content=content,
            audience=audience if isinstance(audience, list) else [audience],
            priority=data.get("priority") or "normal",
            status=PublicationStatus.PUBLISHED.value,
            published_at=utcnow(),
            created_by=approver.id,
        )

    @staticmethod
    def _build_fee_structure(data: Dict[str, Any], approver: Staff) -> FeeStructure:
        try:
            fee = FeeStructureCreate.model_validate(data)
        except PydanticValidationError as e:
            fields = ", ".join(str(error["loc"][0]) for error in e.errors() if error["loc"])
            raise BadRequestError(f"Missing or invalid fee fields: {fields}")

        fee_data = fee.model_dump()
        if fee_data["total_amount"] is None:
            fee_data["total_amount"] = 0
        return FeeStructure(**fee_data, created_by=approver.id)

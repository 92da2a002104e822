# schoolhub/models/approval.py
import enum
from sqlalchemy import Column, String, Text, JSON, ForeignKey, Uuid, Index
from .base import Base


class RequestType(str, enum.Enum):
    EVENT = "Event"
    COMMUNICATION = "Communication"
    FEE = "Fee"
    LEAVE = "Leave"
    RESOURCE = "Resource"
    OTHER = "Other"


class ApprovalStatus(str, enum.Enum):
    PENDING = "Pending"
    FORWARDED = "Forwarded"
    APPROVED = "Approved"
    REJECTED = "Rejected"


class Approver(str, enum.Enum):
    HOD = "HOD"
    VP = "VP"
    PRINCIPAL = "Principal"
    COMPLETED = "Completed"


class ApprovalRequest(Base):
    __tablename__ = "approval_requests"

    requester_id = Column(Uuid(as_uuid=True), ForeignKey("staff.id"), nullable=False, index=True)
    request_type = Column(String(20), nullable=False, index=True)
    title = Column(String(200), nullable=False)
    description = Column(Text)
    request_data = Column(JSON, default=dict)
    status = Column(String(20), nullable=False, default=ApprovalStatus.PENDING.value)
    current_approver = Column(String(20), nullable=False, default=Approver.PRINCIPAL.value)

    # [{"approver": id, "role": "HOD", "status": "Approved", "comments": "", "timestamp": iso}]
    approval_history = Column(JSON, default=list)

    created_item_id = Column(Uuid(as_uuid=True))
    created_item_type = Column(String(30))

    __table_args__ = (
        Index("idx_approval_queue", "current_approver", "status"),
    )

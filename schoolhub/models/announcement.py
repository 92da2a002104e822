# schoolhub/models/announcement.py
from sqlalchemy import Column, String, Text, DateTime, JSON, ForeignKey, Uuid
from .base import Base
from .exam import PublicationStatus


class Announcement(Base):
    __tablename__ = "announcements"

    title = Column(String(200), nullable=False)
    content = Column(Text, nullable=False)
    # "All", "Students", "Staff" or a class name such as "10-A"
    audience = Column(JSON, default=lambda: ["All"])
    priority = Column(String(10), default="normal", nullable=False)
    status = Column(String(20), default=PublicationStatus.DRAFT.value, nullable=False, index=True)
    published_at = Column(DateTime)
    created_by = Column(Uuid(as_uuid=True), ForeignKey("staff.id"), nullable=False)


class Event(Base):
    __tablename__ = "events"

    title = Column(String(200), nullable=False)
    description = Column(Text)
    start_date = Column(DateTime, nullable=False)
    end_date = Column(DateTime, nullable=False)
    location = Column(String(200), nullable=False, default="TBD")
    organizer = Column(String(200), default="School Administration")
    event_type = Column(String(20), nullable=False, default="Event")
    target_audience = Column(JSON, default=lambda: ["All"])
    status = Column(String(20), default="Active", nullable=False)
    created_by = Column(Uuid(as_uuid=True), ForeignKey("staff.id"))

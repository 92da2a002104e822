# schoolhub/models/class_model.py
from sqlalchemy import Column, String, Integer, ForeignKey, Boolean, Uuid, UniqueConstraint
from .base import Base


class ClassModel(Base):
    __tablename__ = "classes"

    class_name = Column(String(20), nullable=False, index=True)
    section = Column(String(10), nullable=False)
    academic_year = Column(String(10), nullable=False)
    capacity = Column(Integer, default=40)
    classroom = Column(String(50))
    coordinator_id = Column(Uuid(as_uuid=True), ForeignKey("staff.id"), nullable=True, index=True)
    is_active = Column(Boolean, default=True)

    __table_args__ = (
        UniqueConstraint("class_name", "section", "academic_year", name="uq_class_identity"),
    )

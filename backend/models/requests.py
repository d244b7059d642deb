from sqlalchemy import Column, String, Text, Date, ForeignKey, Enum
from sqlalchemy.orm import relationship
from database import Base
import enum
import uuid
from models.audit_mixin import TimestampMixin


class RequestStatus(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    COMPLETED = "completed"


class RequestPriority(str, enum.Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Request(Base, TimestampMixin):
    __tablename__ = "requests"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    project_name = Column(String(255), nullable=False)
    requester_id = Column(String(36), ForeignKey("users.id"), nullable=True, index=True)
    reason = Column(Text, nullable=True)
    priority = Column(
        Enum(RequestPriority, name="request_priority", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=RequestPriority.MEDIUM,
    )
    due_date = Column(Date, nullable=True)
    status = Column(
        Enum(RequestStatus, name="request_status", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=RequestStatus.PENDING,
        index=True,
    )

    # Relationships
    requester = relationship("User", back_populates="requests")
    items = relationship(
        "RequestItem",
        back_populates="request",
        cascade="all, delete-orphan",
        order_by="RequestItem.id",
    )

    @property
    def requester_name(self):
        return self.requester.name if self.requester else None

    @property
    def requester_email(self):
        return self.requester.email if self.requester else None

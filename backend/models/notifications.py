from sqlalchemy import Column, Integer, String, Text, Boolean, ForeignKey
from sqlalchemy.orm import relationship
from database import Base
from models.audit_mixin import CreatedAtMixin


class Notification(Base, CreatedAtMixin):
    __tablename__ = "notifications"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    type = Column(String(50), nullable=True) # e.g. "request", "low-stock"
    title = Column(String(255), nullable=True)
    message = Column(Text, nullable=True)
    related_item_id = Column(Integer, ForeignKey("items.id"), nullable=True)
    is_read = Column(Boolean, nullable=False, default=False)

    user = relationship("User", back_populates="notifications")

from sqlalchemy import Column, Integer, String, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship
from database import Base
from models.audit_mixin import CreatedAtMixin


class RequestItem(Base, CreatedAtMixin):
    __tablename__ = "request_items"
    __table_args__ = (CheckConstraint("quantity > 0", name="ck_request_items_quantity_positive"),)

    id = Column(Integer, primary_key=True, index=True)
    request_id = Column(String(36), ForeignKey("requests.id", ondelete="CASCADE"), nullable=False, index=True)
    item_id = Column(Integer, ForeignKey("items.id"), nullable=False, index=True)
    quantity = Column(Integer, nullable=False)
    # Snapshot written when the request is approved
    stock_before = Column(Integer, nullable=True)
    stock_after = Column(Integer, nullable=True)

    # Relationships
    request = relationship("Request", back_populates="items")
    item = relationship("Item", back_populates="request_lines")

    @property
    def name(self):
        return self.item.name if self.item else None

    @property
    def category(self):
        return self.item.category if self.item else None

    @property
    def unit(self):
        return self.item.unit if self.item else None

from sqlalchemy import Column, Integer, String, Text, ForeignKey, Enum
from sqlalchemy.orm import relationship
from database import Base
import enum
from models.audit_mixin import CreatedAtMixin


class ChangeType(str, enum.Enum):
    OPENING = "opening"
    RESTOCK = "restock"
    REQUEST = "request"
    ADJUSTMENT = "adjustment"
    CLOSING = "closing"


class StockHistory(Base, CreatedAtMixin):
    """Append-only record of one quantity change. Rows are never updated or deleted."""
    __tablename__ = "stock_history"

    id = Column(Integer, primary_key=True, index=True)
    item_id = Column(Integer, ForeignKey("items.id"), nullable=False, index=True)
    change_type = Column(
        Enum(ChangeType, name="stock_change_type", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
    quantity_before = Column(Integer, nullable=False)
    quantity_change = Column(Integer, nullable=False) # signed
    quantity_after = Column(Integer, nullable=False)
    notes = Column(Text, nullable=True)
    created_by = Column(String(255), nullable=True)

    item = relationship("Item", back_populates="history")

    @property
    def item_name(self):
        return self.item.name if self.item else None

    @property
    def category(self):
        return self.item.category if self.item else None

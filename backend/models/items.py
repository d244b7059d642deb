from sqlalchemy import Column, Integer, String, Text, Numeric, Boolean, DateTime, Enum, CheckConstraint
from sqlalchemy.orm import relationship
from database import Base
import enum
from models.audit_mixin import TimestampMixin


class ItemStatus(str, enum.Enum):
    IN_STOCK = "in-stock"
    LOW_STOCK = "low-stock"
    OUT_OF_STOCK = "out-of-stock"


class Item(Base, TimestampMixin):
    __tablename__ = "items"
    __table_args__ = (
        CheckConstraint("quantity >= 0", name="ck_items_quantity_non_negative"),
        CheckConstraint("min_quantity >= 0", name="ck_items_min_quantity_non_negative"),
    )

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    category = Column(String(100), nullable=True, index=True) # free-form, opaque to the workflow
    quantity = Column(Integer, nullable=False, default=0)
    min_quantity = Column(Integer, nullable=False, default=0) # reorder threshold
    unit = Column(String(50), nullable=False, default="pcs") # e.g. "pcs", "box", "rim"
    price = Column(Numeric(15, 2), nullable=False, default=0)
    # Only ever written through crud.stock_ledger.derive_status
    status = Column(
        Enum(ItemStatus, name="item_status", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=ItemStatus.IN_STOCK,
    )
    is_active = Column(Boolean, nullable=False, default=True, index=True)
    last_restocked = Column(DateTime(timezone=True), nullable=True)

    # Relationships
    history = relationship("StockHistory", back_populates="item", order_by="StockHistory.id")
    request_lines = relationship("RequestItem", back_populates="item")

    def __repr__(self):
        return f"<Item(id={self.id}, name={self.name}, quantity={self.quantity}, status={self.status})>"

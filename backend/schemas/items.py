from pydantic import BaseModel, Field
from typing import Optional
from decimal import Decimal
from datetime import datetime
from models.items import ItemStatus
from models.stock_history import ChangeType


class ItemBase(BaseModel):
    name: str
    description: Optional[str] = None
    category: Optional[str] = None
    quantity: int = Field(0, ge=0)
    min_quantity: int = Field(0, ge=0, alias="minQuantity") # reorder threshold
    unit: str = "pcs"
    price: Decimal = Decimal("0")

    class Config:
        populate_by_name = True


class ItemCreate(ItemBase):
    # Recorded on the opening history entry when quantity > 0
    notes: Optional[str] = None
    user_id: Optional[str] = Field(None, alias="userId")


class ItemUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    # Absolute quantity, not a delta
    quantity: Optional[int] = Field(None, ge=0)
    min_quantity: Optional[int] = Field(None, ge=0, alias="minQuantity")
    unit: Optional[str] = None
    price: Optional[Decimal] = None
    # History note and actor, not item fields
    notes: Optional[str] = None
    history_notes: Optional[str] = Field(None, alias="historyNotes")
    user_id: Optional[str] = Field(None, alias="userId")

    class Config:
        populate_by_name = True


class StockAdjustment(BaseModel):
    delta: int
    change_type: ChangeType = ChangeType.ADJUSTMENT
    notes: Optional[str] = None
    user_id: Optional[str] = Field(None, alias="userId")

    class Config:
        populate_by_name = True


class Item(ItemBase):
    id: int
    status: ItemStatus
    is_active: bool = Field(True, alias="isActive")
    last_restocked: Optional[datetime] = Field(None, alias="lastRestocked")
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
        populate_by_name = True


class ItemImportResult(BaseModel):
    success: bool = True
    created: int
    skipped: int
    errors: list[str] = []

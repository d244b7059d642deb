from pydantic import BaseModel
from datetime import datetime
from typing import Optional, List
from models.stock_history import ChangeType
from schemas.items import Item


class StockHistoryEntry(BaseModel):
    id: int
    item_id: int
    change_type: ChangeType
    quantity_before: int
    quantity_change: int
    quantity_after: int
    notes: Optional[str] = None
    created_by: Optional[str] = None
    created_at: datetime
    item_name: Optional[str] = None
    category: Optional[str] = None

    class Config:
        from_attributes = True


class StockHistoryList(BaseModel):
    history: List[StockHistoryEntry]


class ItemStockHistory(BaseModel):
    item: Item
    history: List[StockHistoryEntry]


class StockSummary(BaseModel):
    opening_stock: int
    total_in: int
    total_out: int
    closing_stock: int
    period: str = "month"
    period_start: datetime


class ItemChangeTotal(BaseModel):
    item_id: int
    name: str
    total_change: int

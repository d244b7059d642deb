from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from typing import List, Optional, Union
import logging

from database import get_db
from crud import items as crud_items
from crud import stock_history as crud_stock_history
from exceptions import NotFoundError
from schemas.stock_history import (
    StockHistoryEntry,
    StockHistoryList,
    ItemStockHistory,
    StockSummary,
    ItemChangeTotal,
)

router = APIRouter(tags=["Stock History"])
logger = logging.getLogger("stock_history")

MAX_HISTORY_DAYS = 36500


@router.get("/stock-history", response_model=StockHistoryList)
def read_stock_history(days: Optional[int] = Query(None, ge=0, le=MAX_HISTORY_DAYS), db: Session = Depends(get_db)):
    """History entries across all items in the last `days` days (default window from config)."""
    return {"history": crud_stock_history.get_recent_history(db, days=days)}


@router.get("/stock-history/item/{item_id}", response_model=ItemStockHistory)
def read_item_stock_history(item_id: int, db: Session = Depends(get_db)):
    try:
        db_item = crud_items.get_item(db, item_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"item": db_item, "history": crud_stock_history.get_item_history(db, item_id)}


@router.get("/stock-summary", response_model=StockSummary)
def read_stock_summary(db: Session = Depends(get_db)):
    return crud_stock_history.get_stock_summary(db)


@router.get("/stock-summary/items", response_model=Union[List[StockHistoryEntry], List[ItemChangeTotal]])
def read_item_stock_summary(item_id: Optional[int] = None, db: Session = Depends(get_db)):
    """Net change per item, or the stock card (newest first) of one item when `item_id` is given."""
    if item_id is not None:
        return crud_stock_history.get_item_stock_card(db, item_id)
    return crud_stock_history.get_item_change_totals(db)

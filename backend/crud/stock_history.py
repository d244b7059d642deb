import logging
import os
from datetime import timedelta
from typing import Optional

from dotenv import load_dotenv
from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from models.items import Item
from models.stock_history import StockHistory, ChangeType
from utils.time_utils import now, start_of_month

load_dotenv()

logger = logging.getLogger(__name__)

STOCK_HISTORY_WINDOW_DAYS = int(os.getenv("STOCK_HISTORY_WINDOW_DAYS", "30"))


def record(
    db: Session,
    item_id: int,
    change_type: ChangeType,
    quantity_before: int,
    quantity_change: int,
    quantity_after: int,
    notes: Optional[str] = None,
    actor: Optional[str] = None,
) -> StockHistory:
    """Append one history entry to the caller's transaction.

    Nothing is committed here: the entry must land in the same transaction as
    the item mutation that produced it.
    """
    entry = StockHistory(
        item_id=item_id,
        change_type=ChangeType(change_type),
        quantity_before=quantity_before,
        quantity_change=quantity_change,
        quantity_after=quantity_after,
        notes=notes,
        created_by=actor,
        created_at=now(),
    )
    db.add(entry)
    logger.debug(
        f"History staged for item {item_id}: {entry.change_type.value} "
        f"{quantity_before} {quantity_change:+d} -> {quantity_after}"
    )
    return entry


def get_item_history(db: Session, item_id: int):
    """History for one item, oldest first (running-balance order)."""
    return (
        db.query(StockHistory)
        .options(joinedload(StockHistory.item))
        .filter(StockHistory.item_id == item_id)
        .order_by(StockHistory.created_at.asc(), StockHistory.id.asc())
        .all()
    )


def get_item_stock_card(db: Session, item_id: int):
    """History for one item, newest first."""
    return (
        db.query(StockHistory)
        .options(joinedload(StockHistory.item))
        .filter(StockHistory.item_id == item_id)
        .order_by(StockHistory.created_at.desc(), StockHistory.id.desc())
        .all()
    )


def get_recent_history(db: Session, days: Optional[int] = None):
    """History across all items inside the lookback window, newest first."""
    days = STOCK_HISTORY_WINDOW_DAYS if days is None else days
    cutoff = now() - timedelta(days=days)
    return (
        db.query(StockHistory)
        .join(Item, StockHistory.item_id == Item.id)
        .options(joinedload(StockHistory.item))
        .filter(StockHistory.created_at >= cutoff)
        .order_by(StockHistory.created_at.desc(), StockHistory.id.desc())
        .all()
    )


def get_stock_summary(db: Session) -> dict:
    """Month-to-date opening/in/out/closing totals across active items."""
    period_start = start_of_month()

    closing_stock = db.query(func.coalesce(func.sum(Item.quantity), 0)).filter(Item.is_active.is_(True)).scalar()
    total_in = (
        db.query(func.coalesce(func.sum(StockHistory.quantity_change), 0))
        .filter(StockHistory.quantity_change > 0, StockHistory.created_at >= period_start)
        .scalar()
    )
    total_out = -(
        db.query(func.coalesce(func.sum(StockHistory.quantity_change), 0))
        .filter(StockHistory.quantity_change < 0, StockHistory.created_at >= period_start)
        .scalar()
    )

    return {
        "opening_stock": int(closing_stock) - int(total_in) + int(total_out),
        "total_in": int(total_in),
        "total_out": int(total_out),
        "closing_stock": int(closing_stock),
        "period": "month",
        "period_start": period_start,
    }


def get_item_change_totals(db: Session):
    """Net recorded change per item, including items with no history."""
    rows = (
        db.query(Item.id, Item.name, func.coalesce(func.sum(StockHistory.quantity_change), 0))
        .outerjoin(StockHistory, StockHistory.item_id == Item.id)
        .group_by(Item.id, Item.name)
        .order_by(Item.name)
        .all()
    )
    return [{"item_id": item_id, "name": name, "total_change": int(total)} for item_id, name, total in rows]

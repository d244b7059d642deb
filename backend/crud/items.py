import logging
from typing import Optional

from pydantic import ValidationError as SchemaValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from crud import stock_history, stock_ledger
from exceptions import ItemNotFound, TransactionFailure, ValidationError
from models.items import Item
from models.stock_history import ChangeType
from schemas.items import ItemCreate, StockAdjustment
from utils.time_utils import now

logger = logging.getLogger(__name__)

MANUAL_CHANGE_TYPES = {ChangeType.RESTOCK, ChangeType.ADJUSTMENT}


def get_item(db: Session, item_id: int) -> Item:
    db_item = db.query(Item).filter(Item.id == item_id).first()
    if db_item is None:
        raise ItemNotFound(item_id)
    return db_item


def get_items(db: Session, category: Optional[str] = None, include_inactive: bool = False):
    query = db.query(Item)
    if not include_inactive:
        query = query.filter(Item.is_active.is_(True))
    if category:
        query = query.filter(Item.category == category)
    return query.order_by(Item.name).all()


def _stage_item(db: Session, item: ItemCreate) -> Item:
    """Add the item plus its `opening` entry to the session without committing."""
    data = item.model_dump(exclude={"notes", "user_id"})
    db_item = Item(
        **data,
        status=stock_ledger.derive_status(item.quantity, item.min_quantity),
        is_active=True,
        last_restocked=now() if item.quantity > 0 else None,
        created_by=item.user_id,
        updated_by=item.user_id,
    )
    db.add(db_item)
    db.flush() # need db_item.id for the history row

    if db_item.quantity > 0:
        stock_history.record(
            db,
            db_item.id,
            ChangeType.OPENING,
            0,
            db_item.quantity,
            db_item.quantity,
            item.notes or "Opening stock",
            item.user_id,
        )
    return db_item


def create_item(db: Session, item: ItemCreate) -> Item:
    try:
        db_item = _stage_item(db, item)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception(f"Creating item '{item.name}' rolled back: {e}")
        raise TransactionFailure(f"Item '{item.name}' could not be created", cause=e) from e
    db.refresh(db_item)
    logger.info(f"Item '{db_item.name}' (ID: {db_item.id}) created with quantity {db_item.quantity}")
    return db_item


def import_items(db: Session, rows: list[dict], actor: Optional[str] = None) -> dict:
    """Create one item per spreadsheet row in a single transaction.

    Rows without a name or with invalid values are skipped and reported.
    """
    created, skipped, errors = 0, 0, []
    try:
        for row_number, row in enumerate(rows, start=2): # row 1 is the header
            if not row.get("name"):
                skipped += 1
                continue
            try:
                payload = ItemCreate(**row, userId=actor, notes="Imported from spreadsheet")
            except SchemaValidationError as e:
                skipped += 1
                errors.append(f"Row {row_number}: {e.errors()[0]['msg']}")
                continue
            _stage_item(db, payload)
            created += 1
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception(f"Item import rolled back: {e}")
        raise TransactionFailure("Item import was rolled back", cause=e) from e

    logger.info(f"Item import by {actor or 'unknown'}: {created} created, {skipped} skipped")
    return {"success": True, "created": created, "skipped": skipped, "errors": errors}


def adjust_item_stock(db: Session, item_id: int, adjustment: StockAdjustment) -> Item:
    """Apply a signed delta outside any request and record its effective change."""
    if adjustment.change_type not in MANUAL_CHANGE_TYPES:
        raise ValidationError(
            f"Change type '{adjustment.change_type.value}' cannot be applied by hand; use restock or adjustment"
        )
    if adjustment.delta == 0:
        raise ValidationError("Adjustment delta cannot be zero")
    try:
        change = stock_ledger.adjust_quantity(
            db, item_id, adjustment.delta, adjustment.change_type, adjustment.notes, adjustment.user_id
        )
        stock_history.record(
            db,
            item_id,
            adjustment.change_type,
            change.quantity_before,
            change.effective_delta,
            change.quantity_after,
            adjustment.notes or "Stock adjustment",
            adjustment.user_id,
        )
        db.commit()
    except ItemNotFound:
        db.rollback()
        raise
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception(f"Stock adjustment of item {item_id} rolled back: {e}")
        raise TransactionFailure(f"Stock adjustment of item {item_id} was rolled back", cause=e) from e
    return get_item(db, item_id)


def soft_delete_item(db: Session, item_id: int, actor: Optional[str] = None) -> Item:
    """Flag the item inactive; it is never removed so its history stays resolvable."""
    db_item = get_item(db, item_id)
    db_item.is_active = False
    if actor:
        db_item.updated_by = actor
    db.commit()
    db.refresh(db_item)
    logger.info(f"Item '{db_item.name}' (ID: {item_id}) deactivated by {actor or 'unknown'}")
    return db_item

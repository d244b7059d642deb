"""
Stock ledger: the only code that writes Item.quantity and Item.status.

Every path that changes a quantity goes through adjust_quantity, and every
path that can move the reorder threshold recomputes status through
derive_status, so status is always a pure function of
(quantity, min_quantity).
"""
import logging
from typing import NamedTuple, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from crud import stock_history
from exceptions import ItemNotFound, ValidationError, TransactionFailure
from models.items import Item, ItemStatus
from models.stock_history import ChangeType, StockHistory
from utils import sqlalchemy_to_dict
from utils.time_utils import now

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = {"name", "description", "category", "min_quantity", "unit", "price"}
REQUIRED_FIELDS = {"name", "min_quantity", "unit", "price"}


class StockChange(NamedTuple):
    item_id: int
    quantity_before: int
    quantity_after: int
    requested_delta: int

    @property
    def effective_delta(self) -> int:
        # Differs from requested_delta when the floor at zero kicked in
        return self.quantity_after - self.quantity_before


def derive_status(quantity: int, min_quantity: int) -> ItemStatus:
    quantity = quantity or 0
    if quantity <= 0:
        return ItemStatus.OUT_OF_STOCK
    if quantity <= (min_quantity or 0):
        return ItemStatus.LOW_STOCK
    return ItemStatus.IN_STOCK


def get_item_for_update(db: Session, item_id: int) -> Item:
    item = db.query(Item).filter(Item.id == item_id).with_for_update().first()
    if item is None:
        raise ItemNotFound(item_id)
    return item


def adjust_quantity(
    db: Session,
    item_id: int,
    delta: int,
    change_type: ChangeType = ChangeType.ADJUSTMENT,
    notes: Optional[str] = None,
    actor: Optional[str] = None,
) -> StockChange:
    """Apply a signed delta with a floor at zero and recompute status.

    The change is staged on the session but not committed, and no history is
    written: the caller records history and owns the transaction.
    """
    item = get_item_for_update(db, item_id)
    before = item.quantity or 0
    after = max(0, before + delta)

    item.quantity = after
    item.status = derive_status(after, item.min_quantity)
    if after > before:
        item.last_restocked = now()
    if actor:
        item.updated_by = actor
    db.add(item)

    if before + delta < 0:
        logger.warning(
            f"Item {item_id} clamped at 0: {before} {delta:+d} requested ({ChangeType(change_type).value})"
        )
    logger.info(
        f"Item {item_id} quantity {before} -> {after} ({ChangeType(change_type).value}, status {item.status.value})"
        + (f": {notes}" if notes else "")
    )
    return StockChange(item_id=item_id, quantity_before=before, quantity_after=after, requested_delta=delta)


def set_fields(
    db: Session,
    item_id: int,
    update_data: dict,
    notes: Optional[str] = None,
    actor: Optional[str] = None,
) -> tuple[Item, Optional[StockHistory]]:
    """Edit item fields; a `quantity` key is an absolute set, not a delta.

    A real quantity change appends one `restock` (quantity rose) or
    `adjustment` (quantity fell) entry. Item and history commit together.
    """
    update_data = dict(update_data)
    new_quantity = update_data.pop("quantity", None)
    unknown = set(update_data) - EDITABLE_FIELDS
    if unknown:
        raise ValidationError(f"Fields cannot be edited: {', '.join(sorted(unknown))}")
    cleared = sorted(key for key in update_data if key in REQUIRED_FIELDS and update_data[key] is None)
    if cleared:
        raise ValidationError(f"Fields cannot be empty: {', '.join(cleared)}")
    if new_quantity is not None and new_quantity < 0:
        raise ValidationError("Quantity cannot be negative")

    entry = None
    try:
        item = get_item_for_update(db, item_id)
        old_values = sqlalchemy_to_dict(item)

        for key, value in update_data.items():
            setattr(item, key, value)
        # min_quantity may have moved even when quantity did not
        item.status = derive_status(item.quantity, item.min_quantity)
        if actor:
            item.updated_by = actor

        if new_quantity is not None and new_quantity != item.quantity:
            change_type = ChangeType.RESTOCK if new_quantity > item.quantity else ChangeType.ADJUSTMENT
            history_notes = notes or "Manual update"
            change = adjust_quantity(db, item_id, new_quantity - item.quantity, change_type, history_notes, actor)
            entry = stock_history.record(
                db,
                item_id,
                change_type,
                change.quantity_before,
                change.effective_delta,
                change.quantity_after,
                history_notes,
                actor,
            )

        db.commit()
    except ItemNotFound:
        db.rollback()
        raise
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception(f"Update of item {item_id} rolled back: {e}")
        raise TransactionFailure(f"Update of item {item_id} was rolled back", cause=e) from e

    db.refresh(item)
    changed = {
        key: (old_values.get(key), value)
        for key, value in sqlalchemy_to_dict(item).items()
        if old_values.get(key) != value and key not in ("updated_at", "last_restocked")
    }
    logger.info(f"Item {item_id} updated by {actor or 'unknown'}: {changed}")
    return item, entry

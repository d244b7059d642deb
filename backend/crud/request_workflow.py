"""
Request status transitions.

    pending -> approved | rejected -> completed

Approving deducts every line's quantity from stock and appends a `request`
history entry per line. All line updates and the request's own status change
run in one transaction: either all of it is committed or none of it is.
"""
import logging
from typing import Optional

from sqlalchemy.orm import Session

from crud import stock_history, stock_ledger
from exceptions import RequestNotFound, RequestLocked, TransactionFailure
from models.requests import Request, RequestStatus
from models.stock_history import ChangeType
from utils.time_utils import now

logger = logging.getLogger(__name__)


def _deduct_request_stock(db: Session, db_request: Request, actor: Optional[str]):
    note = f"Approved request {db_request.id}"
    for line in db_request.items:
        change = stock_ledger.adjust_quantity(db, line.item_id, -line.quantity, ChangeType.REQUEST, note, actor)
        # The entry keeps the nominal requested amount as its change, even when
        # quantity_after was floored at 0, so before + change != after is
        # possible for over-requested lines.
        stock_history.record(
            db,
            line.item_id,
            ChangeType.REQUEST,
            change.quantity_before,
            -line.quantity,
            change.quantity_after,
            note,
            actor,
        )
        line.stock_before = change.quantity_before
        line.stock_after = change.quantity_after
        db.add(line)
    db.flush()


def set_request_status(db: Session, request_id: str, new_status, actor: Optional[str] = None) -> Request:
    new_status = RequestStatus(new_status)
    try:
        db_request = db.query(Request).filter(Request.id == request_id).with_for_update().first()
        if db_request is None:
            raise RequestNotFound(request_id)

        old_status = db_request.status
        if old_status == RequestStatus.COMPLETED and new_status != RequestStatus.COMPLETED:
            raise RequestLocked(request_id, old_status.value)

        # Re-approving must never deduct twice
        if new_status == RequestStatus.APPROVED and old_status != RequestStatus.APPROVED:
            _deduct_request_stock(db, db_request, actor)

        db_request.status = new_status
        db_request.updated_at = now()
        if actor:
            db_request.updated_by = actor
        db.commit()
    except (RequestNotFound, RequestLocked) as e:
        db.rollback()
        logger.warning(f"Status change of request {request_id} to {new_status.value} refused: {e}")
        raise
    except Exception as e:
        db.rollback()
        logger.exception(f"Status change of request {request_id} to {new_status.value} rolled back: {e}")
        raise TransactionFailure(f"Status change of request {request_id} was rolled back", cause=e) from e

    db.refresh(db_request)
    logger.info(f"Request {request_id} moved {old_status.value} -> {new_status.value} by {actor or 'unknown'}")
    return db_request

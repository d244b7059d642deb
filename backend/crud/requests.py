import logging
import os

from dotenv import load_dotenv
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload, selectinload

from exceptions import RequestNotFound, ValidationError, TransactionFailure
from models.items import Item
from models.request_items import RequestItem
from models.requests import Request, RequestStatus, RequestPriority
from models.users import User
from schemas.requests import RequestCreate

load_dotenv()

logger = logging.getLogger(__name__)

RECENT_REQUESTS_LIMIT = int(os.getenv("RECENT_REQUESTS_LIMIT", "200"))


def _request_query(db: Session):
    return db.query(Request).options(
        joinedload(Request.requester),
        selectinload(Request.items).joinedload(RequestItem.item),
    )


def _validate_new_request(db: Session, request: RequestCreate):
    if not request.project_name or not request.items:
        raise ValidationError("Missing required fields: project_name and at least one item are required")

    for index, line in enumerate(request.items, start=1):
        if line.item_id is None or line.quantity is None:
            raise ValidationError(f"Line {index} needs both item_id and quantity")
        if line.quantity <= 0:
            raise ValidationError(f"Line {index} quantity must be greater than 0")

    item_ids = {line.item_id for line in request.items}
    found = {
        row.id
        for row in db.query(Item.id).filter(Item.id.in_(item_ids), Item.is_active.is_(True)).all()
    }
    missing = sorted(item_ids - found)
    if missing:
        raise ValidationError(f"Items not found: {', '.join(str(i) for i in missing)}")

    if request.requester_id:
        requester = db.query(User.id).filter(User.id == request.requester_id).first()
        if requester is None:
            raise ValidationError(f"Requester {request.requester_id} not found")


def create_request(db: Session, request: RequestCreate) -> Request:
    """Create a pending request and all of its lines in one transaction."""
    _validate_new_request(db, request)

    db_request = Request(
        project_name=request.project_name,
        requester_id=request.requester_id,
        reason=request.reason or "",
        priority=request.priority or RequestPriority.MEDIUM,
        due_date=request.due_date,
        status=RequestStatus.PENDING,
        created_by=request.requester_id,
    )
    db_request.items = [RequestItem(item_id=line.item_id, quantity=line.quantity) for line in request.items]

    try:
        db.add(db_request)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception(f"Creating request for project '{request.project_name}' rolled back: {e}")
        raise TransactionFailure("Request could not be created", cause=e) from e

    db.refresh(db_request)
    logger.info(
        f"Request {db_request.id} created for project '{db_request.project_name}' "
        f"with {len(db_request.items)} line(s) by {request.requester_id or 'unknown'}"
    )
    return db_request


def get_request(db: Session, request_id: str) -> Request:
    db_request = _request_query(db).filter(Request.id == request_id).first()
    if db_request is None:
        raise RequestNotFound(request_id)
    return db_request


def get_requests_by_requester(db: Session, requester_id: str):
    return (
        _request_query(db)
        .filter(Request.requester_id == requester_id)
        .order_by(Request.created_at.desc())
        .all()
    )


def get_recent_requests(db: Session, limit: int = RECENT_REQUESTS_LIMIT):
    return _request_query(db).order_by(Request.created_at.desc()).limit(limit).all()


def delete_request(db: Session, request_id: str):
    """Hard delete; the lines go with it."""
    db_request = db.query(Request).filter(Request.id == request_id).first()
    if db_request is None:
        raise RequestNotFound(request_id)
    try:
        db.delete(db_request)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception(f"Deleting request {request_id} rolled back: {e}")
        raise TransactionFailure(f"Request {request_id} could not be deleted", cause=e) from e
    logger.info(f"Request {request_id} deleted")
    return True

from datetime import timedelta

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from models.categories import Category
from models.items import Item
from models.request_items import RequestItem
from models.requests import Request, RequestStatus
from models.users import User, UserRole
from utils.time_utils import now

TOP_ITEMS_LIMIT = 5
ACTIVITY_LIMIT = 10


def _counts_by(db: Session, column, enum_cls, *filters):
    counts = {member.value: 0 for member in enum_cls}
    rows = db.query(column, func.count()).filter(*filters).group_by(column).all()
    for value, count in rows:
        counts[value.value] = count
    return counts


def _top_requested_items(db: Session, *filters):
    total = func.sum(RequestItem.quantity).label("total_requested")
    rows = (
        db.query(Item.name, Item.category, total)
        .join(RequestItem, RequestItem.item_id == Item.id)
        .join(Request, Request.id == RequestItem.request_id)
        .filter(*filters)
        .group_by(Item.id, Item.name, Item.category)
        .order_by(total.desc(), Item.name)
        .limit(TOP_ITEMS_LIMIT)
        .all()
    )
    return [
        {"name": name, "category": category, "total_requested": int(total_requested or 0)}
        for name, category, total_requested in rows
    ]


def _recent_activity(db: Session, *filters):
    requests = (
        db.query(Request)
        .options(joinedload(Request.requester))
        .filter(*filters)
        .order_by(Request.created_at.desc())
        .limit(ACTIVITY_LIMIT)
        .all()
    )
    return [
        {
            "id": request.id,
            "type": "request_created",
            "description": f"Request for {request.project_name}",
            "timestamp": request.created_at,
            "user": request.requester_name,
            "status": request.status.value,
        }
        for request in requests
    ]


def get_dashboard_stats(db: Session):
    week_ago = now() - timedelta(days=7)
    active = Item.is_active.is_(True)

    return {
        "total_users": db.query(func.count(User.id)).scalar(),
        "users_by_role": _counts_by(db, User.role, UserRole),
        "total_items": db.query(func.count(Item.id)).filter(active).scalar(),
        "total_quantity": int(db.query(func.coalesce(func.sum(Item.quantity), 0)).filter(active).scalar()),
        "low_stock_items": db.query(func.count(Item.id))
        .filter(active, Item.quantity <= Item.min_quantity)
        .scalar(),
        "total_categories": db.query(func.count(func.distinct(Item.category)))
        .filter(active, Item.category.isnot(None))
        .scalar(),
        "total_requests": db.query(func.count(Request.id)).scalar(),
        "requests_by_status": _counts_by(db, Request.status, RequestStatus),
        "recent_requests": db.query(func.count(Request.id)).filter(Request.created_at >= week_ago).scalar(),
        "top_requested_items": _top_requested_items(db),
        "recent_activity": _recent_activity(db),
    }


def get_user_dashboard_stats(db: Session, user_id: str):
    month_ago = now() - timedelta(days=30)
    mine = Request.requester_id == user_id

    my_requests = _counts_by(db, Request.status, RequestStatus, mine)
    my_requests["total"] = sum(my_requests.values())

    return {
        "my_requests": my_requests,
        "available_items": db.query(func.count(Item.id))
        .filter(Item.is_active.is_(True), Item.quantity > 0)
        .scalar(),
        "available_categories": db.query(func.count(Category.id)).scalar(),
        "recent_requests": db.query(func.count(Request.id))
        .filter(mine, Request.created_at >= month_ago)
        .scalar(),
        "my_top_requested_items": _top_requested_items(db, mine),
        "my_recent_activity": _recent_activity(db, mine),
    }

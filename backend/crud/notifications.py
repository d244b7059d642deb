from sqlalchemy import func
from sqlalchemy.orm import Session

from exceptions import NotificationNotFound
from models.notifications import Notification
from schemas.notifications import NotificationCreate


def get_user_notifications(db: Session, user_id: str, limit: int = 50):
    return (
        db.query(Notification)
        .filter(Notification.user_id == user_id)
        .order_by(Notification.created_at.desc(), Notification.id.desc())
        .limit(limit)
        .all()
    )


def get_unread_count(db: Session, user_id: str) -> int:
    return (
        db.query(func.count(Notification.id))
        .filter(Notification.user_id == user_id, Notification.is_read.is_(False))
        .scalar()
    )


def create_notification(db: Session, notification: NotificationCreate) -> Notification:
    db_notification = Notification(**notification.model_dump(), is_read=False)
    db.add(db_notification)
    db.commit()
    db.refresh(db_notification)
    return db_notification


def mark_read(db: Session, notification_id: int) -> Notification:
    db_notification = db.query(Notification).filter(Notification.id == notification_id).first()
    if db_notification is None:
        raise NotificationNotFound(notification_id)
    db_notification.is_read = True
    db.commit()
    return db_notification


def mark_all_read(db: Session, user_id: str) -> int:
    updated = (
        db.query(Notification)
        .filter(Notification.user_id == user_id, Notification.is_read.is_(False))
        .update({Notification.is_read: True}, synchronize_session=False)
    )
    db.commit()
    return updated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List
import logging

from database import get_db
from crud import notifications as crud_notifications
from exceptions import NotFoundError
from schemas.notifications import Notification, NotificationCreate, UnreadCount
from schemas.common import SuccessResponse

router = APIRouter(prefix="/notifications", tags=["Notifications"])
logger = logging.getLogger("notifications")


@router.get("/user/{user_id}", response_model=List[Notification])
def read_user_notifications(user_id: str, db: Session = Depends(get_db)):
    return crud_notifications.get_user_notifications(db, user_id)


@router.get("/user/{user_id}/unread-count", response_model=UnreadCount)
def read_unread_count(user_id: str, db: Session = Depends(get_db)):
    return {"count": crud_notifications.get_unread_count(db, user_id)}


@router.patch("/user/{user_id}/mark-all-read", response_model=SuccessResponse)
def mark_all_notifications_read(user_id: str, db: Session = Depends(get_db)):
    updated = crud_notifications.mark_all_read(db, user_id)
    return {"success": True, "message": f"{updated} notification(s) marked as read"}


@router.patch("/{notification_id}/read", response_model=SuccessResponse)
def mark_notification_read(notification_id: int, db: Session = Depends(get_db)):
    try:
        crud_notifications.mark_read(db, notification_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"success": True}


@router.post("", response_model=Notification, status_code=status.HTTP_201_CREATED)
def create_notification(notification: NotificationCreate, db: Session = Depends(get_db)):
    return crud_notifications.create_notification(db, notification)

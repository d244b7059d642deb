from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
import logging

from database import get_db
from crud import dashboard as crud_dashboard
from schemas.dashboard import DashboardStats, UserDashboardStats

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])
logger = logging.getLogger("dashboard")


@router.get("/stats", response_model=DashboardStats)
def read_dashboard_stats(db: Session = Depends(get_db)):
    try:
        return crud_dashboard.get_dashboard_stats(db)
    except Exception as e:
        logger.exception(f"Error building dashboard stats: {e}")
        raise HTTPException(status_code=500, detail="Internal server error while building dashboard stats.")


@router.get("/user/{user_id}", response_model=UserDashboardStats)
def read_user_dashboard_stats(user_id: str, db: Session = Depends(get_db)):
    try:
        return crud_dashboard.get_user_dashboard_stats(db, user_id)
    except Exception as e:
        logger.exception(f"Error building dashboard stats for user {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Internal server error while building dashboard stats.")

from pydantic import BaseModel
from typing import Optional, List, Dict
from datetime import datetime


class TopRequestedItem(BaseModel):
    name: str
    category: Optional[str] = None
    total_requested: int


class ActivityEntry(BaseModel):
    id: str
    type: str = "request_created"
    description: str
    timestamp: Optional[datetime] = None
    user: Optional[str] = None
    status: Optional[str] = None


class DashboardStats(BaseModel):
    total_users: int
    users_by_role: Dict[str, int]
    total_items: int
    total_quantity: int
    low_stock_items: int
    total_categories: int
    total_requests: int
    requests_by_status: Dict[str, int]
    recent_requests: int
    top_requested_items: List[TopRequestedItem]
    recent_activity: List[ActivityEntry]


class UserDashboardStats(BaseModel):
    my_requests: Dict[str, int]
    available_items: int
    available_categories: int
    recent_requests: int
    my_top_requested_items: List[TopRequestedItem]
    my_recent_activity: List[ActivityEntry]

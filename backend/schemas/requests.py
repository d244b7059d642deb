from pydantic import BaseModel
from typing import Optional, List
from datetime import date, datetime
from models.requests import RequestStatus, RequestPriority


class RequestLineCreate(BaseModel):
    # Optional so that missing values surface as a 400 from the repository
    item_id: Optional[int] = None
    quantity: Optional[int] = None


class RequestCreate(BaseModel):
    project_name: Optional[str] = None
    requester_id: Optional[str] = None
    reason: Optional[str] = None
    priority: Optional[RequestPriority] = RequestPriority.MEDIUM
    due_date: Optional[date] = None
    items: List[RequestLineCreate] = []


class RequestStatusUpdate(BaseModel):
    status: RequestStatus
    approved_by: Optional[str] = None


class RequestLine(BaseModel):
    id: int
    item_id: int
    quantity: int
    name: Optional[str] = None
    category: Optional[str] = None
    unit: Optional[str] = None
    stock_before: Optional[int] = None
    stock_after: Optional[int] = None

    class Config:
        from_attributes = True


class Request(BaseModel):
    id: str
    project_name: str
    requester_id: Optional[str] = None
    requester_name: Optional[str] = None
    requester_email: Optional[str] = None
    reason: Optional[str] = None
    priority: RequestPriority
    due_date: Optional[date] = None
    status: RequestStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    items: List[RequestLine] = []

    class Config:
        from_attributes = True


class RequestCreated(BaseModel):
    success: bool = True
    id: str

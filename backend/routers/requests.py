from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session
from typing import List
import logging

from database import get_db
from crud import requests as crud_requests
from crud import request_workflow
from exceptions import NotFoundError, ValidationError, TransactionFailure
from schemas.requests import Request, RequestCreate, RequestCreated, RequestStatusUpdate
from schemas.common import SuccessResponse
from utils.excel import XLSX_MEDIA_TYPE, requests_workbook
from utils.time_utils import now

router = APIRouter(prefix="/requests", tags=["Requests"])
logger = logging.getLogger("requests")


@router.post("", response_model=RequestCreated, status_code=status.HTTP_201_CREATED)
def create_request(request: RequestCreate, db: Session = Depends(get_db)):
    try:
        db_request = crud_requests.create_request(db, request)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except TransactionFailure as e:
        raise HTTPException(status_code=500, detail=str(e))
    return {"success": True, "id": db_request.id}


@router.get("", response_model=List[Request])
def read_requests(db: Session = Depends(get_db)):
    """Most recent requests, newest first."""
    return crud_requests.get_recent_requests(db)


@router.get("/export")
def export_requests(db: Session = Depends(get_db)):
    excel_file = requests_workbook(crud_requests.get_recent_requests(db))
    filename = f"requests_{now().strftime('%Y-%m-%d')}.xlsx"
    return StreamingResponse(
        excel_file,
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )


@router.get("/user/{user_id}", response_model=List[Request])
def read_user_requests(user_id: str, db: Session = Depends(get_db)):
    return crud_requests.get_requests_by_requester(db, user_id)


@router.get("/{request_id}", response_model=Request)
def read_request(request_id: str, db: Session = Depends(get_db)):
    try:
        return crud_requests.get_request(db, request_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.patch("/{request_id}/status", response_model=SuccessResponse)
def update_request_status(request_id: str, payload: RequestStatusUpdate, db: Session = Depends(get_db)):
    """Move a request to a new status. Approval deducts stock for every line."""
    try:
        request_workflow.set_request_status(db, request_id, payload.status, actor=payload.approved_by)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except TransactionFailure as e:
        raise HTTPException(status_code=500, detail=str(e))
    return {"success": True}


@router.delete("/{request_id}", response_model=SuccessResponse)
def delete_request(request_id: str, db: Session = Depends(get_db)):
    try:
        crud_requests.delete_request(db, request_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except TransactionFailure as e:
        raise HTTPException(status_code=500, detail=str(e))
    return {"success": True, "message": "Request deleted successfully"}

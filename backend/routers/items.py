from fastapi import APIRouter, Depends, HTTPException, status, UploadFile, File, Query
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session
from typing import List, Optional
import logging

from database import get_db
from crud import items as crud_items
from crud import stock_ledger
from exceptions import NotFoundError, ValidationError, TransactionFailure
from schemas.items import Item, ItemCreate, ItemUpdate, StockAdjustment, ItemImportResult
from schemas.common import SuccessResponse
from utils.excel import XLSX_MEDIA_TYPE, items_workbook, inventory_template, read_items_workbook
from utils.time_utils import now

router = APIRouter(prefix="/items", tags=["Items"])
logger = logging.getLogger("items")


@router.get("", response_model=List[Item])
def read_items(category: Optional[str] = None, db: Session = Depends(get_db)):
    """Active items, optionally filtered by category."""
    return crud_items.get_items(db, category=category)


@router.get("/export")
def export_items(db: Session = Depends(get_db)):
    excel_file = items_workbook(crud_items.get_items(db))
    filename = f"inventory_{now().strftime('%Y-%m-%d')}.xlsx"
    return StreamingResponse(
        excel_file,
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )


@router.get("/template")
def download_template():
    return StreamingResponse(
        inventory_template(),
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": "attachment; filename=inventory_template.xlsx"},
    )


@router.post("/import", response_model=ItemImportResult)
async def import_items(
    file: UploadFile = File(...),
    user_id: Optional[str] = Query(None, alias="userId"),
    db: Session = Depends(get_db),
):
    if not file.filename or not file.filename.lower().endswith((".xlsx", ".xls")):
        raise HTTPException(status_code=400, detail="Invalid file type. Please upload an Excel file.")
    content = await file.read()
    try:
        rows = read_items_workbook(content)
    except Exception as e:
        logger.exception(f"Could not read uploaded workbook {file.filename}: {e}")
        raise HTTPException(status_code=400, detail=f"Could not read Excel file: {e}")
    try:
        return crud_items.import_items(db, rows, actor=user_id)
    except TransactionFailure as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/{item_id}", response_model=Item)
def read_item(item_id: int, db: Session = Depends(get_db)):
    try:
        return crud_items.get_item(db, item_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("", response_model=Item, status_code=status.HTTP_201_CREATED)
def create_item(item: ItemCreate, db: Session = Depends(get_db)):
    try:
        return crud_items.create_item(db, item)
    except TransactionFailure as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.put("/{item_id}", response_model=Item)
def update_item(item_id: int, item: ItemUpdate, db: Session = Depends(get_db)):
    """Update item fields. `quantity` is the new absolute stock level."""
    update_data = item.model_dump(exclude_unset=True, exclude={"notes", "history_notes", "user_id"})
    notes = item.history_notes or item.notes
    try:
        db_item, _ = stock_ledger.set_fields(db, item_id, update_data, notes=notes, actor=item.user_id)
        return db_item
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except TransactionFailure as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/{item_id}/adjust", response_model=Item)
def adjust_item(item_id: int, adjustment: StockAdjustment, db: Session = Depends(get_db)):
    """Apply a signed stock delta; the result never drops below zero."""
    try:
        return crud_items.adjust_item_stock(db, item_id, adjustment)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except TransactionFailure as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.delete("/{item_id}", response_model=SuccessResponse)
def delete_item(item_id: int, user_id: Optional[str] = Query(None, alias="userId"), db: Session = Depends(get_db)):
    try:
        crud_items.soft_delete_item(db, item_id, actor=user_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"success": True, "message": "Item deleted successfully"}

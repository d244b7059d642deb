from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
import logging

from database import get_db
from crud import categories as crud_categories
from exceptions import NotFoundError, ValidationError
from schemas.categories import Category, CategoryCreate, CategoryUpdate, CategoryList
from schemas.common import SuccessResponse

router = APIRouter(prefix="/categories", tags=["Categories"])
logger = logging.getLogger("categories")


@router.get("", response_model=CategoryList)
def read_categories(db: Session = Depends(get_db)):
    return {"success": True, "categories": crud_categories.get_categories(db)}


@router.post("", response_model=Category, status_code=status.HTTP_201_CREATED)
def create_category(category: CategoryCreate, db: Session = Depends(get_db)):
    try:
        db_category = crud_categories.create_category(db, category)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    logger.info(f"Category '{db_category.name}' created")
    return db_category


@router.put("/{category_id}", response_model=Category)
def update_category(category_id: int, category: CategoryUpdate, db: Session = Depends(get_db)):
    try:
        return crud_categories.update_category(db, category_id, category)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.delete("/{category_id}", response_model=SuccessResponse)
def delete_category(category_id: int, db: Session = Depends(get_db)):
    try:
        crud_categories.delete_category(db, category_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"success": True, "message": "Category deleted successfully"}

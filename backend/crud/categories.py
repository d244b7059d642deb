import logging

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from exceptions import CategoryNotFound, ValidationError
from models.categories import Category
from models.items import Item
from schemas.categories import CategoryCreate, CategoryUpdate

logger = logging.getLogger(__name__)


def sync_categories_from_items(db: Session) -> int:
    """Insert categories used by active items but missing from the table (case-insensitive)."""
    known = {name.lower() for (name,) in db.query(Category.name).all()}
    used = (
        db.query(Item.category)
        .filter(Item.is_active.is_(True), Item.category.isnot(None), Item.category != "")
        .distinct()
        .all()
    )
    added = 0
    for (name,) in used:
        if name.lower() in known:
            continue
        db.add(Category(name=name, description=f"{name} items"))
        known.add(name.lower())
        added += 1
    if added:
        db.commit()
        logger.info(f"Synced {added} missing categories from items")
    return added


def get_categories(db: Session):
    sync_categories_from_items(db)
    return db.query(Category).order_by(Category.name).all()


def get_category(db: Session, category_id: int) -> Category:
    db_category = db.query(Category).filter(Category.id == category_id).first()
    if db_category is None:
        raise CategoryNotFound(category_id)
    return db_category


def create_category(db: Session, category: CategoryCreate) -> Category:
    if not category.name:
        raise ValidationError("Name required")
    db_category = Category(name=category.name, description=category.description)
    db.add(db_category)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ValidationError(f"Category '{category.name}' already exists")
    db.refresh(db_category)
    return db_category


def update_category(db: Session, category_id: int, category: CategoryUpdate) -> Category:
    db_category = get_category(db, category_id)
    for key, value in category.model_dump(exclude_unset=True).items():
        setattr(db_category, key, value)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ValidationError(f"Category '{category.name}' already exists")
    db.refresh(db_category)
    return db_category


def delete_category(db: Session, category_id: int):
    db_category = get_category(db, category_id)
    in_use = (
        db.query(func.count(Item.id))
        .filter(Item.category == db_category.name, Item.is_active.is_(True))
        .scalar()
    )
    if in_use:
        raise ValidationError(
            f"Cannot delete: {in_use} active item(s) still use category \"{db_category.name}\". "
            "Change their category first."
        )
    db.delete(db_category)
    db.commit()
    logger.info(f"Category '{db_category.name}' (ID: {category_id}) deleted")
    return True

import logging
from typing import Optional

from sqlalchemy.orm import Session

from exceptions import UserNotFound, ValidationError
from models.users import User, UserRole
from schemas.users import UserCreate
from utils.auth_utils import hash_password, verify_password

logger = logging.getLogger(__name__)


def get_users(db: Session):
    return db.query(User).order_by(User.name).all()


def get_user(db: Session, user_id: str) -> User:
    db_user = db.query(User).filter(User.id == user_id).first()
    if db_user is None:
        raise UserNotFound(user_id)
    return db_user


def get_user_by_email(db: Session, email: str) -> User:
    db_user = db.query(User).filter(User.email == email).first()
    if db_user is None:
        raise UserNotFound(email)
    return db_user


def create_user(db: Session, user: UserCreate) -> User:
    if not user.name or not user.email or not user.password:
        raise ValidationError("Missing required fields: name, email and password are required")
    if db.query(User.id).filter(User.email == user.email).first():
        raise ValidationError("Email already registered")

    db_user = User(
        name=user.name,
        email=user.email,
        password=hash_password(user.password),
        role=user.role or UserRole.USER,
    )
    db.add(db_user)
    db.commit()
    db.refresh(db_user)
    logger.info(f"User {db_user.email} registered with role {db_user.role.value}")
    return db_user


def authenticate(db: Session, email: Optional[str], password: Optional[str]) -> Optional[User]:
    """Return the user when the credentials match, otherwise None."""
    if not email or not password:
        raise ValidationError("Email and password are required")
    db_user = db.query(User).filter(User.email == email).first()
    if db_user is None or not verify_password(password, db_user.password):
        logger.warning(f"Failed login for {email}")
        return None
    return db_user

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List
import logging

from database import get_db
from crud import users as crud_users
from exceptions import NotFoundError, ValidationError
from schemas.users import User, UserCreate, UserCreated, LoginRequest, LoginResponse

router = APIRouter(tags=["Users"])
logger = logging.getLogger("users")


@router.get("/users", response_model=List[User])
def read_users(db: Session = Depends(get_db)):
    return crud_users.get_users(db)


@router.post("/users", response_model=UserCreated, status_code=status.HTTP_201_CREATED)
def create_user(user: UserCreate, db: Session = Depends(get_db)):
    try:
        db_user = crud_users.create_user(db, user)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"success": True, "user": db_user}


@router.get("/users/email/{email}", response_model=User)
def read_user_by_email(email: str, db: Session = Depends(get_db)):
    try:
        return crud_users.get_user_by_email(db, email)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/auth/login", response_model=LoginResponse)
def login(credentials: LoginRequest, db: Session = Depends(get_db)):
    try:
        db_user = crud_users.authenticate(db, credentials.email, credentials.password)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if db_user is None:
        raise HTTPException(status_code=401, detail="Invalid credentials")
    logger.info(f"User {db_user.email} logged in")
    return {"success": True, "message": "Login successful", "user": db_user}

from pydantic import BaseModel
from typing import Optional
from models.users import UserRole


class UserCreate(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    role: Optional[UserRole] = UserRole.USER


class User(BaseModel):
    id: str
    name: str
    email: str
    role: UserRole

    class Config:
        from_attributes = True


class SessionUser(BaseModel):
    id: str
    username: str
    email: str
    role: UserRole

    class Config:
        from_attributes = True


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class LoginResponse(BaseModel):
    success: bool = True
    message: str = "Login successful"
    user: SessionUser


class UserCreated(BaseModel):
    success: bool = True
    user: SessionUser

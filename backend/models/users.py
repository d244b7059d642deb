from database import Base
from sqlalchemy import Column, String, Enum
from sqlalchemy.orm import relationship
import enum
import uuid
from models.audit_mixin import CreatedAtMixin


class UserRole(str, enum.Enum):
    ADMIN = "admin"
    MANAGER = "manager"
    USER = "user"


class User(Base, CreatedAtMixin):
    __tablename__ = 'users'

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password = Column(String(255), nullable=False) # hash, or legacy plaintext
    role = Column(
        Enum(UserRole, name="user_role", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=UserRole.USER,
    )

    requests = relationship("Request", back_populates="requester")
    notifications = relationship("Notification", back_populates="user", cascade="all, delete-orphan")

    @property
    def username(self):
        return self.name

    def __repr__(self):
        return f"<User(id={self.id}, email={self.email}, role={self.role})>"

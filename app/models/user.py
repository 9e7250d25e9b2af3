#app/models/user.py
from datetime import datetime
from sqlalchemy import (
    Column, Integer, String, Boolean, DateTime, func
)
from app.models.base import Base

class User(Base):
    """
    User: named account. Anonymous sessions have no row here.
    """
    __tablename__ = "users"

    id: int = Column(Integer, primary_key=True, index=True)
    username: str = Column(String(50), unique=True, nullable=False, index=True)
    email: str = Column(String(255), unique=True, nullable=False, index=True)
    full_name: str = Column(String(128), nullable=True, doc="Display name")
    password_hash: str = Column(String(128), nullable=False, doc="bcrypt hash, never the raw password")
    is_active: bool = Column(Boolean, default=True, nullable=False)
    created_at: datetime = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    last_login_at: datetime = Column(DateTime(timezone=True), nullable=True)

    def __repr__(self):
        return f"<User(id={self.id}, username='{self.username}', email='{self.email}')>"

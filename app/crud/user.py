#app/crud/user.py
from datetime import datetime, timezone
from typing import Optional
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import UserValidationError, WriteFailure
from app.core.security import hash_password, verify_password
from app.models.user import User

logger = logging.getLogger("ProgressBoard.Users")

def get_user(db: Session, user_id: int) -> Optional[User]:
    return db.query(User).filter(User.id == user_id).first()

def get_user_by_username(db: Session, username: str) -> Optional[User]:
    return db.query(User).filter(User.username == username).first()

def create_user(db: Session, data: dict) -> User:
    """
    Creates a named user; username and email must be unique.
    """
    username = (data.get("username") or "").strip()
    email = (data.get("email") or "").strip()
    password = data.get("password") or ""
    if not username or not email or not password:
        raise UserValidationError("Username, email and password are required.")
    if get_user_by_username(db, username):
        raise UserValidationError(f"User '{username}' already exists.")
    if db.query(User).filter(User.email == email).first():
        raise UserValidationError(f"Email '{email}' is already registered.")

    user = User(
        username=username,
        email=email,
        full_name=data.get("full_name"),
        password_hash=hash_password(password),
        is_active=data.get("is_active", True),
    )
    db.add(user)
    try:
        db.commit()
        db.refresh(user)
        logger.info(f"Created user '{user.username}' (ID: {user.id})")
        return user
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to create user '{username}': {e}")
        raise WriteFailure("Database error while creating user.")

def authenticate_user(db: Session, username: str, password: str) -> Optional[User]:
    user = get_user_by_username(db, username)
    if not user or not verify_password(password, user.password_hash):
        return None
    return user

def set_last_login(db: Session, user_id: int) -> None:
    user = get_user(db, user_id)
    if not user:
        return
    user.last_login_at = datetime.now(timezone.utc)
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.warning(f"Could not record last login for user {user_id}: {e}")

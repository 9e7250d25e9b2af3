# app/dependencies.py

from typing import Callable, Generator
from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.orm import Session
from app.core.events import ChangeFeed
from app.core.exceptions import AuthFailure
from app.core.security import oauth2_scheme, verify_access_token
from app.core.settings import settings
from app.database import SessionLocal
from app.crud.user import get_user_by_username
from app.schemas.auth import Identity
from app.services.export_sink import ExportSink, FileExportSink

def get_db() -> Generator[Session, None, None]:
    """
    Yields a database session and always closes it afterwards.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def get_session_factory() -> Callable[[], Session]:
    """
    Session factory for long-lived streams, which open a short session per snapshot.
    """
    return SessionLocal

def get_current_identity(
    token: str = Depends(oauth2_scheme),
    db: Session = Depends(get_db)
) -> Identity:
    """
    Resolves the bearer token to an Identity. Anonymous tokens need no user row.
    """
    credentials_exception = AuthFailure("Could not validate credentials")
    payload = verify_access_token(token)
    if payload is None:
        raise credentials_exception
    subject: str | None = payload.get("sub")
    if not subject:
        raise credentials_exception

    if payload.get("anon"):
        return Identity(user_id=subject, display_name=None, is_anonymous=True)

    user = get_user_by_username(db, username=subject)
    if user is None:
        raise credentials_exception
    if not user.is_active:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Inactive user")
    return Identity(
        user_id=str(user.id),
        display_name=user.full_name or user.username,
        is_anonymous=False,
    )

def get_change_feed(request: Request) -> ChangeFeed:
    return request.app.state.change_feed

def get_export_sink() -> ExportSink:
    return FileExportSink(settings.EXPORT_DIR)

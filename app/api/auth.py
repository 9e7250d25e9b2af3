#app/api/auth.py
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session
from datetime import timedelta
import logging

from app.schemas.auth import Token, Identity
from app.crud.user import authenticate_user, set_last_login
from app.core.security import create_access_token, create_anonymous_token
from app.core.settings import settings
from app.dependencies import get_db, get_current_identity

router = APIRouter(prefix="/auth", tags=["Auth"])
logger = logging.getLogger("ProgressBoard.Auth")

ACCESS_TOKEN_EXPIRE_MINUTES = settings.ACCESS_TOKEN_EXPIRE_MINUTES
ANONYMOUS_TOKEN_EXPIRE_MINUTES = settings.ANONYMOUS_TOKEN_EXPIRE_MINUTES

@router.post("/login", response_model=Token, status_code=status.HTTP_200_OK)
def login(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db),
):
    """
    Password login for a named user.
    """
    user = authenticate_user(db, form_data.username, form_data.password)
    if not user or not user.is_active:
        logger.warning(f"Rejected login for '{form_data.username}'")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Incorrect username or password")

    token, _ = create_access_token(
        data={"sub": user.username, "user_id": user.id},
        expires_delta=timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES),
    )
    set_last_login(db, user.id)
    logger.info(f"User '{user.username}' logged in")
    return Token(access_token=token, token_type="bearer", expires_in=ACCESS_TOKEN_EXPIRE_MINUTES * 60)

@router.post("/anonymous", response_model=Token, status_code=status.HTTP_200_OK)
def anonymous_session():
    """
    Start an anonymous session. It can edit projects but never seeds demo data.
    """
    token, _, subject = create_anonymous_token(timedelta(minutes=ANONYMOUS_TOKEN_EXPIRE_MINUTES))
    logger.info(f"Started anonymous session {subject}")
    return Token(access_token=token, token_type="bearer", expires_in=ANONYMOUS_TOKEN_EXPIRE_MINUTES * 60)

@router.get("/me", response_model=Identity)
def read_identity(identity: Identity = Depends(get_current_identity)):
    return identity

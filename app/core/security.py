# app/core/security.py

import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional, Any, Dict

import bcrypt
from jose import JWTError, jwt
from fastapi.security import OAuth2PasswordBearer

from app.core.settings import settings

SECRET_KEY = settings.SECRET_KEY
ALGORITHM = settings.JWT_ALGORITHM
ACCESS_TOKEN_EXPIRE_MINUTES = settings.ACCESS_TOKEN_EXPIRE_MINUTES
ANONYMOUS_TOKEN_EXPIRE_MINUTES = settings.ANONYMOUS_TOKEN_EXPIRE_MINUTES

def hash_password(plain_password: str) -> str:
    return bcrypt.hashpw(plain_password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")

def verify_password(plain_password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(plain_password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        return False

def create_access_token(
    data: dict,
    expires_delta: Optional[timedelta] = None
) -> tuple[str, datetime]:
    """
    Encodes an access token (JWT) and returns (token, expire_time).
    """
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode.update({"exp": expire, "type": "access"})
    encoded_jwt = jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)
    return encoded_jwt, expire

def create_anonymous_token(
    expires_delta: Optional[timedelta] = None
) -> tuple[str, datetime, str]:
    """
    Issues a token for an anonymous session with a fresh opaque subject.
    Returns (token, expire_time, subject).
    """
    subject = f"anon-{uuid.uuid4().hex}"
    token, expire = create_access_token(
        {"sub": subject, "anon": True},
        expires_delta or timedelta(minutes=ANONYMOUS_TOKEN_EXPIRE_MINUTES),
    )
    return token, expire, subject

def verify_access_token(token: str) -> Optional[Dict[str, Any]]:
    """
    Decodes and validates an access token; None when invalid or expired.
    """
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
        if payload.get("type") != "access":
            return None
        return payload
    except JWTError:
        return None

# FastAPI OAuth2 scheme (used with Depends)
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login")

#app/schemas/auth.py
from pydantic import BaseModel, Field
from typing import Optional

class Token(BaseModel):
    """
    Token: bearer access token.
    """
    access_token: str = Field(..., examples=["eyJhbGciOi..."])
    token_type: str = Field("bearer")
    expires_in: int = Field(..., description="Lifetime in seconds", examples=[3600])

class Identity(BaseModel):
    """
    Identity: who is acting: opaque id, optional display name, anonymous flag.
    """
    user_id: str = Field(..., examples=["12", "anon-3f9c0d2a"])
    display_name: Optional[str] = None
    is_anonymous: bool = False

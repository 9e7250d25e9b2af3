#app/schemas/user.py
from pydantic import BaseModel, Field, EmailStr, constr
from typing import Optional

class UserBase(BaseModel):
    """
    UserBase: shared user fields.
    """
    username: constr(min_length=3, max_length=50) = Field(..., examples=["site_lead"], description="Unique username")
    email: EmailStr = Field(..., examples=["lead@example.com"])
    full_name: Optional[str] = Field(None, examples=["Alex Chen"], description="Display name used in audit records")
    is_active: bool = Field(True)

class UserCreate(UserBase):
    """
    UserCreate: registration payload (password required).
    """
    password: constr(min_length=8) = Field(..., examples=["StrongPassw0rd!"])


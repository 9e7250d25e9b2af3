#app/schemas/response.py
from pydantic import BaseModel, Field
from typing import Any, Optional

class SuccessResponse(BaseModel):
    """
    SuccessResponse: generic result of an operation.
    """
    result: Any = Field(..., description="Operation result")
    detail: Optional[str] = Field(None, examples=["Operation successful"])

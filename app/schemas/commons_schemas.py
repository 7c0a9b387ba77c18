# app/schemas/commons_schemas.py
"""
Shared schemas
"""

from pydantic import BaseModel
from typing import Optional

# base response
class BaseResponse(BaseModel):
    status: str
    message: Optional[str] = None
    timestamp: Optional[str] = None

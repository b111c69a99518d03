"""
Common Pydantic schemas
"""

from typing import Any, List, Optional
from pydantic import BaseModel

class StandardResponse(BaseModel):
    """Standard API response"""
    success: bool
    message: str
    data: Optional[Any] = None
    warnings: List[str] = []

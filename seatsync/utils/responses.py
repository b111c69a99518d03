"""
Standardized response utilities
"""

from typing import Any, List, Optional
from fastapi import HTTPException, status
from fastapi.responses import JSONResponse

from seatsync.schemas.common import StandardResponse

def success_response(
    message: str,
    data: Any = None,
    warnings: Optional[List[str]] = None,
    status_code: int = 200
) -> JSONResponse:
    """Create standardized success response"""
    response = StandardResponse(
        success=True,
        message=message,
        data=data,
        warnings=warnings or []
    )
    return JSONResponse(
        content=response.model_dump(),
        status_code=status_code
    )

def not_found_error(resource: str = "Resource"):
    """Create not found error"""
    raise HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"{resource} not found"
    )

def conflict_error(message: str):
    """Create conflict error"""
    raise HTTPException(
        status_code=status.HTTP_409_CONFLICT,
        detail=message
    )

def not_ready_error():
    """Create error for requests arriving before the seating is loaded"""
    raise HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail="Seating is still loading. Please try again shortly."
    )

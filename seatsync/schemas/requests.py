"""
Request bodies for seating operations
"""

from typing import Optional
from pydantic import BaseModel, Field, field_validator

class _NameBody(BaseModel):
    name: str = Field(min_length=1, max_length=255)

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("name must not be blank")
        return value

class GuestCreate(_NameBody):
    """Schema for adding a guest to a table"""

class GuestRename(_NameBody):
    """Schema for renaming a guest"""

class TableUpdate(BaseModel):
    """Schema for updating a table's category and/or note"""
    category: Optional[str] = Field(default=None, max_length=100)
    note: Optional[str] = Field(default=None, max_length=500)

    @field_validator("category")
    @classmethod
    def strip_category(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        value = value.strip()
        if not value:
            raise ValueError("category must not be blank")
        return value

    @field_validator("note")
    @classmethod
    def strip_note(cls, value: Optional[str]) -> Optional[str]:
        return value.strip() if value is not None else None

class GuestMove(BaseModel):
    """Schema for moving a guest (and companions) to another table"""
    target_table_id: str = Field(min_length=1)

"""
Read-side seating schemas
"""

from typing import List, Optional
from pydantic import BaseModel

class SeatingInfo(BaseModel):
    """Where a guest sits and who sits with them"""
    guest_id: str
    guest_name: str
    table_id: str
    category: str
    seat_no: int
    is_extra_seat: bool
    checked_in: bool
    is_plus_one: bool
    parent_id: Optional[str] = None
    plus_one_count: int
    table_mates: List[dict]  # List of {id, name, seat_no, checked_in}

class TableOption(BaseModel):
    """A table a guest can be moved to"""
    id: str
    category: str
    guest_count: int
    capacity: int

"""
Pydantic schemas package
"""

from .common import *
from .requests import *
from .seating import *
from .summary import *

__all__ = [
    "StandardResponse",
    "GuestCreate",
    "GuestRename",
    "TableUpdate",
    "GuestMove",
    "Guest",
    "Table",
    "Seating",
    "SearchResult",
    "SeatingInfo",
    "TableOption",
]

"""
Seating snapshot schemas

These are the in-memory snapshot types and, dumped by alias, the exact shape
of the persisted record: ``{"tables": [{id, category, guests, note?}]}``.
"""

from typing import Any, Dict, Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field, model_validator

class Guest(BaseModel):
    """A seated guest; ``parent_id`` is set iff the guest is a plus-one"""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    name: str
    is_plus_one: bool = Field(default=False, alias="isPlusOne")
    is_checked_in: bool = Field(default=False, alias="isCheckedIn")
    parent_id: Optional[str] = Field(default=None, alias="parentId")

    @model_validator(mode="after")
    def check_parent(self) -> "Guest":
        if self.is_plus_one != (self.parent_id is not None):
            raise ValueError("parentId must be set exactly when isPlusOne is true")
        if self.parent_id == self.id:
            raise ValueError("a guest cannot be its own parent")
        return self

class Table(BaseModel):
    """A table and its guests in insertion (seat) order"""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    category: str
    guests: Tuple[Guest, ...] = ()
    note: Optional[str] = None

class Seating(BaseModel):
    """The complete snapshot of tables and guests"""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    tables: Tuple[Table, ...] = ()

    @model_validator(mode="after")
    def check_identities(self) -> "Seating":
        table_ids = [t.id for t in self.tables]
        if len(table_ids) != len(set(table_ids)):
            raise ValueError("table ids must be unique")

        guests: Dict[str, Guest] = {}
        for table in self.tables:
            for guest in table.guests:
                if guest.id in guests:
                    raise ValueError(f"guest id {guest.id!r} appears more than once")
                guests[guest.id] = guest

        # Companions hang off primary guests only, one level deep
        for guest in guests.values():
            if guest.parent_id is None:
                continue
            parent = guests.get(guest.parent_id)
            if parent is None or parent.is_plus_one:
                raise ValueError(f"guest {guest.id!r} has no primary guest {guest.parent_id!r}")
        return self

    def to_record(self) -> Dict[str, Any]:
        """Serialize to the persisted record shape"""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")

    def find_table(self, table_id: str) -> Optional[Table]:
        return next((t for t in self.tables if t.id == table_id), None)

    def locate_guest(self, guest_id: str) -> Tuple[Optional[Table], Optional[Guest]]:
        """Return the table holding ``guest_id`` and the guest, or ``(None, None)``"""
        for table in self.tables:
            for guest in table.guests:
                if guest.id == guest_id:
                    return table, guest
        return None, None

    @property
    def guest_count(self) -> int:
        return sum(len(t.guests) for t in self.tables)

class SearchResult(BaseModel):
    """A search hit, denormalized so callers never re-join against the snapshot"""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    table_id: str = Field(alias="tableId")
    guest_id: str = Field(alias="guestId")
    guest_name: str = Field(alias="guestName")
    category: str
    is_checked_in: bool = Field(alias="isCheckedIn")
    is_plus_one: bool = Field(alias="isPlusOne")

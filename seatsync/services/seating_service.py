"""
Seating summaries, seat numbering and advisory capacity
"""

from typing import Dict, List, Optional

from seatsync.core.config import settings
from seatsync.schemas.seating import Seating, Table
from seatsync.schemas.summary import SeatingInfo, TableOption

class SeatingService:
    """Read-only views over the live snapshot"""
    
    @staticmethod
    def table_capacity(table_id: str) -> int:
        """Advisory seat count: the head table seats more than the others"""
        if table_id == settings.HEAD_TABLE_ID:
            return settings.HEAD_TABLE_CAPACITY
        return settings.TABLE_CAPACITY
    
    @staticmethod
    def seat_label(index: int, capacity: int) -> str:
        """Label for the guest at ``index``; positions past capacity are extra seats"""
        if index < capacity:
            return f"Seat {index + 1}"
        return f"Extra {index + 1}"
    
    @staticmethod
    def plus_one_count(table: Table, guest_id: str) -> int:
        return sum(1 for g in table.guests if g.parent_id == guest_id)
    
    @staticmethod
    def capacity_warning(seating: Seating, table_id: str) -> Optional[str]:
        """Warning text when a table holds more guests than its capacity"""
        table = seating.find_table(table_id)
        if table is None:
            return None
        capacity = SeatingService.table_capacity(table.id)
        if len(table.guests) <= capacity:
            return None
        return f"Table {table.id} is over capacity: {len(table.guests)}/{capacity} (+{len(table.guests) - capacity})"
    
    @staticmethod
    def get_table_summary(table: Table, include_guests: bool = True) -> Dict:
        """Occupancy figures for one table, optionally with numbered guests"""
        capacity = SeatingService.table_capacity(table.id)
        total = len(table.guests)
        
        table_info = {
            "id": table.id,
            "category": table.category,
            "note": table.note,
            "capacity": capacity,
            "total_guests": total,
            "checked_in": sum(1 for g in table.guests if g.is_checked_in),
            "available_seats": max(0, capacity - total),
            "over_capacity": total > capacity,
            "overflow": max(0, total - capacity),
        }
        
        if include_guests:
            table_info["guests"] = [
                {
                    "id": guest.id,
                    "name": guest.name,
                    "seat_no": idx + 1,
                    "seat_label": SeatingService.seat_label(idx, capacity),
                    "is_extra_seat": idx >= capacity,
                    "isPlusOne": guest.is_plus_one,
                    "isCheckedIn": guest.is_checked_in,
                    "parentId": guest.parent_id,
                    "plus_one_count": SeatingService.plus_one_count(table, guest.id),
                }
                for idx, guest in enumerate(table.guests)
            ]
        
        return table_info
    
    @staticmethod
    def get_seating_summary(seating: Seating, include_guests: bool = False) -> Dict:
        """Totals across the snapshot plus per-table stats"""
        tables = [
            SeatingService.get_table_summary(table, include_guests=include_guests)
            for table in seating.tables
        ]
        
        return {
            "total_guests": seating.guest_count,
            "checked_in_guests": sum(t["checked_in"] for t in tables),
            "total_tables": len(tables),
            "over_capacity_tables": [t["id"] for t in tables if t["over_capacity"]],
            "tables": tables,
        }
    
    @staticmethod
    def get_guest_seating_info(seating: Seating, guest_id: str) -> Optional[SeatingInfo]:
        """Seat and table mates for a guest, or None when the guest is unknown"""
        table, guest = seating.locate_guest(guest_id)
        if table is None or guest is None:
            return None
        
        capacity = SeatingService.table_capacity(table.id)
        index = table.guests.index(guest)
        
        table_mates = [
            {
                "id": mate.id,
                "name": mate.name,
                "seat_no": idx + 1,
                "checked_in": mate.is_checked_in,
            }
            for idx, mate in enumerate(table.guests)
            if mate.id != guest.id
        ]
        
        return SeatingInfo(
            guest_id=guest.id,
            guest_name=guest.name,
            table_id=table.id,
            category=table.category,
            seat_no=index + 1,
            is_extra_seat=index >= capacity,
            checked_in=guest.is_checked_in,
            is_plus_one=guest.is_plus_one,
            parent_id=guest.parent_id,
            plus_one_count=SeatingService.plus_one_count(table, guest.id),
            table_mates=table_mates,
        )
    
    @staticmethod
    def table_options(seating: Seating) -> List[TableOption]:
        """Every table as a move target, in snapshot order"""
        return [
            TableOption(
                id=table.id,
                category=table.category,
                guest_count=len(table.guests),
                capacity=SeatingService.table_capacity(table.id),
            )
            for table in seating.tables
        ]

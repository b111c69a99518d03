"""
Guest name search over the live snapshot
"""

from typing import List

from seatsync.schemas.seating import Seating, SearchResult

class SearchService:
    """Stateless name search; the snapshot is small, so every query is a full scan"""

    @staticmethod
    def search(seating: Seating, query: str) -> List[SearchResult]:
        """Case-insensitive substring match in table order, then seat order.

        A blank query returns an empty list, meaning "no search yet" rather
        than "nothing found".
        """
        term = (query or "").strip().lower()
        if not term:
            return []

        return [
            SearchResult(
                table_id=table.id,
                guest_id=guest.id,
                guest_name=guest.name,
                category=table.category,
                is_checked_in=guest.is_checked_in,
                is_plus_one=guest.is_plus_one,
            )
            for table in seating.tables
            for guest in table.guests
            if term in guest.name.lower()
        ]

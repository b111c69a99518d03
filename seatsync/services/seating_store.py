"""
Seating state transitions

Every operation takes the current snapshot and returns a new one. Unknown
table or guest ids are not errors: the operation returns the very same
snapshot object, so callers can tell a no-op apart with ``is``.
"""

import uuid
from typing import Callable, List, Optional

from seatsync.schemas.seating import Guest, Seating, Table

COMPANION_SUFFIX = "-companion"


def new_guest_id(prefix: str) -> str:
    """Generate a collision-free guest id"""
    return f"{prefix}-{uuid.uuid4().hex}"


def companion_name(parent_name: str) -> str:
    """Display name given to a new plus-one"""
    return f"{parent_name}{COMPANION_SUFFIX}"


def _update_table(
    seating: Seating,
    table_id: str,
    update: Callable[[Table], Table]
) -> Seating:
    """Apply ``update`` to one table, returning ``seating`` itself when nothing changed"""
    changed = False
    tables: List[Table] = []
    for table in seating.tables:
        if table.id == table_id:
            new_table = update(table)
            changed = new_table is not table
            tables.append(new_table)
        else:
            tables.append(table)

    if not changed:
        return seating
    return seating.model_copy(update={"tables": tuple(tables)})


def _update_guest(
    seating: Seating,
    table_id: str,
    guest_id: str,
    update: Callable[[Guest], Guest]
) -> Seating:
    def apply(table: Table) -> Table:
        for idx, guest in enumerate(table.guests):
            if guest.id == guest_id:
                guests = list(table.guests)
                guests[idx] = update(guest)
                return table.model_copy(update={"guests": tuple(guests)})
        return table

    return _update_table(seating, table_id, apply)


def _find_guest(table: Table, guest_id: str) -> Optional[Guest]:
    return next((g for g in table.guests if g.id == guest_id), None)


class SeatingStore:
    """Pure operations over the seating snapshot"""

    @staticmethod
    def add_guest(seating: Seating, table_id: str, name: str) -> Seating:
        """Append a new primary guest to the end of the table"""
        guest = Guest(id=new_guest_id("manual"), name=name)
        return _update_table(
            seating,
            table_id,
            lambda table: table.model_copy(update={"guests": table.guests + (guest,)})
        )

    @staticmethod
    def add_plus_one(seating: Seating, table_id: str, parent_guest_id: str) -> Seating:
        """Append a companion for ``parent_guest_id`` to the end of the same table.

        Plus-ones cannot bring companions of their own.
        """
        def apply(table: Table) -> Table:
            parent = _find_guest(table, parent_guest_id)
            if parent is None or parent.is_plus_one:
                return table
            companion = Guest(
                id=new_guest_id("plusone"),
                name=companion_name(parent.name),
                is_plus_one=True,
                parent_id=parent.id,
            )
            return table.model_copy(update={"guests": table.guests + (companion,)})

        return _update_table(seating, table_id, apply)

    @staticmethod
    def remove_plus_one(seating: Seating, table_id: str, parent_guest_id: str) -> Seating:
        """Remove the most recently added companion of ``parent_guest_id``"""
        def apply(table: Table) -> Table:
            children = [g for g in table.guests if g.parent_id == parent_guest_id]
            if not children:
                return table
            last_id = children[-1].id
            return table.model_copy(
                update={"guests": tuple(g for g in table.guests if g.id != last_id)}
            )

        return _update_table(seating, table_id, apply)

    @staticmethod
    def remove_guest(seating: Seating, table_id: str, guest_id: str) -> Seating:
        """Remove a guest together with every companion attached to it"""
        def apply(table: Table) -> Table:
            if _find_guest(table, guest_id) is None:
                return table
            return table.model_copy(
                update={
                    "guests": tuple(
                        g for g in table.guests
                        if g.id != guest_id and g.parent_id != guest_id
                    )
                }
            )

        return _update_table(seating, table_id, apply)

    @staticmethod
    def rename_guest(seating: Seating, table_id: str, guest_id: str, new_name: str) -> Seating:
        return _update_guest(
            seating, table_id, guest_id,
            lambda guest: guest.model_copy(update={"name": new_name})
        )

    @staticmethod
    def toggle_check_in(seating: Seating, table_id: str, guest_id: str) -> Seating:
        return _update_guest(
            seating, table_id, guest_id,
            lambda guest: guest.model_copy(update={"is_checked_in": not guest.is_checked_in})
        )

    @staticmethod
    def update_category(seating: Seating, table_id: str, new_category: str) -> Seating:
        return _update_table(
            seating, table_id,
            lambda table: table.model_copy(update={"category": new_category})
        )

    @staticmethod
    def update_note(seating: Seating, table_id: str, new_note: str) -> Seating:
        return _update_table(
            seating, table_id,
            lambda table: table.model_copy(update={"note": new_note})
        )

    @staticmethod
    def move_guest(seating: Seating, guest_id: str, target_table_id: str) -> Seating:
        """Move a primary guest and its companions, as one group, to the end of another table.

        No-op when the guest is unknown, already at the target table, the
        target table does not exist, or the guest is itself a plus-one
        (companions only travel with their primary guest).
        """
        source, guest = seating.locate_guest(guest_id)
        if source is None or guest is None:
            return seating
        if guest.is_plus_one or source.id == target_table_id:
            return seating
        if seating.find_table(target_table_id) is None:
            return seating

        group = [guest] + [g for g in source.guests if g.parent_id == guest_id]
        group_ids = {g.id for g in group}

        tables: List[Table] = []
        for table in seating.tables:
            if table.id == source.id:
                table = table.model_copy(
                    update={"guests": tuple(g for g in table.guests if g.id not in group_ids)}
                )
            elif table.id == target_table_id:
                table = table.model_copy(update={"guests": table.guests + tuple(group)})
            tables.append(table)

        return seating.model_copy(update={"tables": tuple(tables)})

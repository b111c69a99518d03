"""
Seating API routes - staff operations on tables and guests
"""

from typing import Callable, Optional

from fastapi import APIRouter, Depends, Query

from seatsync.core.deps import get_sync_engine
from seatsync.schemas.requests import GuestCreate, GuestMove, GuestRename, TableUpdate
from seatsync.schemas.seating import Seating
from seatsync.services.search_service import SearchService
from seatsync.services.seating_service import SeatingService
from seatsync.services.seating_store import SeatingStore
from seatsync.services.sync_engine import SeatingNotReadyError, SyncEngine, SyncEngineClosedError
from seatsync.utils.responses import conflict_error, not_found_error, not_ready_error, success_response

router = APIRouter()

def _current(sync_engine: SyncEngine) -> Seating:
    try:
        return sync_engine.seating
    except SeatingNotReadyError:
        not_ready_error()

def _apply(sync_engine: SyncEngine, operation: Callable[..., Seating], *args) -> Seating:
    try:
        return sync_engine.apply(operation, *args)
    except (SeatingNotReadyError, SyncEngineClosedError):
        not_ready_error()

def _require_table(seating: Seating, table_id: str):
    table = seating.find_table(table_id)
    if table is None:
        not_found_error("Table")
    return table

def _require_guest(seating: Seating, table_id: str, guest_id: str):
    table = _require_table(seating, table_id)
    guest = next((g for g in table.guests if g.id == guest_id), None)
    if guest is None:
        not_found_error("Guest")
    return guest

def _table_response(message: str, seating: Seating, table_id: str, status_code: int = 200):
    warning: Optional[str] = SeatingService.capacity_warning(seating, table_id)
    return success_response(
        message=message,
        data=SeatingService.get_table_summary(seating.find_table(table_id)),
        warnings=[warning] if warning else None,
        status_code=status_code
    )

# -------- Reads --------

@router.get("")
async def get_seating(sync_engine: SyncEngine = Depends(get_sync_engine)):
    """Full snapshot in its persisted shape"""
    seating = _current(sync_engine)
    return {
        "mode": sync_engine.mode.value,
        **seating.to_record()
    }

@router.get("/status")
async def sync_status(sync_engine: SyncEngine = Depends(get_sync_engine)):
    """Which backend this session syncs with and whether seating is loaded"""
    mode = sync_engine.mode.value if sync_engine.mode else None
    return {
        "mode": mode,
        "online": mode == "remote",
        "ready": sync_engine.is_ready
    }

@router.get("/summary")
async def get_summary(
    include_guests: bool = Query(False),
    sync_engine: SyncEngine = Depends(get_sync_engine)
):
    """Occupancy and check-in totals"""
    return SeatingService.get_seating_summary(_current(sync_engine), include_guests=include_guests)

@router.get("/tables")
async def list_tables(sync_engine: SyncEngine = Depends(get_sync_engine)):
    """Tables with guest counts, e.g. as move targets"""
    return [option.model_dump() for option in SeatingService.table_options(_current(sync_engine))]

@router.get("/tables/{table_id}")
async def get_table(table_id: str, sync_engine: SyncEngine = Depends(get_sync_engine)):
    """One table with numbered seats"""
    table = _require_table(_current(sync_engine), table_id)
    return SeatingService.get_table_summary(table)

@router.get("/search")
async def search_guests(
    q: str = Query(""),
    sync_engine: SyncEngine = Depends(get_sync_engine)
):
    """Find guests by name"""
    results = SearchService.search(_current(sync_engine), q)
    return {
        "query": q,
        "searched": bool(q.strip()),
        "results": [r.model_dump(by_alias=True) for r in results]
    }

@router.get("/guests/{guest_id}")
async def get_guest(guest_id: str, sync_engine: SyncEngine = Depends(get_sync_engine)):
    """Seat and table mates of one guest"""
    info = SeatingService.get_guest_seating_info(_current(sync_engine), guest_id)
    if info is None:
        not_found_error("Guest")
    return info.model_dump()

# -------- Table operations --------

@router.patch("/tables/{table_id}")
async def update_table(
    table_id: str,
    body: TableUpdate,
    sync_engine: SyncEngine = Depends(get_sync_engine)
):
    """Update a table's category and/or note"""
    _require_table(_current(sync_engine), table_id)

    if body.category is not None:
        _apply(sync_engine, SeatingStore.update_category, table_id, body.category)
    if body.note is not None:
        _apply(sync_engine, SeatingStore.update_note, table_id, body.note)

    return _table_response("Table updated", sync_engine.seating, table_id)

# -------- Guest operations --------

@router.post("/tables/{table_id}/guests")
async def add_guest(
    table_id: str,
    body: GuestCreate,
    sync_engine: SyncEngine = Depends(get_sync_engine)
):
    """Add a guest at the end of a table"""
    _require_table(_current(sync_engine), table_id)
    seating = _apply(sync_engine, SeatingStore.add_guest, table_id, body.name)
    return _table_response("Guest added", seating, table_id, status_code=201)

@router.patch("/tables/{table_id}/guests/{guest_id}")
async def rename_guest(
    table_id: str,
    guest_id: str,
    body: GuestRename,
    sync_engine: SyncEngine = Depends(get_sync_engine)
):
    """Rename a guest"""
    _require_guest(_current(sync_engine), table_id, guest_id)
    seating = _apply(sync_engine, SeatingStore.rename_guest, table_id, guest_id, body.name)
    return _table_response("Guest renamed", seating, table_id)

@router.delete("/tables/{table_id}/guests/{guest_id}")
async def remove_guest(
    table_id: str,
    guest_id: str,
    sync_engine: SyncEngine = Depends(get_sync_engine)
):
    """Remove a guest together with their companions"""
    _require_guest(_current(sync_engine), table_id, guest_id)
    seating = _apply(sync_engine, SeatingStore.remove_guest, table_id, guest_id)
    return _table_response("Guest removed", seating, table_id)

@router.post("/tables/{table_id}/guests/{guest_id}/check-in")
async def toggle_check_in(
    table_id: str,
    guest_id: str,
    sync_engine: SyncEngine = Depends(get_sync_engine)
):
    """Flip a guest's check-in flag"""
    _require_guest(_current(sync_engine), table_id, guest_id)
    seating = _apply(sync_engine, SeatingStore.toggle_check_in, table_id, guest_id)
    return _table_response("Check-in updated", seating, table_id)

@router.post("/tables/{table_id}/guests/{guest_id}/plus-ones")
async def add_plus_one(
    table_id: str,
    guest_id: str,
    sync_engine: SyncEngine = Depends(get_sync_engine)
):
    """Add a companion for a primary guest"""
    guest = _require_guest(_current(sync_engine), table_id, guest_id)
    if guest.is_plus_one:
        conflict_error("A plus-one cannot bring a plus-one")
    seating = _apply(sync_engine, SeatingStore.add_plus_one, table_id, guest_id)
    return _table_response("Plus-one added", seating, table_id, status_code=201)

@router.delete("/tables/{table_id}/guests/{guest_id}/plus-ones")
async def remove_plus_one(
    table_id: str,
    guest_id: str,
    sync_engine: SyncEngine = Depends(get_sync_engine)
):
    """Remove the most recently added companion of a guest"""
    _require_guest(_current(sync_engine), table_id, guest_id)
    seating = _apply(sync_engine, SeatingStore.remove_plus_one, table_id, guest_id)
    return _table_response("Plus-one removed", seating, table_id)

@router.post("/guests/{guest_id}/move")
async def move_guest(
    guest_id: str,
    body: GuestMove,
    sync_engine: SyncEngine = Depends(get_sync_engine)
):
    """Move a guest and their companions to another table"""
    seating = _current(sync_engine)
    _, guest = seating.locate_guest(guest_id)
    if guest is None:
        not_found_error("Guest")
    _require_table(seating, body.target_table_id)
    if guest.is_plus_one:
        conflict_error("Plus-ones move with their guest; move the primary guest instead")

    seating = _apply(sync_engine, SeatingStore.move_guest, guest_id, body.target_table_id)
    return _table_response("Guest moved", seating, body.target_table_id)

"""
FastAPI dependencies
"""

from fastapi import Request

from seatsync.services.sync_engine import SyncEngine


def get_sync_engine(request: Request) -> SyncEngine:
    return request.app.state.sync_engine

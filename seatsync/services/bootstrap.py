"""
Builds the SyncEngine for the running application from settings.
"""

import logging

from seatsync.core.config import Settings
from seatsync.core.db import SessionLocal
from seatsync.services.firebase_client import get_firestore_client
from seatsync.services.plan_loader import default_seating_factory
from seatsync.services.repositories import FirestoreSeatingRepository, LocalSeatingRepository
from seatsync.services.sync_engine import SyncEngine

logger = logging.getLogger(__name__)


def build_remote_repository(settings: Settings):
    """Return the Firestore repository, or None when no remote configuration is usable"""
    if not settings.USE_FIREBASE:
        return None
    try:
        client = get_firestore_client()
    except (RuntimeError, ValueError) as e:
        logger.error(f"Firebase unavailable, starting in local mode: {e}")
        return None
    if client is None:
        return None
    return FirestoreSeatingRepository(client, settings.SEATING_COLLECTION, settings.SEATING_DOCUMENT)


def build_sync_engine(settings: Settings, session_factory=SessionLocal) -> SyncEngine:
    local = LocalSeatingRepository(session_factory, settings.LOCAL_CACHE_KEY)
    return SyncEngine(
        local=local,
        default_factory=default_seating_factory(settings.SEATING_PLAN_FILE),
        remote=build_remote_repository(settings),
    )

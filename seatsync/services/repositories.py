"""
Repository layer abstracting seating persistence (Firestore document vs local SQLAlchemy cache).

Both repositories store the whole snapshot as one record; nothing smaller
than the full document is ever read or written.
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Optional

from google.api_core.exceptions import GoogleAPIError
from google.auth.exceptions import GoogleAuthError
from pydantic import ValidationError
from sqlalchemy.orm import Session

from seatsync.models import CacheEntry
from seatsync.schemas.seating import Seating

logger = logging.getLogger(__name__)

RecordCallback = Callable[[Optional[Seating]], None]
ErrorCallback = Callable[[Exception], None]


def parse_record(data: Any) -> Optional[Seating]:
    """Parse a persisted record, treating anything malformed as absent"""
    if not isinstance(data, dict) or "tables" not in data:
        return None
    try:
        return Seating.model_validate(data)
    except ValidationError as e:
        logger.warning(f"Ignoring malformed seating record: {e.error_count()} validation errors")
        return None


class SeatingRepository(ABC):
    """Persistence port for the seating snapshot"""

    name = "repository"

    @abstractmethod
    def load(self) -> Optional[Seating]:
        """Return the persisted snapshot, or None when absent or malformed"""

    @abstractmethod
    def save(self, seating: Seating) -> None:
        """Overwrite the persisted record with ``seating``"""


class LiveSeatingRepository(SeatingRepository):
    """A repository that can push record changes as they happen"""

    @abstractmethod
    def subscribe(self, on_record: RecordCallback, on_error: ErrorCallback) -> None:
        """Deliver the record (or None when absent) now and on every change.

        ``on_error`` is called instead when the subscription cannot be established.
        """

    @abstractmethod
    def unsubscribe(self) -> None:
        """Stop delivering record changes"""


# -------- Local cache repository --------

class LocalSeatingRepository(SeatingRepository):
    """Snapshot stored as JSON text under one key of the local cache table"""

    name = "local"

    def __init__(self, session_factory: Callable[[], Session], key: str):
        self.session_factory = session_factory
        self.key = key

    def load(self) -> Optional[Seating]:
        db = self.session_factory()
        try:
            entry = db.get(CacheEntry, self.key)
            if entry is None:
                return None
            try:
                data = json.loads(entry.value)
            except json.JSONDecodeError:
                logger.warning(f"Ignoring unreadable local cache entry '{self.key}'")
                return None
            return parse_record(data)
        finally:
            db.close()

    def save(self, seating: Seating) -> None:
        db = self.session_factory()
        try:
            value = json.dumps(seating.to_record(), ensure_ascii=False)
            entry = db.get(CacheEntry, self.key)
            if entry is None:
                db.add(CacheEntry(key=self.key, value=value))
            else:
                entry.value = value
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()


# -------- Firestore repository --------

class FirestoreSeatingRepository(LiveSeatingRepository):
    """Snapshot stored as the single Firestore document ``{collection}/{document}``"""

    name = "remote"

    def __init__(self, client, collection: str, document: str):
        self.doc_ref = client.collection(collection).document(document)
        self._watch = None

    def load(self) -> Optional[Seating]:
        doc = self.doc_ref.get()
        return parse_record(doc.to_dict()) if doc.exists else None

    def save(self, seating: Seating) -> None:
        self.doc_ref.set(seating.to_record())

    def subscribe(self, on_record: RecordCallback, on_error: ErrorCallback) -> None:
        def on_snapshot(docs, changes, read_time):
            snapshot = next((d for d in docs if d.exists), None)
            on_record(parse_record(snapshot.to_dict()) if snapshot is not None else None)

        try:
            # The watch stream reports no errors back, so check access with a read first
            self.doc_ref.get()
            self._watch = self.doc_ref.on_snapshot(on_snapshot)
        except (GoogleAPIError, GoogleAuthError) as e:
            on_error(e)

    def unsubscribe(self) -> None:
        if self._watch is not None:
            self._watch.unsubscribe()
            self._watch = None

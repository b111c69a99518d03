"""
Seating synchronization between the in-memory snapshot and its backend.

The backend is chosen once, at start: the live remote record when one is
configured, otherwise the local cache. A remote subscription failure
downgrades the session to the local cache for good. Every applied operation
updates the in-memory snapshot first and is then written out, whole, on a
single background writer.
"""

import logging
import threading
from concurrent import futures
from enum import Enum
from typing import Callable, List, Optional

from seatsync.schemas.seating import Seating
from seatsync.services.repositories import LiveSeatingRepository, SeatingRepository

logger = logging.getLogger(__name__)

SAVE_FAILED_MESSAGE = "Saving failed, please check the network connection"


class SyncMode(str, Enum):
    REMOTE = "remote"
    LOCAL = "local"


class SeatingNotReadyError(RuntimeError):
    """Raised when the snapshot is used before the first one was adopted"""


class SyncEngineClosedError(RuntimeError):
    """Raised when an operation is applied after the engine was closed"""


class SyncEngine:
    """Holds the live snapshot and keeps it in step with the chosen backend"""

    def __init__(
        self,
        local: SeatingRepository,
        default_factory: Callable[[], Seating],
        remote: Optional[LiveSeatingRepository] = None,
        executor: Optional[futures.Executor] = None
    ):
        self.local = local
        self.remote = remote
        self.default_factory = default_factory

        self._executor = executor or futures.ThreadPoolExecutor(
            max_workers=1, thread_name_prefix="seating-writer"
        )
        self._lock = threading.RLock()
        self._ready = threading.Event()
        self._seating: Optional[Seating] = None
        self._mode: Optional[SyncMode] = None
        self._started = False
        self._closed = False
        self._pending: List[futures.Future] = []
        self._listeners: List[Callable[[Seating], None]] = []
        self._alert_listeners: List[Callable[[str], None]] = []

    # -------- state --------

    @property
    def mode(self) -> Optional[SyncMode]:
        return self._mode

    @property
    def is_ready(self) -> bool:
        return self._ready.is_set()

    @property
    def seating(self) -> Seating:
        seating = self._seating
        if seating is None:
            raise SeatingNotReadyError("Seating has not been loaded yet")
        return seating

    def wait_until_ready(self, timeout: Optional[float] = None) -> bool:
        return self._ready.wait(timeout)

    # -------- listeners --------

    def add_listener(self, callback: Callable[[Seating], None]) -> None:
        """Call ``callback`` with every snapshot adopted or produced from now on"""
        self._listeners.append(callback)

    def add_alert_listener(self, callback: Callable[[str], None]) -> None:
        """Call ``callback`` with a user-facing message when a remote save fails"""
        self._alert_listeners.append(callback)

    def _notify(self, seating: Seating) -> None:
        for callback in list(self._listeners):
            try:
                callback(seating)
            except Exception:
                logger.exception("Seating listener failed")

    def _alert(self, message: str) -> None:
        for callback in list(self._alert_listeners):
            try:
                callback(message)
            except Exception:
                logger.exception("Alert listener failed")

    # -------- lifecycle --------

    def start(self) -> None:
        """Choose the backend and load or seed the snapshot"""
        with self._lock:
            if self._started:
                raise RuntimeError("SyncEngine already started")
            self._started = True

            if self.remote is None:
                logger.info("No remote record configured, using local cache")
                self._mode = SyncMode.LOCAL
                self._start_local()
                return

            logger.info("Subscribing to remote seating record")
            self._mode = SyncMode.REMOTE

        self.remote.subscribe(self._on_remote_record, self._on_remote_error)

    def close(self) -> None:
        """Tear down the subscription and wait for queued writes"""
        with self._lock:
            subscribed = self.remote is not None and self._mode is SyncMode.REMOTE
            self._closed = True
        # Outside the lock: unsubscribing waits for an in-flight push callback
        if subscribed:
            self.remote.unsubscribe()
        self._executor.shutdown(wait=True)
        logger.info("SyncEngine closed")

    def flush(self, timeout: Optional[float] = None) -> None:
        """Block until every write submitted so far has finished"""
        with self._lock:
            pending = list(self._pending)
        futures.wait(pending, timeout=timeout)

    def _start_local(self) -> None:
        seating = self.local.load()
        if seating is None:
            logger.info("Local cache empty, seeding default seating")
            seating = self.default_factory()
            self._submit_write(self.local, seating)
        self._adopt(seating)

    def _adopt(self, seating: Seating) -> None:
        self._seating = seating
        self._ready.set()
        self._notify(seating)

    # -------- remote push channel --------

    def _on_remote_record(self, seating: Optional[Seating]) -> None:
        with self._lock:
            if self._closed or self._mode is not SyncMode.REMOTE:
                return
            if seating is None:
                logger.info("Remote seating record absent, seeding default seating")
                seating = self.default_factory()
                self._submit_write(self.remote, seating)
            self._adopt(seating)

    def _on_remote_error(self, error: Exception) -> None:
        with self._lock:
            if self._closed or self._mode is not SyncMode.REMOTE:
                return
            logger.error(f"Remote seating subscription failed, using local cache for this session: {error}")
            self._mode = SyncMode.LOCAL
            self.remote.unsubscribe()
            self._start_local()

    # -------- write path --------

    def apply(self, operation: Callable[..., Seating], *args) -> Seating:
        """Apply a store operation to the live snapshot and persist the result.

        The new snapshot is visible immediately; the write happens in the
        background. Operations that change nothing are not written.
        """
        with self._lock:
            if self._closed:
                raise SyncEngineClosedError("SyncEngine is closed")
            current = self.seating
            updated = operation(current, *args)
            if updated is current:
                return current

            self._seating = updated
            repository = self.remote if self._mode is SyncMode.REMOTE else self.local
            self._submit_write(repository, updated)
            self._notify(updated)
            return updated

    def _submit_write(self, repository: SeatingRepository, seating: Seating) -> None:
        self._pending = [f for f in self._pending if not f.done()]
        self._pending.append(self._executor.submit(self._write, repository, seating))

    def _write(self, repository: SeatingRepository, seating: Seating) -> None:
        try:
            repository.save(seating)
        except Exception as e:
            if repository is self.remote:
                logger.error(f"Saving seating to {repository.name} record failed: {e}")
                self._alert(SAVE_FAILED_MESSAGE)
            else:
                logger.warning(f"Saving seating to {repository.name} cache failed: {e}")

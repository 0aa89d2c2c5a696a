from __future__ import annotations

import logging
import threading

from ..common.datetime_utils import now_local
from .model import DashboardSnapshot, LoadTicket

logger = logging.getLogger(__name__)


class DashboardState:
    """Holds the latest snapshot and sequences concurrent loads.

    Every load takes a ticket; only the newest ticket may publish. A slower, older load
    that finishes late is discarded instead of overwriting fresher data.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._generation = 0
        self._snapshot = DashboardSnapshot()

    @property
    def snapshot(self) -> DashboardSnapshot:
        with self._lock:
            return self._snapshot

    def begin(self) -> LoadTicket:
        with self._lock:
            self._generation += 1
            return LoadTicket(generation=self._generation)

    def is_current(self, ticket: LoadTicket) -> bool:
        with self._lock:
            return ticket.generation == self._generation

    def publish(self, ticket: LoadTicket, snapshot: DashboardSnapshot) -> bool:
        with self._lock:
            if ticket.generation != self._generation:
                logger.info("Discarding stale dashboard load #%s (current #%s)", ticket.generation, self._generation)
                return False
            self._snapshot = snapshot
            return True

    def fail(self, ticket: LoadTicket, message: str) -> bool:
        """Reset both collections to empty and remember ``message``."""
        return self.publish(ticket, DashboardSnapshot(loaded_at=now_local(), error=message))

"""Published sync state and the single-writer store that holds it."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass

from invite_sync.contacts.models import ContactRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SyncState:
    """Immutable snapshot of the contact list and invite status shown to the UI."""

    permission_granted: bool | None = None  # None until the user answers
    permission_requested: bool = False
    invite_count: int = 0
    all_contacts: tuple[ContactRecord, ...] = ()
    filtered_contacts: tuple[ContactRecord, ...] = ()
    filter_text: str = ""
    loading: bool = True


Subscriber = Callable[[SyncState], None]


class StateStore:
    """Holds the latest :class:`SyncState`; writers replace it, never mutate it.

    ``update`` serializes writers, so each transition sees the snapshot left
    by the previous one. The last write wins.
    """

    def __init__(self, initial: SyncState | None = None):
        self._state = initial or SyncState()
        self._lock = threading.Lock()
        self._subscribers: list[Subscriber] = []

    def get(self) -> SyncState:
        return self._state

    def update(self, transition: Callable[[SyncState], SyncState]) -> SyncState:
        """Replace the state with ``transition(current)`` and notify subscribers."""
        with self._lock:
            new_state = transition(self._state)
            if new_state is self._state:
                return new_state
            self._state = new_state
            subscribers = list(self._subscribers)
        for callback in subscribers:
            callback(new_state)
        return new_state

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register ``callback`` for future snapshots. Returns an unsubscribe function."""
        with self._lock:
            self._subscribers.append(callback)

        def _unsubscribe() -> None:
            with self._lock:
                if callback in self._subscribers:
                    self._subscribers.remove(callback)

        return _unsubscribe

"""Scoped holding areas for extraction results awaiting confirmation.

A ``StagingStore`` belongs to one verification session; nothing here is
module-global. Mutations on a store are serialized by its own lock, but two
sessions never share entries, and a caller editing while another commits
the same store still sees last-writer-wins semantics.
"""

import threading
import time
import uuid
from collections.abc import Callable, Mapping
from dataclasses import replace

from printform.extraction.models import FIELD_KEYS
from printform.logging.logger import Log
from printform.staging.exceptions import (
    StagedEntryNotFoundError,
    StagingSessionNotFoundError,
    UnknownFieldError,
)
from printform.staging.models import PendingVerification

_ATTR_BY_KEY = {key: attr for attr, key in FIELD_KEYS.items()}


class StagingStore:
    """Ordered, editable list of PendingVerification entries for one session."""

    def __init__(self, session_id: str | None = None) -> None:
        self.session_id = session_id or uuid.uuid4().hex
        self._entries: list[PendingVerification] = []
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def stage(self, entry: PendingVerification) -> int:
        """Append an entry and return its index."""
        with self._lock:
            self._entries.append(entry)
            index = len(self._entries) - 1
        Log.debug(f"Staged image {entry.image_id} in session {self.session_id}")
        return index

    def entries(self) -> list[PendingVerification]:
        with self._lock:
            return list(self._entries)

    def get(self, index: int) -> PendingVerification:
        with self._lock:
            return self._at(index)

    def edit(self, index: int, updates: Mapping[str, object]) -> PendingVerification:
        """Overwrite fields of a staged entry.

        Keys are schema keys (``"Class"``, ``"No_of_copies"``...). Values are
        taken as given; they are sanitized again at commit time.
        """
        unknown = sorted(set(updates) - set(_ATTR_BY_KEY))
        if unknown:
            raise UnknownFieldError(f"Unknown form fields: {unknown}")
        changes = {_ATTR_BY_KEY[key]: value for key, value in updates.items()}
        with self._lock:
            entry = self._at(index)
            entry.field_set = replace(entry.field_set, **changes)
        return entry

    def remove(self, index: int) -> PendingVerification:
        """Drop one entry without touching storage."""
        with self._lock:
            entry = self._at(index)
            del self._entries[index]
        Log.info(f"Removed staged image {entry.image_id} from session {self.session_id}")
        return entry

    def release(self, image_id: int) -> PendingVerification:
        """Drop the entry for an image once it has been committed."""
        with self._lock:
            for index, entry in enumerate(self._entries):
                if entry.image_id == image_id:
                    del self._entries[index]
                    return entry
        raise StagedEntryNotFoundError(f"Image {image_id} is not staged")

    def discard_all(self) -> int:
        """Clear every entry without touching storage; return how many were dropped."""
        with self._lock:
            count = len(self._entries)
            self._entries.clear()
        Log.info(f"Discarded {count} staged entries from session {self.session_id}")
        return count

    def _at(self, index: int) -> PendingVerification:
        if not 0 <= index < len(self._entries):
            raise StagedEntryNotFoundError(f"No staged entry at index {index}")
        return self._entries[index]


class StagingRegistry:
    """Owns staging sessions and expires the ones left idle too long."""

    def __init__(
        self,
        ttl_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._ttl_seconds = ttl_seconds
        self._clock = clock
        self._sessions: dict[str, tuple[StagingStore, float]] = {}
        self._lock = threading.Lock()

    def open(self, session_id: str | None = None) -> StagingStore:
        """Return the live store for a session, creating it when needed."""
        self.purge_expired()
        with self._lock:
            if session_id is not None and session_id in self._sessions:
                store, _ = self._sessions[session_id]
            else:
                store = StagingStore(session_id)
            self._sessions[store.session_id] = (store, self._clock())
        return store

    def get(self, session_id: str) -> StagingStore:
        self.purge_expired()
        with self._lock:
            if session_id not in self._sessions:
                raise StagingSessionNotFoundError(f"Staging session {session_id} not found")
            store, _ = self._sessions[session_id]
            self._sessions[session_id] = (store, self._clock())
        return store

    def close(self, session_id: str) -> None:
        with self._lock:
            self._sessions.pop(session_id, None)

    def purge_expired(self) -> int:
        now = self._clock()
        with self._lock:
            expired = [
                session_id
                for session_id, (_store, touched) in self._sessions.items()
                if now - touched > self._ttl_seconds
            ]
            for session_id in expired:
                del self._sessions[session_id]
        if expired:
            Log.info(f"Expired {len(expired)} idle staging sessions")
        return len(expired)

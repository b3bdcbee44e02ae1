"""In-memory store for admin dialog sessions."""

import asyncio
import logging
from collections.abc import AsyncIterator, Callable
from contextlib import AbstractAsyncContextManager, asynccontextmanager
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Protocol

from lyrics_bot.domain.sessions import Session

logger = logging.getLogger(__name__)


class SessionStore(Protocol):
    """Storage interface for per-user dialog sessions."""

    def get(self, user_id: int) -> Session | None:
        """Return the user's live session, if present."""

    def put(self, session: Session) -> None:
        """Store a session, replacing any previous one for its owner."""

    def delete(self, user_id: int) -> None:
        """Remove the user's session if present."""

    def touch(self, user_id: int) -> None:
        """Restart the idle timer of the user's live session."""

    def lock(self, user_id: int) -> AbstractAsyncContextManager[None]:
        """Serialize read-modify-write of one user's session."""


@dataclass
class _StoredSession:
    session: Session
    touched_at: datetime


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


class InMemorySessionStore(SessionStore):
    """Process-local session table with idle expiry.

    Sessions untouched for longer than ``idle_timeout`` are treated as absent
    and swept whenever a session is stored. ``put`` and ``touch`` restart the
    timer. Table operations never await, so they are atomic on the event
    loop; ``lock`` covers the awaits between a read and the following write
    for a single user.
    """

    def __init__(
        self,
        idle_timeout: timedelta = timedelta(minutes=30),
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.idle_timeout = idle_timeout
        self._clock = clock
        self._entries: dict[int, _StoredSession] = {}
        self._locks: dict[int, asyncio.Lock] = {}
        self._lock_holders: dict[int, int] = {}

    def get(self, user_id: int) -> Session | None:
        entry = self._entries.get(user_id)
        if entry is None:
            return None
        if self._is_expired(entry):
            logger.info("Session expired", extra={"user_id": user_id})
            self._entries.pop(user_id, None)
            return None
        return entry.session

    def put(self, session: Session) -> None:
        self.evict_idle()
        self._entries[session.owner] = _StoredSession(
            session=session, touched_at=self._clock()
        )

    def delete(self, user_id: int) -> None:
        self._entries.pop(user_id, None)

    def touch(self, user_id: int) -> None:
        entry = self._entries.get(user_id)
        if entry is not None and not self._is_expired(entry):
            entry.touched_at = self._clock()

    @asynccontextmanager
    async def lock(self, user_id: int) -> AsyncIterator[None]:
        # Locks live only while someone holds or waits for them.
        user_lock = self._locks.setdefault(user_id, asyncio.Lock())
        self._lock_holders[user_id] = self._lock_holders.get(user_id, 0) + 1
        try:
            async with user_lock:
                yield
        finally:
            self._lock_holders[user_id] -= 1
            if not self._lock_holders[user_id]:
                del self._lock_holders[user_id]
                del self._locks[user_id]

    def evict_idle(self) -> int:
        """Drop expired sessions and return how many were removed."""
        expired = [
            user_id
            for user_id, entry in self._entries.items()
            if self._is_expired(entry)
        ]
        for user_id in expired:
            self._entries.pop(user_id, None)
        if expired:
            logger.info("Evicted idle sessions", extra={"count": len(expired)})
        return len(expired)

    @property
    def active_count(self) -> int:
        return len(self._entries)

    @property
    def lock_count(self) -> int:
        return len(self._locks)

    def _is_expired(self, entry: _StoredSession) -> bool:
        return self._clock() - entry.touched_at > self.idle_timeout

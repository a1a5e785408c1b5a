import time
from typing import Callable, Dict, Optional, Tuple

from .base import SessionStore
from .locks import ReadWriteLock


class InMemorySessionStore(SessionStore):
    """Process-local sessions; a restart logs everybody out."""

    def __init__(
        self,
        ttl_seconds: Optional[int] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._sessions: Dict[str, Tuple[str, float]] = {}
        self._lock = ReadWriteLock()
        self._ttl = ttl_seconds
        self._clock = clock

    def _expired(self, created_at: float) -> bool:
        return self._ttl is not None and self._clock() - created_at >= self._ttl

    async def lookup(self, session_id: str) -> Optional[str]:
        async with self._lock.read():
            entry = self._sessions.get(session_id)
        if entry is None:
            return None
        username, created_at = entry
        if self._expired(created_at):
            async with self._lock.write():
                self._sessions.pop(session_id, None)
            return None
        return username

    async def insert(self, session_id: str, username: str) -> None:
        async with self._lock.write():
            self._sessions[session_id] = (username, self._clock())

    async def remove_by_user(self, username: str) -> int:
        async with self._lock.write():
            doomed = [sid for sid, (owner, _) in self._sessions.items() if owner == username]
            for sid in doomed:
                del self._sessions[sid]
        return len(doomed)

    def __len__(self) -> int:
        return len(self._sessions)

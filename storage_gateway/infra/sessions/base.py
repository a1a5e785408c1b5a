from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional


class SessionStore(ABC):
    """session_id -> username mapping shared by all requests."""

    @abstractmethod
    async def lookup(self, session_id: str) -> Optional[str]: ...

    @abstractmethod
    async def insert(self, session_id: str, username: str) -> None: ...

    @abstractmethod
    async def remove_by_user(self, username: str) -> int:
        """Drop every session owned by ``username``; returns how many."""

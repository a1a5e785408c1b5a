"""
Session authentication.

Login verifies a username/token pair against the credential store and issues
an opaque session id; every protected request resolves that id back to a
user through the session table.
"""

import asyncio
import secrets
from typing import Optional

from storage_gateway.domain.entities import AuthenticatedUser
from storage_gateway.domain.exceptions import InvalidSessionError, MissingSessionError
from storage_gateway.infra.auth.credentials import CredentialStore
from storage_gateway.infra.config.logging_config import get_logger
from storage_gateway.infra.sessions.base import SessionStore

log = get_logger("auth")


class AuthGate:
    def __init__(self, credentials: CredentialStore, sessions: SessionStore) -> None:
        self.credentials = credentials
        self.sessions = sessions

    async def verify_credentials(self, username: str, presented_token: str) -> bool:
        """bcrypt check of the pair, run in a worker thread."""
        return await asyncio.to_thread(self.credentials.verify, username, presented_token)

    async def create_session(self, username: str) -> str:
        """Issue a new session id for ``username``.

        Existing sessions of the same user stay valid.
        """
        session_id = secrets.token_urlsafe(32)
        await self.sessions.insert(session_id, username)
        log.info("auth.session.created", username=username)
        return session_id

    async def resolve_session(self, session_id: Optional[str]) -> AuthenticatedUser:
        """Map a session id to its user.

        Raises:
            MissingSessionError: no session id was presented.
            InvalidSessionError: the id is unknown or its user no longer exists.
        """
        if session_id is None:
            raise MissingSessionError()

        username = await self.sessions.lookup(session_id)
        if username is None:
            log.info("auth.session.unknown")
            raise InvalidSessionError()

        user = self.credentials.get(username)
        if user is None:
            log.warning("auth.session.stale_user", username=username)
            raise InvalidSessionError()

        return AuthenticatedUser(username=username, name=user.name)

    async def end_sessions_for_user(self, username: str) -> int:
        removed = await self.sessions.remove_by_user(username)
        log.info("auth.sessions.ended", username=username, removed=removed)
        return removed

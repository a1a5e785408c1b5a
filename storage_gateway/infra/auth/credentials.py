"""
File-backed credential store.

The users file maps a username to its display name and a bcrypt hash of the
user's API token::

    {"alice": {"name": "Alice A.", "token_hash": "$2b$12$..."}}

It is produced out of process by ``add-user`` and loaded once at startup.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, Mapping, Optional, Union

from passlib.context import CryptContext
from pydantic import BaseModel, ValidationError

from storage_gateway.infra.config.logging_config import get_logger

log = get_logger("auth.credentials")

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


class UserRecord(BaseModel):
    """One entry of the users file."""

    name: str
    token_hash: str


def hash_token(token: str) -> str:
    """Hash a plaintext token for storage in the users file."""
    return pwd_context.hash(token)


class CredentialStore:
    """Read-only username -> UserRecord table."""

    def __init__(self, users: Optional[Mapping[str, UserRecord]] = None) -> None:
        self._users: Dict[str, UserRecord] = dict(users or {})

    @classmethod
    def load(cls, path: Union[str, Path]) -> "CredentialStore":
        """Load the users file, falling back to an empty table."""
        path = Path(path)
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            log.info("credentials.missing_file", path=str(path))
            return cls()
        except (OSError, ValueError) as e:
            log.warning("credentials.unreadable", path=str(path), error=str(e))
            return cls()

        try:
            users = {
                username: UserRecord.model_validate(entry)
                for username, entry in raw.items()
            }
        except (AttributeError, ValidationError) as e:
            log.warning("credentials.malformed", path=str(path), error=str(e))
            return cls()

        log.info("credentials.loaded", path=str(path), users=len(users))
        return cls(users)

    def get(self, username: str) -> Optional[UserRecord]:
        return self._users.get(username)

    def __contains__(self, username: object) -> bool:
        return username in self._users

    def __len__(self) -> int:
        return len(self._users)

    def verify(self, username: str, token: str) -> bool:
        """Check ``token`` against the stored hash; unknown users fail closed."""
        user = self._users.get(username)
        if user is None:
            return False
        try:
            return pwd_context.verify(token, user.token_hash)
        except (ValueError, TypeError):
            # unparseable hash in the users file
            log.warning("credentials.bad_hash", username=username)
            return False

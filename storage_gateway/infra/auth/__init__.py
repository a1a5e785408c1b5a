"""Authentication infrastructure package."""

from .cookies import clear_cookie_header, extract_session_id, session_cookie_header
from .credentials import CredentialStore, UserRecord, hash_token

__all__ = [
    "CredentialStore",
    "UserRecord",
    "hash_token",
    "extract_session_id",
    "session_cookie_header",
    "clear_cookie_header",
]

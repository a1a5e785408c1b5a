"""
Application context: everything a request handler needs, built once per app.
"""

from dataclasses import dataclass
from typing import Optional

from storage_gateway.application.auth_gate import AuthGate
from storage_gateway.infra.auth.credentials import CredentialStore
from storage_gateway.infra.config.settings import Settings, get_settings
from storage_gateway.infra.sessions import (
    InMemorySessionStore,
    RedisSessionStore,
    SessionStore,
)
from storage_gateway.infra.storage import ObjectStorage, r2_client_factory


@dataclass
class AppContext:
    settings: Settings
    credentials: CredentialStore
    sessions: SessionStore
    auth: AuthGate
    storage: ObjectStorage


def build_session_store(settings: Settings) -> SessionStore:
    backend = settings.session_backend.lower()
    if backend == "memory":
        return InMemorySessionStore(ttl_seconds=settings.session_ttl_seconds)
    if backend == "redis":
        return RedisSessionStore.from_url(
            settings.redis_url,
            prefix=settings.redis_key_prefix,
            ttl_seconds=settings.session_ttl_seconds,
        )
    raise ValueError(f"Unknown SESSION_BACKEND: {settings.session_backend}")


def build_context(
    settings: Optional[Settings] = None,
    *,
    credentials: Optional[CredentialStore] = None,
    sessions: Optional[SessionStore] = None,
    storage: Optional[ObjectStorage] = None,
) -> AppContext:
    """Wire the context from settings; explicit collaborators win."""
    settings = settings or get_settings()
    if credentials is None:
        credentials = CredentialStore.load(settings.users_file)
    if sessions is None:
        sessions = build_session_store(settings)
    if storage is None:
        storage = ObjectStorage(
            bucket=settings.r2_bucket_name,
            client_factory=r2_client_factory(settings),
            base_path=settings.storage_base_path,
        )
    return AppContext(
        settings=settings,
        credentials=credentials,
        sessions=sessions,
        auth=AuthGate(credentials, sessions),
        storage=storage,
    )

"""
Unit tests for session issuance and resolution.
"""

import pytest

from storage_gateway.application.auth_gate import AuthGate
from storage_gateway.domain.entities import AuthenticatedUser
from storage_gateway.domain.exceptions import InvalidSessionError, MissingSessionError
from storage_gateway.infra.auth.credentials import CredentialStore, UserRecord
from storage_gateway.infra.sessions import InMemorySessionStore
from tests._helpers.auth import ALICE_TOKEN


@pytest.fixture
def gate(credentials):
    return AuthGate(credentials, InMemorySessionStore())


class TestVerifyCredentials:
    @pytest.mark.asyncio
    async def test_valid_pair(self, gate):
        assert await gate.verify_credentials("alice", ALICE_TOKEN) is True

    @pytest.mark.asyncio
    async def test_invalid_pairs(self, gate):
        assert await gate.verify_credentials("alice", "nope") is False
        assert await gate.verify_credentials("nobody", ALICE_TOKEN) is False
        assert await gate.verify_credentials("", "") is False


class TestSessions:
    @pytest.mark.asyncio
    async def test_create_and_resolve(self, gate):
        session_id = await gate.create_session("alice")

        user = await gate.resolve_session(session_id)

        assert user == AuthenticatedUser(username="alice", name="Alice A.")

    @pytest.mark.asyncio
    async def test_session_ids_are_unique_and_opaque(self, gate):
        ids = {await gate.create_session("alice") for _ in range(20)}
        assert len(ids) == 20
        assert all("alice" not in sid and len(sid) >= 40 for sid in ids)

    @pytest.mark.asyncio
    async def test_missing_session(self, gate):
        with pytest.raises(MissingSessionError) as exc_info:
            await gate.resolve_session(None)
        assert exc_info.value.message == "Missing session"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "session_id", ["", "unknown", "00000000-0000-0000-0000-000000000000", "x" * 500]
    )
    async def test_unknown_session(self, gate, session_id):
        await gate.create_session("alice")
        with pytest.raises(InvalidSessionError) as exc_info:
            await gate.resolve_session(session_id)
        assert exc_info.value.message == "Invalid session"

    @pytest.mark.asyncio
    async def test_session_of_deleted_user_is_invalid(self):
        sessions = InMemorySessionStore()
        await sessions.insert("orphan", "ghost")
        gate = AuthGate(
            CredentialStore({"alice": UserRecord(name="Alice A.", token_hash="x")}),
            sessions,
        )

        with pytest.raises(InvalidSessionError):
            await gate.resolve_session("orphan")

    @pytest.mark.asyncio
    async def test_end_sessions_for_user(self, gate):
        first = await gate.create_session("alice")
        second = await gate.create_session("alice")
        bobs = await gate.create_session("bob")

        assert await gate.end_sessions_for_user("alice") == 2

        for session_id in (first, second):
            with pytest.raises(InvalidSessionError):
                await gate.resolve_session(session_id)
        assert (await gate.resolve_session(bobs)).username == "bob"

from typing import Optional

import redis.asyncio as redis

from .base import SessionStore

# SMEMBERS and the DELs run as one script so an insert cannot land between them
REMOVE_USER_SESSIONS = """
local removed = 0
for _, sid in ipairs(redis.call('SMEMBERS', KEYS[1])) do
    removed = removed + redis.call('DEL', ARGV[1] .. sid)
end
redis.call('DEL', KEYS[1])
return removed
"""


class RedisSessionStore(SessionStore):
    """Sessions shared between gateway processes through redis.

    ``<prefix>session:<id>`` holds the owning username and
    ``<prefix>user:<username>`` is the set of that user's session ids, so a
    logout can drop all of them without scanning the keyspace. With a TTL the
    user set expires together with the newest session.
    """

    def __init__(
        self,
        client: "redis.Redis",
        prefix: str = "gateway:",
        ttl_seconds: Optional[int] = None,
    ) -> None:
        self._r = client
        self._prefix = prefix
        self._ttl = ttl_seconds
        self._remove_user_sessions = client.register_script(REMOVE_USER_SESSIONS)

    @classmethod
    def from_url(
        cls, url: str, prefix: str = "gateway:", ttl_seconds: Optional[int] = None
    ) -> "RedisSessionStore":
        return cls(redis.from_url(url, decode_responses=True), prefix, ttl_seconds)

    def _session_key(self, session_id: str) -> str:
        return f"{self._prefix}session:{session_id}"

    def _user_key(self, username: str) -> str:
        return f"{self._prefix}user:{username}"

    async def lookup(self, session_id: str) -> Optional[str]:
        value = await self._r.get(self._session_key(session_id))
        if isinstance(value, bytes):
            value = value.decode("utf-8")
        return value

    async def insert(self, session_id: str, username: str) -> None:
        user_key = self._user_key(username)
        async with self._r.pipeline(transaction=True) as pipe:
            pipe.set(self._session_key(session_id), username, ex=self._ttl)
            pipe.sadd(user_key, session_id)
            if self._ttl:
                pipe.expire(user_key, self._ttl)
            await pipe.execute()

    async def remove_by_user(self, username: str) -> int:
        """Drop every session of ``username``; returns how many were still live."""
        removed = await self._remove_user_sessions(
            keys=[self._user_key(username)], args=[f"{self._prefix}session:"]
        )
        return int(removed)

    async def close(self) -> None:
        await self._r.aclose()

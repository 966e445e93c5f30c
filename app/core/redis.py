import json

import redis.asyncio as redis
from app.core.config import settings

class SessionStore:
    """Active sessions, keyed by the identity provider's access token.

    A token that verifies but has no entry here was signed out (or never
    registered) and is refused.
    """

    prefix = "token"

    def __init__(self, url: str = settings.REDIS_URL):
        self.redis = redis.from_url(url, encoding="utf-8", decode_responses=True)

    def _key(self, token: str) -> str:
        return f"{self.prefix}:{token}"

    async def save(self, token: str, data: dict, expire: int):
        await self.redis.set(self._key(token), json.dumps(data), ex=max(expire, 1))

    async def load(self, token: str) -> dict | None:
        raw = await self.redis.get(self._key(token))
        return json.loads(raw) if raw else None

    async def revoke(self, token: str) -> bool:
        return bool(await self.redis.delete(self._key(token)))

    async def close(self):
        await self.redis.aclose()

session_store = SessionStore()

def get_session_store() -> SessionStore:
    return session_store

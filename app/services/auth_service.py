from datetime import datetime, timezone
from uuid import UUID

from app.core.exceptions import AuthError
from app.core.logger import logger
from app.core.redis import SessionStore
from app.core.security import decode_access_token
from app.core.utils import utcnow
from app.schemas.auth import CurrentUser, SessionInfo


def _identity(payload: dict) -> CurrentUser:
    try:
        user_id = UUID(str(payload["sub"]))
    except ValueError:
        raise AuthError("Could not validate credentials")
    return CurrentUser(id=user_id, email=payload.get("email"))


class AuthService:
    """Mirrors the identity provider's sessions so they can be signed out."""

    def __init__(self, store: SessionStore):
        self.store = store

    async def start_session(self, token: str) -> SessionInfo:
        payload = decode_access_token(token)
        user = _identity(payload)
        expires_at = datetime.fromtimestamp(payload["exp"], tz=timezone.utc)
        ttl = int((expires_at - utcnow()).total_seconds())
        if ttl <= 0:
            raise AuthError("Session expired")

        await self.store.save(token, {"user_id": str(user.id), "email": user.email}, ttl)
        logger.info("Session started for user %s", user.id)
        return SessionInfo(user=user, expires_at=expires_at)

    async def current_user(self, token: str) -> CurrentUser:
        payload = decode_access_token(token)
        if await self.store.load(token) is None:
            raise AuthError("Session expired")
        return _identity(payload)

    async def end_session(self, token: str, user: CurrentUser) -> None:
        await self.store.revoke(token)
        logger.info("Session ended for user %s", user.id)

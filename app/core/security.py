from datetime import timedelta
from typing import Optional

import jwt
from jwt.exceptions import PyJWTError

from app.core.config import settings
from app.core.exceptions import AuthError
from app.core.utils import utcnow


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Sign a token the same way the identity provider does.

    Used by local tooling and the test-suite; production tokens come from
    the provider itself.
    """
    to_encode = data.copy()
    expire = utcnow() + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode.setdefault("aud", settings.TOKEN_AUDIENCE)
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> dict:
    # Tokens without an expiry or a subject are refused outright.
    try:
        payload = jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM],
            audience=settings.TOKEN_AUDIENCE,
            options={"require": ["exp", "sub"]},
        )
    except PyJWTError:
        raise AuthError("Could not validate credentials")
    if not payload.get("sub"):
        raise AuthError("Could not validate credentials")
    return payload

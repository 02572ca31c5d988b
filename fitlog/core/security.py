from datetime import datetime, timedelta, timezone

from jose import JWTError
from jose import jwt

from fitlog.core.config import settings

# Tokens are issued by the external identity provider. create_access_token
# mints compatible tokens for local development and tests.


def create_token(*, user_id: str, expires_delta: timedelta, audience: str | None = None) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        "sub": user_id,
        "type": "access",
        "iat": int(now.timestamp()),
        "exp": int((now + expires_delta).timestamp()),
    }
    aud = audience or settings.JWT_AUDIENCE
    if aud:
        payload["aud"] = aud
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALG)

def create_access_token(user_id: str) -> str:
    return create_token(
        user_id=user_id,
        expires_delta=timedelta(minutes=settings.ACCESS_TOKEN_MINUTES),
    )

def decode_token(token: str) -> dict:
    options = {"verify_aud": settings.JWT_AUDIENCE is not None}
    try:
        return jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[settings.JWT_ALG],
            audience=settings.JWT_AUDIENCE,
            options=options,
        )
    except JWTError:
        raise ValueError("Invalid token")

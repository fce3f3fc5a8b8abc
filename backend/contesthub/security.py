from __future__ import annotations
from datetime import datetime, timedelta, timezone
from typing import Any
import jwt
from contesthub.config import settings

JWT_ALG = "HS256"

def issue_token(email: str) -> str:
    """Sign a token binding ``email``; valid for ACCESS_TOKEN_TTL_DAYS."""
    now = datetime.now(timezone.utc)
    payload = {
        "email": email,
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(days=settings.access_token_ttl_days)).timestamp()),
    }
    return jwt.encode(payload, settings.access_token_secret, algorithm=JWT_ALG)

def decode_token(token: str) -> dict[str, Any]:
    # raises jwt.InvalidTokenError (ExpiredSignatureError included)
    return jwt.decode(
        token,
        settings.access_token_secret,
        algorithms=[JWT_ALG],
        options={"require": ["email", "iat", "exp"]},
    )

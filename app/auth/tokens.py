from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from functools import lru_cache

import jwt

from app.config import settings

def now_utc() -> datetime:
    return datetime.now(timezone.utc)

@dataclass(frozen=True)
class Valid:
    user_id: uuid.UUID

@dataclass(frozen=True)
class Invalid:
    reason: str

class TokenCodec:
    """Signs and verifies HS256 access tokens.

    The signing secret is fixed for the lifetime of the codec; a new secret
    invalidates every token issued under the old one.
    """

    algorithm = "HS256"

    def __init__(
        self,
        secret: str,
        *,
        issuer: str,
        audience: str,
        ttl: timedelta = timedelta(hours=1),
    ):
        if not secret:
            raise ValueError("token secret must not be empty")
        self._secret = secret
        self.issuer = issuer
        self.audience = audience
        self.ttl = ttl

    def issue(self, user_id: str | uuid.UUID, *, now: datetime | None = None) -> str:
        iat = now or now_utc()
        exp = iat + self.ttl
        payload = {
            "sub": str(user_id),
            "iss": self.issuer,
            "aud": self.audience,
            "iat": int(iat.timestamp()),
            "exp": int(exp.timestamp()),
        }
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def verify(self, token: str) -> Valid | Invalid:
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                audience=self.audience,
                issuer=self.issuer,
                options={"require": ["sub", "exp", "iat"]},
            )
        except jwt.ExpiredSignatureError:
            return Invalid("token expired")
        except jwt.InvalidTokenError:
            return Invalid("invalid token")

        try:
            return Valid(uuid.UUID(str(payload["sub"])))
        except ValueError:
            return Invalid("invalid subject")

@lru_cache
def get_token_codec() -> TokenCodec:
    return TokenCodec(
        settings.jwt_secret,
        issuer=settings.jwt_issuer,
        audience=settings.jwt_audience,
        ttl=timedelta(minutes=settings.jwt_expires_minutes),
    )

from __future__ import annotations

from dataclasses import dataclass

from fastapi import Depends, Header

from app.auth.tokens import Invalid, TokenCodec, Valid, get_token_codec
from app.errors import AuthorizationError

@dataclass(frozen=True)
class Missing:
    pass

IdentityResult = Missing | Invalid | Valid

def resolve_identity(authorization: str | None, codec: TokenCodec) -> IdentityResult:
    """Resolve an ``Authorization`` header value into an identity result.

    No header (or an empty one) is ``Missing``. Anything that is not
    ``Bearer <token>`` or whose token fails verification is ``Invalid``.
    Account existence is not checked here.
    """
    if authorization is None or not authorization.strip():
        return Missing()

    parts = authorization.strip().split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        return Invalid("malformed authorization header")

    return codec.verify(parts[1])

def require_identity(
    authorization: str | None = Header(default=None),
    codec: TokenCodec = Depends(get_token_codec),
) -> Valid:
    result = resolve_identity(authorization, codec)
    if isinstance(result, Missing):
        raise AuthorizationError("missing bearer token")
    if isinstance(result, Invalid):
        raise AuthorizationError("invalid bearer token")
    return result

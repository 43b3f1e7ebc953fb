"""Signed, short-lived tokens for identity flows.

`TokenSigner` wraps PyJWT (HS256). Callers get a plain dict back from
`verify` or one of two exceptions, so they can tell an expired token (ask
the user to start over) from a tampered or malformed one.
"""

from datetime import datetime, timedelta, timezone

import jwt
from django.core.exceptions import ImproperlyConfigured


class TokenError(Exception):
    """Base for token verification failures."""


class TokenExpired(TokenError):
    pass


class TokenInvalid(TokenError):
    pass


class TokenSigner:
    """Sign and verify JWT payloads with a shared secret."""

    def __init__(self, secret: str, algorithm: str = "HS256"):
        if not secret:
            raise ImproperlyConfigured("A signing secret is required to issue identity tokens.")
        self._secret = secret
        self.algorithm = algorithm

    def sign(self, payload: dict, ttl: timedelta) -> str:
        now = datetime.now(timezone.utc)
        claims = {**payload, "iat": now, "exp": now + ttl}
        return jwt.encode(claims, self._secret, algorithm=self.algorithm)

    def verify(self, token: str) -> dict:
        try:
            payload = jwt.decode(token, self._secret, algorithms=[self.algorithm], options={"require": ["exp"]})
        except jwt.ExpiredSignatureError as exc:
            raise TokenExpired(str(exc)) from exc
        except jwt.InvalidTokenError as exc:
            raise TokenInvalid(str(exc)) from exc
        if not isinstance(payload, dict):
            raise TokenInvalid("Token payload must be an object")
        return payload

"""PyJWT-backed implementation of TokenService.

Tokens are HS256-signed JWTs whose ``sub`` claim is the user ID (as a
string, which is what RFC 7519 and PyJWT require) and whose ``exp``
claim bounds their lifetime.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import jwt

from ecom.domain.exceptions import UnauthorizedError
from ecom.domain.service.token_service import TokenService

ALGORITHM = "HS256"
DEFAULT_EXPIRATION_SECONDS = 3600 * 24 * 7


class JwtTokenService(TokenService):

    def __init__(
        self,
        secret: str,
        expiration_seconds: int = DEFAULT_EXPIRATION_SECONDS,
    ) -> None:
        if not secret:
            raise ValueError("JWT secret must not be empty")
        self._secret = secret
        self._expiration = timedelta(seconds=expiration_seconds)

    def issue(self, user_id: int) -> str:
        now = datetime.now(timezone.utc)
        claims = {
            "sub": str(user_id),
            "iat": now,
            "exp": now + self._expiration,
        }
        return jwt.encode(claims, self._secret, algorithm=ALGORITHM)

    def verify(self, token: str) -> int:
        try:
            claims = jwt.decode(
                token,
                self._secret,
                algorithms=[ALGORITHM],
                options={"require": ["exp", "sub"]},
            )
        except jwt.ExpiredSignatureError as exc:
            raise UnauthorizedError("credential expired") from exc
        except jwt.InvalidTokenError as exc:
            raise UnauthorizedError("invalid credential") from exc

        try:
            return int(claims["sub"])
        except (TypeError, ValueError) as exc:
            raise UnauthorizedError("invalid credential subject") from exc

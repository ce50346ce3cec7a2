"""Application service: Authenticate a request.

Resolves the ``Authorization`` header of a request to the ID of an
existing user.  Every way this can fail is an UnauthorizedError, so the
caller cannot tell a forged token from a deleted user.
"""

from __future__ import annotations

import structlog

from ecom.domain.exceptions import LookupFailureError, UnauthorizedError, UpstreamFailureError
from ecom.domain.repository.user_repository import UserRepository
from ecom.domain.service.token_service import TokenService

logger = structlog.get_logger(__name__)

BEARER_SCHEME = "bearer"


class AuthenticateHandler:

    def __init__(self, token_service: TokenService, user_repo: UserRepository) -> None:
        self._token_service = token_service
        self._user_repo = user_repo

    def handle(self, authorization: str | None) -> int:
        """Return the user ID behind a ``Bearer <token>`` header value."""
        token = self._extract_token(authorization)
        user_id = self._token_service.verify(token)

        try:
            user = self._user_repo.get_by_id(user_id)
        except LookupFailureError as exc:
            raise UpstreamFailureError("could not load user") from exc

        if user is None:
            logger.info("auth.unknown_user", user_id=user_id)
            raise UnauthorizedError("permission denied")
        return user_id

    @staticmethod
    def _extract_token(authorization: str | None) -> str:
        if not authorization or not authorization.strip():
            raise UnauthorizedError("missing credential")

        parts = authorization.split()
        if len(parts) != 2 or parts[0].lower() != BEARER_SCHEME:
            raise UnauthorizedError("malformed credential")
        return parts[1]

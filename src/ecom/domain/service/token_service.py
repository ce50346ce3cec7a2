"""Port for issuing and verifying bearer credentials.

The domain only needs two things from a token: that it is authentic and
unexpired, and which user it was issued to.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class TokenService(ABC):

    @abstractmethod
    def issue(self, user_id: int) -> str:
        """Return a signed credential for *user_id*."""

    @abstractmethod
    def verify(self, token: str) -> int:
        """Return the user ID a credential was issued to.

        Raises UnauthorizedError if the credential is malformed, forged,
        expired, or carries no usable subject.
        """

"""Abstract repository for User."""

from __future__ import annotations

from abc import ABC, abstractmethod

from ecom.domain.model.user import User


class UserRepository(ABC):

    @abstractmethod
    def get_by_id(self, user_id: int) -> User | None:
        """Return a user by ID, or None."""

    @abstractmethod
    def get_by_email(self, email: str) -> User | None:
        """Return a user by email (case-insensitive), or None."""

    @abstractmethod
    def add(self, user: User) -> User:
        """Persist a new user and assign its ID."""

"""Application service: Register User use case."""

from __future__ import annotations

from ecom.domain.exceptions import ValidationError
from ecom.domain.model.user import User
from ecom.domain.repository.user_repository import UserRepository


class RegisterUserHandler:

    def __init__(self, user_repo: UserRepository) -> None:
        self._user_repo = user_repo

    def handle(self, first_name: str, last_name: str, email: str) -> User:
        if not first_name or not first_name.strip():
            raise ValidationError("First name is required")
        if not last_name or not last_name.strip():
            raise ValidationError("Last name is required")

        email = (email or "").strip()
        if "@" not in email:
            raise ValidationError(f"Invalid email address: {email!r}")

        if self._user_repo.get_by_email(email) is not None:
            raise ValidationError(f"user with email {email} already exists")

        return self._user_repo.add(
            User(
                id=None,
                first_name=first_name.strip(),
                last_name=last_name.strip(),
                email=email,
            )
        )

"""JSON-file-backed implementation of UserRepository."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from ecom.domain.model.user import User
from ecom.domain.repository.user_repository import UserRepository
from ecom.infrastructure.persistence.json_files import (
    ensure_file,
    load_records,
    next_id,
    persist_records,
)
from ecom.infrastructure.persistence.store_lock import lock_for


class JsonUserRepository(UserRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._lock = lock_for(file_path.parent)
        ensure_file(self._file_path)

    def get_by_id(self, user_id: int) -> User | None:
        for raw in load_records(self._file_path):
            if raw["id"] == user_id:
                return self._to_domain(raw)
        return None

    def get_by_email(self, email: str) -> User | None:
        for raw in load_records(self._file_path):
            if raw["email"].lower() == email.lower():
                return self._to_domain(raw)
        return None

    def add(self, user: User) -> User:
        with self._lock:
            records = load_records(self._file_path)
            user.id = next_id(records)
            records.append(
                {
                    "id": user.id,
                    "first_name": user.first_name,
                    "last_name": user.last_name,
                    "email": user.email,
                    "created_at": user.created_at.isoformat(),
                }
            )
            persist_records(self._file_path, records)
        return user

    @staticmethod
    def _to_domain(raw: dict) -> User:
        return User(
            id=raw["id"],
            first_name=raw["first_name"],
            last_name=raw["last_name"],
            email=raw["email"],
            created_at=datetime.fromisoformat(raw["created_at"]),
        )

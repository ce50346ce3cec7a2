"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.

Configuration comes from the environment, read at call time so tests
and the CLI can override it.
"""

from __future__ import annotations

import os
from pathlib import Path

from ecom.infrastructure.auth.jwt_token_service import (
    DEFAULT_EXPIRATION_SECONDS,
    JwtTokenService,
)
from ecom.infrastructure.persistence.json_order_repository import (
    JsonOrderRepository,
)
from ecom.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)
from ecom.infrastructure.persistence.json_unit_of_work import (
    ORDER_ITEMS_FILE,
    ORDERS_FILE,
    PRODUCTS_FILE,
    JsonUnitOfWork,
)
from ecom.infrastructure.persistence.json_user_repository import (
    JsonUserRepository,
)

# Resolve data directory relative to the project root.
# When installed in editable mode the project root is the repo root.
_DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"
_DEFAULT_JWT_SECRET = "not-so-secret-now-is-it?-set-ECOM_JWT_SECRET"


def data_dir() -> Path:
    return Path(os.getenv("ECOM_DATA_DIR", str(_DEFAULT_DATA_DIR)))


def jwt_secret() -> str:
    return os.getenv("ECOM_JWT_SECRET", _DEFAULT_JWT_SECRET)


def jwt_expiration_seconds() -> int:
    return int(os.getenv("ECOM_JWT_EXPIRATION_SECONDS", str(DEFAULT_EXPIRATION_SECONDS)))


def server_host() -> str:
    return os.getenv("ECOM_HOST", "127.0.0.1")


def server_port() -> int:
    return int(os.getenv("ECOM_PORT", "8080"))


def product_repository() -> JsonProductRepository:
    return JsonProductRepository(data_dir() / PRODUCTS_FILE)


def order_repository() -> JsonOrderRepository:
    return JsonOrderRepository(data_dir() / ORDERS_FILE, data_dir() / ORDER_ITEMS_FILE)


def user_repository() -> JsonUserRepository:
    return JsonUserRepository(data_dir() / "users.json")


def unit_of_work() -> JsonUnitOfWork:
    return JsonUnitOfWork(data_dir())


def token_service() -> JwtTokenService:
    return JwtTokenService(jwt_secret(), jwt_expiration_seconds())


def http_app():
    """Build the FastAPI application wired to the JSON store."""
    from ecom.infrastructure.api.app import create_app

    return create_app(
        unit_of_work_factory=unit_of_work,
        user_repo=user_repository(),
        product_repo=product_repository(),
        order_repo=order_repository(),
        token_service=token_service(),
    )

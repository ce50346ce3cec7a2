"""FastAPI application factory.

Errors raised by the application layer are turned into responses here,
by exception type:

* ``UnauthorizedError``            -> 401
* ``ProductNotFoundError``         -> 400 (a bad cart, not a missing page)
* other ``EntityNotFoundError``    -> 404
* other ``DomainException``        -> 400
* ``StoreError``                   -> 500, generic body, logged in full
"""

from __future__ import annotations

from typing import Callable

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ecom.application.unit_of_work import UnitOfWork
from ecom.domain.exceptions import (
    DomainException,
    EntityNotFoundError,
    ProductNotFoundError,
    StoreError,
    UnauthorizedError,
)
from ecom.domain.repository.order_repository import OrderRepository
from ecom.domain.repository.product_repository import ProductRepository
from ecom.domain.repository.user_repository import UserRepository
from ecom.domain.service.token_service import TokenService
from ecom.infrastructure.api.routes import router

logger = structlog.get_logger(__name__)


def _error(status_code: int, message: str, headers: dict | None = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message}, headers=headers)


def create_app(
    unit_of_work_factory: Callable[[], UnitOfWork],
    user_repo: UserRepository,
    product_repo: ProductRepository,
    order_repo: OrderRepository,
    token_service: TokenService,
) -> FastAPI:
    app = FastAPI(title="ecom API", description="Cart checkout and orders")

    app.state.unit_of_work_factory = unit_of_work_factory
    app.state.user_repo = user_repo
    app.state.product_repo = product_repo
    app.state.order_repo = order_repo
    app.state.token_service = token_service

    @app.exception_handler(UnauthorizedError)
    async def unauthorized(request: Request, exc: UnauthorizedError) -> JSONResponse:
        return _error(401, str(exc), headers={"WWW-Authenticate": "Bearer"})

    @app.exception_handler(ProductNotFoundError)
    async def product_not_found(request: Request, exc: ProductNotFoundError) -> JSONResponse:
        return _error(400, str(exc))

    @app.exception_handler(EntityNotFoundError)
    async def not_found(request: Request, exc: EntityNotFoundError) -> JSONResponse:
        return _error(404, str(exc))

    @app.exception_handler(DomainException)
    async def bad_request(request: Request, exc: DomainException) -> JSONResponse:
        return _error(400, str(exc))

    @app.exception_handler(RequestValidationError)
    async def invalid_payload(request: Request, exc: RequestValidationError) -> JSONResponse:
        return _error(400, f"invalid payload: {exc.errors()}")

    @app.exception_handler(StoreError)
    async def store_failure(request: Request, exc: StoreError) -> JSONResponse:
        logger.error(
            "store.failure",
            path=request.url.path,
            user_id=getattr(request.state, "user_id", None),
            exc_info=exc,
        )
        return _error(500, "internal server error")

    @app.get("/health")
    async def health() -> dict:
        return {"status": "ok"}

    app.include_router(router)
    return app

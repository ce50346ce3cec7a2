"""FastAPI dependencies — the bridge from a request to the application layer.

Collaborators are stored on ``app.state`` by ``create_app`` and picked up
here per request.
"""

from __future__ import annotations

from fastapi import Request

from ecom.application.authenticate import AuthenticateHandler
from ecom.application.unit_of_work import UnitOfWork


def current_user_id(request: Request) -> int:
    """Authenticate the request and attach the user ID to ``request.state``.

    Raising here stops the request before the endpoint body runs.
    """
    handler = AuthenticateHandler(
        token_service=request.app.state.token_service,
        user_repo=request.app.state.user_repo,
    )
    user_id = handler.handle(request.headers.get("Authorization"))
    request.state.user_id = user_id
    return user_id


def unit_of_work(request: Request) -> UnitOfWork:
    return request.app.state.unit_of_work_factory()

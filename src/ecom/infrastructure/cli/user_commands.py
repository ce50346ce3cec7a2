"""CLI commands for users and their credentials."""

from __future__ import annotations

import click

from ecom.application.register_user import RegisterUserHandler
from ecom.domain.exceptions import DomainException, StoreError
from ecom.infrastructure.bootstrap import token_service, user_repository


@click.command("register")
@click.option("--first-name", required=True, help="First name.")
@click.option("--last-name", required=True, help="Last name.")
@click.option("--email", required=True, help="Email address (unique).")
def user_register(first_name: str, last_name: str, email: str) -> None:
    """Register a new shopper."""
    handler = RegisterUserHandler(user_repo=user_repository())

    try:
        user = handler.handle(first_name=first_name, last_name=last_name, email=email)
    except (DomainException, StoreError) as exc:
        raise click.ClickException(str(exc))

    click.echo(f"User #{user.id} {user.full_name} <{user.email}> registered")


@click.command("token")
@click.option("--email", required=True, help="Email of a registered user.")
def user_token(email: str) -> None:
    """Print a bearer token for a registered user."""
    try:
        user = user_repository().get_by_email(email)
    except StoreError as exc:
        raise click.ClickException(str(exc))

    if user is None:
        raise click.ClickException(f"No user with email {email}")

    click.echo(token_service().issue(user.id))  # type: ignore[arg-type]

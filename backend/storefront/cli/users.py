"""Flask CLI commands for account administration."""

from __future__ import annotations

import logging

import click
from flask.cli import with_appcontext

from storefront.services._shared.errors import NotFoundError
from storefront.services.auth.admin import AccountAdminService

LOGGER = logging.getLogger(__name__)


@click.group("users")
def users_cli() -> None:
    """Account administration commands."""


@users_cli.command("promote")
@click.argument("email")
@with_appcontext
def promote(email: str) -> None:
    """Grant the admin role to the account registered under EMAIL."""
    try:
        user = AccountAdminService().promote_to_admin(email)
    except NotFoundError as exc:
        raise click.ClickException(str(exc)) from exc
    LOGGER.info("user promoted", extra={"user_id": user.id})
    click.echo(f"{user.email} is now {user.role}")

"""Flask CLI commands for account administration."""

from __future__ import annotations

import click
from flask.cli import with_appcontext

from site_inspector.api.deps import auth_service
from site_inspector.services import RegisterIn


@click.group("users")
def users_cli() -> None:
    """User administration commands."""


@users_cli.command("create-admin")
@click.option("--email", required=True)
@click.option("--username", required=True)
@click.option("--full-name", "full_name", required=True)
@click.password_option("--password", confirmation_prompt=True)
@with_appcontext
def create_admin_command(email: str, username: str, full_name: str, password: str) -> None:
    """Create an administrator account.

    The same password policy and uniqueness checks as self-registration apply.
    """
    result = auth_service().create_admin(
        RegisterIn(email=email, username=username, full_name=full_name, password=password)
    )
    if not result:
        details = "; ".join(result.errors)
        raise click.ClickException(f"{result.message}: {details}")
    click.echo(f"Created admin {email}")

"""Flask CLI commands for refresh-token housekeeping."""

from __future__ import annotations

import logging

import click
from flask.cli import with_appcontext

from site_inspector.api.deps import auth_service, token_service
from site_inspector.core.extensions import db
from site_inspector.models.refresh_token import RevocationReason
from site_inspector.repositories import UserRepository

LOGGER = logging.getLogger(__name__)


@click.group("tokens")
def tokens_cli() -> None:
    """Refresh and reset token maintenance."""


@tokens_cli.command("cleanup")
@with_appcontext
def cleanup_command() -> None:
    """Delete expired refresh and password-reset tokens.

    Meant to run periodically (cron, systemd timer). Revoked but unexpired
    rows are kept for audit until they expire.
    """
    refresh_count = token_service().cleanup_expired()
    reset_count = auth_service().cleanup_expired_reset_tokens()
    click.echo(f"Deleted {refresh_count} expired refresh tokens")
    click.echo(f"Deleted {reset_count} expired password reset tokens")


@tokens_cli.command("revoke-user")
@click.argument("email")
@with_appcontext
def revoke_user_command(email: str) -> None:
    """Revoke every refresh token of the user identified by EMAIL."""
    user = UserRepository().get_by_email(email)
    user_id = user.id if user is not None else None
    db.session.rollback()
    if user_id is None:
        raise click.ClickException(f"No user with email {email!r}")
    count = token_service().revoke_all_for_user(user_id, reason=RevocationReason.ADMIN)
    LOGGER.info("Revoked tokens from CLI", extra={"event": "cli.tokens.revoke_user", "user_id": user_id})
    click.echo(f"Revoked {count} refresh tokens")

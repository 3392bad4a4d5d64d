"""Flask CLI commands for the user store."""

from __future__ import annotations

import logging

import click
from flask import current_app
from flask.cli import with_appcontext

from authapi.api.deps import get_auth_service
from authapi.core.extensions import db
from authapi.services._shared.result import Failure
from authapi.services.auth import RegisterIn

LOGGER = logging.getLogger(__name__)


def _ensure_non_production() -> None:
    """Abort destructive commands when running in production."""
    config = current_app.config
    if not (config.get("DEBUG") or config.get("TESTING")):
        raise click.UsageError("'--drop' is restricted to development and testing.")


@click.group("auth")
def auth_cli() -> None:
    """User store maintenance commands."""


@auth_cli.command("init-db")
@click.option("--drop", is_flag=True, help="Drop existing tables first (non-production only).")
@with_appcontext
def init_db_command(drop: bool) -> None:
    """Create the database tables (use ``flask db upgrade`` for migrations)."""
    if drop:
        _ensure_non_production()
        db.drop_all()
        LOGGER.warning("auth tables dropped", extra={"event": "cli.init_db.drop"})
    db.create_all()
    click.echo("Database tables created.")


@auth_cli.command("create-user")
@click.argument("name")
@click.argument("email")
@click.password_option("--password", help="Password (prompted when omitted).")
@with_appcontext
def create_user_command(name: str, email: str, password: str) -> None:
    """Register a user through the same rules as ``POST /auth/register``."""
    result = get_auth_service().register(RegisterIn(name=name, email=email, password=password))
    if isinstance(result, Failure):
        errors = result.details.get("errors") if result.details else None
        suffix = f" {errors}" if errors else ""
        raise click.ClickException(f"{result.message}.{suffix}")
    click.echo(f"Created user {result.value.id} <{result.value.email}>.")

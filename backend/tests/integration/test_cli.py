"""Integration tests for the ``flask auth`` command group."""

from __future__ import annotations

from sqlalchemy import inspect

from authapi.models import User


def test_init_db_creates_tables(runner, db) -> None:
    db.drop_all()

    result = runner.invoke(args=["auth", "init-db"])

    assert result.exit_code == 0, result.output
    assert "Database tables created." in result.output
    assert "users" in inspect(db.engine).get_table_names()


def test_init_db_drop_is_refused_outside_dev_and_testing(app, runner) -> None:
    app.config.update(TESTING=False, DEBUG=False)

    result = runner.invoke(args=["auth", "init-db", "--drop"])

    assert result.exit_code == 2
    assert "restricted to development and testing" in result.output


def test_create_user_registers_through_the_service(runner, session) -> None:
    result = runner.invoke(
        args=["auth", "create-user", "Jane", "Jane@Example.com", "--password", "secret123"]
    )

    assert result.exit_code == 0, result.output
    assert "<jane@example.com>" in result.output
    user = session.query(User).filter_by(email="jane@example.com").one()
    assert user.password_hash != "secret123"


def test_create_user_reports_duplicates(runner) -> None:
    args = ["auth", "create-user", "Jane", "jane@example.com", "--password", "secret123"]
    assert runner.invoke(args=args).exit_code == 0

    result = runner.invoke(args=args)

    assert result.exit_code == 1
    assert "Email is already registered" in result.output


def test_create_user_rejects_short_password(runner) -> None:
    result = runner.invoke(
        args=["auth", "create-user", "Jane", "jane@example.com", "--password", "short"]
    )

    assert result.exit_code == 1
    assert "Validation failed" in result.output


def test_create_user_rejects_overlong_password(runner, session) -> None:
    result = runner.invoke(
        args=["auth", "create-user", "Jane", "jane@example.com", "--password", "p" * 10_000]
    )

    assert result.exit_code == 1
    assert "Longer than maximum length 128." in result.output
    assert session.query(User).count() == 0

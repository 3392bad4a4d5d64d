"""Unit tests for UserRepository."""

from __future__ import annotations

import pytest

from authapi.models import User
from authapi.repositories.user import UserRepository
from authapi.services._shared.errors import DuplicateEmailError
from tests.factories.user import UserFactory


class TestUserRepository:
    """Ensure ``UserRepository`` performs the credential store operations."""

    @pytest.fixture()
    def repo(self, app):
        return UserRepository()

    def test_create_user_assigns_id(self, repo, session):
        user = repo.create_user(name="Jane", email="Jane@X.com", password_hash="digest")
        session.commit()

        assert user.id is not None
        assert user.email == "jane@x.com"
        assert repo.find_by_id(user.id) is user

    def test_create_user_duplicate_email(self, repo, session):
        UserFactory(email="dup@example.com")

        with pytest.raises(DuplicateEmailError) as excinfo:
            repo.create_user(name="Other", email="DUP@example.com", password_hash="digest")
        session.rollback()

        assert str(excinfo.value) == "Email is already registered"
        assert excinfo.value.email == "dup@example.com"
        # no partial row left behind
        assert session.query(User).filter_by(email="dup@example.com").count() == 1

    def test_find_by_email_is_case_insensitive(self, repo):
        created = UserFactory(email="bob@example.com")

        found = repo.find_by_email("  BOB@Example.com ")
        assert found is not None
        assert found.id == created.id

    def test_find_unknown_returns_none(self, repo):
        assert repo.find_by_email("nobody@example.com") is None
        assert repo.find_by_id(999_999) is None

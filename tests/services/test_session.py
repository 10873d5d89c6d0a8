"""Unit tests for the authentication session and service."""

from unittest.mock import MagicMock

import pytest

from halabtours.models.api import AuthResponse, LoginRequest
from halabtours.services.session import (
    AuthService,
    AuthSession,
    NotAdminError,
    decode_token_claims,
)


def auth_response(token, user_id=3, email="lina@example.com"):
    return AuthResponse(id=user_id, name="Lina", email=email, token=token)


def test_decode_token_claims(admin_token):
    claims = decode_token_claims(admin_token)
    assert claims.id == 1
    assert claims.role == "ADMIN"
    assert claims.exp == 2000000000


@pytest.mark.parametrize("token", ["not-a-jwt", "a.%%%.c", "a.bm90IGpzb24.c"])
def test_malformed_token_has_empty_claims(token):
    claims = decode_token_claims(token)
    assert claims.id is None
    assert claims.role is None


def test_new_session_is_anonymous():
    session = AuthSession()
    assert not session.is_authenticated
    assert not session.is_admin
    assert session.admin_id is None


def test_login_and_logout(user_token):
    session = AuthSession()

    session.login(auth_response(user_token))

    assert session.is_authenticated
    assert session.user.name == "Lina"
    assert session.access_token == user_token
    assert not session.is_admin

    session.logout()

    assert session.user is None
    assert not session.is_authenticated


def test_admin_id_comes_from_token_claims(admin_token):
    session = AuthSession()
    session.login(auth_response(admin_token, user_id=1, email="admin@example.com"))
    assert session.is_admin
    assert session.admin_id == 1


class TestAuthService:
    @pytest.fixture
    def client(self):
        return MagicMock()

    @pytest.fixture
    def service(self, client):
        return AuthService(client, AuthSession())

    def test_login(self, service, client, user_token):
        client.login.return_value = auth_response(user_token)

        user = service.login("lina@example.com", "secret")

        assert user.id == 3
        assert service.session.is_authenticated
        client.login.assert_called_once_with(
            LoginRequest(email="lina@example.com", password="secret")
        )

    def test_register_signs_in(self, service, client, user_token):
        client.register.return_value = auth_response(user_token)

        service.register("Lina", "lina@example.com", "secret")

        assert service.session.user.email == "lina@example.com"

    def test_admin_login(self, service, client, admin_token):
        client.login.return_value = auth_response(admin_token, user_id=1, email="admin@example.com")

        user = service.admin_login("admin@example.com", "secret")

        assert user.id == 1
        assert service.session.admin_id == 1

    def test_admin_login_rejects_regular_user(self, service, client, user_token):
        client.login.return_value = auth_response(user_token)

        with pytest.raises(NotAdminError):
            service.admin_login("lina@example.com", "secret")

        assert not service.session.is_authenticated

    def test_logout(self, service, client, user_token):
        client.login.return_value = auth_response(user_token)
        service.login("lina@example.com", "secret")

        service.logout()

        assert service.session.user is None

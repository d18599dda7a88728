from __future__ import annotations

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from src.time_clock.time_clock.core.enums import Role
from src.time_clock.time_clock.core.exceptions import AuthenticationError, NotFoundError, ValidationError
from src.time_clock.time_clock.users.service import AuthService
from src.time_clock.time_clock.users.tokens import TokenService, extract_bearer_token


def _auth(users_repo, ttl_hours=1):
    return AuthService(users_repo, TokenService("test-secret", ttl_hours=ttl_hours))


def test_login_issues_token_resolving_to_account(users_repo):
    auth = _auth(users_repo)

    result = auth.login("gerente", "secret123")
    claims = auth.resolve(result.token)

    assert result.expires_in == 3600
    assert claims.user_id == 2
    assert claims.role == Role.MANAGER


def test_auth_wrong_password_raises(users_repo):
    with pytest.raises(AuthenticationError):
        _auth(users_repo).login("admin", "wrong")


def test_inactive_account_cannot_login(users_repo):
    with pytest.raises(AuthenticationError):
        _auth(users_repo).login("inativo", "secret123")


def test_missing_credentials_is_validation_error(users_repo):
    with pytest.raises(ValidationError):
        _auth(users_repo).login("", "")


def test_expired_token_rejected(users_repo):
    tokens = TokenService("test-secret", ttl_hours=1)
    token = tokens.issue(users_repo.get_by_id(1), now=datetime.now(timezone.utc) - timedelta(hours=2))

    with pytest.raises(AuthenticationError):
        tokens.verify(token)


def test_token_signed_with_other_secret_rejected(users_repo):
    token = TokenService("other-secret").issue(users_repo.get_by_id(1))

    with pytest.raises(AuthenticationError):
        TokenService("test-secret").verify(token)


def test_token_for_deactivated_account_rejected(users_repo):
    import dataclasses

    auth = _auth(users_repo)
    token = auth.login("joao", "secret123").token
    users_repo.users[3] = dataclasses.replace(users_repo.users[3], is_active=False)

    with pytest.raises(AuthenticationError):
        auth.resolve(token)


def test_token_payload_claims(users_repo):
    token = TokenService("test-secret").issue(users_repo.get_by_id(3))
    payload = jwt.decode(token, "test-secret", algorithms=["HS256"], issuer="time-clock")

    assert payload["sub"] == "3"
    assert payload["role"] == "EMPLOYEE"


@pytest.mark.parametrize("header", [None, "", "Basic abc", "Bearer "])
def test_extract_bearer_token_rejects_malformed(header):
    with pytest.raises(AuthenticationError):
        extract_bearer_token(header)


def test_change_password(users_repo):
    auth = _auth(users_repo)

    with pytest.raises(ValidationError):
        auth.change_password(3, current_password="secret123", new_password="12345")
    with pytest.raises(ValidationError):
        auth.change_password(3, current_password="wrong", new_password="novasenha")

    auth.change_password(3, current_password="secret123", new_password="novasenha")

    assert auth.login("joao", "novasenha").user.user_id == 3
    with pytest.raises(AuthenticationError):
        auth.login("joao", "secret123")


def test_profile_of_unknown_account(users_repo):
    with pytest.raises(NotFoundError):
        _auth(users_repo).profile(42)

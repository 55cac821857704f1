"""Unit tests for AuthService."""

from unittest.mock import AsyncMock

import pytest

from flashdeck.core.exceptions import EmailAlreadyExistsError, InvalidCredentialsError
from flashdeck.core.security import decode_token
from flashdeck.modules.auth.schemas import LoginRequest, RegisterRequest
from flashdeck.modules.auth.service import AuthService
from flashdeck.modules.users.service import UserService
from flashdeck.tests.factories import DEFAULT_PASSWORD


@pytest.fixture
def user_service():
    return AsyncMock(spec=UserService)


@pytest.fixture
def auth_service(mock_session, user_service) -> AuthService:
    return AuthService(mock_session, user_service=user_service)


async def test_register_returns_token_for_email(auth_service, user_service, owner):
    user_service.create.return_value = owner

    response = await auth_service.register(
        RegisterRequest(email="owner@example.com", username="owner", password="secret1")
    )

    assert decode_token(response.token).sub == "owner@example.com"
    assert response.user.id == owner.id
    assert response.user.username == "owner"


async def test_register_duplicate(auth_service, user_service):
    user_service.create.side_effect = EmailAlreadyExistsError()

    with pytest.raises(EmailAlreadyExistsError):
        await auth_service.register(
            RegisterRequest(email="owner@example.com", username="owner", password="secret1")
        )


async def test_login(auth_service, user_service, owner):
    user_service.get_by_email.return_value = owner

    response = await auth_service.login(
        LoginRequest(email="OWNER@example.com", password=DEFAULT_PASSWORD)
    )

    user_service.get_by_email.assert_awaited_once_with("owner@example.com")
    assert decode_token(response.token).sub == owner.email


async def test_login_wrong_password(auth_service, user_service, owner):
    user_service.get_by_email.return_value = owner

    with pytest.raises(InvalidCredentialsError) as exc_info:
        await auth_service.login(LoginRequest(email="owner@example.com", password="wrong-one"))

    assert exc_info.value.status_code == 401
    assert exc_info.value.message == "Bad credentials."


async def test_login_unknown_email(auth_service, user_service):
    user_service.get_by_email.return_value = None

    with pytest.raises(InvalidCredentialsError):
        await auth_service.login(LoginRequest(email="nobody@example.com", password="secret1"))

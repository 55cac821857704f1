"""FastAPI роутер для эндпоинтов аутентификации."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from flashdeck.core.exceptions import DuplicateResourceError, InvalidCredentialsError
from flashdeck.modules.auth.dependencies import get_auth_service
from flashdeck.modules.auth.schemas import AuthResponse, LoginRequest, RegisterRequest
from flashdeck.modules.auth.service import AuthService

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Регистрация нового пользователя",
    responses={409: DuplicateResourceError.openapi_response()},
)
async def register(
    request: RegisterRequest,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
) -> AuthResponse:
    """Зарегистрировать новую учётную запись пользователя.

    При успешной регистрации сразу возвращает токен доступа.

    Args:
        request: Email, имя пользователя и пароль
        auth_service: Сервис аутентификации

    Returns:
        AuthResponse: Токен и профиль пользователя
    """
    return await auth_service.register(request)


@router.post(
    "/login",
    response_model=AuthResponse,
    summary="Вход в систему",
    responses={401: InvalidCredentialsError.openapi_response()},
)
async def login(
    request: LoginRequest,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
) -> AuthResponse:
    """Аутентифицировать пользователя по email и паролю."""
    return await auth_service.login(request)

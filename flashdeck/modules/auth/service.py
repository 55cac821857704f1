"""
Сервис аутентификации пользователей.

Основные компоненты:
    - AuthService: регистрация и вход с выдачей JWT
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from flashdeck.core.exceptions import InvalidCredentialsError
from flashdeck.core.metrics import record_auth_attempt
from flashdeck.core.security import create_access_token, verify_password
from flashdeck.modules.users.schemas import UserResponse
from flashdeck.modules.users.service import UserService, normalize_email
from flashdeck.shared.errors import AppError

from .schemas import AuthResponse, LoginRequest, RegisterRequest

logger = logging.getLogger(__name__)


class AuthService:
    """
    Сервис аутентификации.

    Subject выдаваемого токена - нормализованный email пользователя.
    """

    def __init__(self, session: AsyncSession, user_service: UserService | None = None) -> None:
        """
        Инициализировать сервис аутентификации.

        Args:
            session: Асинхронная сессия SQLAlchemy для операций с БД
            user_service: Сервис пользователей (для тестов)
        """
        self._session = session
        self._user_service = user_service or UserService(session)

    async def register(self, request: RegisterRequest) -> AuthResponse:
        """
        Зарегистрировать нового пользователя и вернуть токен.

        Args:
            request: Email, имя пользователя и пароль

        Returns:
            AuthResponse с токеном и данными пользователя

        Raises:
            EmailAlreadyExistsError: Email уже зарегистрирован
            UsernameAlreadyExistsError: Имя пользователя занято
        """
        try:
            user = await self._user_service.create(
                email=request.email,
                username=request.username,
                password=request.password,
            )
        except AppError:
            record_auth_attempt("register", "failure")
            raise

        record_auth_attempt("register", "success")
        return AuthResponse(
            token=create_access_token(user.email),
            user=UserResponse.model_validate(user),
        )

    async def login(self, request: LoginRequest) -> AuthResponse:
        """
        Аутентифицировать пользователя и вернуть токен.

        Raises:
            InvalidCredentialsError: Неверный email или пароль
        """
        email = normalize_email(request.email)
        user = await self._user_service.get_by_email(email)

        if user is None or not verify_password(request.password, user.password_hash):
            record_auth_attempt("login", "failure")
            logger.warning("Failed login attempt", extra={"email": email})
            raise InvalidCredentialsError()

        record_auth_attempt("login", "success")
        logger.info("User %s logged in", user.id, extra={"user_id": str(user.id)})
        return AuthResponse(
            token=create_access_token(user.email),
            user=UserResponse.model_validate(user),
        )

"""
Сервис управления пользователями.

Основные компоненты:
    - UserService: создание и поиск учетных записей
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from flashdeck.core.exceptions import (
    EmailAlreadyExistsError,
    UserNotFoundError,
    UsernameAlreadyExistsError,
)
from flashdeck.core.security import hash_password

from .models import User
from .repository import UserRepository

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    """Email сравнивается и хранится в нижнем регистре без пробелов по краям."""
    return email.strip().lower()


class UserService:
    """
    Сервис управления пользователями.

    Attributes:
        repository: Репозиторий пользователей
    """

    def __init__(self, session: AsyncSession, repository: UserRepository | None = None) -> None:
        """
        Инициализировать сервис пользователей.

        Args:
            session: Асинхронная сессия SQLAlchemy для операций с БД
            repository: Репозиторий пользователей (для тестов)
        """
        self._session = session
        self.repository = repository or UserRepository(session)

    async def get_by_id(self, user_id: UUID) -> User:
        """
        Получить пользователя по ID.

        Raises:
            UserNotFoundError: Пользователь не существует
        """
        user = await self.repository.get_by_id(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    async def get_by_email(self, email: str) -> User | None:
        """Получить пользователя по email (без учета регистра)."""
        return await self.repository.get_by_email(email)

    async def create(self, email: str, username: str, password: str) -> User:
        """
        Создать нового пользователя.

        Args:
            email: Email (будет нормализован)
            username: Имя пользователя (будут обрезаны пробелы)
            password: Пароль в открытом виде

        Returns:
            Созданный объект User

        Raises:
            EmailAlreadyExistsError: Email уже зарегистрирован
            UsernameAlreadyExistsError: Имя пользователя занято
            DuplicateResourceError: Гонка на уникальном индексе
        """
        email = normalize_email(email)
        username = username.strip()

        if await self.repository.email_exists(email):
            raise EmailAlreadyExistsError(details={"field": "email"})
        if await self.repository.username_exists(username):
            raise UsernameAlreadyExistsError(details={"field": "username"})

        user = User(
            email=email,
            username=username,
            password_hash=hash_password(password),
        )
        user = await self.repository.add(user)
        logger.info("Created user %s", user.id, extra={"user_id": str(user.id)})
        return user

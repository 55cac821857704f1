"""Доступ к таблице пользователей."""

from sqlalchemy import exists, func, select

from flashdeck.shared.repository import BaseRepository

from .models import User


class UserRepository(BaseRepository[User]):
    """Репозиторий пользователей с регистронезависимым поиском."""

    model = User

    async def get_by_email(self, email: str) -> User | None:
        """
        Получить пользователя по email без учета регистра.

        Args:
            email: Email пользователя

        Returns:
            Объект User если найден, None в противном случае
        """
        stmt = select(User).where(func.lower(User.email) == email.strip().lower())
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def email_exists(self, email: str) -> bool:
        stmt = select(exists().where(func.lower(User.email) == email.strip().lower()))
        return bool(await self._session.scalar(stmt))

    async def username_exists(self, username: str) -> bool:
        stmt = select(exists().where(func.lower(User.username) == username.strip().lower()))
        return bool(await self._session.scalar(stmt))

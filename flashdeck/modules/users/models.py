"""
Модели SQLAlchemy для пользователей.

Основные компоненты:
    - User: учетная запись пользователя
"""

from sqlalchemy import Index, String, func
from sqlalchemy.orm import Mapped, mapped_column

from flashdeck.core.database import Base
from flashdeck.shared.mixins import TimestampMixin, UUIDMixin


class User(UUIDMixin, TimestampMixin, Base):
    """
    Модель пользователя.

    Email хранится в нижнем регистре, username - в исходном регистре;
    уникальность обоих полей регистронезависимая.

    Attributes:
        id: Уникальный идентификатор (UUID7)
        email: Email для входа (уникальный)
        username: Публичное имя пользователя (уникальное)
        password_hash: Хеш пароля (bcrypt)
        created_at: Дата создания (из TimestampMixin)
        updated_at: Дата обновления (из TimestampMixin)
    """

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(String(255), nullable=False)
    username: Mapped[str] = mapped_column(String(100), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)


Index("uq_users_email_lower", func.lower(User.email), unique=True)
Index("uq_users_username_lower", func.lower(User.username), unique=True)

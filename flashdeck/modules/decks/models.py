"""
Модели SQLAlchemy для колод.

Основные компоненты:
    - Deck: колода карточек с тегами и флагом публичности
"""

from uuid import UUID

from sqlalchemy import Boolean, ForeignKey, Index, String, false, text
from sqlalchemy.dialects.postgresql import ARRAY
from sqlalchemy.orm import Mapped, mapped_column

from flashdeck.core.database import Base
from flashdeck.shared.mixins import TimestampMixin, UUIDMixin

TITLE_MAX_LENGTH = 255
DESCRIPTION_MAX_LENGTH = 500


class Deck(UUIDMixin, TimestampMixin, Base):
    """
    Модель колоды.

    Владелец колоды задается при создании и больше не меняется.
    Связи с пользователем и карточками хранятся как внешние ключи
    и разрешаются через репозитории по требованию.

    Attributes:
        id: Уникальный идентификатор (UUID7)
        owner_id: UUID владельца колоды
        title: Название колоды
        description: Описание колоды (опционально, пустое хранится как NULL)
        tags: Упорядоченный список тегов
        is_public: Видна ли колода всем пользователям
        created_at: Дата создания
        updated_at: Дата обновления
    """

    __tablename__ = "decks"

    owner_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title: Mapped[str] = mapped_column(String(TITLE_MAX_LENGTH), nullable=False)
    description: Mapped[str | None] = mapped_column(
        String(DESCRIPTION_MAX_LENGTH),
        nullable=True,
    )
    tags: Mapped[list[str]] = mapped_column(
        ARRAY(String),
        nullable=False,
        default=list,
        server_default=text("'{}'"),
    )
    is_public: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=false(),
    )

    __table_args__ = (
        Index("ix_decks_owner_created", "owner_id", "created_at"),
        Index("ix_decks_tags", "tags", postgresql_using="gin"),
    )

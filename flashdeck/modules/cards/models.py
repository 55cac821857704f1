"""
Модели SQLAlchemy для карточек.

Основные компоненты:
    - Card: карточка с лицевой и оборотной сторонами
"""

from uuid import UUID

from sqlalchemy import ForeignKey, Text
from sqlalchemy.orm import Mapped, mapped_column

from flashdeck.core.database import Base
from flashdeck.shared.mixins import TimestampMixin, UUIDMixin


class Card(UUIDMixin, TimestampMixin, Base):
    """
    Модель карточки.

    Содержимое сторон хранится как непрозрачный текст.

    Attributes:
        id: Уникальный идентификатор (UUID7)
        deck_id: UUID колоды, которой принадлежит карточка
        front: Лицевая сторона
        back: Оборотная сторона
        created_at: Дата создания
        updated_at: Дата обновления
    """

    __tablename__ = "cards"

    deck_id: Mapped[UUID] = mapped_column(
        ForeignKey("decks.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    front: Mapped[str] = mapped_column(Text, nullable=False)
    back: Mapped[str] = mapped_column(Text, nullable=False)

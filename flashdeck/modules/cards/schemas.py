"""Схемы Pydantic для операций с карточками."""

from uuid import UUID

from pydantic import Field

from flashdeck.shared.schemas import BaseSchema, UUIDTimestampSchema


class CardCreate(BaseSchema):
    """Схема для создания новой карточки."""

    front: str = Field(
        ...,
        min_length=1,
        description="Лицевая сторона карточки",
        examples=["What is the capital of France?"],
    )
    back: str = Field(
        ...,
        min_length=1,
        description="Оборотная сторона карточки",
        examples=["Paris"],
    )


class CardUpdate(BaseSchema):
    """Схема для обновления карточки.

    Все поля опциональны - обновляются только переданные поля,
    null равнозначен отсутствию поля.
    """

    front: str | None = Field(
        default=None,
        min_length=1,
        description="Новая лицевая сторона",
    )
    back: str | None = Field(
        default=None,
        min_length=1,
        description="Новая оборотная сторона",
    )


class CardResponse(UUIDTimestampSchema):
    """Схема ответа с данными карточки."""

    deck_id: UUID = Field(
        ...,
        description="ID колоды, содержащей карточку",
    )
    front: str = Field(
        ...,
        description="Лицевая сторона карточки",
    )
    back: str = Field(
        ...,
        description="Оборотная сторона карточки",
    )

"""Схемы Pydantic для операций с колодами."""

from pydantic import ConfigDict, Field, field_validator

from flashdeck.modules.users.schemas import OwnerInfo
from flashdeck.shared.schemas import BaseSchema, UUIDTimestampSchema

from .models import DESCRIPTION_MAX_LENGTH, TITLE_MAX_LENGTH


class _DeckInput(BaseSchema):
    # Название сохраняется как есть, без обрезки пробелов
    model_config = ConfigDict(str_strip_whitespace=False)

    @field_validator("title", check_fields=False)
    @classmethod
    def title_not_blank(cls, v: str | None) -> str | None:
        if v is not None and not v.strip():
            raise ValueError("Title must not be blank")
        return v

    @field_validator("tags", check_fields=False)
    @classmethod
    def tags_not_blank(cls, v: list[str] | None) -> list[str] | None:
        if v is None:
            return v
        tags = [tag.strip() for tag in v]
        if any(not tag for tag in tags):
            raise ValueError("Tags must be non-empty strings")
        return tags


class DeckCreate(_DeckInput):
    """Схема для создания новой колоды."""

    title: str = Field(
        ...,
        min_length=1,
        max_length=TITLE_MAX_LENGTH,
        description="Название колоды",
        examples=["Calculus"],
    )
    description: str | None = Field(
        default=None,
        max_length=DESCRIPTION_MAX_LENGTH,
        description="Описание колоды (опционально)",
        examples=["Limits, derivatives and integrals"],
    )
    tags: list[str] | None = Field(
        default=None,
        description="Теги колоды; null означает пустой список",
        examples=[["math", "calculus"]],
    )
    is_public: bool | None = Field(
        default=None,
        description="Публичная ли колода; null означает false",
    )


class DeckUpdate(_DeckInput):
    """Схема для частичного обновления колоды.

    Отсутствующее поле и поле со значением null не изменяют колоду.
    `tags: []` очищает теги.
    """

    title: str | None = Field(
        default=None,
        min_length=1,
        max_length=TITLE_MAX_LENGTH,
        description="Новое название колоды",
    )
    description: str | None = Field(
        default=None,
        max_length=DESCRIPTION_MAX_LENGTH,
        description="Новое описание; пустое или из пробелов удаляет описание",
    )
    tags: list[str] | None = Field(
        default=None,
        description="Новый набор тегов (заменяет текущий целиком)",
    )
    is_public: bool | None = Field(
        default=None,
        description="Новый флаг публичности",
    )


class DeckResponse(UUIDTimestampSchema):
    """Схема ответа с данными колоды."""

    title: str = Field(
        ...,
        description="Название колоды",
    )
    description: str | None = Field(
        default=None,
        description="Описание колоды",
    )
    tags: list[str] = Field(
        default_factory=list,
        description="Теги колоды",
    )
    is_public: bool = Field(
        ...,
        description="Публичная ли колода",
    )
    card_count: int = Field(
        ...,
        ge=0,
        description="Текущее количество карточек в колоде",
    )
    owner: OwnerInfo = Field(
        ...,
        description="Владелец колоды",
    )

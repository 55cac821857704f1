"""Схемы Pydantic для пользовательских эндпоинтов."""

from datetime import datetime
from uuid import UUID

from pydantic import Field

from flashdeck.shared.schemas import BaseSchema


class UserResponse(BaseSchema):
    """Схема ответа с данными пользователя."""

    id: UUID = Field(
        ...,
        description="Уникальный идентификатор пользователя",
    )
    email: str = Field(
        ...,
        description="Email пользователя",
    )
    username: str = Field(
        ...,
        description="Имя пользователя",
    )
    created_at: datetime = Field(
        ...,
        description="Дата и время регистрации",
    )


class OwnerInfo(BaseSchema):
    """Публичные сведения о владельце колоды (без email)."""

    id: UUID
    username: str

"""Базовые схемы Pydantic для обработки API запросов и ответов."""

import math
import uuid
from collections.abc import Sequence
from datetime import UTC, datetime
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class BaseSchema(BaseModel):
    """Базовая схема с общей конфигурацией.

    JSON наружу отдается в camelCase; на входе принимаются
    как camelCase, так и snake_case имена полей.
    """

    model_config = ConfigDict(
        from_attributes=True,
        validate_assignment=True,
        str_strip_whitespace=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )


class UUIDSchema(BaseSchema):
    """Схема с полем UUID-идентификатора."""

    id: uuid.UUID = Field(
        ...,
        description="Уникальный идентификатор",
    )


class TimestampSchema(BaseSchema):
    """Схема с полями временных меток."""

    created_at: datetime = Field(
        ...,
        description="Дата и время создания",
    )
    updated_at: datetime = Field(
        ...,
        description="Дата и время последнего обновления",
    )


class UUIDTimestampSchema(UUIDSchema, TimestampSchema):
    """Комбинированная схема с UUID и временными метками."""

    pass


T = TypeVar("T")


def total_pages_for(total_count: int, page_size: int) -> int:
    """Количество страниц: ceil(total / size), 0 для пустой выборки."""
    if total_count <= 0:
        return 0
    return math.ceil(total_count / page_size)


class PageResponse(BaseSchema, Generic[T]):
    """Обобщенная обертка для пагинированных ответов.

    Страницы нумеруются с нуля.
    """

    items: list[T] = Field(
        ...,
        description="Элементы текущей страницы",
    )
    page: int = Field(
        ...,
        ge=0,
        description="Номер страницы (начиная с 0)",
    )
    page_size: int = Field(
        ...,
        ge=1,
        description="Количество элементов на странице",
    )
    total_count: int = Field(
        ...,
        ge=0,
        description="Общее количество элементов",
    )
    total_pages: int = Field(
        ...,
        ge=0,
        description="Общее количество страниц",
    )

    @classmethod
    def create(
        cls,
        items: Sequence[T],
        total_count: int,
        page: int,
        page_size: int,
    ) -> "PageResponse[T]":
        """Создает страницу из элементов и параметров пагинации.

        Args:
            items: Элементы текущей страницы.
            total_count: Общее количество элементов по всем страницам.
            page: Номер страницы (с нуля).
            page_size: Размер страницы.

        Returns:
            Экземпляр PageResponse.
        """
        return cls(
            items=list(items),
            page=page,
            page_size=page_size,
            total_count=total_count,
            total_pages=total_pages_for(total_count, page_size),
        )


class HealthResponse(BaseSchema):
    """Схема ответа проверки работоспособности."""

    status: str = Field(
        ...,
        description="Общий статус работоспособности",
        examples=["healthy", "unhealthy"],
    )
    version: str | None = Field(
        default=None,
        description="Версия приложения",
    )
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        description="Временная метка проверки",
    )
    dependencies: dict[str, str] | None = Field(
        default=None,
        description="Статус работоспособности отдельных зависимостей",
    )

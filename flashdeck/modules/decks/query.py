"""
Построение запросов списка колод.

Нормализация входных параметров и выбор ровно одной ветки фильтрации
в фиксированном порядке: теги, затем поиск по названию, затем только
публичные, иначе - свои и публичные колоды.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from sqlalchemy import ColumnElement, Select, or_, select

from flashdeck.modules.auth.principal import Principal

from .models import Deck

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


class DeckFilter(StrEnum):
    """Ветка фильтрации списка колод."""

    TAGS = "tags"
    SEARCH = "search"
    PUBLIC_ONLY = "public_only"
    DEFAULT = "default"


def parse_tags(raw: str | Iterable[str] | None) -> tuple[str, ...]:
    """
    Разобрать теги из строки через запятую или последовательности.

    Элементы обрезаются, пустые отбрасываются; порядок сохраняется.

    Examples:
        >>> parse_tags(" math, ,algebra ")
        ('math', 'algebra')
        >>> parse_tags(None)
        ()
    """
    if raw is None:
        return ()
    parts = raw.split(",") if isinstance(raw, str) else raw
    return tuple(tag for tag in (part.strip() for part in parts) if tag)


def clamp_page(page: int | None) -> int:
    return max(page or 0, 0)


def clamp_page_size(page_size: int | None) -> int:
    if page_size is None:
        return DEFAULT_PAGE_SIZE
    return min(max(page_size, 1), MAX_PAGE_SIZE)


@dataclass(frozen=True, slots=True)
class DeckListQuery:
    """Нормализованные параметры списка колод."""

    page: int = 0
    page_size: int = DEFAULT_PAGE_SIZE
    search: str | None = None
    tags: tuple[str, ...] = ()
    only_public: bool = False

    @classmethod
    def normalize(
        cls,
        page: int | None = 0,
        page_size: int | None = DEFAULT_PAGE_SIZE,
        search: str | None = None,
        tags: str | Iterable[str] | None = None,
        only_public: bool | None = None,
    ) -> "DeckListQuery":
        """
        Привести сырые параметры к допустимым значениям.

        Args:
            page: Номер страницы; отрицательный становится 0
            page_size: Размер страницы; ограничивается диапазоном 1..100
            search: Подстрока названия; пустая после обрезки считается отсутствующей
            tags: Теги строкой через запятую или последовательностью
            only_public: Показывать только публичные колоды
        """
        search = search.strip() if search is not None else None
        return cls(
            page=clamp_page(page),
            page_size=clamp_page_size(page_size),
            search=search or None,
            tags=parse_tags(tags),
            only_public=bool(only_public),
        )

    @property
    def branch(self) -> DeckFilter:
        if self.tags:
            return DeckFilter.TAGS
        if self.search:
            return DeckFilter.SEARCH
        if self.only_public:
            return DeckFilter.PUBLIC_ONLY
        return DeckFilter.DEFAULT

    @property
    def offset(self) -> int:
        return self.page * self.page_size

    @property
    def limit(self) -> int:
        return self.page_size


def visible_to(principal: Principal) -> ColumnElement[bool]:
    """Колоды, которые принципал может видеть: свои или публичные."""
    return or_(Deck.owner_id == principal.id, Deck.is_public.is_(True))


def filter_conditions(query: DeckListQuery, principal: Principal) -> list[ColumnElement[bool]]:
    branch = query.branch
    if branch is DeckFilter.TAGS:
        return [visible_to(principal), Deck.tags.contains(list(query.tags))]
    if branch is DeckFilter.SEARCH and query.search:
        return [visible_to(principal), Deck.title.icontains(query.search, autoescape=True)]
    if branch is DeckFilter.PUBLIC_ONLY:
        return [Deck.is_public.is_(True)]
    return [visible_to(principal)]


def build_list_statement(query: DeckListQuery, principal: Principal) -> Select[Any]:
    """
    SELECT колод для выбранной ветки, новые первыми.

    id - вторичный ключ сортировки, чтобы страницы были стабильными
    при совпадающем времени создания.
    """
    return (
        select(Deck)
        .where(*filter_conditions(query, principal))
        .order_by(Deck.created_at.desc(), Deck.id.desc())
    )

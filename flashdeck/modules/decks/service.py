"""
Сервис управления колодами.

Основные компоненты:
    - DeckService: создание, получение, список, частичное обновление
      и удаление колод с проверкой прав принципала
"""

import logging
from collections.abc import Iterable
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from flashdeck.core.exceptions import (
    DeckNotFoundError,
    PermissionDeniedError,
    UserNotFoundError,
)
from flashdeck.core.metrics import record_deck_operation
from flashdeck.modules.auth.principal import Principal
from flashdeck.modules.cards.repository import CardRepository
from flashdeck.modules.users.models import User
from flashdeck.modules.users.repository import UserRepository
from flashdeck.shared.schemas import PageResponse

from .assembler import DeckAssembler
from .merge import DeckPatch, apply_update, normalize_description
from .models import Deck
from .policy import can_mutate, can_view
from .query import DEFAULT_PAGE_SIZE, DeckListQuery
from .repository import DeckRepository
from .schemas import DeckCreate, DeckResponse, DeckUpdate

logger = logging.getLogger(__name__)


class DeckService:
    """
    Сервис управления колодами.

    Каждая операция получает принципала явным аргументом и заново
    разрешает его в хранилище пользователей.

    Example:
        service = DeckService(session)
        deck = await service.create_deck(DeckCreate(title="Calc"), principal)
    """

    def __init__(
        self,
        session: AsyncSession,
        *,
        decks: DeckRepository | None = None,
        users: UserRepository | None = None,
        cards: CardRepository | None = None,
    ) -> None:
        """
        Инициализировать сервис колод.

        Args:
            session: Асинхронная сессия SQLAlchemy для операций с БД
            decks: Репозиторий колод (для тестов)
            users: Репозиторий пользователей (для тестов)
            cards: Репозиторий карточек (для тестов)
        """
        self._session = session
        self.decks = decks or DeckRepository(session)
        self.users = users or UserRepository(session)
        self.cards = cards or CardRepository(session)
        self.assembler = DeckAssembler(self.users, self.cards)

    async def _resolve_user(self, principal: Principal) -> User:
        user = await self.users.get_by_id(principal.id)
        if user is None:
            raise UserNotFoundError(principal.id)
        return user

    async def get_viewable(self, deck_id: UUID, principal: Principal) -> Deck:
        """
        Колода, которую принципал может видеть.

        Raises:
            DeckNotFoundError: Колоды нет или она приватная и чужая
        """
        deck = await self.decks.get_visible(deck_id, principal)
        if deck is None or not can_view(deck, principal):
            raise DeckNotFoundError(deck_id)
        return deck

    async def get_mutable(self, deck_id: UUID, principal: Principal) -> Deck:
        """
        Колода, которую принципал может изменять.

        Поиск идет по id без фильтра видимости.

        Raises:
            DeckNotFoundError: Колоды нет
            PermissionDeniedError: Принципал не владелец
        """
        deck = await self.decks.get_by_id(deck_id)
        if deck is None:
            raise DeckNotFoundError(deck_id)
        if not can_mutate(deck, principal):
            logger.warning(
                "User %s denied mutation of deck %s",
                principal.id,
                deck_id,
                extra={"user_id": str(principal.id), "deck_id": str(deck_id)},
            )
            raise PermissionDeniedError(
                details={"resource_type": "deck", "resource_id": str(deck_id)}
            )
        return deck

    async def create_deck(self, data: DeckCreate, principal: Principal) -> DeckResponse:
        """
        Создать колоду от имени принципала.

        Args:
            data: Данные колоды; null-теги становятся [], null-флаг - false
            principal: Владелец новой колоды

        Returns:
            DeckResponse созданной колоды

        Raises:
            UserNotFoundError: Пользователь принципала больше не существует
            DuplicateResourceError: Нарушено ограничение уникальности
        """
        owner = await self._resolve_user(principal)

        deck = Deck(
            owner_id=owner.id,
            title=data.title,
            description=normalize_description(data.description),
            tags=list(data.tags) if data.tags is not None else [],
            is_public=bool(data.is_public),
        )
        deck = await self.decks.add(deck)

        record_deck_operation("create")
        logger.info(
            "Created deck %s for user %s",
            deck.id,
            owner.id,
            extra={"deck_id": str(deck.id), "user_id": str(owner.id)},
        )
        return await self.assembler.to_response(deck, owner)

    async def get_deck(self, deck_id: UUID, principal: Principal) -> DeckResponse:
        """
        Получить колоду по ID.

        Raises:
            UserNotFoundError: Пользователь принципала больше не существует
            DeckNotFoundError: Колоды нет или она приватная и чужая
        """
        await self._resolve_user(principal)
        deck = await self.get_viewable(deck_id, principal)
        return await self.assembler.to_response(deck)

    async def list_decks(
        self,
        principal: Principal,
        page: int | None = 0,
        page_size: int | None = DEFAULT_PAGE_SIZE,
        search: str | None = None,
        tags: str | Iterable[str] | None = None,
        only_public: bool | None = None,
    ) -> PageResponse[DeckResponse]:
        """
        Получить страницу колод.

        Параметры нормализуются здесь же, независимо от вызывающего кода.

        Args:
            principal: Текущий пользователь
            page: Номер страницы (с нуля)
            page_size: Размер страницы (1..100)
            search: Подстрока названия без учета регистра
            tags: Теги, которые должны присутствовать у колоды (все)
            only_public: Показывать только публичные колоды

        Returns:
            PageResponse с колодами и счетчиками
        """
        await self._resolve_user(principal)
        query = DeckListQuery.normalize(
            page=page,
            page_size=page_size,
            search=search,
            tags=tags,
            only_public=only_public,
        )
        decks, total = await self.decks.list_page(query, principal)
        items = await self.assembler.to_responses(decks)

        logger.debug(
            "Listed %d of %d decks (filter=%s)",
            len(items),
            total,
            query.branch,
            extra={"user_id": str(principal.id)},
        )
        return PageResponse[DeckResponse].create(
            items=items,
            total_count=total,
            page=query.page,
            page_size=query.page_size,
        )

    async def update_deck(
        self, deck_id: UUID, data: DeckUpdate, principal: Principal
    ) -> DeckResponse:
        """
        Частично обновить колоду.

        Пустой запрос ничего не записывает и не меняет updated_at.

        Raises:
            UserNotFoundError: Пользователь принципала больше не существует
            DeckNotFoundError: Колоды нет
            PermissionDeniedError: Принципал не владелец
        """
        await self._resolve_user(principal)
        deck = await self.get_mutable(deck_id, principal)

        if not apply_update(deck, DeckPatch.from_update(data)):
            logger.debug("Deck %s not modified", deck_id, extra={"deck_id": str(deck_id)})
            return await self.assembler.to_response(deck)

        deck = await self.decks.save(deck)
        record_deck_operation("update")
        logger.info("Updated deck %s", deck.id, extra={"deck_id": str(deck.id)})
        return await self.assembler.to_response(deck)

    async def delete_deck(self, deck_id: UUID, principal: Principal) -> None:
        """
        Удалить колоду вместе со всеми ее карточками в одной транзакции.

        Raises:
            UserNotFoundError: Пользователь принципала больше не существует
            DeckNotFoundError: Колоды нет
            PermissionDeniedError: Принципал не владелец
        """
        await self._resolve_user(principal)
        deck = await self.get_mutable(deck_id, principal)

        removed_cards = await self.cards.delete_by_deck(deck.id)
        await self.decks.delete(deck)

        record_deck_operation("delete")
        logger.info(
            "Deleted deck %s with %d cards",
            deck_id,
            removed_cards,
            extra={"deck_id": str(deck_id), "user_id": str(principal.id)},
        )

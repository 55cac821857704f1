"""
Сервис управления карточками.

Основные компоненты:
    - CardService: CRUD карточек внутри колоды

Чтение доступно всем, кто видит колоду; изменения - только владельцу.
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from flashdeck.core.exceptions import CardNotFoundError
from flashdeck.core.metrics import record_card_operation
from flashdeck.modules.auth.principal import Principal
from flashdeck.modules.decks.query import clamp_page, clamp_page_size
from flashdeck.modules.decks.service import DeckService
from flashdeck.shared.schemas import PageResponse

from .models import Card
from .repository import CardRepository
from .schemas import CardCreate, CardResponse, CardUpdate

logger = logging.getLogger(__name__)


class CardService:
    """
    Сервис управления карточками.

    Example:
        service = CardService(session)
        card = await service.create_card(deck_id, CardCreate(front="Q", back="A"), principal)
    """

    def __init__(
        self,
        session: AsyncSession,
        *,
        cards: CardRepository | None = None,
        deck_service: DeckService | None = None,
    ) -> None:
        """
        Инициализировать сервис карточек.

        Args:
            session: Асинхронная сессия SQLAlchemy для операций с БД
            cards: Репозиторий карточек (для тестов)
            deck_service: Сервис колод, проверяющий доступ (для тестов)
        """
        self._session = session
        self.cards = cards or CardRepository(session)
        self.decks = deck_service or DeckService(session, cards=self.cards)

    async def _get_card(self, deck_id: UUID, card_id: UUID) -> Card:
        card = await self.cards.get_in_deck(deck_id, card_id)
        if card is None:
            raise CardNotFoundError(card_id)
        return card

    async def list_cards(
        self,
        deck_id: UUID,
        principal: Principal,
        page: int | None = 0,
        page_size: int | None = None,
    ) -> PageResponse[CardResponse]:
        """
        Получить страницу карточек колоды в порядке создания.

        Raises:
            DeckNotFoundError: Колоды нет или она приватная и чужая
        """
        deck = await self.decks.get_viewable(deck_id, principal)
        page = clamp_page(page)
        page_size = clamp_page_size(page_size)

        total = await self.cards.count_by_deck(deck.id)
        cards = await self.cards.list_by_deck(deck.id, page * page_size, page_size)
        return PageResponse[CardResponse].create(
            items=[CardResponse.model_validate(card) for card in cards],
            total_count=total,
            page=page,
            page_size=page_size,
        )

    async def get_card(self, deck_id: UUID, card_id: UUID, principal: Principal) -> CardResponse:
        """
        Получить карточку колоды.

        Raises:
            DeckNotFoundError: Колоды нет или она приватная и чужая
            CardNotFoundError: Карточки нет в этой колоде
        """
        deck = await self.decks.get_viewable(deck_id, principal)
        card = await self._get_card(deck.id, card_id)
        return CardResponse.model_validate(card)

    async def create_card(
        self, deck_id: UUID, data: CardCreate, principal: Principal
    ) -> CardResponse:
        """
        Добавить карточку в колоду.

        Raises:
            DeckNotFoundError: Колоды нет
            PermissionDeniedError: Принципал не владелец колоды
        """
        deck = await self.decks.get_mutable(deck_id, principal)
        card = await self.cards.add(Card(deck_id=deck.id, front=data.front, back=data.back))

        record_card_operation("create")
        logger.info(
            "Created card %s in deck %s",
            card.id,
            deck.id,
            extra={"card_id": str(card.id), "deck_id": str(deck.id)},
        )
        return CardResponse.model_validate(card)

    async def update_card(
        self, deck_id: UUID, card_id: UUID, data: CardUpdate, principal: Principal
    ) -> CardResponse:
        """
        Частично обновить карточку; пустой запрос ничего не записывает.

        Raises:
            DeckNotFoundError: Колоды нет
            PermissionDeniedError: Принципал не владелец колоды
            CardNotFoundError: Карточки нет в этой колоде
        """
        deck = await self.decks.get_mutable(deck_id, principal)
        card = await self._get_card(deck.id, card_id)

        changes = {
            name: value
            for name, value in data.model_dump(exclude_unset=True).items()
            if value is not None
        }
        if not changes:
            return CardResponse.model_validate(card)

        for field, value in changes.items():
            setattr(card, field, value)
        card.touch()
        card = await self.cards.save(card)

        record_card_operation("update")
        logger.info("Updated card %s", card.id, extra={"card_id": str(card.id)})
        return CardResponse.model_validate(card)

    async def delete_card(self, deck_id: UUID, card_id: UUID, principal: Principal) -> None:
        """
        Удалить карточку.

        Raises:
            DeckNotFoundError: Колоды нет
            PermissionDeniedError: Принципал не владелец колоды
            CardNotFoundError: Карточки нет в этой колоде
        """
        deck = await self.decks.get_mutable(deck_id, principal)
        card = await self._get_card(deck.id, card_id)
        await self.cards.delete(card)

        record_card_operation("delete")
        logger.info("Deleted card %s", card_id, extra={"card_id": str(card_id)})

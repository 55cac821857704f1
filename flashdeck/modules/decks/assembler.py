"""
Сборка ответов по колодам.

Владелец подгружается по id через репозиторий пользователей,
количество карточек считается запросом на момент ответа.
"""

from collections.abc import Sequence

from flashdeck.core.exceptions import UserNotFoundError
from flashdeck.modules.cards.repository import CardRepository
from flashdeck.modules.users.models import User
from flashdeck.modules.users.repository import UserRepository
from flashdeck.modules.users.schemas import OwnerInfo

from .models import Deck
from .schemas import DeckResponse


class DeckAssembler:
    """Преобразует колоды в DeckResponse."""

    def __init__(self, users: UserRepository, cards: CardRepository) -> None:
        self._users = users
        self._cards = cards

    @staticmethod
    def render(deck: Deck, owner: User, card_count: int) -> DeckResponse:
        return DeckResponse(
            id=deck.id,
            title=deck.title,
            description=deck.description,
            tags=list(deck.tags or []),
            is_public=deck.is_public,
            card_count=card_count,
            owner=OwnerInfo(id=owner.id, username=owner.username),
            created_at=deck.created_at,
            updated_at=deck.updated_at,
        )

    async def to_response(self, deck: Deck, owner: User | None = None) -> DeckResponse:
        """
        Собрать ответ для одной колоды.

        Args:
            deck: Колода
            owner: Уже загруженный владелец, если есть
        """
        if owner is None:
            owner = await self._users.get_by_id(deck.owner_id)
            if owner is None:
                raise UserNotFoundError(deck.owner_id)
        card_count = await self._cards.count_by_deck(deck.id)
        return self.render(deck, owner, card_count)

    async def to_responses(self, decks: Sequence[Deck]) -> list[DeckResponse]:
        """Собрать ответы для страницы колод двумя пакетными запросами."""
        if not decks:
            return []
        owners = await self._users.get_many_by_ids(deck.owner_id for deck in decks)
        counts = await self._cards.count_by_decks(deck.id for deck in decks)

        responses = []
        for deck in decks:
            owner = owners.get(deck.owner_id)
            if owner is None:
                raise UserNotFoundError(deck.owner_id)
            responses.append(self.render(deck, owner, counts.get(deck.id, 0)))
        return responses

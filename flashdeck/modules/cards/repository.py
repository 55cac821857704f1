"""Доступ к таблице карточек."""

from collections.abc import Iterable, Sequence
from uuid import UUID

from sqlalchemy import delete, func, select

from flashdeck.shared.errors import safe
from flashdeck.shared.repository import BaseRepository

from .models import Card


class CardRepository(BaseRepository[Card]):
    """Репозиторий карточек; также источник живого счетчика карточек колод."""

    model = Card

    async def count_by_deck(self, deck_id: UUID) -> int:
        """Количество карточек в колоде на момент запроса."""
        stmt = select(func.count()).select_from(Card).where(Card.deck_id == deck_id)
        return (await self._session.scalar(stmt)) or 0

    async def count_by_decks(self, deck_ids: Iterable[UUID]) -> dict[UUID, int]:
        """
        Количество карточек для нескольких колод одним запросом.

        Returns:
            Словарь deck_id -> количество; колоды без карточек получают 0.
        """
        ids = set(deck_ids)
        if not ids:
            return {}
        stmt = (
            select(Card.deck_id, func.count(Card.id))
            .where(Card.deck_id.in_(ids))
            .group_by(Card.deck_id)
        )
        result = await self._session.execute(stmt)
        counts = {deck_id: 0 for deck_id in ids}
        counts.update({deck_id: count for deck_id, count in result.all()})
        return counts

    async def get_in_deck(self, deck_id: UUID, card_id: UUID) -> Card | None:
        stmt = select(Card).where(Card.id == card_id, Card.deck_id == deck_id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_by_deck(self, deck_id: UUID, offset: int, limit: int) -> Sequence[Card]:
        stmt = (
            select(Card)
            .where(Card.deck_id == deck_id)
            .order_by(Card.created_at.asc(), Card.id.asc())
        )
        return await self.fetch_page(stmt, offset, limit)

    @safe
    async def delete_by_deck(self, deck_id: UUID) -> int:
        """
        Удалить все карточки колоды.

        Returns:
            Количество удаленных карточек.
        """
        result = await self._session.execute(delete(Card).where(Card.deck_id == deck_id))
        return result.rowcount or 0
